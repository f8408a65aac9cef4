"""
EntitySpotter component

Gazetteer-based entity recognition: every configured phrase of every entity
type is matched case-insensitively against the tokenized utterance. A spaCy
language model, when available, adds part-of-speech tags to the diagnostic
context of each match; without it a blank English tokenizer is used and
matching works the same.
"""
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import spacy
from pydantic import TypeAdapter, ValidationError
from spacy.matcher import PhraseMatcher

from ..exceptions import ArtifactError, ConfigurationError
from ..models.corpus import EntityDefinition
from ..models.response import RecognizedEntity
from .artifacts import dump_artifact, load_artifact

logger = logging.getLogger(__name__)

ARTIFACT_FORMAT = "restaurant-nlu/entity-spotter"

_DEFINITIONS_ADAPTER = TypeAdapter(List[EntityDefinition])


class EntitySpotter:
    """
    Pattern spotter over a spaCy tokenizer

    All matches are returned, including overlapping spans and repeated entity
    types, ordered by span start, span end and definition order.
    """

    def __init__(
        self,
        definitions: Sequence[EntityDefinition] = (),
        language_model: Optional[str] = "en_core_web_sm",
        language: str = "en"
    ):
        """
        Initialize EntitySpotter

        Args:
            definitions: Entity types and their phrases
            language_model: spaCy model package to load; None for tokenizer only
            language: Language code of the blank fallback pipeline
        """
        self.language_model = language_model
        self.language = language
        self.nlp, self.pattern_only = self._create_pipeline()
        self._lock = threading.Lock()
        self._definitions: Tuple[EntityDefinition, ...] = ()
        self._matcher: Optional[PhraseMatcher] = None
        self._order: Dict[str, int] = {}
        self._install(definitions)

    def _create_pipeline(self):
        """Load the language model, falling back to a blank tokenizer"""
        if not self.language_model:
            logger.info("No spaCy language model configured, using pattern-only pipeline")
            return spacy.blank(self.language), True

        try:
            nlp = spacy.load(self.language_model)
        except (OSError, ImportError, ValueError) as e:
            logger.warning(
                f"Failed to load spaCy model '{self.language_model}': {e}. "
                f"Falling back to pattern-only pipeline"
            )
            return spacy.blank(self.language), True

        logger.info(f"Loaded spaCy model '{self.language_model}' with components {nlp.pipe_names}")
        return nlp, False

    def _install(self, definitions: Sequence[EntityDefinition]) -> None:
        """Build a matcher for the definitions and swap it in"""
        order: Dict[str, int] = {}
        matcher = PhraseMatcher(self.nlp.vocab, attr="LOWER")

        for definition in definitions:
            if definition.tag in order:
                raise ConfigurationError(f"Duplicate entity tag: {definition.tag}")
            order[definition.tag] = len(order)
            phrases = [pattern for pattern in definition.patterns if pattern and pattern.strip()]
            if phrases:
                matcher.add(definition.tag, [self.nlp.make_doc(phrase) for phrase in phrases])

        with self._lock:
            self._definitions = tuple(definitions)
            self._matcher = matcher
            self._order = order

        logger.debug(f"EntitySpotter installed {len(order)} entity types")

    @property
    def definitions(self) -> Tuple[EntityDefinition, ...]:
        return self._definitions

    @property
    def tags(self) -> List[str]:
        return [definition.tag for definition in self._definitions]

    def train(self, definitions: Sequence[EntityDefinition]) -> None:
        """Replace every entity type with the given definitions"""
        self._install(definitions)

    def add(self, definition: EntityDefinition) -> None:
        """Register another entity type"""
        self._install(self._definitions + (definition,))

    def extract(self, text: Optional[str]) -> List[RecognizedEntity]:
        """
        Recognize entities in a text

        Args:
            text: Raw utterance

        Returns:
            One RecognizedEntity per phrase match
        """
        if not text or not text.strip():
            return []

        with self._lock:
            matcher, order = self._matcher, self._order

        doc = self.nlp(text)
        tokens = ", ".join(token.text for token in doc)
        pos = ", ".join(token.pos_ for token in doc)
        context = f"[{tokens}]-[{pos}]"

        spans = sorted(
            (start, end, order[self.nlp.vocab.strings[match_id]], self.nlp.vocab.strings[match_id])
            for match_id, start, end in matcher(doc)
        )
        return [
            RecognizedEntity(entity_type=tag, entity_value=doc[start:end].text, context=context)
            for start, end, _, tag in spans
        ]

    def persist(self, path: Union[str, Path]) -> None:
        """
        Write the spotter state, one section per entity type

        Args:
            path: Artifact file, overwritten if present
        """
        sections = [definition.model_dump(mode="json") for definition in self._definitions]
        dump_artifact({"language": self.language, "sections": sections}, path, ARTIFACT_FORMAT)
        logger.info(f"Persisted {len(sections)} entity types to {path}")

    def restore(self, path: Union[str, Path]) -> "EntitySpotter":
        """
        Replace the spotter state with a persisted one

        Args:
            path: Artifact written by ``persist``

        Returns:
            This spotter

        Raises:
            ArtifactError: If the artifact content is malformed
        """
        artifact = load_artifact(path, ARTIFACT_FORMAT)
        try:
            definitions = _DEFINITIONS_ADAPTER.validate_python(artifact.get("sections"))
        except ValidationError as e:
            raise ArtifactError(f"Malformed entity spotter artifact {path}: {e}") from e

        if artifact.get("language", self.language) != self.language:
            logger.warning(
                f"Entity spotter artifact {path} was written for language "
                f"'{artifact.get('language')}', current pipeline is '{self.language}'"
            )

        try:
            self._install(definitions)
        except ConfigurationError as e:
            raise ArtifactError(f"Malformed entity spotter artifact {path}: {e}") from e
        logger.info(f"Restored {len(definitions)} entity types from {path}")
        return self

    @classmethod
    def from_artifact(
        cls,
        path: Union[str, Path],
        language_model: Optional[str] = "en_core_web_sm",
        language: str = "en"
    ) -> "EntitySpotter":
        """Create a spotter from a persisted artifact"""
        return cls(language_model=language_model, language=language).restore(path)
