"""
Corpus loading

Reads the intent and entity JSON corpora into validated definition records.
"""
import json
import logging
from pathlib import Path
from typing import List, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import ConfigurationError
from ..models.corpus import EntityDefinition, IntentDefinition, TrainingExample

logger = logging.getLogger(__name__)

DefinitionT = TypeVar("DefinitionT", bound=BaseModel)


def _load_definitions(file_path: Union[str, Path], model: Type[DefinitionT]) -> List[DefinitionT]:
    path = Path(file_path)
    if not path.exists():
        raise ConfigurationError(f"{model.__name__} corpus file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed JSON in {path}: {e}") from e

    try:
        definitions = TypeAdapter(List[model]).validate_python(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {model.__name__} records in {path}: {e}") from e

    seen = set()
    for definition in definitions:
        if definition.tag in seen:
            raise ConfigurationError(f"Duplicate tag '{definition.tag}' in {path}")
        seen.add(definition.tag)

    logger.info(f"Loaded {len(definitions)} {model.__name__} records from {path}")
    return definitions


def load_intents(file_path: Union[str, Path]) -> List[IntentDefinition]:
    """
    Load intent definitions from the training corpus file

    Args:
        file_path: Path to a JSON array of ``{tag, patterns, responses, actions}``

    Returns:
        Intent definitions in file order

    Raises:
        ConfigurationError: If the file is missing, malformed or repeats a tag
    """
    return _load_definitions(file_path, IntentDefinition)


def load_entities(file_path: Union[str, Path]) -> List[EntityDefinition]:
    """
    Load entity definitions from the entity corpus file

    Args:
        file_path: Path to a JSON array of ``{tag, patterns}``

    Returns:
        Entity definitions in file order

    Raises:
        ConfigurationError: If the file is missing, malformed or repeats a tag
    """
    return _load_definitions(file_path, EntityDefinition)


def build_training_examples(intents: Sequence[IntentDefinition]) -> List[TrainingExample]:
    """Expand every intent pattern into a labeled example"""
    return [
        TrainingExample(text=pattern, label=intent.tag)
        for intent in intents
        for pattern in intent.patterns
    ]
