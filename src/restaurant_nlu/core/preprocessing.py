"""
TextPreprocessor component

The single preprocessing path shared by classifier training and prediction:
cleaning of labeled examples and spelling correction of classifier input.
"""
import logging
from typing import Dict, List, Optional, Sequence

from ..config import SPELLING_POLICY_SYMMETRIC, SPELLING_POLICIES
from ..exceptions import ConfigurationError
from ..models.corpus import TrainingExample
from .features import word_tokens
from .spell_corrector import SpellCorrector

logger = logging.getLogger(__name__)


class TextPreprocessor:
    """
    Preprocessing shared by training and prediction

    With the ``symmetric`` policy the spelling corrector is applied to training
    texts and to prediction input alike. With ``training_only`` it is applied
    to training texts only, leaving live input untouched.
    """

    def __init__(self, corrector: Optional[SpellCorrector] = None, policy: str = SPELLING_POLICY_SYMMETRIC):
        if policy not in SPELLING_POLICIES:
            raise ConfigurationError(f"Unknown spelling policy: {policy}")
        self.corrector = corrector
        self.policy = policy

    @property
    def signature(self) -> Dict[str, object]:
        """Settings that must match between a persisted model and this preprocessor"""
        return {"spelling_policy": self.policy}

    def clean(self, examples: Sequence[TrainingExample]) -> List[TrainingExample]:
        """
        Drop incomplete examples and deduplicate exact (label, text) pairs

        Args:
            examples: Raw labeled examples

        Returns:
            Complete examples, first occurrence of each pair kept in order
        """
        cleaned: Dict[tuple, TrainingExample] = {}
        dropped = 0
        for example in examples or ():
            if not example.is_complete:
                dropped += 1
                continue
            cleaned.setdefault(example.key, example)

        duplicates = len(examples or ()) - dropped - len(cleaned)
        logger.debug(f"Cleaned training data: {dropped} incomplete, {duplicates} duplicate examples removed")
        return list(cleaned.values())

    def prepare_training_text(self, text: str) -> str:
        if self.corrector is None:
            return text
        return self.corrector.correct(text)

    def prepare_examples(self, examples: Sequence[TrainingExample]) -> List[TrainingExample]:
        """Spelling-correct the text of every example"""
        return [
            example.model_copy(update={"text": self.prepare_training_text(example.text)})
            for example in examples
        ]

    def prepare(self, text: Optional[str]) -> str:
        """
        Prepare prediction input the way training texts were prepared

        Args:
            text: Raw utterance

        Returns:
            Text fed to the feature pipeline
        """
        text = text or ""
        if self.policy == SPELLING_POLICY_SYMMETRIC:
            return self.prepare_training_text(text)
        return text

    def tokens(self, text: str) -> List[str]:
        """Word tokens of prepared text, for diagnostics"""
        return word_tokens(text)
