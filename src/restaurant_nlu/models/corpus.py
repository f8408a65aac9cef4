"""
Corpus data models

Intent and entity definitions as they appear in the JSON corpus files, and the
labeled examples derived from them for classifier training.
"""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class IntentDefinition(BaseModel):
    """One intent record of the training corpus"""
    model_config = ConfigDict(frozen=True)

    tag: str = Field(min_length=1)
    patterns: Tuple[str, ...] = ()
    responses: Tuple[str, ...] = ()
    actions: Optional[Tuple[str, ...]] = None


class EntityDefinition(BaseModel):
    """One entity type of the entity corpus with its gazetteer phrases"""
    model_config = ConfigDict(frozen=True)

    tag: str = Field(min_length=1)
    patterns: Tuple[str, ...] = ()


class TrainingExample(BaseModel):
    """A labeled utterance; may be empty before cleaning"""
    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    label: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """Both text and label carry non-whitespace content"""
        return bool(self.text and self.text.strip() and self.label and self.label.strip())

    @property
    def key(self) -> Tuple[Optional[str], Optional[str]]:
        """Exact (label, text) identity used for deduplication"""
        return (self.label, self.text)
