"""
Pipeline result models

Defines the records produced while processing an utterance: recognized
entities, classifier predictions and metrics, and the dispatch outcomes.
"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class RecognizedEntity(BaseModel):
    """Entity span recognized in an utterance"""
    model_config = ConfigDict(frozen=True)

    entity_type: str
    entity_value: str
    context: str = ""


class IntentPrediction(BaseModel):
    """Classifier output for a single utterance"""
    model_config = ConfigDict(frozen=True)

    label: str
    confidence: float = Field(ge=0.0, le=1.0)
    scores: Dict[str, float] = Field(default_factory=dict)
    tokens: Tuple[str, ...] = ()


class TrainingMetrics(BaseModel):
    """Sanity metrics computed on the fixed validation set after training"""
    micro_accuracy: Optional[float] = None
    macro_accuracy: Optional[float] = None
    log_loss: Optional[float] = None
    validation_examples: int = 0
    training_examples: int = 0
    labels: List[str] = Field(default_factory=list)
    iterations: int = 0
    converged: bool = False


class Response(BaseModel):
    """
    Response produced by dispatching an understood utterance

    Immutable. The pipeline fills in ``tokens`` with ``model_copy`` before the
    response is recorded.
    """
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    parent_id: Optional[uuid.UUID] = None
    question: str = ""
    predicted_label: str
    text: str
    response_type: str
    requires_follow_up: bool = False
    confidence: float = Field(ge=0.0, le=1.0)
    entities: Tuple[RecognizedEntity, ...] = ()
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    tokens: str = ""


class NotUnderstood(BaseModel):
    """Outcome of a dispatch whose confidence did not pass the gate"""
    model_config = ConfigDict(frozen=True)

    question: str = ""
    predicted_label: Optional[str] = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    text: str
