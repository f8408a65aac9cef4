"""
Data models for the restaurant NLU pipeline

Corpus records (intents, entities, training examples) and the records produced
while processing an utterance.
"""

from .corpus import (
    IntentDefinition,
    EntityDefinition,
    TrainingExample,
)
from .response import (
    RecognizedEntity,
    IntentPrediction,
    TrainingMetrics,
    Response,
    NotUnderstood,
)

__all__ = [
    # Corpus models
    "IntentDefinition",
    "EntityDefinition",
    "TrainingExample",
    # Result models
    "RecognizedEntity",
    "IntentPrediction",
    "TrainingMetrics",
    "Response",
    "NotUnderstood",
]
