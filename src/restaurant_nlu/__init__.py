"""
Restaurant NLU Package

Intent routing for a restaurant ordering assistant. A free-text utterance is
spelling-normalized, classified into an intent with a confidence score,
scanned for domain entities (names, food items) and dispatched to a templated
response handler when the confidence passes the gate.

Main Components:
- IntentClassifier: train + predict over n-gram features
- EntitySpotter: gazetteer-based entity recognition
- DispatchRouter: confidence-gated label to handler dispatch
- NLUPipeline: the context object owning one instance of each

Usage:
    from restaurant_nlu import PipelineFactory, get_config

    pipeline = PipelineFactory.create_pipeline(get_config())
    pipeline.start()
    print(pipeline.process("order masala dosa for raj").text)
"""

from .core import (
    HunspellDictionary,
    SpellCorrector,
    TextPreprocessor,
    IntentClassifier,
    EntitySpotter,
    DispatchRouter,
    HandlerRegistry,
    ResponseHistory,
    NLUPipeline,
)
from .models import (
    IntentDefinition,
    EntityDefinition,
    TrainingExample,
    RecognizedEntity,
    IntentPrediction,
    TrainingMetrics,
    Response,
    NotUnderstood,
)
from .config import (
    NLUConfig,
    PathsConfig,
    SpellingConfig,
    ClassifierConfig,
    SpotterConfig,
    RouterConfig,
    LoggingConfig,
    load_config_from_env,
    load_config_from_dict,
    load_config_file,
    get_config,
)
from .exceptions import (
    NLUError,
    ConfigurationError,
    TrainingDataError,
    ModelNotTrainedError,
    ArtifactError,
)
from .factory import PipelineFactory

__version__ = "0.1.0"

__all__ = [
    # Core components
    "HunspellDictionary",
    "SpellCorrector",
    "TextPreprocessor",
    "IntentClassifier",
    "EntitySpotter",
    "DispatchRouter",
    "HandlerRegistry",
    "ResponseHistory",
    "NLUPipeline",
    # Data models
    "IntentDefinition",
    "EntityDefinition",
    "TrainingExample",
    "RecognizedEntity",
    "IntentPrediction",
    "TrainingMetrics",
    "Response",
    "NotUnderstood",
    # Configuration
    "NLUConfig",
    "PathsConfig",
    "SpellingConfig",
    "ClassifierConfig",
    "SpotterConfig",
    "RouterConfig",
    "LoggingConfig",
    "load_config_from_env",
    "load_config_from_dict",
    "load_config_file",
    "get_config",
    # Errors
    "NLUError",
    "ConfigurationError",
    "TrainingDataError",
    "ModelNotTrainedError",
    "ArtifactError",
    # Factory
    "PipelineFactory",
    # Metadata
    "__version__",
]
