"""
NLUPipeline component

Owns every component of one pipeline instance and coordinates startup,
training and the processing of single utterances.
"""
import logging
import uuid
from pathlib import Path
from typing import Optional

from ..config import NLUConfig
from ..models.response import Response, TrainingMetrics
from .corpus_loader import build_training_examples, load_entities, load_intents
from .entity_spotter import EntitySpotter
from .history import ResponseHistory
from .intent_classifier import IntentClassifier
from .preprocessing import TextPreprocessor
from .router import DispatchResult, DispatchRouter

logger = logging.getLogger(__name__)


class NLUPipeline:
    """
    Restaurant NLU pipeline

    Utterance flow: classifier prediction, entity extraction on the raw
    utterance, confidence-gated dispatch, history recording.
    """

    def __init__(
        self,
        config: NLUConfig,
        preprocessor: TextPreprocessor,
        classifier: IntentClassifier,
        spotter: EntitySpotter,
        router: DispatchRouter,
        history: ResponseHistory
    ):
        self.config = config
        self.preprocessor = preprocessor
        self.classifier = classifier
        self.spotter = spotter
        self.router = router
        self.history = history

        logger.debug("NLUPipeline initialized successfully")

    @property
    def is_ready(self) -> bool:
        return self.classifier.is_trained

    def train(self) -> TrainingMetrics:
        """
        Train the classifier and the spotter from the corpus files

        Both models are persisted; the spotter is then restored from its
        artifact so that the running spotter is exactly what was written.

        Returns:
            Classifier validation metrics

        Raises:
            ConfigurationError: If a corpus is invalid or a label has no handler
            TrainingDataError: If the intent corpus yields no examples
        """
        paths = self.config.paths
        intents = load_intents(paths.intents_file)
        entities = load_entities(paths.entities_file)

        metrics, _ = self.classifier.train(build_training_examples(intents))

        self.spotter.train(entities)
        self.spotter.persist(paths.spotter_model_path)
        self.spotter.restore(paths.spotter_model_path)

        self.validate()
        logger.info(f"Pipeline trained with labels {metrics.labels}")
        return metrics

    def start(self, retrain: bool = False) -> Optional[TrainingMetrics]:
        """
        Make the pipeline ready to process utterances

        Persisted models are restored when both exist, unless ``retrain`` is
        set; otherwise the models are trained.

        Returns:
            Training metrics, or None if the models were restored
        """
        paths = self.config.paths
        artifacts_exist = Path(paths.classifier_model_path).exists() and Path(paths.spotter_model_path).exists()

        if retrain or not artifacts_exist:
            return self.train()

        self.classifier.restore(paths.classifier_model_path)
        self.spotter.restore(paths.spotter_model_path)
        self.validate()
        logger.info("Pipeline started from persisted models")
        return None

    def validate(self) -> None:
        """
        Check that every classifier label has a handler

        Raises:
            ConfigurationError: If a label is unbound
        """
        self.router.registry.validate(self.classifier.labels)

    def process(self, utterance: str, parent_id: Optional[uuid.UUID] = None) -> DispatchResult:
        """
        Process one utterance

        Args:
            utterance: Raw user input
            parent_id: Id of the response this utterance follows up on

        Returns:
            Response, or NotUnderstood for low-confidence utterances
        """
        prediction = self.classifier.predict(utterance)
        entities = self.spotter.extract(utterance)

        result = self.router.dispatch(
            utterance,
            prediction.label,
            prediction.confidence,
            entities,
            parent_id=parent_id,
        )

        if isinstance(result, Response):
            result = result.model_copy(update={"tokens": ", ".join(prediction.tokens)})
            self.history.add(result)

        logger.debug(
            f"Processed utterance: label={prediction.label}, confidence={prediction.confidence:.3f}, "
            f"entities={len(entities)}"
        )
        return result
