"""
IntentClassifier component

Trains the intent model from labeled utterances, persists it, and predicts the
intent of single utterances with the full per-class score distribution.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import numpy as np
from sklearn.metrics import accuracy_score, log_loss, recall_score
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import LabelEncoder

from ..config import ClassifierConfig
from ..exceptions import ArtifactError, ConfigurationError, ModelNotTrainedError, TrainingDataError
from ..models.corpus import TrainingExample
from ..models.response import IntentPrediction, TrainingMetrics
from .artifacts import dump_artifact, load_artifact
from .features import build_feature_pipeline, word_tokens
from .maxent import MaxEntClassifier
from .preprocessing import TextPreprocessor

logger = logging.getLogger(__name__)

ARTIFACT_FORMAT = "restaurant-nlu/intent-classifier"


@dataclass(frozen=True)
class ClassifierModel:
    """Trained intent model: featurizer + linear model, label key map and schema"""
    pipeline: Pipeline
    label_encoder: LabelEncoder
    schema: Dict[str, Any]

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(str(label) for label in self.label_encoder.classes_)

    @property
    def estimator(self) -> MaxEntClassifier:
        return self.pipeline.named_steps["classifier"]


class IntentClassifier:
    """
    Intent classifier

    Holds the single active model. Retraining builds and persists a new model
    before swapping it in, so concurrent predictions always see a complete
    model.
    """

    def __init__(
        self,
        preprocessor: TextPreprocessor,
        model_path: Optional[Union[str, Path]] = None,
        config: Optional[ClassifierConfig] = None
    ):
        """
        Initialize IntentClassifier

        Args:
            preprocessor: Preprocessing shared by training and prediction
            model_path: Fixed artifact path; None disables persistence
            config: Training configuration
        """
        self.preprocessor = preprocessor
        self.model_path = Path(model_path) if model_path else None
        self.config = config or ClassifierConfig()
        self._model: Optional[ClassifierModel] = None
        self._lock = threading.Lock()

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> ClassifierModel:
        """The active model"""
        with self._lock:
            model = self._model
        if model is None:
            raise ModelNotTrainedError("Intent classifier has not been trained or restored")
        return model

    @property
    def labels(self) -> Tuple[str, ...]:
        """Closed label set of the active model"""
        return self.model.labels

    def train(self, examples: Sequence[TrainingExample]) -> Tuple[TrainingMetrics, ClassifierModel]:
        """
        Train a new model and make it the active one

        Args:
            examples: Labeled utterances

        Returns:
            Validation metrics and the trained model

        Raises:
            TrainingDataError: If no examples remain after cleaning
        """
        cleaned = self.preprocessor.clean(examples)
        if not cleaned:
            raise TrainingDataError("No training examples with both text and label")

        prepared = self.preprocessor.prepare_examples(cleaned)
        texts = [example.text for example in prepared]

        label_encoder = LabelEncoder()
        y = label_encoder.fit_transform([example.label for example in prepared])

        pipeline = Pipeline([
            ("features", build_feature_pipeline(
                word_ngram_length=self.config.word_ngram_length,
                char_ngram_length=self.config.char_ngram_length,
            )),
            ("classifier", MaxEntClassifier(
                l1_regularization=self.config.l1_regularization,
                l2_regularization=self.config.l2_regularization,
                max_iterations=self.config.max_iterations,
                tolerance=self.config.tolerance,
                history_size=self.config.history_size,
                enforce_non_negativity=self.config.enforce_non_negativity,
            )),
        ])

        word_features = any(word_tokens(text) for text in texts)
        if not word_features:
            # Stop words only: character n-grams still separate the labels
            logger.warning("Training texts contain no word features, using character n-grams only")
            pipeline.set_params(features__ngrams__words="drop")

        logger.info(f"Training intent classifier on {len(prepared)} examples, {len(label_encoder.classes_)} labels")
        try:
            pipeline.fit(texts, y)
        except ValueError as e:
            raise TrainingDataError(f"Training examples produced no usable features: {e}") from e

        model = ClassifierModel(
            pipeline=pipeline,
            label_encoder=label_encoder,
            schema={
                "labels": [str(label) for label in label_encoder.classes_],
                "preprocessing": self.preprocessor.signature,
                "features": {
                    "word_ngram_length": self.config.word_ngram_length,
                    "char_ngram_length": self.config.char_ngram_length,
                    "word_features": word_features,
                },
                "training_examples": len(prepared),
                "trained_at": datetime.now(timezone.utc).isoformat(),
            },
        )

        metrics = self._evaluate(model, len(prepared))

        if self.model_path is not None:
            self._persist(model, self.model_path)

        with self._lock:
            self._model = model

        logger.info(
            f"Intent classifier trained: micro_accuracy={metrics.micro_accuracy}, "
            f"macro_accuracy={metrics.macro_accuracy}, log_loss={metrics.log_loss}"
        )
        return metrics, model

    def predict(self, text: Optional[str]) -> IntentPrediction:
        """
        Predict the intent of one utterance

        Args:
            text: Raw utterance

        Returns:
            Top label, its score, and the score of every label

        Raises:
            ModelNotTrainedError: If no model has been trained or restored
        """
        model = self.model
        prepared = self.preprocessor.prepare(text)
        proba = model.pipeline.predict_proba([prepared])[0]
        best = int(np.argmax(proba))
        labels = model.labels

        return IntentPrediction(
            label=labels[best],
            confidence=float(np.clip(proba[best], 0.0, 1.0)),
            scores={label: float(score) for label, score in zip(labels, proba)},
            tokens=tuple(self.preprocessor.tokens(prepared)),
        )

    def restore(self, path: Optional[Union[str, Path]] = None) -> ClassifierModel:
        """
        Load a persisted model and make it the active one

        Args:
            path: Artifact path; defaults to the configured model path

        Raises:
            ConfigurationError: If no path is known or the artifact was trained
                with different preprocessing
            ArtifactError: If the file is not an intent classifier artifact
        """
        path = Path(path) if path else self.model_path
        if path is None:
            raise ConfigurationError("No intent classifier model path configured")

        artifact = load_artifact(path, ARTIFACT_FORMAT)
        try:
            model = ClassifierModel(
                pipeline=artifact["pipeline"],
                label_encoder=artifact["label_encoder"],
                schema=artifact["schema"],
            )
        except KeyError as e:
            raise ArtifactError(f"Intent classifier artifact {path} is missing {e}") from e

        if model.schema.get("preprocessing") != self.preprocessor.signature:
            raise ConfigurationError(
                f"Intent classifier artifact {path} was trained with preprocessing "
                f"{model.schema.get('preprocessing')}, expected {self.preprocessor.signature}"
            )

        with self._lock:
            self._model = model

        logger.info(f"Restored intent classifier from {path} with labels {list(model.labels)}")
        return model

    def _evaluate(self, model: ClassifierModel, training_count: int) -> TrainingMetrics:
        """Score the model on the fixed validation examples"""
        estimator = model.estimator
        metrics = TrainingMetrics(
            training_examples=training_count,
            labels=list(model.labels),
            iterations=estimator.n_iter_,
            converged=estimator.converged_,
        )

        known = set(model.labels)
        validation = [TrainingExample(**example) for example in self.config.validation_examples]
        usable = [example for example in validation if example.is_complete and example.label in known]
        if len(usable) < len(validation):
            logger.warning(f"Skipped {len(validation) - len(usable)} validation examples with unknown labels")
        if not usable:
            return metrics

        y_true = model.label_encoder.transform([example.label for example in usable])
        proba = model.pipeline.predict_proba([self.preprocessor.prepare(example.text) for example in usable])
        y_pred = np.argmax(proba, axis=1)

        metrics.validation_examples = len(usable)
        metrics.micro_accuracy = float(accuracy_score(y_true, y_pred))
        metrics.macro_accuracy = float(
            recall_score(y_true, y_pred, labels=np.unique(y_true), average="macro", zero_division=0)
        )
        if len(model.labels) > 1:
            metrics.log_loss = float(log_loss(y_true, proba, labels=np.arange(len(model.labels))))
        return metrics

    @staticmethod
    def _persist(model: ClassifierModel, path: Path) -> None:
        dump_artifact(
            {
                "pipeline": model.pipeline,
                "label_encoder": model.label_encoder,
                "schema": model.schema,
            },
            path,
            ARTIFACT_FORMAT,
        )
        logger.info(f"Persisted intent classifier to {path}")
