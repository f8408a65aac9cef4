"""
DispatchRouter component

Maps predicted intent labels to response handlers through an explicit
registry and turns a classified utterance into a Response, gated on the
classifier confidence.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..exceptions import ConfigurationError
from ..models.response import NotUnderstood, RecognizedEntity, Response
from .handlers import Handler

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.49
DEFAULT_FALLBACK_MESSAGE = "Sorry, I didn't understand that. How can I help you?"

DispatchResult = Union[Response, NotUnderstood]


@dataclass(frozen=True)
class HandlerBinding:
    """Handler registered for one intent label"""
    handler: Handler
    response_type: str
    requires_follow_up: bool = False


class HandlerRegistry:
    """
    Intent label to handler table

    Unlike a topic registry there is no default handler: a label without a
    binding is a configuration error.
    """

    def __init__(self, name: str = "restaurant"):
        self.name = name
        self._bindings: Dict[str, HandlerBinding] = {}

    def register(
        self,
        label: str,
        handler: Handler,
        response_type: Optional[str] = None,
        requires_follow_up: bool = False
    ) -> None:
        """
        Register the handler of an intent label

        Args:
            label: Intent label produced by the classifier
            handler: Callable ``(utterance, entities) -> text``
            response_type: Response type reported in responses; defaults to the label
            requires_follow_up: Whether responses of this intent expect an answer
        """
        if not label:
            raise ConfigurationError("Handler label must not be empty")
        self._bindings[label] = HandlerBinding(
            handler=handler,
            response_type=response_type or label,
            requires_follow_up=requires_follow_up,
        )
        logger.debug(f"[{self.name}] Registered handler for label: {label}")

    def register_handlers(self, handlers: Dict[str, Union[Handler, Tuple[Handler, bool]]]) -> None:
        """
        Register several handlers at once

        Args:
            handlers: Label to handler, or label to ``(handler, requires_follow_up)``
        """
        for label, entry in handlers.items():
            if isinstance(entry, tuple):
                handler, requires_follow_up = entry
                self.register(label, handler, requires_follow_up=requires_follow_up)
            else:
                self.register(label, entry)

    def get(self, label: str) -> HandlerBinding:
        """
        Get the binding of a label

        Raises:
            ConfigurationError: If no handler is registered for the label
        """
        binding = self._bindings.get(label)
        if binding is None:
            raise ConfigurationError(f"[{self.name}] No handler registered for intent label: {label}")
        return binding

    def __contains__(self, label: object) -> bool:
        return label in self._bindings

    @property
    def labels(self) -> List[str]:
        return list(self._bindings)

    def missing(self, labels: Iterable[str]) -> List[str]:
        """Labels without a registered handler"""
        return [label for label in labels if label not in self._bindings]

    def validate(self, labels: Iterable[str]) -> None:
        """
        Check that every label the classifier can produce has a handler

        Raises:
            ConfigurationError: Listing every unbound label
        """
        missing = self.missing(labels)
        if missing:
            raise ConfigurationError(f"[{self.name}] No handler registered for intent labels: {missing}")
        logger.debug(f"[{self.name}] All intent labels have handlers")


class DispatchRouter:
    """
    Confidence-gated dispatcher

    Stateless across calls: each utterance is dispatched on its own.
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE
    ):
        """
        Initialize DispatchRouter

        Args:
            registry: Label to handler table
            confidence_threshold: Confidences at or below this are not understood
            fallback_message: Text of the not-understood outcome
        """
        self.registry = registry
        self.confidence_threshold = confidence_threshold
        self.fallback_message = fallback_message

    def dispatch(
        self,
        utterance: str,
        predicted_label: str,
        confidence: float,
        entities: Optional[Sequence[RecognizedEntity]] = None,
        parent_id: Optional[uuid.UUID] = None
    ) -> DispatchResult:
        """
        Dispatch a classified utterance to its handler

        Args:
            utterance: Raw utterance
            predicted_label: Top label of the classifier
            confidence: Score of the top label
            entities: Entities recognized in the utterance
            parent_id: Id of the response this utterance follows up on

        Returns:
            Response, or NotUnderstood when the confidence does not pass the gate

        Raises:
            ConfigurationError: If the label has no registered handler
        """
        entities = list(entities or [])

        if confidence <= self.confidence_threshold:
            logger.debug(
                f"Not dispatching '{predicted_label}': confidence {confidence:.3f} "
                f"<= {self.confidence_threshold}"
            )
            return NotUnderstood(
                question=utterance or "",
                predicted_label=predicted_label,
                confidence=confidence,
                text=self.fallback_message,
            )

        binding = self.registry.get(predicted_label)
        text = binding.handler(utterance, entities)

        response = Response(
            parent_id=parent_id,
            question=utterance or "",
            predicted_label=predicted_label,
            text=text,
            response_type=binding.response_type,
            requires_follow_up=binding.requires_follow_up,
            confidence=confidence,
            entities=tuple(entities),
        )
        logger.debug(f"Dispatched '{predicted_label}' ({confidence:.3f}) -> {response.id}")
        return response
