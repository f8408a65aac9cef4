"""
Pipeline Factory

Factory for creating NLU pipeline components with proper dependency injection.
"""
from typing import Dict, Optional, Tuple

from .config import NLUConfig
from .core.dictionary import HunspellDictionary
from .core.domain_words import load_domain_words
from .core.entity_spotter import EntitySpotter
from .core.handlers import DEFAULT_HANDLERS, Handler
from .core.history import ResponseHistory
from .core.intent_classifier import IntentClassifier
from .core.pipeline import NLUPipeline
from .core.preprocessing import TextPreprocessor
from .core.router import DispatchRouter, HandlerRegistry
from .core.spell_corrector import SpellCorrector


class PipelineFactory:
    """Factory for creating NLU pipeline instances"""

    @staticmethod
    def create_dictionary(config: NLUConfig) -> HunspellDictionary:
        """
        Load the Hunspell dictionary merged with the domain vocabulary

        Raises:
            ConfigurationError: If a dictionary file is missing
        """
        paths = config.paths
        return HunspellDictionary.from_files(
            paths.dictionary_file,
            paths.affix_file,
            extra_words=load_domain_words(paths.domain_words_file),
        )

    @staticmethod
    def create_registry(handlers: Optional[Dict[str, Tuple[Handler, bool]]] = None) -> HandlerRegistry:
        registry = HandlerRegistry("restaurant")
        registry.register_handlers(handlers if handlers is not None else DEFAULT_HANDLERS)
        return registry

    @staticmethod
    def create_pipeline(
        config: NLUConfig,
        handlers: Optional[Dict[str, Tuple[Handler, bool]]] = None,
        dictionary: Optional[HunspellDictionary] = None
    ) -> NLUPipeline:
        """
        Create a fully configured NLU pipeline instance

        Args:
            config: Pipeline configuration
            handlers: Label to ``(handler, requires_follow_up)``; defaults to
                the restaurant handlers
            dictionary: Preloaded dictionary; loaded from the configured files
                when omitted

        Returns:
            Unstarted NLUPipeline; call ``start`` or ``train`` before processing
        """
        # Create spelling corrector
        corrector = SpellCorrector(
            dictionary if dictionary is not None else PipelineFactory.create_dictionary(config),
            max_suggestions=config.spelling.max_suggestions,
            max_distance=config.spelling.max_distance,
        )

        # Create shared preprocessor
        preprocessor = TextPreprocessor(corrector, policy=config.spelling.policy)

        # Create models
        classifier = IntentClassifier(
            preprocessor,
            model_path=config.paths.classifier_model_path,
            config=config.classifier,
        )
        spotter = EntitySpotter(language_model=config.spotter.language_model)

        # Create router
        router = DispatchRouter(
            PipelineFactory.create_registry(handlers),
            confidence_threshold=config.router.confidence_threshold,
            fallback_message=config.router.fallback_message,
        )

        return NLUPipeline(
            config=config,
            preprocessor=preprocessor,
            classifier=classifier,
            spotter=spotter,
            router=router,
            history=ResponseHistory(config.router.history_capacity),
        )
