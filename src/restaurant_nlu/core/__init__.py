"""
Core components for the restaurant NLU pipeline

Spelling correction, intent classification, entity spotting and dispatch.
"""

from .dictionary import HunspellDictionary
from .spell_corrector import SpellCorrector
from .preprocessing import TextPreprocessor
from .maxent import MaxEntClassifier
from .intent_classifier import IntentClassifier, ClassifierModel
from .entity_spotter import EntitySpotter
from .router import DispatchRouter, HandlerRegistry, HandlerBinding
from .history import ResponseHistory
from .pipeline import NLUPipeline

__all__ = [
    "HunspellDictionary",
    "SpellCorrector",
    "TextPreprocessor",
    "MaxEntClassifier",
    "IntentClassifier",
    "ClassifierModel",
    "EntitySpotter",
    "DispatchRouter",
    "HandlerRegistry",
    "HandlerBinding",
    "ResponseHistory",
    "NLUPipeline",
]
