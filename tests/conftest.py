"""
Shared test fixtures
"""
import json
import logging

import pytest

from restaurant_nlu.config import NLUConfig, load_config_from_dict
from restaurant_nlu.core.dictionary import HunspellDictionary
from restaurant_nlu.models.corpus import EntityDefinition, TrainingExample
from restaurant_nlu.models.response import RecognizedEntity


SAMPLE_INTENTS = [
    {
        "tag": "Greeting",
        "patterns": ["Hi", "Hello", "Hey there", "Good morning", "Hello, anyone there?", "Namaste"],
        "responses": ["Hello, how can I help you?"],
        "actions": []
    },
    {
        "tag": "Goodbye",
        "patterns": ["Bye", "bye bye", "Goodbye", "See you later", "Good night", "Catch you later"],
        "responses": ["Goodbye"],
        "actions": []
    },
    {
        "tag": "Order",
        "patterns": [
            "Order masala dosa", "Order idli for raj", "I want to order food", "Place an order for vada",
            "Order filter coffee", "Please order poha for priya"
        ],
        "responses": ["Your order is placed"],
        "actions": ["PlaceOrder"]
    },
]

SAMPLE_ENTITIES = [
    {"tag": "Name", "patterns": ["raj", "priya"]},
    {"tag": "FoodItem", "patterns": ["masala dosa", "dosa", "idli", "vada", "poha", "filter coffee"]},
]

SAMPLE_WORDS = [
    "hi", "hello", "hey", "there", "good", "morning", "anyone", "namaste", "bye", "goodbye", "see", "you",
    "later", "night", "catch", "order", "masala", "dosa", "idli", "for", "i", "want", "to", "food",
    "place", "an", "vada", "filter", "coffee", "please", "poha",
]


@pytest.fixture
def sample_intents():
    """Intent corpus records"""
    return [dict(intent) for intent in SAMPLE_INTENTS]


@pytest.fixture
def sample_entities():
    """Entity definitions"""
    return [EntityDefinition(**entity) for entity in SAMPLE_ENTITIES]


@pytest.fixture
def training_examples():
    """Labeled examples of the sample corpus"""
    return [
        TrainingExample(text=pattern, label=intent["tag"])
        for intent in SAMPLE_INTENTS
        for pattern in intent["patterns"]
    ]


@pytest.fixture
def small_dictionary():
    """In-memory dictionary covering the sample corpus"""
    return HunspellDictionary(SAMPLE_WORDS)


@pytest.fixture
def corpus_files(tmp_path):
    """Sample intent and entity corpora written to JSON files"""
    intents_file = tmp_path / "intents.json"
    entities_file = tmp_path / "entities.json"
    intents_file.write_text(json.dumps(SAMPLE_INTENTS), encoding="utf-8")
    entities_file.write_text(json.dumps(SAMPLE_ENTITIES), encoding="utf-8")
    return intents_file, entities_file


@pytest.fixture
def test_config(tmp_path, corpus_files):
    """Configuration pointing at temporary corpora and model paths"""
    intents_file, entities_file = corpus_files
    return load_config_from_dict({
        "paths": {
            "intents_file": str(intents_file),
            "entities_file": str(entities_file),
            "classifier_model_path": str(tmp_path / "models" / "intent-classifier.joblib"),
            "spotter_model_path": str(tmp_path / "models" / "entity-spotter.joblib"),
        },
        "spotter": {"language_model": None},
        "router": {"history_capacity": 10},
    })


@pytest.fixture
def default_config():
    return NLUConfig()


@pytest.fixture
def order_entities():
    """Entities recognized in 'order idli for raj'"""
    return [
        RecognizedEntity(entity_type="FoodItem", entity_value="idli"),
        RecognizedEntity(entity_type="Name", entity_value="raj"),
    ]


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Restore the root logger after tests that configure logging"""
    import restaurant_nlu.logger as logger_module

    root_logger = logging.getLogger()
    level = root_logger.level

    yield

    logger_module._logging_configured = False
    for handler in root_logger.handlers[:]:
        # pytest manages its own capture handlers
        if type(handler).__module__.startswith("_pytest"):
            continue
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)
