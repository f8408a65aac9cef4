"""
Unit tests for corpus loading
"""
import json
from pathlib import Path

import pytest

from restaurant_nlu.core.corpus_loader import build_training_examples, load_entities, load_intents
from restaurant_nlu.core.handlers import DEFAULT_HANDLERS
from restaurant_nlu.exceptions import ConfigurationError

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class TestLoadIntents:
    """Intent corpus loading"""

    def test_load_sample(self, corpus_files):
        intents_file, _ = corpus_files

        intents = load_intents(intents_file)

        assert [intent.tag for intent in intents] == ["Greeting", "Goodbye", "Order"]
        assert intents[2].actions == ("PlaceOrder",)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_intents(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('[{"tag": "Greeting", ', encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Malformed"):
            load_intents(path)

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps([{"patterns": ["Hi"]}]), encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid"):
            load_intents(path)

    def test_duplicate_tag(self, tmp_path):
        path = tmp_path / "duplicate.json"
        path.write_text(json.dumps([{"tag": "Greeting"}, {"tag": "Greeting"}]), encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Duplicate"):
            load_intents(path)

    def test_training_examples_in_file_order(self, corpus_files):
        intents_file, _ = corpus_files

        examples = build_training_examples(load_intents(intents_file))

        assert len(examples) == 18
        assert (examples[0].label, examples[0].text) == ("Greeting", "Hi")
        assert (examples[-1].label, examples[-1].text) == ("Order", "Please order poha for priya")


class TestLoadEntities:
    """Entity corpus loading"""

    def test_load_sample(self, corpus_files):
        _, entities_file = corpus_files

        entities = load_entities(entities_file)

        assert [entity.tag for entity in entities] == ["Name", "FoodItem"]
        assert "masala dosa" in entities[1].patterns


class TestBundledCorpus:
    """Corpus files shipped with the project"""

    def test_every_intent_has_a_handler(self):
        intents = load_intents(DATA_DIR / "ghms-restaurant.json")

        assert {intent.tag for intent in intents} == set(DEFAULT_HANDLERS)

    def test_entity_types(self):
        entities = load_entities(DATA_DIR / "ghms-restaurant-ner.json")

        assert [entity.tag for entity in entities] == ["Name", "FoodItem"]
