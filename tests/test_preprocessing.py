"""
Unit tests for text preprocessing and featurization
"""
import numpy as np
import pytest

from restaurant_nlu.config import SPELLING_POLICY_SYMMETRIC, SPELLING_POLICY_TRAINING_ONLY
from restaurant_nlu.core.features import build_feature_pipeline, normalize_text, word_tokens
from restaurant_nlu.core.preprocessing import TextPreprocessor
from restaurant_nlu.core.spell_corrector import SpellCorrector
from restaurant_nlu.exceptions import ConfigurationError
from restaurant_nlu.models.corpus import TrainingExample


class TestCleaning:
    """Training example cleaning"""

    def test_incomplete_examples_dropped(self):
        examples = [
            TrainingExample(text="Hi", label="Greeting"),
            TrainingExample(text=None, label="Greeting"),
            TrainingExample(text="Bye", label=None),
            TrainingExample(text="  ", label="Goodbye"),
        ]

        cleaned = TextPreprocessor().clean(examples)

        assert cleaned == [TrainingExample(text="Hi", label="Greeting")]

    def test_duplicates_collapsed(self):
        examples = [
            TrainingExample(text="Hi", label="Greeting"),
            TrainingExample(text="Bye", label="Goodbye"),
            TrainingExample(text="Hi", label="Greeting"),
            TrainingExample(text="Hi", label="Greeting"),
        ]

        cleaned = TextPreprocessor().clean(examples)

        assert [example.key for example in cleaned] == [("Greeting", "Hi"), ("Goodbye", "Bye")]

    def test_same_text_different_labels_kept(self):
        examples = [
            TrainingExample(text="Hi", label="Greeting"),
            TrainingExample(text="Hi", label="Support"),
        ]

        assert len(TextPreprocessor().clean(examples)) == 2

    def test_empty_input(self):
        assert TextPreprocessor().clean([]) == []


class TestSpellingPolicy:
    """Spelling correction of training and prediction text"""

    def test_symmetric_corrects_prediction_input(self, small_dictionary):
        preprocessor = TextPreprocessor(SpellCorrector(small_dictionary), policy=SPELLING_POLICY_SYMMETRIC)

        assert preprocessor.prepare("ordr masala dosa") == "order masala dosa"
        assert preprocessor.prepare_training_text("ordr masala dosa") == "order masala dosa"

    def test_training_only_leaves_prediction_input(self, small_dictionary):
        preprocessor = TextPreprocessor(SpellCorrector(small_dictionary), policy=SPELLING_POLICY_TRAINING_ONLY)

        assert preprocessor.prepare("ordr masala dosa") == "ordr masala dosa"
        assert preprocessor.prepare_training_text("ordr masala dosa") == "order masala dosa"

    def test_prepare_examples_corrects_text(self, small_dictionary):
        preprocessor = TextPreprocessor(SpellCorrector(small_dictionary))

        prepared = preprocessor.prepare_examples([TrainingExample(text="helo", label="Greeting")])

        assert prepared == [TrainingExample(text="hello", label="Greeting")]

    def test_without_corrector(self):
        preprocessor = TextPreprocessor()

        assert preprocessor.prepare("ordr") == "ordr"
        assert preprocessor.prepare(None) == ""

    def test_signature(self):
        assert TextPreprocessor(policy=SPELLING_POLICY_TRAINING_ONLY).signature == {
            "spelling_policy": "training_only"
        }

    def test_unknown_policy_rejected(self):
        with pytest.raises(ConfigurationError):
            TextPreprocessor(policy="whenever")


class TestFeatures:
    """Text normalization and feature extraction"""

    def test_normalize_text(self):
        assert normalize_text("  Café, NAMASTE!! ") == "cafe namaste"

    def test_word_tokens_drop_stop_words(self):
        assert word_tokens("Order the masala dosa for Raj") == ["order", "masala", "dosa", "raj"]

    def test_word_tokens_keep_digits(self):
        assert word_tokens("Chicken 65") == ["chicken", "65"]

    def test_feature_rows_are_normalized(self):
        pipeline = build_feature_pipeline()

        matrix = pipeline.fit_transform(["order masala dosa", "hi there", "bye"])

        assert matrix.shape[0] == 3
        norms = np.asarray(matrix.multiply(matrix).sum(axis=1)).ravel()
        assert norms == pytest.approx([1.0, 1.0, 1.0])

    def test_character_ngrams_capture_misspellings(self):
        pipeline = build_feature_pipeline()
        pipeline.fit(["masala dosa"])

        # Unseen spelling still shares character n-grams
        assert pipeline.transform(["masla dosaa"]).nnz > 0
