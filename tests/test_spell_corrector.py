"""
Unit tests for SpellCorrector component
"""
from pathlib import Path

import pytest
from rapidfuzz.distance import Levenshtein

from restaurant_nlu.core.dictionary import HunspellDictionary
from restaurant_nlu.core.domain_words import load_domain_words
from restaurant_nlu.core.spell_corrector import SpellCorrector

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture
def corrector():
    dictionary = HunspellDictionary(["order", "masala", "dosa", "idli", "for", "menu", "show", "me", "the"])
    return SpellCorrector(dictionary)


class TestSpellCorrector:
    """Token-level correction"""

    def test_known_words_unchanged(self, corrector):
        assert corrector.correct("order masala dosa") == "order masala dosa"

    def test_misspelled_word_replaced(self, corrector):
        assert corrector.correct("ordr masla dosa") == "order masala dosa"

    def test_domain_word_not_altered(self):
        dictionary = HunspellDictionary(["data", "order"])
        dictionary.add_words(["dosa"])

        assert SpellCorrector(dictionary).correct("order dosa") == "order dosa"

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_input_unchanged(self, corrector, text):
        assert corrector.correct(text) == text

    def test_whitespace_preserved(self, corrector):
        assert corrector.correct("show  me\tthe menuu") == "show  me\tthe menu"

    def test_punctuation_preserved(self, corrector):
        assert corrector.correct("dosaa, please?").startswith("dosa, ")

    def test_capitalization_preserved(self, corrector):
        assert corrector.correct("Ordr") == "Order"
        assert corrector.correct("MENUU") == "MENU"

    def test_tokens_without_letters_kept(self, corrector):
        assert corrector.correct("order 2 dosa") == "order 2 dosa"

    def test_unknown_word_without_close_match_kept(self, corrector):
        assert corrector.correct("xylophone") == "xylophone"

    def test_check(self, corrector):
        assert corrector.check("Dosa") is True
        assert corrector.check("dosaa") is False


class TestSuggestions:
    """Suggestion ranking"""

    def test_closest_first(self, corrector):
        assert corrector.suggest("dosaa")[0] == "dosa"

    def test_ties_broken_by_dictionary_order(self):
        dictionary = HunspellDictionary(["cat", "bat", "hat"])

        assert SpellCorrector(dictionary).suggest("at") == ["cat", "bat", "hat"]

    def test_suggestion_limit(self):
        dictionary = HunspellDictionary(["cat", "bat", "hat", "rat", "mat"])

        assert len(SpellCorrector(dictionary, max_suggestions=3).suggest("at")) == 3

    def test_distance_cutoff(self):
        dictionary = HunspellDictionary(["restaurant"])

        assert SpellCorrector(dictionary, max_distance=3).suggest("rest") == []

    def test_empty_word(self, corrector):
        assert corrector.suggest("") == []


class TestBundledDictionary:
    """Correction against the shipped Hunspell files"""

    @pytest.fixture
    def bundled_corrector(self):
        dictionary = HunspellDictionary.from_files(
            DATA_DIR / "dictionary" / "en_base.dic",
            DATA_DIR / "dictionary" / "en_base.aff",
            extra_words=load_domain_words(),
        )
        return SpellCorrector(dictionary)

    def test_hunspell_and_domain_words_corrected(self, bundled_corrector):
        assert bundled_corrector.correct("ordr masla dosa") == "order masala dosa"

    def test_affixed_forms_kept(self, bundled_corrector):
        assert bundled_corrector.correct("ordered colder dishes") == "ordered colder dishes"

    def test_suggestions_within_distance(self, bundled_corrector):
        for suggestion in bundled_corrector.suggest("ordr"):
            assert Levenshtein.distance("ordr", suggestion) <= 3
