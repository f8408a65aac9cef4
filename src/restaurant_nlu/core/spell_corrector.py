"""
SpellCorrector component

Token-level spelling correction against a Hunspell dictionary merged with the
domain vocabulary. Unknown tokens are replaced by the closest dictionary form
by Levenshtein distance.
"""
import logging
import re
from typing import List, Optional

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from .dictionary import HunspellDictionary

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"(\s+)")
_AFFIX_PUNCT_RE = re.compile(r"^(\W*)(.*?)(\W*)$", re.DOTALL)


class SpellCorrector:
    """
    Dictionary-backed spelling corrector

    A token that is in the dictionary (case-insensitively) is kept. Otherwise
    up to ``max_suggestions`` forms within ``max_distance`` edits are looked up
    and the closest one replaces the token. Ties go to Hunspell suggestion
    order, then to the insertion order of the extra words.
    """

    def __init__(self, dictionary: HunspellDictionary, max_suggestions: int = 3, max_distance: int = 3):
        """
        Initialize SpellCorrector

        Args:
            dictionary: Accepted word forms, domain words included
            max_suggestions: Maximum number of suggestions per token
            max_distance: Maximum edit distance of a suggestion
        """
        self.dictionary = dictionary
        self.max_suggestions = max_suggestions
        self.max_distance = max_distance
        logger.debug(
            f"SpellCorrector initialized with {len(dictionary)} words, "
            f"max_suggestions={max_suggestions}, max_distance={max_distance}"
        )

    def check(self, word: str) -> bool:
        """True if the word is an accepted form"""
        return word in self.dictionary

    def suggest(self, word: str) -> List[str]:
        """
        Suggest replacements for a word, closest first

        Candidates are the Hunspell suggestions followed by the extra words.
        Only candidates within ``max_distance`` Levenshtein edits are kept and
        ties keep candidate order.

        Args:
            word: Word to look up

        Returns:
            Up to ``max_suggestions`` dictionary forms
        """
        if not word:
            return []
        lowered = word.lower()

        extra = process.extract(
            lowered,
            self.dictionary.choices,
            scorer=Levenshtein.distance,
            score_cutoff=self.max_distance,
            limit=None,
        )
        extra.sort(key=lambda match: (match[1], match[2]))
        candidates = [candidate.lower() for candidate in self.dictionary.suggest(word)]
        candidates.extend(choice for choice, _distance, _index in extra)

        ranked = []
        for candidate in dict.fromkeys(candidates):
            distance = Levenshtein.distance(lowered, candidate, score_cutoff=self.max_distance)
            if candidate != lowered and distance <= self.max_distance:
                ranked.append((distance, candidate))
        ranked.sort(key=lambda item: item[0])
        return [candidate for _distance, candidate in ranked[:self.max_suggestions]]

    def correct(self, text: Optional[str]) -> Optional[str]:
        """
        Correct every whitespace-delimited token of a text

        Args:
            text: Text to correct; empty or None is returned unchanged

        Returns:
            Corrected text with the original whitespace preserved
        """
        if not text:
            return text
        parts = _WHITESPACE_RE.split(text)
        return "".join(
            part if not part or part.isspace() else self._correct_token(part)
            for part in parts
        )

    def _correct_token(self, token: str) -> str:
        leading, core, trailing = _AFFIX_PUNCT_RE.match(token).groups()
        if not any(ch.isalpha() for ch in core) or self.check(core):
            return token

        suggestions = self.suggest(core)
        if not suggestions:
            return token

        replacement = suggestions[0]
        if len(core) > 1 and core.isupper():
            replacement = replacement.upper()
        elif core[0].isupper():
            replacement = replacement[0].upper() + replacement[1:]

        logger.debug(f"Corrected '{core}' to '{replacement}'")
        return f"{leading}{replacement}{trailing}"
