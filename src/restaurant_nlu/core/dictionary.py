"""
Hunspell dictionary loading

Wraps a spylls Hunspell dictionary, which interprets the full ``.aff``/``.dic``
format (affix continuation classes, TRY, REP and n-gram suggestion tables),
together with an in-memory list of extra accepted words such as the domain
vocabulary.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from spylls.hunspell import Dictionary

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class HunspellDictionary:
    """
    Accepted word forms: a Hunspell dictionary plus extra words

    Extra words are matched case-insensitively and keep their insertion order,
    which is the tie-break order for spelling suggestions after the Hunspell
    suggestions.
    """

    def __init__(self, words: Iterable[str] = (), hunspell: Optional[Dictionary] = None):
        """
        Initialize HunspellDictionary

        Args:
            words: Extra accepted words
            hunspell: Loaded spylls dictionary; None for extra words only
        """
        self.hunspell = hunspell
        self._forms: Dict[str, str] = {}
        self._choices: Optional[Tuple[str, ...]] = None
        self._suggestions: Dict[str, Tuple[str, ...]] = {}
        self.add_words(words)

    @classmethod
    def from_files(
        cls,
        dictionary_path: PathLike,
        affix_path: PathLike,
        extra_words: Iterable[str] = ()
    ) -> "HunspellDictionary":
        """
        Load a dictionary from Hunspell files and merge extra words

        Args:
            dictionary_path: Path to the ``.dic`` file
            affix_path: Path to the ``.aff`` file with the same base name
            extra_words: Additional accepted words, e.g. domain vocabulary

        Raises:
            ConfigurationError: If a file is missing or the base names differ
        """
        dictionary_path = Path(dictionary_path)
        affix_path = Path(affix_path)
        for path in (dictionary_path, affix_path):
            if not path.exists():
                raise ConfigurationError(f"Hunspell dictionary file not found: {path}")

        base = dictionary_path.with_suffix("")
        if affix_path.with_suffix("") != base or dictionary_path.suffix != ".dic" or affix_path.suffix != ".aff":
            raise ConfigurationError(
                f"Hunspell files must be <name>.dic and <name>.aff side by side, "
                f"got {dictionary_path} and {affix_path}"
            )

        try:
            hunspell = Dictionary.from_files(str(base))
        except (UnicodeDecodeError, ValueError, KeyError, IndexError) as e:
            raise ConfigurationError(f"Malformed Hunspell dictionary {base}: {e}") from e

        dictionary = cls(extra_words, hunspell=hunspell)
        logger.info(
            f"Loaded {len(hunspell.dic.words)} Hunspell stems from {dictionary_path} "
            f"and {len(dictionary._forms)} extra words"
        )
        return dictionary

    def add_words(self, words: Iterable[str]) -> None:
        for word in words:
            word = word.strip()
            if word:
                self._forms.setdefault(word.lower(), word)
        self._choices = None
        self._suggestions.clear()

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        if word.lower() in self._forms:
            return True
        return self.hunspell is not None and self.hunspell.lookup(word)

    def __len__(self) -> int:
        stems = len(self.hunspell.dic.words) if self.hunspell is not None else 0
        return stems + len(self._forms)

    @property
    def choices(self) -> Tuple[str, ...]:
        """Lower-cased extra words in insertion order"""
        if self._choices is None:
            self._choices = tuple(self._forms)
        return self._choices

    def suggest(self, word: str) -> List[str]:
        """
        Hunspell suggestions for a word, in Hunspell's order

        Results are cached per word. Without a Hunspell dictionary the list is
        empty.
        """
        if self.hunspell is None or not word:
            return []
        cached = self._suggestions.get(word)
        if cached is None:
            cached = tuple(self.hunspell.suggest(word))
            self._suggestions[word] = cached
        return list(cached)
