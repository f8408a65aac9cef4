"""
Text featurization

Word unigrams and character n-grams over normalized text, concatenated into a
single L2-normalized sparse vector.
"""
import re
from typing import List

from sklearn.feature_extraction.text import CountVectorizer, strip_accents_unicode
from sklearn.pipeline import FeatureUnion, Pipeline
from sklearn.preprocessing import Normalizer

STOP_WORDS = frozenset([
    "a", "about", "above", "after", "again", "against", "all", "am", "an", "and", "any", "are", "as", "at",
    "be", "because", "been", "before", "being", "below", "between", "both", "but", "by",
    "can", "did", "do", "does", "doing", "don", "down", "during",
    "each", "few", "for", "from", "further",
    "had", "has", "have", "having", "he", "her", "here", "hers", "herself", "him", "himself", "his", "how",
    "i", "if", "in", "into", "is", "it", "its", "itself", "just",
    "me", "more", "most", "my", "myself", "no", "nor", "not", "now",
    "of", "off", "on", "once", "only", "or", "other", "our", "ours", "ourselves", "out", "over", "own",
    "s", "same", "she", "should", "so", "some", "such",
    "t", "than", "that", "the", "their", "theirs", "them", "themselves", "then", "there", "these", "they",
    "this", "those", "through", "to", "too",
    "under", "until", "up", "very", "was", "we", "were", "what", "when", "where", "which", "while", "who",
    "whom", "why", "will", "with",
    "you", "your", "yours", "yourself", "yourselves",
])

# Single-character tokens such as digits are kept
WORD_TOKEN_PATTERN = r"(?u)\b\w+\b"

_PUNCTUATION_RE = re.compile(r"[^\w\s]|_")
_WORD_RE = re.compile(WORD_TOKEN_PATTERN)


def normalize_text(text: str) -> str:
    """Lower-case, strip diacritics and punctuation, collapse whitespace"""
    text = strip_accents_unicode(text.lower())
    text = _PUNCTUATION_RE.sub(" ", text)
    return " ".join(text.split())


def word_tokens(text: str) -> List[str]:
    """Word features of a text: normalized tokens without stop words"""
    return [token for token in _WORD_RE.findall(normalize_text(text)) if token not in STOP_WORDS]


def build_feature_pipeline(word_ngram_length: int = 1, char_ngram_length: int = 3) -> Pipeline:
    """
    Build the unfitted featurization pipeline

    Args:
        word_ngram_length: Longest word n-gram; all shorter lengths are included
        char_ngram_length: Longest character n-gram; all shorter lengths are included

    Returns:
        scikit-learn Pipeline producing L2-normalized sparse feature rows
    """
    word_features = CountVectorizer(
        preprocessor=normalize_text,
        token_pattern=WORD_TOKEN_PATTERN,
        stop_words=sorted(STOP_WORDS),
        ngram_range=(1, word_ngram_length),
    )
    char_features = CountVectorizer(
        analyzer="char_wb",
        preprocessor=normalize_text,
        ngram_range=(1, char_ngram_length),
    )
    return Pipeline([
        ("ngrams", FeatureUnion([
            ("words", word_features),
            ("chars", char_features),
        ])),
        ("normalize", Normalizer(norm="l2")),
    ])
