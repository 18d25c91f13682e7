from __future__ import annotations
from typing import Callable, List, Tuple
import math
import re
from collections import Counter

MIN_SENTENCE_CHARS = 10
SHORT_PREFIX_RATIO = 0.6
EMPTY_PREFIX_RATIO = 0.4
TARGET_RATIO = 0.35
MAX_RATIO = 0.6
FIRST_BOOST = 1.5
LAST_BOOST = 1.3
SALIENT_BOOST = 1.2

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might",
    "this", "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
    "what", "which", "who", "when", "where", "why", "how",
})

_SENTENCE = re.compile(r"[^.!?\n]+[.!?]+\s*")
_TERMINATOR_SPLIT = re.compile(r"[.!?]+\s+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_WIDE_SPACE_SPLIT = re.compile(r"\s{2,}")
_WORD = re.compile(r"\b\w+\b", re.ASCII)
_DIGITS = re.compile(r"\d+", re.ASCII)
_CAPITALIZED = re.compile(r"[A-Z][a-z]+")


def _keep(pieces) -> List[str]:
    out = []
    for p in pieces:
        p = p.strip()
        if len(p) > MIN_SENTENCE_CHARS:
            out.append(p)
    return out


def _by_pattern(text: str) -> List[str]:
    return _keep(m.group(0) for m in _SENTENCE.finditer(text))


def _by_terminators(text: str) -> List[str]:
    return _keep(_TERMINATOR_SPLIT.split(text))


def _by_paragraphs(text: str) -> List[str]:
    return _keep(_PARAGRAPH_SPLIT.split(text))


def _by_wide_spaces(text: str) -> List[str]:
    return _keep(_WIDE_SPACE_SPLIT.split(text))


# tried in order, first non-empty result wins
SEGMENTERS: Tuple[Callable[[str], List[str]], ...] = (
    _by_pattern,
    _by_terminators,
    _by_paragraphs,
    _by_wide_spaces,
)


def split_sentences(text: str) -> List[str]:
    """Segment already-stripped text into candidate sentences."""
    for segment in SEGMENTERS:
        sents = segment(text)
        if sents:
            return sents
    return []


def tokenize(text: str) -> List[str]:
    return _WORD.findall(text.lower())


def word_frequencies(text: str) -> Counter:
    return Counter(w for w in tokenize(text) if w not in STOP_WORDS and len(w) > 2)


def _prefix(text: str, ratio: float) -> str:
    return text[: math.floor(len(text) * ratio)].strip() + "..."


def score_sentence(sentence: str, index: int, total: int, freq: Counter) -> float:
    words = tokenize(sentence)
    if not words:
        return 0.0
    score = float(sum(freq.get(w, 0) for w in words))
    if index == 0:
        score *= FIRST_BOOST
    if index == total - 1:
        score *= LAST_BOOST
    if _DIGITS.search(sentence) or _CAPITALIZED.search(sentence):
        score *= SALIENT_BOOST
    return score / math.sqrt(len(words))


def target_count(total: int) -> int:
    return max(3, min(math.ceil(total * TARGET_RATIO), math.floor(total * MAX_RATIO)))


def summarize(text: str) -> str:
    """
    Extractive summary without any model:
    - Segment into sentences (pattern, terminators, paragraphs, wide spaces)
    - Score by stop-word filtered term frequency with position boosts
    - Keep first, last and best-scoring sentences in document order
    Never raises; short or unstructured text degrades to a prefix + "...".
    """
    normalized = text.strip()
    if not normalized:
        return text

    sents = split_sentences(normalized)
    if len(sents) <= 2:
        return _prefix(normalized, SHORT_PREFIX_RATIO)
    if len(sents) == 3:
        return " ".join(sents).strip()

    # frequencies come from the raw input, not the stripped copy
    freq = word_frequencies(text)
    total = len(sents)
    scores = [(i, score_sentence(s, i, total, freq)) for i, s in enumerate(sents)]
    ranked = sorted(scores, key=lambda x: (-x[1], x[0]))

    selected = {0}
    if total > 1:
        selected.add(total - 1)
    want = target_count(total)
    for i, _ in ranked:
        if len(selected) >= want:
            break
        selected.add(i)

    summary = " ".join(sents[i] for i in sorted(selected) if sents[i].strip()).strip()
    if not summary:
        return _prefix(normalized, EMPTY_PREFIX_RATIO)
    return summary
