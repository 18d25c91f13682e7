from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Dict
from .utils import round_half_up, word_count


@dataclass(frozen=True)
class SummaryStats:
    original_length: int
    summary_length: int
    original_word_count: int
    summary_word_count: int
    compression_ratio: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compression_ratio(original_length: int, summary_length: int) -> int:
    """Percentage by which the summary is shorter than the original."""
    if original_length == 0:
        return 0
    return round_half_up((original_length - summary_length) / original_length * 100)


def build_stats(original: str, summary: str) -> SummaryStats:
    return SummaryStats(
        original_length=len(original),
        summary_length=len(summary),
        original_word_count=word_count(original),
        summary_word_count=word_count(summary),
        compression_ratio=compression_ratio(len(original), len(summary)),
    )
