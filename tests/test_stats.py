# tests/test_stats.py
import pytest

from textbrief.stats import build_stats, compression_ratio
from textbrief.summarizer import summarize
from textbrief.utils import chunk_text, is_real_key, now_iso, round_half_up, word_count


@pytest.mark.parametrize("original,summary,expected", [
    (1000, 250, 75),
    (1000, 333, 67),
    (8, 7, 13),   # 12.5 rounds up, not to even
    (8, 9, -12),  # -12.5 rounds toward +inf
    (4, 5, -25),
    (0, 0, 0),
])
def test_compression_ratio(original, summary, expected):
    assert compression_ratio(original, summary) == expected


def test_word_count_counts_edge_pieces():
    assert word_count("one two   three") == 3
    assert word_count("  a b ") == 4
    assert word_count("") == 1


def test_build_stats_matches_summary():
    text = (
        "Rivers shape the land they cross. Floods carry silt onto the plains. "
        "Farmers have relied on that silt for centuries. Dams now hold much of it back. "
        "Engineers are studying ways to release sediment downstream."
    )
    summary = summarize(text)
    stats = build_stats(text, summary)
    assert stats.original_length == len(text)
    assert stats.summary_length == len(summary)
    assert stats.compression_ratio == round_half_up(
        (len(text) - len(summary)) / len(text) * 100
    )
    assert 0 < stats.compression_ratio < 100
    assert stats.as_dict()["summary_word_count"] == len(summary.split())


def test_chunk_text_packs_sentences():
    assert chunk_text("One. Two. Three.") == ["One. Two. Three."]
    assert chunk_text("Alpha beta. Gamma delta. Eps.", max_length=10) == [
        "Alpha beta.",
        "Gamma delta.",
        "Eps.",
    ]


def test_chunk_text_without_content_returns_input():
    assert chunk_text("...") == ["..."]


def test_chunks_respect_max_length():
    text = " ".join(f"Sentence number {i} has a few words in it." for i in range(60))
    chunks = chunk_text(text, 200)
    assert len(chunks) > 1
    assert all(len(c) <= 202 for c in chunks)


def test_placeholder_key_is_not_real():
    assert not is_real_key(None)
    assert not is_real_key("")
    assert not is_real_key("your_huggingface_api_key_here")
    assert is_real_key("hf_abc")


def test_now_iso_is_utc():
    ts = now_iso()
    assert ts.endswith("Z")
    assert "T" in ts
