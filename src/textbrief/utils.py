from __future__ import annotations
from datetime import datetime, timezone
from typing import List
import math
import re

_WS = re.compile(r"\s+")
_CHUNK_SPLIT = re.compile(r"[.!?]+")
PLACEHOLDER_KEY = "your_huggingface_api_key_here"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def word_count(text: str) -> int:
    # counts the empty pieces around leading/trailing whitespace too
    return len(_WS.split(text))


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def is_real_key(key: str | None) -> bool:
    return bool(key) and key != PLACEHOLDER_KEY


def chunk_text(text: str, max_length: int = 1000) -> List[str]:
    """Pack sentences into chunks of at most `max_length` characters."""
    pieces = [p.strip() for p in _CHUNK_SPLIT.split(text) if p.strip()]
    chunks: List[str] = []
    current = ""
    for piece in pieces:
        if len(current) + len(piece) + 1 <= max_length:
            current += (". " if current else "") + piece
        else:
            if current:
                chunks.append(current + ".")
            current = piece
    if current:
        chunks.append(current + ".")
    return chunks or [text]
