from __future__ import annotations
import asyncio
import logging
from typing import List, Literal, Optional
import httpx
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from .config import TextbriefConfig
from .inference import InferenceClient, InferenceError
from .stats import build_stats
from .summarizer import summarize as extractive_summary
from .utils import chunk_text, now_iso

log = logging.getLogger(__name__)


class SummaryResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: str
    original_length: int
    summary_length: int
    original_word_count: int
    summary_word_count: int
    compression_ratio: int
    timestamp: str
    mode: Literal["ai", "demo"]
    fallback: bool = False


def make_result(original: str, summary: str, mode: str, fallback: bool = False) -> SummaryResult:
    summary = summary.strip()
    stats = build_stats(original, summary)
    log.info(
        "summarization complete: %d -> %d chars (%d%% compression)",
        stats.original_length, stats.summary_length, stats.compression_ratio,
    )
    return SummaryResult(summary=summary, timestamp=now_iso(), mode=mode, fallback=fallback, **stats.as_dict())


class SummarizationService:
    def __init__(self, cfg: TextbriefConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cfg = cfg
        self.transport = transport

    @property
    def mode(self) -> str:
        return self.cfg.mode

    async def summarize(self, text: str) -> SummaryResult:
        if not self.cfg.ai_enabled:
            log.info("using extractive summarization (no API key configured)")
            return make_result(text, extractive_summary(text), "demo")

        log.info("using model summarization")
        try:
            summary = await self._summarize_remote(text)
        except InferenceError as ex:
            if not self.cfg.fallback_enabled:
                raise
            log.warning("model summarization failed, falling back to extractive: %s", str(ex)[:200])
            return make_result(text, extractive_summary(text), "demo", fallback=True)
        return make_result(text, summary, "ai")

    async def _summarize_remote(self, text: str) -> str:
        size = self.cfg.chunk_size
        async with InferenceClient(self.cfg, transport=self.transport) as client:
            if len(text) <= size:
                return await client.summarize(text)

            chunks = chunk_text(text, size)
            log.info("processing %d chunks", len(chunks))
            partials: List[str] = []
            for i, chunk in enumerate(chunks):
                log.info("processing chunk %d/%d", i + 1, len(chunks))
                partials.append(await client.summarize(chunk))
                if i < len(chunks) - 1 and self.cfg.chunk_delay_ms:
                    await asyncio.sleep(self.cfg.chunk_delay_ms / 1000.0)

            combined = " ".join(partials)
            if len(combined) > size:
                log.info("final summarization pass")
                return await client.summarize(combined)
            return combined
