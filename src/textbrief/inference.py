from __future__ import annotations
import logging
from typing import Any, Dict, Optional
import httpx
from .config import TextbriefConfig

log = logging.getLogger(__name__)


class InferenceError(Exception):
    """Remote summarization failed."""


class ModelLoadingError(InferenceError):
    pass


class ApiKeyError(InferenceError):
    pass


class InferenceTimeout(InferenceError):
    pass


def build_parameters(text: str) -> Dict[str, Any]:
    n = len(text)
    return {
        "max_length": min(250, max(80, n // 8)),
        "min_length": min(50, n // 20),
        "do_sample": False,
        "num_beams": 4,
        "length_penalty": 1.2,
    }


def parse_response(data: Any) -> str:
    if isinstance(data, dict) and data.get("error"):
        raise InferenceError(str(data["error"]))
    if isinstance(data, list) and data and isinstance(data[0], dict) and data[0].get("summary_text"):
        return data[0]["summary_text"]
    raise InferenceError("Unexpected API response format")


class InferenceClient:
    """Thin async client for a Hugging Face summarization model."""

    def __init__(self, cfg: TextbriefConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cfg = cfg
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(cfg.timeout_s),
            headers={
                "Authorization": f"Bearer {cfg.api_key}",
                "Content-Type": "application/json",
            },
        )

    async def __aenter__(self) -> "InferenceClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def summarize(self, text: str) -> str:
        payload = {"inputs": text, "parameters": build_parameters(text)}
        try:
            r = await self._client.post(self.cfg.api_url, json=payload)
        except httpx.TimeoutException as ex:
            raise InferenceTimeout("Request timeout - the text might be too long") from ex
        except (httpx.HTTPError, httpx.InvalidURL) as ex:
            raise InferenceError(f"API request failed: {ex}") from ex

        if r.status_code == 503:
            raise ModelLoadingError("Model is loading, please try again in a few moments")
        if r.status_code == 401:
            raise ApiKeyError("API key is invalid or not configured")
        if not 200 <= r.status_code < 300:
            raise InferenceError(f"API request failed: status {r.status_code}")

        try:
            data = r.json()
        except ValueError as ex:
            raise InferenceError("Unexpected API response format") from ex
        summary = parse_response(data)
        log.debug("model returned %d chars for %d input chars", len(summary), len(text))
        return summary
