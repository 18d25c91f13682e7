from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
import json
import os
from pathlib import Path
from dotenv import load_dotenv
from .utils import is_real_key

DEFAULT_API_URL = "https://api-inference.huggingface.co/models/facebook/bart-large-cnn"
DEFAULT_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]


@dataclass
class TextbriefConfig:
    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout_s: float = 30.0
    chunk_size: int = 1000
    chunk_delay_ms: int = 1000
    min_text_length: int = 200
    max_text_length: int = 100_000
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    fallback_enabled: bool = True

    @property
    def ai_enabled(self) -> bool:
        return is_real_key(self.api_key)

    @property
    def mode(self) -> str:
        return "ai" if self.ai_enabled else "demo"

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "TextbriefConfig":
        return TextbriefConfig(
            api_key=data.get("api_key"),
            api_url=data.get("api_url", DEFAULT_API_URL),
            timeout_s=float(data.get("timeout_s", 30.0)),
            chunk_size=int(data.get("chunk_size", 1000)),
            chunk_delay_ms=int(data.get("chunk_delay_ms", 1000)),
            min_text_length=int(data.get("min_text_length", 200)),
            max_text_length=int(data.get("max_text_length", 100_000)),
            cors_origins=list(data.get("cors_origins", DEFAULT_ORIGINS)),
            host=data.get("host", "0.0.0.0"),
            port=int(data.get("port", 3001)),
            log_level=data.get("log_level", "INFO"),
            fallback_enabled=bool(data.get("fallback_enabled", True)),
        )

    @staticmethod
    def load(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> "TextbriefConfig":
        """Read the JSON file (if given and present), then overlay environment variables."""
        data: Dict[str, Any] = {}
        if path is not None and Path(path).exists():
            data = json.loads(Path(path).read_text())
        if env is None:
            load_dotenv()
            env = os.environ
        cfg = TextbriefConfig.from_dict(data)
        cfg.apply_env(env)
        return cfg

    def apply_env(self, env: Mapping[str, str]) -> None:
        if env.get("HUGGINGFACE_API_KEY"):
            self.api_key = env["HUGGINGFACE_API_KEY"]
        if env.get("HUGGINGFACE_API_URL"):
            self.api_url = env["HUGGINGFACE_API_URL"]
        if env.get("PORT"):
            self.port = int(env["PORT"])
        if env.get("TEXTBRIEF_LOG_LEVEL"):
            self.log_level = env["TEXTBRIEF_LOG_LEVEL"]

    def dump(self) -> str:
        # the key stays in the environment, never in the file
        data = {
            "api_url": self.api_url,
            "timeout_s": self.timeout_s,
            "chunk_size": self.chunk_size,
            "chunk_delay_ms": self.chunk_delay_ms,
            "min_text_length": self.min_text_length,
            "max_text_length": self.max_text_length,
            "cors_origins": self.cors_origins,
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "fallback_enabled": self.fallback_enabled,
        }
        return json.dumps(data, indent=2)


def write_default_config(path: Path) -> None:
    if path.exists():
        raise FileExistsError(f"{path} already exists")
    path.write_text(TextbriefConfig().dump())
