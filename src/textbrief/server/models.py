from pydantic import BaseModel
from typing import Any, Literal


class SummarizeRequest(BaseModel):
    # validated by hand so type errors get the same 400 body as missing text
    text: Any = None


class HealthDTO(BaseModel):
    status: str = "OK"
    message: str = "AI Text Summarizer API is running"
    timestamp: str
    mode: Literal["ai", "demo"]


class ErrorDTO(BaseModel):
    error: str
    message: str
