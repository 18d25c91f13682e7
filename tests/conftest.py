# tests/conftest.py
import json

import httpx
import pytest

from textbrief.config import TextbriefConfig

LONG_TEXT = " ".join([
    "The city council met on Tuesday to discuss the new transit plan.",
    "Members debated the cost of extending the tram line to the airport.",
    "Several residents spoke in favour of more frequent bus services.",
    "The finance committee warned that the budget is already stretched.",
    "A consultant presented ridership forecasts for the next ten years.",
    "Business owners asked for fewer road closures during construction.",
    "The mayor promised a public consultation before any final decision.",
    "The council will vote on the transit plan at its next meeting in May.",
])


class Recorder:
    """MockTransport handler that answers every call with the same response and records requests."""

    def __init__(self, status=200, body=None, exc=None):
        self.status = status
        self.body = body
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(request)
        return httpx.Response(self.status, json=self.body)

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def timeout_error(request):
    return httpx.ReadTimeout("timed out", request=request)


def connect_error(request):
    return httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def ai_cfg():
    return TextbriefConfig(api_key="hf_test", chunk_delay_ms=0)


@pytest.fixture
def demo_cfg():
    return TextbriefConfig(api_key=None)
