"""
Tests for the llm-library backed client, using a stand-in model.
"""

import asyncio
import time

import pytest

from reqdoc import llm_client
from reqdoc.config import ReqdocSettings
from reqdoc.llm_client import ModelLLMClient
from reqdoc.protocols import LLMClient


class FakeResponse:
    def __init__(self, text):
        self._text = text

    def text(self):
        return self._text


class FakeModel:
    model_id = "fake-model"

    def __init__(self, sleep=0.0):
        self.sleep = sleep
        self.calls = []

    def prompt(self, prompt, system=None, **options):
        self.calls.append((prompt, system, options))
        if self.sleep:
            time.sleep(self.sleep)
        return FakeResponse(f"echo: {prompt}")


def test_satisfies_protocol():
    assert isinstance(ModelLLMClient(FakeModel()), LLMClient)


def test_complete_passes_system_and_options():
    model = FakeModel()
    client = ModelLLMClient(model, default_temperature=0.0, default_max_tokens=256)

    text = asyncio.run(client.complete("hello", system="be brief"))

    assert text == "echo: hello"
    assert model.calls == [("hello", "be brief", {"temperature": 0.0, "max_tokens": 256})]


def test_call_options_override_defaults():
    model = FakeModel()
    client = ModelLLMClient(model, default_temperature=None)

    asyncio.run(client.complete("hi", temperature=0.7, max_tokens=10))

    assert model.calls[0][2] == {"temperature": 0.7, "max_tokens": 10}


def test_unset_options_are_not_sent():
    model = FakeModel()
    client = ModelLLMClient(model, default_temperature=None, default_max_tokens=None)

    asyncio.run(client.complete("hi"))

    assert model.calls[0][2] == {}


def test_slow_call_times_out():
    client = ModelLLMClient(FakeModel(sleep=0.5), default_timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(client.complete("hi"))


def test_from_default_settings_sends_no_max_tokens(monkeypatch):
    """Models without a max_tokens option must not receive one by default."""
    model = FakeModel()
    monkeypatch.setattr(llm_client.llm, "get_model", lambda *args: model)

    client = ModelLLMClient.from_settings(ReqdocSettings(_env_file=None))
    asyncio.run(client.complete("hi"))

    assert "max_tokens" not in model.calls[0][2]
