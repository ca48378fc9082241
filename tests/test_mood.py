"""
Tests for the reference mood description client.
"""

from types import SimpleNamespace

import numpy as np
from openai import OpenAIError

from color_histogram import rgba_image
from color_mood import EMPTY_REPLY_TEXT, FALLBACK_TEXT, describe_mood


class FakeClient:

    def __init__(self, content=None, error=None, choices=None):
        self.requests = []
        self.content = content
        self.error = error
        self.choices = choices
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self.create))

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.choices is not None:
            return SimpleNamespace(choices=self.choices)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def reference_image():
    return rgba_image(2, 2, np.tile(np.array([200, 120, 40, 255], dtype=np.uint8), 4))


def test_returns_model_sentence():
    client = FakeClient(content="  Warm amber highlights over teal shadows.  ")
    assert describe_mood(reference_image(), client=client, model="test-model") == \
        "Warm amber highlights over teal shadows."

    request = client.requests[0]
    assert request["model"] == "test-model"
    parts = request["messages"][0]["content"]
    assert parts[0]["type"] == "text"
    assert parts[1]["image_url"]["url"].startswith("data:image/png;base64,")


def test_empty_reply():
    assert describe_mood(reference_image(), client=FakeClient(content=None)) == EMPTY_REPLY_TEXT


def test_api_failure_falls_back(capsys):
    client = FakeClient(error=OpenAIError("quota exceeded"))
    assert describe_mood(reference_image(), client=client) == FALLBACK_TEXT
    assert "Mood analysis failed: quota exceeded" in capsys.readouterr().err


def test_reply_without_choices_falls_back(capsys):
    client = FakeClient(choices=[])
    assert describe_mood(reference_image(), client=client) == FALLBACK_TEXT
    assert "Mood analysis failed" in capsys.readouterr().err
