# tests/test_tone_llm.py
import types

import pytest
import requests

# Public facade
import tone_typography.tone.llm as llm

# Impl module (to patch _session and other internals)
from tone_typography.tone.llm import llm_api_client as llm_impl


# ── Dummies ───────────────────────────────────────────────────────────────────
class DummyResponse:
    def __init__(self, status_code=200, json_data=None, text="ok", headers=None):
        self.status_code = status_code
        self._json = json_data or {}
        self.text = text
        self.headers = headers or {}
    def json(self):
        return self._json


def _reply(content):
    return DummyResponse(200, {"choices": [{"message": {"content": content}}]})


# ── Tests ─────────────────────────────────────────────────────────────────────
def test_case_01_has_api_key_true_false(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    assert llm.has_api_key() is True
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    assert llm.has_api_key() is False


def test_case_02_get_llm_client_ok(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    client = llm.get_llm_client()
    assert isinstance(client, llm.OpenRouterToneClient)


def test_case_03_get_llm_client_none_without_key(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    assert llm.get_llm_client() is None
    with pytest.raises(RuntimeError):
        llm.OpenRouterToneClient()


def test_case_04_build_tone_prompt_lists_all_tones_and_text():
    prompt = llm.build_tone_prompt("the sea at dusk")
    assert "the sea at dusk" in prompt
    for tone in ("calm", "playful", "serious", "intense"):
        assert f"'{tone}'" in prompt
    assert "exactly one word" in prompt


def test_case_05_classify_posts_low_temperature_payload(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    seen = {}

    def fake_post(url, headers, json, timeout):
        seen.update(url=url, headers=headers, json=json, timeout=timeout)
        return _reply("calm")

    monkeypatch.setattr(llm_impl, "_session", types.SimpleNamespace(post=fake_post))
    client = llm.OpenRouterToneClient(temperature=0.1, timeout=3.0)
    assert client.classify("soft rain") == "calm"
    assert seen["headers"]["Authorization"] == "Bearer sk-test"
    assert seen["json"]["temperature"] == 0.1
    assert seen["timeout"] == 3.0
    assert "soft rain" in seen["json"]["messages"][0]["content"]


def test_case_06_classify_non_200_raises_with_status(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")

    def fake_post(url, headers, json, timeout):
        return DummyResponse(429, text="rate limited", headers={"Retry-After": "3"})

    monkeypatch.setattr(llm_impl, "_session", types.SimpleNamespace(post=fake_post))
    with pytest.raises(llm.RemoteClassifierError) as info:
        llm.OpenRouterToneClient().classify("anything at all")
    assert info.value.status_code == 429
    assert info.value.body == "rate limited"
    assert llm.is_rate_limited(info.value)


def test_case_07_classify_empty_content_raises(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    monkeypatch.setattr(
        llm_impl, "_session", types.SimpleNamespace(post=lambda *a, **k: _reply(""))
    )
    with pytest.raises(llm.RemoteClassifierError) as info:
        llm.OpenRouterToneClient().classify("anything at all")
    assert not llm.is_rate_limited(info.value)


def test_case_08_transport_errors_propagate(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")

    def raising_post(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(llm_impl, "_session", types.SimpleNamespace(post=raising_post))
    with pytest.raises(requests.ConnectionError):
        llm.OpenRouterToneClient().classify("anything at all")


@pytest.mark.parametrize(
    "reply, expected",
    [
        ("calm", "calm"),
        ("  Playful\n", "playful"),
        ("INTENSE", "intense"),
        ("serious", "serious"),
        ("I think it is calm", "serious"),
        ("", "serious"),
        (None, "serious"),
    ],
)
def test_case_09_parse_tone_reply(reply, expected):
    assert llm.parse_tone_reply(reply) == expected


def test_case_10_is_rate_limited_signatures():
    assert llm.is_rate_limited(llm.RemoteClassifierError("x", status_code=429))
    assert llm.is_rate_limited(RuntimeError('{"status": "RESOURCE_EXHAUSTED"}'))
    assert llm.is_rate_limited(RuntimeError("HTTP 429 Too Many Requests"))

    http_error = requests.HTTPError("boom")
    http_error.response = types.SimpleNamespace(status_code=429)
    assert llm.is_rate_limited(http_error)

    assert not llm.is_rate_limited(llm.RemoteClassifierError("x", status_code=500))
    assert not llm.is_rate_limited(requests.Timeout("read timed out"))
