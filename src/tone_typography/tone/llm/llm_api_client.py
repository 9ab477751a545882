"""
llm_api_client.py.
=================

Does: Build the tone prompt, HTTP payload and headers, call the OpenRouter chat API
      once, and translate failures into inspectable exceptions.
Returns: Raw reply text from classify(); parse_tone_reply() maps it onto a Tone.
Used by: The circuit breaker (tone.breaker) and the demo CLI.
"""

from __future__ import annotations

# ── Imports & Typing ─────────────────────────────────────────────────────────
import logging
import os

import requests  # type: ignore[import-untyped]

from tone_typography import config
from tone_typography.tone.types import DEFAULT_TONE, TONES, Tone

# ── Logger ───────────────────────────────────────────────────────────────────
logger = logging.getLogger(__name__)

RATE_LIMIT_MARKERS = ("429", "RESOURCE_EXHAUSTED")

# Single session for connection reuse
_session = requests.Session()

__all__ = [
    "OpenRouterToneClient",
    "RemoteClassifierError",
    "has_api_key",
    "get_llm_client",
    "build_tone_prompt",
    "parse_tone_reply",
    "is_rate_limited",
]


# ── Errors ───────────────────────────────────────────────────────────────────
class RemoteClassifierError(RuntimeError):
    """Does: Carry a failed remote reply (HTTP status + body preview) to the breaker.
    Args: status_code: HTTP status or None; body: response text.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# ── Client ───────────────────────────────────────────────────────────────────
class OpenRouterToneClient:
    """Does: Minimal OpenRouter client exposing classify() for one tone request.
    Args: model: str; temperature: float; max_tokens: int; timeout: float.
    Returns: Instance usable for classify(); raises if API key is missing.
    """

    def __init__(
        self,
        model: str = config.LLM_MODEL,
        temperature: float = config.LLM_TEMPERATURE,
        max_tokens: int = config.LLM_MAX_TOKENS,
        timeout: float = config.LLM_TIMEOUT,
        api_url: str = config.LLM_API_URL,
    ):
        api_key = os.getenv("OPENROUTER_API_KEY")
        if not api_key:
            raise RuntimeError("OPENROUTER_API_KEY missing")
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.api_url = api_url

    def _headers(self) -> dict:
        """Does: Build authorization/content headers for OpenRouter calls."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _payload(self, text: str) -> dict:
        """Does: Wrap the tone prompt into the JSON payload for OpenRouter."""
        return {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": build_tone_prompt(text)}],
        }

    def classify(self, text: str) -> str:
        """Does: POST one tone request and return the assistant content string.
        Args: text: free-form user text.
        Returns: Raw reply content (unparsed).
        Raises: RemoteClassifierError on non-200 or empty content;
                requests.RequestException on transport failures.
        """
        resp = _session.post(
            self.api_url,
            headers=self._headers(),
            json=self._payload(text),
            timeout=self.timeout,
        )
        if resp.status_code != 200:
            raise RemoteClassifierError(
                f"OpenRouter returned status {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text[:500],
            )

        data = resp.json()
        choice = (data.get("choices") or [{}])[0]
        content = (choice.get("message") or {}).get("content", "")
        if not content:
            raise RemoteClassifierError(
                "OpenRouter returned empty content", status_code=resp.status_code, body=str(data)[:500]
            )
        return content


# ── Public helpers ───────────────────────────────────────────────────────────
def has_api_key() -> bool:
    """Does: Check presence of OPENROUTER_API_KEY in environment."""
    return bool(os.getenv("OPENROUTER_API_KEY"))


def get_llm_client(debug: bool = False) -> OpenRouterToneClient | None:
    """Does: Factory returning OpenRouterToneClient if API key is present.
    Args: debug: if True, logs presence status.
    Returns: OpenRouterToneClient or None.
    """
    ok = has_api_key()
    if debug:
        logger.debug("OpenRouter API key present: %s", ok)
    return OpenRouterToneClient() if ok else None


# ── Prompt construction & reply parsing ──────────────────────────────────────
def build_tone_prompt(text: str) -> str:
    """Does: Build an instruction asking the LLM for exactly one tone word."""
    choices = ", ".join(f"'{t}'" for t in TONES)
    return (
        "Analyze the tone of the following text and return exactly one word "
        f"from this list: {choices}.\n\n"
        f'Text: "{text}"'
    )


def parse_tone_reply(reply: str | None) -> Tone:
    """Does: Map a raw reply onto a Tone; anything unrecognised becomes 'serious'."""
    result = (reply or "").strip().lower()
    if result in TONES:
        return result  # type: ignore[return-value]
    logger.info("[LLM] Unrecognised tone reply %r, defaulting to %s", reply, DEFAULT_TONE)
    return DEFAULT_TONE


def is_rate_limited(error: BaseException) -> bool:
    """Does: Detect a rate-limit signature (HTTP 429 or RESOURCE_EXHAUSTED) on a failure."""
    status = getattr(error, "status_code", None)
    if status is None:
        response = getattr(error, "response", None)
        status = getattr(response, "status_code", None)
    if status == 429:
        return True
    haystack = " ".join(str(part) for part in (error, getattr(error, "body", "")))
    return any(marker in haystack for marker in RATE_LIMIT_MARKERS)
