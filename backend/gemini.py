"""
Single-shot client for the Gemini generateContent REST endpoint.

One POST per request: no retries and no streaming, since every call spends
provider quota. The API key travels in the x-goog-api-key header so it never
shows up in a logged URL.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

import config
from errors import UpstreamMalformed, UpstreamTruncated, UpstreamUnavailable
from models import ConversationTurn

logger = logging.getLogger(__name__)

# Gemini names the assistant side of a conversation "model"
WIRE_ROLES = {"user": "user", "assistant": "model"}

TRUNCATED_FINISH_REASONS = {"MAX_TOKENS"}


@dataclass(frozen=True)
class Completion:
    text: str
    finish_reason: Optional[str]


def build_contents(turns: list[ConversationTurn]) -> list[dict]:
    return [
        {"role": WIRE_ROLES[turn.role], "parts": [{"text": turn.content}]}
        for turn in turns
    ]


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str = config.GEMINI_MODEL,
        api_base: str = config.GEMINI_API_BASE,
        temperature: float = config.GEMINI_TEMPERATURE,
        max_output_tokens: int = config.GEMINI_MAX_OUTPUT_TOKENS,
        timeout: float = config.GEMINI_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_payload(self, turns: list[ConversationTurn]) -> dict:
        return {
            "contents": build_contents(turns),
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }

    async def complete(self, turns: list[ConversationTurn]) -> Completion:
        """Send the conversation once and return the first candidate's text."""
        headers = {"Content-Type": "application/json", "x-goog-api-key": self._api_key}
        logger.info(f"Calling Gemini model {self.model} with {len(turns)} turn(s)")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, headers=headers, json=self.build_payload(turns))
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {type(e).__name__}")
            raise UpstreamUnavailable(details=f"Gemini request failed: {type(e).__name__}") from e

        logger.info(f"Gemini API response status: {response.status_code}")
        if response.is_error:
            # Error bodies are short provider messages, never echo them to the caller
            logger.error(f"Gemini API error: {response.text[:500]}")
            raise UpstreamUnavailable(details=f"Gemini API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamMalformed(details="Gemini response body is not JSON") from e

        return parse_completion(data)


def parse_completion(data) -> Completion:
    """Pull text and finish reason out of a generateContent response body."""
    try:
        candidate = data["candidates"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamMalformed(details="Gemini response has no candidates") from e

    finish_reason = candidate.get("finishReason") if isinstance(candidate, dict) else None
    if finish_reason in TRUNCATED_FINISH_REASONS:
        logger.warning(f"Gemini completion truncated (finishReason={finish_reason})")
        raise UpstreamTruncated(details=f"Completion stopped early: finishReason={finish_reason}")

    try:
        parts = candidate["content"]["parts"]
        text = "".join(part["text"] for part in parts if "text" in part)
    except (KeyError, TypeError) as e:
        raise UpstreamMalformed(
            details=f"Gemini candidate has no text content (finishReason={finish_reason})"
        ) from e

    if not parts or not any("text" in part for part in parts):
        raise UpstreamMalformed(
            details=f"Gemini candidate has no text content (finishReason={finish_reason})"
        )
    return Completion(text=text, finish_reason=finish_reason)
