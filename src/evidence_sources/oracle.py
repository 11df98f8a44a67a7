"""Helpers for calling Claude and validating its structured replies."""

import json
import os
from typing import Any, TypeVar

import anthropic
from pydantic import BaseModel, ValidationError

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

ReplyT = TypeVar("ReplyT", bound=BaseModel)


class OracleReplyError(ValueError):
    """The oracle's reply did not match the expected schema."""


def resolve_api_key(api_key: str | None = None) -> str | None:
    """Explicit key, else CLAUDE_API_KEY, else ANTHROPIC_API_KEY."""
    return api_key or os.environ.get("CLAUDE_API_KEY") or os.environ.get("ANTHROPIC_API_KEY")


def create_client(api_key: str | None = None, timeout: float = 30.0) -> anthropic.AsyncAnthropic:
    """Create an Anthropic client (key defaults to CLAUDE_API_KEY env var)."""
    resolved_key = resolve_api_key(api_key)
    return anthropic.AsyncAnthropic(api_key=resolved_key, timeout=timeout, max_retries=1)


def response_text(response: Any) -> str:
    """Concatenate the text blocks of a messages response."""
    text = ""
    for block in response.content:
        if getattr(block, "type", None) == "text" and hasattr(block, "text"):
            text += block.text
    return text


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences around a JSON reply."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines).strip()
    return cleaned


def parse_reply(text: str, schema: type[ReplyT]) -> ReplyT:
    """Parse a JSON reply and validate it against ``schema``.

    Raises:
        OracleReplyError: If the text is not JSON or violates the schema.
    """
    try:
        raw = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise OracleReplyError(f"Reply is not JSON: {e}") from e
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise OracleReplyError(f"Reply violates schema: {e}") from e
