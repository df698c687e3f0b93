"""Shared LLM helpers for the conversation services (OpenAI client, output cleanup)."""

import json
from typing import Any

from openai import OpenAI

from traveldesk.config import Settings


def get_client(settings: Settings) -> OpenAI:
    if not settings.openai_api_key:
        raise ValueError("OPENAI_API_KEY environment variable is required")
    return OpenAI(api_key=settings.openai_api_key)


def get_model(settings: Settings) -> str:
    return settings.model_conversation


def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code block, if the model added one."""
    text = (content or "").strip()
    if text.startswith("```"):
        lines = text.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return text.strip()


def parse_llm_response(content: str) -> Any:
    """Parse JSON from LLM response, stripping markdown code blocks if present."""
    return json.loads(strip_code_fences(content))


def complete(settings: Settings, system: str, user: str, temperature: float = 0.2) -> str:
    """Single chat completion; returns the message text ('' when empty)."""
    client = get_client(settings)
    response = client.chat.completions.create(
        model=get_model(settings),
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        temperature=temperature,
    )
    return response.choices[0].message.content or ""
