"""
Thin wrapper around the model providers.

One fixed prompt per output type, one user message per call. Models whose
name starts with ``claude`` go to Anthropic, everything else to OpenAI.
"""

import hashlib
import logging
from dataclasses import dataclass

import anthropic
from openai import OpenAI

from .config import get_config
from .errors import LLMConfigurationError

logger = logging.getLogger(__name__)

_openai_client = None
_anthropic_client = None

PROMPTS = {
    "summary": (
        "Generate a structured summary of the following meeting notes. "
        "Be concise and focus on key points."
    ),
    "decisions": (
        "Extract all decisions made during this meeting. "
        "Return them as a JSON array of strings. "
        "If no decisions were made, return an empty array."
    ),
    "actions": (
        "Extract all action items from this meeting. "
        "Return them as a JSON array of objects with fields: "
        "description (string), owner (string or null), dueDate (ISO date string or null). "
        "If no action items, return an empty array."
    ),
}

# Content used when the reply has no text block
EMPTY_CONTENT = {
    "summary": "",
    "decisions": "[]",
    "actions": "[]",
}


@dataclass
class AIResponse:
    content: str
    prompt_tokens: int
    completion_tokens: int
    model: str


def hash_notes(notes: str) -> str:
    """SHA-256 hex digest of the notes, used as the cache key."""
    return hashlib.sha256(notes.encode("utf-8")).hexdigest()


def build_prompt(output_type: str, raw_notes: str) -> str:
    if output_type not in PROMPTS:
        raise ValueError(f"Unknown output type: {output_type}")
    return f"{PROMPTS[output_type]}\n\nNotes:\n{raw_notes}"


def _is_claude_model(model: str) -> bool:
    """Check if the model is a Claude model."""
    return bool(model and model.startswith("claude"))


def _openai_client_once():
    global _openai_client
    if _openai_client is None:
        api_key = get_config().OPENAI_API_KEY
        if not api_key:
            raise LLMConfigurationError(
                "OPENAI_API_KEY is not set. "
                "Please add it to your .env file or environment."
            )
        _openai_client = OpenAI(api_key=api_key)
    return _openai_client


def _anthropic_client_once():
    global _anthropic_client
    if _anthropic_client is None:
        api_key = get_config().ANTHROPIC_API_KEY
        if not api_key:
            raise LLMConfigurationError(
                "ANTHROPIC_API_KEY is not set. "
                "Please add it to your .env file or environment."
            )
        _anthropic_client = anthropic.Anthropic(api_key=api_key)
    return _anthropic_client


def _ask_anthropic(prompt: str, model: str, max_tokens: int, empty: str) -> AIResponse:
    message = _anthropic_client_once().messages.create(
        model=model,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    block = message.content[0] if message.content else None
    text = block.text if block is not None and block.type == "text" else empty
    return AIResponse(
        content=text,
        prompt_tokens=message.usage.input_tokens,
        completion_tokens=message.usage.output_tokens,
        model=message.model,
    )


def _ask_openai(prompt: str, model: str, max_tokens: int, empty: str) -> AIResponse:
    resp = _openai_client_once().chat.completions.create(
        model=model,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    text = resp.choices[0].message.content if resp.choices else None
    usage = resp.usage
    return AIResponse(
        content=text if text is not None else empty,
        prompt_tokens=usage.prompt_tokens if usage else 0,
        completion_tokens=usage.completion_tokens if usage else 0,
        model=resp.model,
    )


def generate(output_type: str, raw_notes: str, model: str = None) -> AIResponse:
    """Run the fixed prompt for ``output_type`` over the notes.

    Raises:
        LLMConfigurationError: the provider for ``model`` has no API key.
        ValueError: unknown output type.
    """
    config = get_config()
    model = model or config.ai_model
    prompt = build_prompt(output_type, raw_notes)
    empty = EMPTY_CONTENT[output_type]

    ask = _ask_anthropic if _is_claude_model(model) else _ask_openai
    try:
        return ask(prompt, model, config.ai_max_tokens, empty)
    except LLMConfigurationError:
        raise
    except Exception as e:
        logger.error(f"Model API error generating {output_type} with {model}: {e}")
        raise


def generate_summary(raw_notes: str) -> AIResponse:
    return generate("summary", raw_notes)


def generate_decisions(raw_notes: str) -> AIResponse:
    return generate("decisions", raw_notes)


def generate_actions(raw_notes: str) -> AIResponse:
    return generate("actions", raw_notes)

