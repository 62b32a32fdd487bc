"""External reasoning step: ask an OpenAI chat model to pick a skill and command."""
import json
import re
from typing import Any

import openai
from openai import OpenAI

from skill_agent.config import (
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
    OPENAI_MODEL,
    REASONING_TEMPERATURE,
    REASONING_TIMEOUT,
)
from skill_agent.logging_utils import get_logger, log_reasoning_request, log_reasoning_response
from skill_agent.skills.loader import render_catalog
from skill_agent.skills.types import Catalog, Resolution

SYSTEM_PROMPT_TEMPLATE = """You are an AI agent that selects the appropriate skill based on user input.
Available skills:
{skill_list}

Instructions:
1. Analyze the user's request
2. Select the most appropriate skill
3. Extract the specific command to execute from the skill
4. Provide your rationale

Respond in JSON format:
{{
    "skillName": "name of selected skill",
    "command": "command to execute",
    "rationale": "why this skill and command"
}}"""

# Accepted spellings for each reply field, first match wins
_SKILL_KEYS = ("skillName", "skill_name", "skill")
_COMMAND_KEYS = ("command",)
_RATIONALE_KEYS = ("rationale", "reasoning")

_CODE_FENCE_RE = re.compile(r"\A```(?:json)?\s*(.*?)\s*```\Z", re.DOTALL)

logger = get_logger(__name__)


class ReasoningUnavailable(RuntimeError):
    """The reasoning service could not produce a usable resolution."""


def build_system_prompt(catalog: Catalog) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(skill_list=render_catalog(catalog, max_commands=3))


def _first_str(data: dict[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def parse_reply(content: str) -> Resolution:
    """Turn the model's reply text into a Resolution. Raises ReasoningUnavailable."""
    text = (content or "").strip()
    fenced = _CODE_FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ReasoningUnavailable(f"reply is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise ReasoningUnavailable("reply is not a JSON object")
    skill_name = _first_str(data, _SKILL_KEYS)
    command = _first_str(data, _COMMAND_KEYS)
    if not skill_name or not command:
        raise ReasoningUnavailable("reply is missing skillName or command")
    return Resolution(
        skill_name=skill_name,
        command=command,
        rationale=_first_str(data, _RATIONALE_KEYS),
        source="reasoning",
    )


def make_client() -> OpenAI:
    """Build the OpenAI client. Retries are off: a failed call goes straight to the fallback."""
    return OpenAI(
        api_key=OPENAI_API_KEY,
        base_url=OPENAI_BASE_URL,
        timeout=REASONING_TIMEOUT,
        max_retries=0,
    )


def reason(
    prompt: str,
    catalog: Catalog,
    *,
    client: Any = None,
    model: str | None = None,
) -> Resolution:
    """Ask the model for {skillName, command, rationale}.

    Raises ReasoningUnavailable on a missing API key, non-success status,
    connection failure or timeout, or a reply that does not have that shape.
    """
    if client is None:
        if not OPENAI_API_KEY:
            raise ReasoningUnavailable("OPENAI_API_KEY is not set")
        client = make_client()
    model = model or OPENAI_MODEL
    messages = [
        {"role": "system", "content": build_system_prompt(catalog)},
        {"role": "user", "content": prompt},
    ]
    log_reasoning_request(logger, model=model, catalog_size=len(catalog))
    try:
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=REASONING_TEMPERATURE,
            response_format={"type": "json_object"},
        )
    except openai.APIStatusError as e:
        logger.warning("reasoning_api_error", status_code=e.status_code, error_body=e.response.text)
        raise ReasoningUnavailable(f"reasoning service returned status {e.status_code}") from e
    except openai.APIConnectionError as e:
        # Includes APITimeoutError
        raise ReasoningUnavailable(f"reasoning service unreachable: {e}") from e
    except openai.OpenAIError as e:
        raise ReasoningUnavailable(f"reasoning call failed: {e}") from e

    if not response.choices:
        raise ReasoningUnavailable("reply has no choices")
    content = (response.choices[0].message.content or "").strip()
    usage = getattr(response, "usage", None)
    log_reasoning_response(
        logger,
        model=model,
        content_length=len(content),
        prompt_tokens=getattr(usage, "prompt_tokens", None),
        completion_tokens=getattr(usage, "completion_tokens", None),
        total_tokens=getattr(usage, "total_tokens", None),
    )
    return parse_reply(content)
