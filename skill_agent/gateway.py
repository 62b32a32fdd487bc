"""Gateway: every request goes through here; ask the reasoning service, fall back to rules."""
import uuid
from typing import Callable

from skill_agent.config import STRICT_SKILL_VALIDATION
from skill_agent.logging_utils import (
    get_logger,
    log_reasoning_unavailable,
    log_resolution,
    log_resolve_start,
    set_trace_id,
)
from skill_agent.reasoning import ReasoningUnavailable, reason
from skill_agent.skills import Catalog, Resolution, fallback_match, find_skill

logger = get_logger(__name__)

Reasoner = Callable[[str, Catalog], Resolution]


def resolve(
    prompt: str,
    catalog: Catalog,
    *,
    reasoner: Reasoner = reason,
    strict: bool | None = None,
) -> Resolution:
    """Resolve a prompt to a skill and command. Never raises for reasoning failures.

    The reasoner is tried once; if it is unavailable (or, in strict mode, names a
    skill that is not in the catalog) the rule-based fallback answers instead.
    """
    strict = STRICT_SKILL_VALIDATION if strict is None else strict
    trace_id = str(uuid.uuid4())
    set_trace_id(trace_id)
    log_resolve_start(logger, user_message=prompt, catalog_size=len(catalog), trace_id=trace_id)

    try:
        resolution = reasoner(prompt, catalog)
        if find_skill(catalog, resolution.skill_name) is None:
            logger.warning("reasoning_unknown_skill", skill_name=resolution.skill_name, strict=strict)
            if strict:
                raise ReasoningUnavailable(f"unknown skill {resolution.skill_name!r}")
    except ReasoningUnavailable as e:
        log_reasoning_unavailable(logger, reason=str(e))
        resolution = fallback_match(prompt, catalog)

    log_resolution(
        logger,
        skill_name=resolution.skill_name,
        command=resolution.command,
        source=resolution.source,
    )
    return resolution
