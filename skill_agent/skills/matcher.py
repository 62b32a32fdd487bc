"""Rule-based fallback: match a user message to a skill and synthesize a command."""
from skill_agent.logging_utils import get_logger
from skill_agent.skills.domains import get_handler
from skill_agent.skills.types import Catalog, Resolution

logger = get_logger(__name__)

NO_OP_COMMAND = 'echo "No command found"'
UNKNOWN_SKILL = "unknown"
NO_MATCH_RATIONALE = "Default fallback: no specific skill matched"


def fallback_match(prompt: str, catalog: Catalog) -> Resolution:
    """Return a Resolution for the prompt without calling any external service.

    Skills are tried in catalog order; the first one with a registered domain
    handler whose trigger keywords appear in the prompt wins. With no match the
    first skill and its first command are returned (or a no-op sentinel).
    """
    prompt_lower = prompt.lower()
    for skill in catalog:
        handler = get_handler(skill.metadata.name)
        if handler is None or not handler.matches(prompt_lower):
            continue
        command = handler.build(prompt, prompt_lower, skill)
        label = handler.label or skill.metadata.name
        return Resolution(
            skill_name=skill.metadata.name,
            command=command,
            rationale=(
                f"Selected '{skill.metadata.name}' skill because user mentioned {label}. "
                f"Command '{command}' best matches the request."
            ),
            source="fallback",
        )

    logger.info("fallback_no_match", catalog_size=len(catalog))
    first = catalog[0] if catalog else None
    return Resolution(
        skill_name=(first.metadata.name if first else "") or UNKNOWN_SKILL,
        command=first.commands[0] if first and first.commands else NO_OP_COMMAND,
        rationale=NO_MATCH_RATIONALE,
        source="fallback",
    )
