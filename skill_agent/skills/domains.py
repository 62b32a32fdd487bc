"""Domain handlers for the rule-based matcher: trigger keywords -> command builder.

Each supported domain registers one DomainHandler keyed by the skill name it serves.
Adding a domain means writing a builder and registering it here.
"""
import re
from dataclasses import dataclass
from typing import Callable

from skill_agent.skills.types import Skill

# build(prompt, prompt_lower, skill) -> command
CommandBuilder = Callable[[str, str, Skill], str]


@dataclass(frozen=True)
class DomainHandler:
    skill_name: str
    triggers: frozenset[str]
    build: CommandBuilder
    label: str = ""

    def matches(self, prompt_lower: str) -> bool:
        return any(t in prompt_lower for t in self.triggers)


_handlers: dict[str, DomainHandler] = {}


def register(handler: DomainHandler) -> None:
    """Register a handler. A later registration for the same skill name replaces the earlier one."""
    _handlers[handler.skill_name] = handler


def get_handler(skill_name: str) -> DomainHandler | None:
    return _handlers.get(skill_name)


def registered_skill_names() -> list[str]:
    return list(_handlers)


# --- Argument extraction ---

_QUOTED_RE = re.compile(r"\"([^\"]+)\"|'([^']+)'")
_WORD_RE = re.compile(r"[\w][\w.\-/]*")


def first_quoted(text: str) -> str | None:
    """Return the first "double" or 'single' quoted term in text, or None."""
    match = _QUOTED_RE.search(text)
    if not match:
        return None
    return (match.group(1) or match.group(2)).strip() or None


def shell_double_quote_escape(text: str) -> str:
    """Escape text for use inside a double-quoted shell argument."""
    for char in ("\\", '"', "$", "`"):
        text = text.replace(char, "\\" + char)
    return text


def term_after(prompt: str, keyword: str, skip_words: frozenset[str]) -> str | None:
    """Return the argument following `keyword` in prompt, keeping the prompt's casing.

    A quoted term after the keyword wins; otherwise the first bare word that is not
    in skip_words.
    """
    match = re.search(rf"\b{re.escape(keyword)}\b", prompt, re.IGNORECASE)
    if not match:
        return None
    rest = prompt[match.end():]
    quoted = first_quoted(rest)
    if quoted:
        return quoted
    for word in _WORD_RE.findall(rest):
        if word.lower() not in skip_words:
            return word
    return None


# --- Obsidian ---

OBSIDIAN_TRIGGERS = frozenset({"obsidian", "note", "vault"})
OBSIDIAN_DEFAULT_NOTE = "Folder/New note"
OBSIDIAN_DEFAULT_QUERY = "query"
# Words that never count as a bare search term
_SEARCH_FILLER = frozenset(
    {
        "for", "about", "in", "on", "my", "the", "a", "an", "all", "any", "of", "to", "with",
        "notes", "note", "obsidian", "vault", "vaults",
    }
)


def build_obsidian_command(prompt: str, prompt_lower: str, skill: Skill) -> str:
    """Pick an obsidian-cli command: create beats search beats default-path."""
    if "create" in prompt_lower or "new" in prompt_lower:
        title = first_quoted(prompt) or OBSIDIAN_DEFAULT_NOTE
        return f'obsidian-cli create "{shell_double_quote_escape(title)}" --open'
    if "search" in prompt_lower:
        query = term_after(prompt, "search", _SEARCH_FILLER) or OBSIDIAN_DEFAULT_QUERY
        return f'obsidian-cli search "{shell_double_quote_escape(query)}"'
    if "default" in prompt_lower or "path" in prompt_lower:
        return "obsidian-cli print-default --path-only"
    return f'obsidian-cli search "{OBSIDIAN_DEFAULT_QUERY}"'


register(
    DomainHandler(
        skill_name="obsidian",
        triggers=OBSIDIAN_TRIGGERS,
        build=build_obsidian_command,
        label="Obsidian/vault/notes",
    )
)
