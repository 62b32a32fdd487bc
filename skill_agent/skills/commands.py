"""Extract invokable commands from inline code spans in a skill body."""
import re
from typing import Iterable

from skill_agent.config import SKILL_COMMAND_PREFIXES

# Single-backtick inline span; no escaping support
_INLINE_SPAN_RE = re.compile(r"`([^`]+)`")

DEFAULT_COMMAND_PREFIXES: tuple[str, ...] = SKILL_COMMAND_PREFIXES


def is_allowed_command(command: str, prefixes: Iterable[str] = DEFAULT_COMMAND_PREFIXES) -> bool:
    """True if the command starts with one of the recognized namespace prefixes."""
    return command.startswith(tuple(prefixes))


def extract_commands(body: str, prefixes: Iterable[str] = DEFAULT_COMMAND_PREFIXES) -> list[str]:
    """Return allow-listed inline spans in order of appearance (duplicates kept)."""
    prefixes = tuple(prefixes)
    commands: list[str] = []
    for match in _INLINE_SPAN_RE.finditer(body):
        command = match.group(1).strip()
        if command and is_allowed_command(command, prefixes):
            commands.append(command)
    return commands
