"""Load skill documents from a category tree: <skills_dir>/<category>/<skill>.md."""
import os
from pathlib import Path
from typing import Iterable

from skill_agent.config import SKILL_FILE_EXTENSIONS, SKILLS_DIR
from skill_agent.logging_utils import get_logger, log_catalog_loaded, log_skill_load_error
from skill_agent.skills.commands import DEFAULT_COMMAND_PREFIXES, extract_commands
from skill_agent.skills.parser import MalformedDocument, parse_document
from skill_agent.skills.types import Catalog, Skill

logger = get_logger(__name__)


def build_skill(path: Path, text: str, prefixes: Iterable[str] = DEFAULT_COMMAND_PREFIXES) -> Skill:
    """Parse one document into a Skill. Raises MalformedDocument."""
    metadata, body = parse_document(text)
    return Skill(
        path=path,
        metadata=metadata,
        content=body,
        commands=tuple(extract_commands(body, prefixes)),
    )


def _list_entries(directory: Path) -> list[os.DirEntry]:
    """List a directory sorted by entry name; the handle is closed on every path."""
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


def _skill_files(category: Path, extensions: tuple[str, ...]) -> list[Path]:
    return [
        Path(entry.path)
        for entry in _list_entries(category)
        if entry.is_file() and entry.name.endswith(extensions)
    ]


def load_skills(
    skills_dir: Path | None = None,
    *,
    extensions: Iterable[str] = SKILL_FILE_EXTENSIONS,
    prefixes: Iterable[str] = DEFAULT_COMMAND_PREFIXES,
) -> Catalog:
    """Discover skill documents one level below each category directory.

    Categories and files are visited in name order. If skills_dir does not exist,
    return (). A document that cannot be read or parsed is logged and skipped.
    """
    directory = Path(skills_dir) if skills_dir is not None else SKILLS_DIR
    if not directory.is_dir():
        logger.warning("skills_dir_missing", skills_dir=str(directory))
        return ()
    extensions = tuple(extensions)
    prefixes = tuple(prefixes)
    skills: list[Skill] = []
    errors = 0
    for category in _list_entries(directory):
        if not category.is_dir():
            logger.debug("skills_dir_entry_skipped", path=category.path)
            continue
        try:
            files = _skill_files(Path(category.path), extensions)
        except OSError as e:
            errors += 1
            log_skill_load_error(logger, path=category.path, error=str(e))
            continue
        for path in files:
            try:
                text = path.read_text(encoding="utf-8")
                skill = build_skill(path, text, prefixes)
            except (OSError, UnicodeDecodeError, MalformedDocument) as e:
                errors += 1
                log_skill_load_error(logger, path=str(path), error=str(e))
                continue
            if not skill.metadata.name or not skill.metadata.description.strip():
                logger.warning(
                    "skill_missing_name_or_description",
                    path=str(path),
                    name=skill.metadata.name,
                )
            skills.append(skill)
    log_catalog_loaded(logger, skills_dir=str(directory), skill_count=len(skills), error_count=errors)
    return tuple(skills)


def find_skill(catalog: Catalog, name: str) -> Skill | None:
    """Return the first skill with this name, or None."""
    for skill in catalog:
        if skill.metadata.name == name:
            return skill
    return None


def render_catalog(catalog: Catalog, max_commands: int = 3) -> str:
    """Compact listing of skills (name, description, a few commands) for prompts and the CLI."""
    lines = []
    for skill in catalog:
        lines.append(f"- **{skill.metadata.name}**: {skill.metadata.description}")
        lines.append(f"  Commands: {', '.join(skill.commands[:max_commands])}")
    return "\n".join(lines)
