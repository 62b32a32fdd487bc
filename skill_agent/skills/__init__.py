"""Skills: load from front-block Markdown files and match to user messages."""
from skill_agent.skills.commands import extract_commands, is_allowed_command
from skill_agent.skills.loader import build_skill, find_skill, load_skills, render_catalog
from skill_agent.skills.matcher import fallback_match
from skill_agent.skills.parser import MalformedDocument, parse_document, render_front_block
from skill_agent.skills.types import Catalog, Resolution, Skill, SkillMetadata

__all__ = [
    "Catalog",
    "MalformedDocument",
    "Resolution",
    "Skill",
    "SkillMetadata",
    "build_skill",
    "extract_commands",
    "fallback_match",
    "find_skill",
    "is_allowed_command",
    "load_skills",
    "parse_document",
    "render_catalog",
    "render_front_block",
]
