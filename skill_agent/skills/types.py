"""Data models for skills and resolutions."""
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Union

# JSON-like value allowed inside a skill's open `metadata` mapping
MetadataValue = Union[str, int, float, bool, None, list["MetadataValue"], dict[str, "MetadataValue"]]


def coerce_metadata_value(value: Any) -> MetadataValue:
    """Normalize a parsed literal into MetadataValue. Unknown scalars become strings."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, dict):
        return {str(k): coerce_metadata_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [coerce_metadata_value(v) for v in value]
    return str(value)


@dataclass(frozen=True)
class SkillMetadata:
    """Typed front-block fields of a skill document."""

    name: str = ""
    description: str = ""
    homepage: str = ""
    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen: expose the open mapping read-only
        coerced = {str(k): coerce_metadata_value(v) for k, v in dict(self.metadata).items()}
        object.__setattr__(self, "metadata", MappingProxyType(coerced))


@dataclass(frozen=True)
class Skill:
    """A single skill: parsed metadata, body text and allow-listed commands."""

    path: Path
    metadata: SkillMetadata
    content: str
    commands: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.metadata.name


@dataclass(frozen=True)
class Resolution:
    """Chosen skill and command for one request."""

    skill_name: str
    command: str
    rationale: str
    # "reasoning" or "fallback"; diagnostic only
    source: str = field(default="fallback", compare=False)


Catalog = tuple[Skill, ...]
