"""Pytest fixtures for skill-agent tests."""
import textwrap
from pathlib import Path
from types import SimpleNamespace

import httpx
import pytest

OBSIDIAN_DOC = textwrap.dedent(
    """\
    ---
    name: obsidian
    description: Notes
    homepage: "https://help.obsidian.md"
    metadata: {"emoji": "💎", "requires": {"bins": ["obsidian-cli"]}}
    ---
    # Obsidian

    Search notes with `obsidian-cli search "query"` or say `echo hi`.
    Create one with `obsidian-cli create "Folder/New note" --open`.
    Print the vault: `obsidian-cli print-default --path-only`.
    Open via `obsidian://open?vault=Main`.
    """
)

WEATHER_DOC = textwrap.dedent(
    """\
    ---
    name: weather
    description: Current weather and forecasts
    ---
    Use `curl wttr.in` for a quick forecast.
    """
)

PREFIXES = ("obsidian-cli", "obsidian://")


def write_skill(root: Path, category: str, filename: str, content: str) -> Path:
    path = root / category / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def obsidian_doc() -> str:
    return OBSIDIAN_DOC


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    """A catalog with one obsidian skill under productivity/."""
    root = tmp_path / "skills"
    write_skill(root, "productivity", "obsidian.md", OBSIDIAN_DOC)
    return root


@pytest.fixture
def mixed_skills_dir(tmp_path: Path) -> Path:
    """Two categories, a malformed document and a non-skill file."""
    root = tmp_path / "skills"
    write_skill(root, "a-info", "weather.md", WEATHER_DOC)
    write_skill(root, "b-productivity", "obsidian.md", OBSIDIAN_DOC)
    write_skill(root, "b-productivity", "broken.md", "no front block here\n")
    write_skill(root, "b-productivity", "notes.txt", OBSIDIAN_DOC)
    (root / "README.md").write_text("top-level file, not a category\n", encoding="utf-8")
    return root


class FakeCompletions:
    """Stands in for client.chat.completions: returns a reply or raises an error."""

    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        usage = SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)


def fake_client(content: str | None = None, error: Exception | None = None) -> SimpleNamespace:
    completions = FakeCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def openai_request() -> httpx.Request:
    return httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
