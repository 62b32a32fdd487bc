"""CLI trigger: resolve messages against the skill catalog and print the decision."""
import sys
from typing import TextIO

from skill_agent.config import OPENAI_MODEL, reasoning_configured
from skill_agent.executor import run_command
from skill_agent.gateway import resolve
from skill_agent.logging_utils import get_trace_id
from skill_agent.skills import Catalog, Resolution, load_skills

DEMO_PROMPTS = [
    'Search for notes about "meeting" in my Obsidian vault',
    'Create a new note called "Daily Log" in Obsidian',
    "What is the default Obsidian vault path?",
    'Search for "project" in Obsidian',
]

EXECUTE_FLAG = "--execute"


def _split_flags(args: list[str]) -> tuple[list[str], bool]:
    execute = EXECUTE_FLAG in args
    return [a for a in args if a != EXECUTE_FLAG], execute


def print_resolution(resolution: Resolution, out: TextIO | None = None) -> None:
    print(f"Skill: {resolution.skill_name}", file=out)
    print(f"Command: {resolution.command}", file=out)
    print(f"Rationale: {resolution.rationale}", file=out)


def handle(prompt: str, catalog: Catalog, *, execute: bool = False) -> int:
    """Resolve one prompt, print it, optionally run the command. Returns an exit status."""
    resolution = resolve(prompt, catalog)
    print_resolution(resolution)
    trace_id = get_trace_id()
    if trace_id:
        print(f"[trace_id={trace_id}]", file=sys.stderr)
    if not execute:
        print(f"[dry run] {resolution.command}")
        return 0
    returncode = run_command(resolution.command)
    return 1 if returncode is None else returncode


def run_cli(args: list[str] | None = None) -> int:
    """Entry for `chat`: message from args (after 'chat') or stdin."""
    words, execute = _split_flags(sys.argv[2:] if args is None else args)
    if words:
        message = " ".join(words)
    else:
        print("Enter your message:")
        message = (sys.stdin.readline() or "").strip()
    if not message:
        print('Usage: python main.py chat "your message" [--execute]', file=sys.stderr)
        return 1
    return handle(message, load_skills(), execute=execute)


def run_list_skills() -> int:
    """Entry for `skills`: print every loaded skill and its commands."""
    if reasoning_configured():
        print(f"Reasoning: {OPENAI_MODEL}")
    else:
        print("Reasoning: OPENAI_API_KEY not set, rule-based fallback only")
    catalog = load_skills()
    if not catalog:
        print("No skills loaded.")
        return 0
    print(f"Loaded {len(catalog)} skill(s)")
    for skill in catalog:
        more = "..." if len(skill.commands) > 2 else ""
        print(f"  - {skill.metadata.name}: {skill.metadata.description}")
        print(f"    Commands: {', '.join(skill.commands[:2])}{more}")
    return 0


def run_demo(args: list[str] | None = None) -> int:
    """Entry for `demo`: resolve each canned prompt in turn."""
    _, execute = _split_flags(sys.argv[2:] if args is None else args)
    catalog = load_skills()
    print(f"Loaded {len(catalog)} skill(s)")
    status = 0
    for i, prompt in enumerate(DEMO_PROMPTS, start=1):
        print("-" * 50)
        print(f"User input #{i}: {prompt}")
        status = handle(prompt, catalog, execute=execute) or status
    return status
