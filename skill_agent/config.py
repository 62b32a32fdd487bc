"""Load and validate configuration from environment."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SKILLS_DIR = Path(os.getenv("SKILLS_DIR") or PROJECT_ROOT / "skills")

# Skill documents
SKILL_FILE_EXTENSIONS = tuple(
    ext.strip() for ext in os.getenv("SKILL_FILE_EXTENSIONS", ".md").split(",") if ext.strip()
)
# Inline code spans are kept as commands only when they start with one of these
SKILL_COMMAND_PREFIXES = tuple(
    p.strip() for p in os.getenv("SKILL_COMMAND_PREFIXES", "obsidian-cli,obsidian://").split(",") if p.strip()
)

# OpenAI (optional: without a key every request goes to the rule-based fallback)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None
try:
    REASONING_TIMEOUT = float(os.getenv("REASONING_TIMEOUT", "30"))
except ValueError:
    REASONING_TIMEOUT = 30.0
try:
    REASONING_TEMPERATURE = float(os.getenv("REASONING_TEMPERATURE", "0.3"))
except ValueError:
    REASONING_TEMPERATURE = 0.3
# When true, a skill name from the model that is not in the catalog is treated as unusable
STRICT_SKILL_VALIDATION = os.getenv("STRICT_SKILL_VALIDATION", "false").strip().lower() in ("1", "true", "yes")

# Command execution (CLI --execute only)
try:
    COMMAND_TIMEOUT = float(os.getenv("COMMAND_TIMEOUT", "60"))
except ValueError:
    COMMAND_TIMEOUT = 60.0

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def reasoning_configured() -> bool:
    """Return True when an OpenAI key is available for the reasoning step."""
    return bool(OPENAI_API_KEY)
