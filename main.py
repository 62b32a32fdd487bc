"""Entry: resolve a message to a skill command, list skills, or run the demo prompts."""
import sys

from skill_agent.config import LOG_LEVEL
from skill_agent.logging_utils import configure_logging

USAGE = 'Usage: python main.py chat "message" [--execute]  |  python main.py skills  |  python main.py demo [--execute]'


def main() -> None:
    configure_logging(LOG_LEVEL)
    if len(sys.argv) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    cmd = sys.argv[1].lower()
    if cmd == "chat":
        from skill_agent.triggers.cli import run_cli
        sys.exit(run_cli())
    elif cmd == "skills":
        from skill_agent.triggers.cli import run_list_skills
        sys.exit(run_list_skills())
    elif cmd == "demo":
        from skill_agent.triggers.cli import run_demo
        sys.exit(run_demo())
    else:
        print("Unknown command. Use: chat | skills | demo", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
