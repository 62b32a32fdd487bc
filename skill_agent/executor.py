"""Hand a resolved command to the shell. Used by the CLI only when --execute is given."""
import subprocess

from skill_agent.config import COMMAND_TIMEOUT
from skill_agent.logging_utils import get_logger

logger = get_logger(__name__)


def run_command(command: str, *, timeout: float | None = None) -> int | None:
    """Run the command string through the shell with inherited stdio.

    Returns the exit code, or None if the command could not be started or timed out.
    """
    timeout = COMMAND_TIMEOUT if timeout is None else timeout
    logger.info("command_execution_start", command=command, timeout=timeout)
    try:
        completed = subprocess.run(command, shell=True, check=False, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning("command_execution_failed", command=command, error=f"timed out after {timeout}s")
        return None
    except OSError as e:
        logger.warning("command_execution_failed", command=command, error=str(e))
        return None
    if completed.returncode != 0:
        logger.warning("command_execution_failed", command=command, returncode=completed.returncode)
    else:
        logger.info("command_execution_end", command=command, returncode=completed.returncode)
    return completed.returncode
