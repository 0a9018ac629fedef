import logging
import subprocess
from typing import List, Optional

from attrsync.classes import CommandResult

logger = logging.getLogger(__name__)


def run_command(cmd: List[str], cwd: Optional[str] = None) -> CommandResult:
    """
    Run an external command and capture its result.

    Commands are always passed as a list and never through a shell. Output
    that is not valid UTF-8 is decoded with replacement characters.

    Args:
        cmd: Program and arguments
        cwd: Working directory for command execution

    Returns:
        CommandResult with ok=False when the command exits non-zero or the
        program is not installed
    """
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
        return CommandResult(ok=True, stdout=result.stdout.strip(), stderr=result.stderr.strip())
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.strip() if e.stderr else str(e)
        logger.error(f"Command failed: {' '.join(cmd)}")
        logger.error(f"Error: {stderr}")
        return CommandResult(ok=False, stdout=(e.stdout or "").strip(), stderr=stderr)
    except FileNotFoundError:
        logger.error(f"{cmd[0]} not found. Please install it first.")
        return CommandResult(ok=False, stderr=f"{cmd[0]} not installed")
