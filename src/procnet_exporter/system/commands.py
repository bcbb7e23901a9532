"""
Command execution utilities.

This module provides the subprocess wrapper used by the text-output
connection source, and a check for the presence of external utilities.
"""

import logging
import os
import shutil
import subprocess
from typing import Optional, Sequence, Tuple

from ..validation import handle_subprocess_error

logger = logging.getLogger(__name__)


def run_command(
    command: Sequence[str], timeout: Optional[float] = None
) -> Tuple[int, str, str]:
    """Execute a command and capture its output with robust error handling.

    Runs the command without a shell, capturing both stdout and stderr. The
    environment is forced to the C locale so that tabular output from system
    utilities keeps a stable, parseable layout.

    Args:
        command: The command and its arguments.
        timeout: Seconds to wait before killing the command, None for no limit.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 when the command could not be launched or timed out.

    Note:
        Uses UTF-8 encoding with error replacement for robust text handling.
    """
    command_str = " ".join(command)
    logger.debug(f"Executing command: '{command_str}' (timeout: {timeout})")

    env = os.environ.copy()
    env["LC_ALL"] = "C"

    try:
        process = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=env,
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        handle_subprocess_error(e, command_str, reraise=False, logger=logger)
        return -1, "", f"Error: Command not found '{command[0]}'"
    except subprocess.TimeoutExpired as e:
        handle_subprocess_error(e, command_str, reraise=False, logger=logger)
        return -1, "", f"Error: Command timed out after {timeout}s"
    except OSError as e:
        handle_subprocess_error(e, command_str, reraise=False, logger=logger)
        return -1, "", f"Error: Failed to launch command: {e}"


def check_command_installed(name: str) -> bool:
    """Check if an executable is available on the system PATH.

    Returns:
        True if the executable is found, False otherwise.
    """
    return shutil.which(name) is not None
