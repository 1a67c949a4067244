"""User hook execution."""

import logging
import subprocess
from pathlib import Path

from .errors import HookError

logger = logging.getLogger(__name__)


def run_hooks(commands: list[str], cwd: Path) -> None:
    """Run shell commands in order, stopping at the first failure.

    Raises:
        HookError: If a command exits non-zero or cannot be started.
    """
    for command in commands:
        logger.info("Running: %s", command)
        try:
            subprocess.run(command, shell=True, cwd=cwd, check=True)
        except subprocess.CalledProcessError as e:
            raise HookError(f'Hook "{command}" exited with code {e.returncode}') from e
        except OSError as e:
            raise HookError(f'Hook "{command}" failed: {e}') from e
