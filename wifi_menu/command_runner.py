import logging
import subprocess
import time
from typing import Optional, Sequence

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Arguments following these keywords are never written to the log
_SECRET_KEYWORDS = {"wpakey", "nwkey"}


class CommandResult(BaseModel):
    command: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    execution_time: float = 0.0
    timeout: bool = False

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def mask_secrets(argv: Sequence[str]) -> str:
    """Render argv for logging with passphrases replaced by ``****``."""
    masked = []
    hide_next = False
    for arg in argv:
        if hide_next:
            masked.append("****")
            hide_next = False
            continue
        masked.append(arg)
        hide_next = arg in _SECRET_KEYWORDS
    return " ".join(masked)


class ShellExecutor:
    """
    Runs external commands and reports their exit status.

    Commands are passed as argv lists and never go through a shell, so SSIDs
    and passphrases need no quoting.
    """

    def run(
        self,
        argv: Sequence[str],
        capture: bool = False,
        quiet: bool = False,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Execute ``argv`` and wait for it to finish.

        Args:
            argv: Executable path followed by its arguments
            capture: Capture stdout/stderr instead of inheriting the terminal
            quiet: Discard output that is not captured
            timeout: Optional wall-clock limit in seconds

        Returns:
            CommandResult; failures to start the command are reported through
            ``exit_code`` (127 missing, 126 not executable, 124 timed out)
        """
        command = mask_secrets(argv)
        logger.debug(f"Running: {command}")
        start_time = time.time()
        if capture:
            sink = subprocess.PIPE
        elif quiet:
            sink = subprocess.DEVNULL
        else:
            sink = None
        try:
            proc = subprocess.run(
                list(argv),
                stdout=sink,
                stderr=sink,
                text=True,
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError:
            logger.error(f"Command not found: {argv[0]}")
            return CommandResult(command=command, exit_code=127)
        except PermissionError:
            logger.error(f"Command not executable: {argv[0]}")
            return CommandResult(command=command, exit_code=126)
        except subprocess.TimeoutExpired:
            logger.warning(f"Command timed out after {timeout}s: {command}")
            return CommandResult(
                command=command,
                exit_code=124,
                execution_time=time.time() - start_time,
                timeout=True,
            )

        execution_time = time.time() - start_time
        logger.debug(
            f"Exit code {proc.returncode} after {execution_time:.2f}s: {command}"
        )
        return CommandResult(
            command=command,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            execution_time=execution_time,
        )
