"""Subprocess execution with Result-based error handling.

Wraps subprocess.run so callers get stdout or a structured error instead of
having to catch exceptions:

    result = run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_dir)
    match result:
        case Ok(stdout):
            branch = stdout.strip()
        case Err(error):
            print(error_summary(error))
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relclean.core.result import Err, Ok, Result

__all__ = ["ProcessError", "error_summary", "run"]

_ERROR_PREFIXES = ("fatal:", "error:", "remote: error:", "! [rejected]", "! [remote rejected]")


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran or timed out).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def error_summary(error: ProcessError) -> str:
    """Pick the most useful line out of a failed command's output.

    Git prints progress chatter before the actual failure, so prefer the
    first ``fatal:``/``error:``-style line; otherwise the last non-empty line
    of stderr, then stdout, then the generic description.
    """
    lines = [ln.strip() for ln in error.stderr.splitlines() if ln.strip()]
    for line in lines:
        if line.lower().startswith(_ERROR_PREFIXES):
            return line
    if lines:
        return lines[-1]

    out_lines = [ln.strip() for ln in error.stdout.splitlines() if ln.strip()]
    if out_lines:
        return out_lines[-1]
    return str(error)


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)
