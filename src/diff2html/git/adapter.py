"""Git subprocess wrapper: builds ``git diff`` arguments and runs them."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_DIFF_ARGS = ("-M", "-C", "HEAD")


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Optional[Path] = None, timeout: int = 60) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("Running git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise GitError(f"git error: {stderr or f'exit status {result.returncode}'}")
    return result.stdout


def generate_git_diff_args(
    extra_args: Sequence[str] = (),
    ignore: Sequence[str] = (),
) -> list[str]:
    """Build the argument list for ``git diff``.

    ``--no-color`` is always present. Without *extra_args* the diff is taken
    against HEAD with rename and copy detection. Each *ignore* path becomes
    an ``:(exclude)`` pathspec after ``--``.
    """
    args = ["diff"]
    if "--no-color" not in extra_args:
        args.append("--no-color")
    args.extend(extra_args or DEFAULT_DIFF_ARGS)

    if ignore:
        if "--" not in args:
            args.append("--")
        args.extend(f":(exclude){path}" for path in ignore)
    return args


def get_diff(
    extra_args: Sequence[str] = (),
    ignore: Sequence[str] = (),
    cwd: Optional[Path] = None,
) -> str:
    """Return the output of ``git diff`` for *extra_args* minus *ignore*d paths."""
    return _run_git(generate_git_diff_args(extra_args, ignore), cwd=cwd)
