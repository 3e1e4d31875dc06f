#!/usr/bin/env python3

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from collections.abc import Sequence

logger = logging.getLogger(__name__)

WRITE_TIMEOUT = 10

# Tried in order, the first one found on PATH wins.
CANDIDATE_COMMANDS: dict[str, tuple[tuple[str, ...], ...]] = {
    "darwin": (("pbcopy",),),
    "win32": (("clip",),),
    "linux": (
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
    ),
}


class ClipboardError(Exception):
    """Writing to the system clipboard failed."""


def detect_command(platform: str | None = None) -> tuple[str, ...]:
    platform = platform or sys.platform
    candidates = CANDIDATE_COMMANDS.get(platform, CANDIDATE_COMMANDS["linux"])
    for command in candidates:
        if shutil.which(command[0]):
            logger.debug(f"Using clipboard {command=}")
            return command
    names = ", ".join(command[0] for command in candidates)
    raise ClipboardError(f"no clipboard utility found (tried {names})")


def write(value: str, command: Sequence[str] | None = None) -> None:
    """Put ``value`` on the system clipboard by piping it into a clipboard utility."""
    command = tuple(command) if command else detect_command()
    try:
        result = subprocess.run(
            command,
            input=value.encode("utf-8"),
            capture_output=True,
            timeout=WRITE_TIMEOUT,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise ClipboardError(str(e)) from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise ClipboardError(
            f"{command[0]} exited with status {result.returncode}"
            + (f": {stderr}" if stderr else "")
        )
    logger.info(f"Copied {len(value)} characters with {command[0]}")
