#!/usr/bin/env python3

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from sepa_viewer.models import Field

logger = logging.getLogger(__name__)

ELLIPSIS = "..."
DEFAULT_TRUNCATE_WIDTH = 40


class State(Enum):
    READY = "ready"
    EMPTY = "empty"
    NOTIFY_VISIBLE = "notify_visible"
    TERMINATED = "terminated"


class Action(Enum):
    UP = "cursor_up"
    DOWN = "cursor_down"
    COPY = "copy"
    QUIT = "quit"
    HELP = "toggle_help"


# Textual key names per action.
KEYMAP: dict[Action, tuple[str, ...]] = {
    Action.UP: ("up", "k"),
    Action.DOWN: ("down", "j"),
    Action.COPY: ("c", "ctrl+c"),
    Action.QUIT: ("q", "escape"),
    Action.HELP: ("question_mark",),
}

# (key display, description)
KEY_HELP: dict[Action, tuple[str, str]] = {
    Action.UP: ("↑/k", "up"),
    Action.DOWN: ("↓/j", "down"),
    Action.COPY: ("c", "copy value"),
    Action.HELP: ("?", "toggle help"),
    Action.QUIT: ("q/esc", "quit"),
}

SHORT_HELP = "Navigation: ↑/↓ or j/k • Copy value: c • Quit: q/esc • Help: ?"
FULL_HELP_COLUMNS = (
    (Action.UP, Action.DOWN),
    (Action.COPY, Action.HELP, Action.QUIT),
)


def truncate(value: str, width: int = DEFAULT_TRUNCATE_WIDTH) -> str:
    """Shorten ``value`` to ``width`` characters, ending in an ellipsis when cut."""
    if len(value) <= width:
        return value
    return value[: width - len(ELLIPSIS)] + ELLIPSIS


@dataclass(frozen=True)
class CopyRequest:
    value: str


@dataclass(frozen=True)
class CopyResult:
    value: str
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class Session:
    """Browsing state of one viewer run.

    The session never touches the terminal or the clipboard. It turns actions
    into state changes and, for a copy, into a ``CopyRequest`` that the caller
    executes in the background, reporting back through ``copy_finished``.
    Every notification gets a token; ``clear_notification`` only acts on the
    token of the latest one, so a timer armed by an earlier copy cannot hide
    the text of a newer one.
    """

    def __init__(
        self,
        fields: Sequence[Field],
        error: Exception | None = None,
        truncate_width: int = DEFAULT_TRUNCATE_WIDTH,
    ) -> None:
        self.fields = tuple(fields)
        self.error = error
        self.truncate_width = truncate_width
        self.cursor = 0
        self.notification = ""
        self.help_expanded = False
        self.terminated = False
        self._notification_token = 0

    @property
    def state(self) -> State:
        if self.terminated:
            return State.TERMINATED
        if not self.fields:
            return State.EMPTY
        if self.notification:
            return State.NOTIFY_VISIBLE
        return State.READY

    @property
    def selected(self) -> Field | None:
        if 0 <= self.cursor < len(self.fields):
            return self.fields[self.cursor]
        return None

    @property
    def error_message(self) -> str:
        if self.error is not None:
            return f"Error: {self.error}"
        return "Error: the document contains no fields"

    def select(self, index: int) -> None:
        if not self.fields:
            return
        self.cursor = max(0, min(index, len(self.fields) - 1))

    def handle(self, action: Action) -> CopyRequest | None:
        state = self.state
        logger.debug(f"Handling {action=} in {state=}")
        if state is State.TERMINATED:
            return None
        if action is Action.QUIT:
            self.terminated = True
            return None
        if state is State.EMPTY:
            return None

        if action is Action.UP:
            self.select(self.cursor - 1)
        elif action is Action.DOWN:
            self.select(self.cursor + 1)
        elif action is Action.HELP:
            self.help_expanded = not self.help_expanded
        elif action is Action.COPY:
            field = self.selected
            if field is None:
                return None
            return CopyRequest(value=field.value)
        return None

    def copy_finished(self, result: CopyResult) -> int:
        if result.success:
            self.notification = f"Copied: {truncate(result.value, self.truncate_width)}"
        else:
            self.notification = f"Copy failed: {result.error}"
            logger.warning(f"Copy failed: {result.error!r}")
        self._notification_token += 1
        return self._notification_token

    def clear_notification(self, token: int) -> bool:
        if token != self._notification_token:
            logger.debug(f"Ignoring stale {token=}")
            return False
        self.notification = ""
        return True

    def help_text(self) -> str:
        if not self.help_expanded:
            return SHORT_HELP
        columns = []
        for group in FULL_HELP_COLUMNS:
            columns.append(
                "    ".join(
                    f"{KEY_HELP[action][0]} {KEY_HELP[action][1]}" for action in group
                )
            )
        return "\n".join(columns)
