#!/usr/bin/env python3

from __future__ import annotations

import logging
from functools import partial

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import DataTable, Static

from sepa_viewer import clipboard
from sepa_viewer.config import ViewerConfig
from sepa_viewer.session import KEY_HELP, KEYMAP, Action, CopyResult, Session, State

logger = logging.getLogger(__name__)


class CopyFinished(Message):
    """Posted by the clipboard worker once the write succeeded or failed."""

    def __init__(self, result: CopyResult) -> None:
        super().__init__()
        self.result = result


class SepaViewerApp(App):
    CSS = """
    Screen {
        padding: 0 1;
    }
    #title {
        color: #ff5faf;
        text-style: bold;
        margin: 1 0;
    }
    #fields {
        border: solid #585858;
        width: auto;
    }
    #fields > .datatable--cursor {
        color: #ffffaf;
        background: #5f00ff;
    }
    #notification {
        color: #00ff00;
        margin: 1 0 0 0;
    }
    #help {
        color: #626262;
        margin: 1 0;
    }
    """

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding(
            ",".join(KEYMAP[action]),
            action.value,
            KEY_HELP[action][1],
            key_display=KEY_HELP[action][0],
            show=False,
            priority=True,
        )
        for action in Action
    ]

    def __init__(self, session: Session, config: ViewerConfig | None = None) -> None:
        super().__init__()
        self.session = session
        self.config = config or ViewerConfig()

    def compose(self) -> ComposeResult:
        if self.session.state is State.EMPTY:
            yield Static(
                f"{self.session.error_message}\n\nPress 'q' to quit.", id="error"
            )
            return
        yield Static(self.config.title, id="title")
        yield DataTable(id="fields", cursor_type="row")
        yield Static("", id="notification")
        yield Static(self.session.help_text(), id="help")

    def on_mount(self) -> None:
        if self.session.state is State.EMPTY:
            logger.info(f"Showing {self.session.error_message!r}")
            return

        table = self.query_one(DataTable)
        table.add_column("Category", width=self.config.category_width)
        table.add_column("Field", width=self.config.field_width)
        table.add_column("Value", width=self.config.value_width)
        for field in self.session.fields:
            table.add_row(field.category, field.name, field.value)
        # viewport rows plus header and border
        table.styles.height = self.config.table_height + 3
        table.focus()
        self.query_one("#notification", Static).display = False

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self.session.select(event.cursor_row)

    def _sync_cursor(self) -> None:
        if self.session.state is State.EMPTY:
            return
        self.query_one(DataTable).move_cursor(row=self.session.cursor)

    def action_cursor_up(self) -> None:
        self.session.handle(Action.UP)
        self._sync_cursor()

    def action_cursor_down(self) -> None:
        self.session.handle(Action.DOWN)
        self._sync_cursor()

    def action_toggle_help(self) -> None:
        self.session.handle(Action.HELP)
        if self.session.state is not State.EMPTY:
            self.query_one("#help", Static).update(self.session.help_text())

    def action_copy(self) -> None:
        request = self.session.handle(Action.COPY)
        if request is not None:
            logger.debug(f"Dispatching {request=}")
            self.write_clipboard(request.value)

    async def action_quit(self) -> None:
        self.session.handle(Action.QUIT)
        self.exit(return_code=0)

    @work(thread=True, group="clipboard")
    def write_clipboard(self, value: str) -> None:
        try:
            clipboard.write(value, command=self.config.clipboard_command)
        except clipboard.ClipboardError as e:
            self.post_message(CopyFinished(CopyResult(value=value, error=e)))
        else:
            self.post_message(CopyFinished(CopyResult(value=value)))

    def on_copy_finished(self, message: CopyFinished) -> None:
        token = self.session.copy_finished(message.result)
        self._show_notification()
        self.set_timer(
            self.config.notify_seconds, partial(self._clear_notification, token)
        )

    def _clear_notification(self, token: int) -> None:
        if self.session.clear_notification(token):
            self._show_notification()

    def _show_notification(self) -> None:
        notification = self.query_one("#notification", Static)
        notification.update(self.session.notification)
        notification.display = bool(self.session.notification)
