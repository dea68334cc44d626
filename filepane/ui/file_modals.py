"""Modal dialogs for file browser operations."""

import logging
from typing import Awaitable, Callable, Optional

from textual.app import ComposeResult
from textual.containers import Container, Grid, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from filepane.exceptions import FileOperationError

logger = logging.getLogger(__name__)


class FileNameScreen(ModalScreen[Optional[str]]):
    """Ask for a file name and hand it to submit.

    The screen stays open while submit raises FileOperationError, showing
    the error under the input. It dismisses with the accepted name, or None
    when cancelled.
    """

    DEFAULT_CSS = """
    FileNameScreen {
        align: center middle;
    }

    #name-modal-container {
        background: $surface;
        border: thick $primary;
        padding: 1 2;
        width: 60;
        height: auto;
    }

    #name-modal-title {
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    #name-error {
        color: $error;
        height: auto;
    }

    #name-button-container {
        margin-top: 1;
        align: center middle;
        height: 3;
    }

    #name-button-container Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        title: str,
        submit: Callable[[str], Awaitable[None]],
        initial: str = "",
        **kwargs,
    ):
        """Initialize the prompt.

        Args:
            title: Heading shown above the input
            submit: Coroutine called with the entered name
            initial: Pre-filled value
        """
        super().__init__(**kwargs)
        self.title_text = title
        self.submit = submit
        self.initial = initial

    def compose(self) -> ComposeResult:
        with Container(id="name-modal-container"):
            yield Label(self.title_text, id="name-modal-title")
            yield Input(value=self.initial, placeholder="e.g. api.raml", id="name-input")
            yield Static("", id="name-error")
            with Horizontal(id="name-button-container"):
                yield Button("OK", variant="primary", id="ok-btn")
                yield Button("Cancel", variant="default", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        await self.action_submit()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ok-btn":
            await self.action_submit()
        else:
            self.action_cancel()

    async def action_submit(self) -> None:
        name = self.query_one("#name-input", Input).value.strip()
        try:
            await self.submit(name)
        except FileOperationError as e:
            logger.info(f"Rejected file name {name!r}: {e}")
            self.query_one("#name-error", Static).update(f"❌ {e.message}")
            return
        self.dismiss(name)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Confirm removing a file."""

    DEFAULT_CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }

    #dialog {
        grid-size: 2;
        grid-gutter: 1 2;
        grid-rows: 1fr 3;
        padding: 0 2;
        width: 60;
        height: 11;
        border: thick $background 80%;
        background: $surface;
    }

    #question {
        column-span: 2;
        height: 3;
        content-align: center middle;
        text-style: bold;
    }

    ConfirmDeleteScreen Button {
        width: 100%;
    }
    """

    BINDINGS = [
        ("y", "confirm_delete", "Yes"),
        ("n", "cancel", "No"),
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self, file_name: str):
        super().__init__()
        self.file_name = file_name

    def compose(self) -> ComposeResult:
        with Grid(id="dialog"):
            yield Label(
                f'Delete "{self.file_name}"?\n\n'
                f"[dim]Press [bold]y[/bold] to delete, [bold]n[/bold] to cancel[/dim]",
                id="question",
            )
            yield Button("Cancel (n)", variant="primary", id="cancel")
            yield Button("Delete (y)", variant="error", id="delete")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def action_confirm_delete(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
