# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import logging

from pathlib import Path
from typing import Any, override

from rich.console import Console, ConsoleRenderable, RenderableType
from rich.containers import Renderables
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text


class CustomRichHandler(RichHandler):
    """Compact console handler rendering ``[L:logger] [account] message``, with the source location right-aligned.

    The account tag is only shown for records logged with ``extra={"account": ...}``.
    """

    @override
    def __init__(self, *args, show_path: bool = True, show_name: bool = True, **kwargs) -> None:
        kwargs.setdefault("rich_tracebacks", True)
        kwargs.setdefault("enable_link_path", False)
        super().__init__(*args, console=Console(stderr=True), **kwargs)

        self.show_path = show_path
        self.show_name = show_name

    @staticmethod
    def level_style(record: logging.LogRecord) -> str:
        return f"logging.level.{record.levelname.lower()}"

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        text = Text()

        text.append("[", style="dim")
        text.append(record.levelname[0], style=self.level_style(record))
        if self.show_name:
            text.append(f":{record.name}", style="dim")
        text.append("] ", style="dim")

        if (account := getattr(record, "account", None)) is not None:
            text.append(f"[{account}] ", style="bold cyan")

        text.append(message)
        return text

    @override
    def render(self, *, record: logging.LogRecord, traceback: Any, message_renderable: ConsoleRenderable) -> ConsoleRenderable:
        renderables: list[ConsoleRenderable] = [message_renderable]
        if traceback:
            renderables.append(traceback)

        output = Table.grid(padding=(0, 1))
        output.expand = True
        output.add_column(ratio=1, style=self.level_style(record), overflow="fold")
        row: list[RenderableType] = [Renderables(renderables)]

        if self.show_path and (path := Path(record.pathname).name):
            output.add_column(style="log.path")
            row.append(Text(f"{path}:{record.lineno}" if record.lineno else path))

        output.add_row(*row)
        return output
