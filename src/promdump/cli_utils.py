# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from promdump.common.exceptions import PromDumpMultiError


def _error_text(error: Exception) -> Text:
    text = Text(f"{error.__class__.__name__}: ", style="bold red")
    if isinstance(error, PromDumpMultiError):
        text.append(str(error).split(":", 1)[0])
        for cause in error.exceptions:
            text.append(f"\n  - {cause}")
    else:
        text.append(str(error))
    return text


@contextmanager
def exit_on_error(
    title: str = "Error", console: Console | None = None, exit_code: int = 1
) -> Iterator[None]:
    """Print any exception raised in the block as a panel on stderr and exit.

    `SystemExit` and `KeyboardInterrupt` pass through untouched.
    """
    try:
        yield
    except Exception as e:
        console = console or Console(stderr=True)
        console.print(
            Panel(
                _error_text(e),
                title=title,
                border_style="bold red",
                title_align="left",
                expand=False,
            )
        )
        console.file.flush()
        sys.exit(exit_code)
