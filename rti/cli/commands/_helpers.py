"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from rti.core.errors import InjectError
from rti.core.result import Err, Result
from rti.output.console import Style

if TYPE_CHECKING:
    from rti.cli.context import CLIContext


def exit_on_error[T](result: Result[T, InjectError], ctx: CLIContext) -> T:
    """Return the Ok value, or report the error and exit with its code.

    Replaces the common pattern:
        match result:
            case Err(e):
                ctx.console.error(e.message)
                raise typer.Exit(code=int(e.exit_code))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        fail(result.error, ctx)
    return result.value


def fail(error: InjectError, ctx: CLIContext) -> NoReturn:
    ctx.console.error(error.message)
    if error.hint:
        ctx.console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(error.exit_code))
