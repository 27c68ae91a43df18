"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and CLI command wrappers
to ensure consistent error handling across all Typer commands.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

from ..errors import ApiException

T = TypeVar('T')

EXIT_CODES = {
    "ValidationError": 2,
    "ValueError": 2,
    "ApiException": 3,
}

NOT_FOUND_EXIT_CODE = 1
FALLBACK_EXIT_CODE = 3


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    Returns:
    - 0: Success
    - 1: Resource not found (ApiException with status 404)
    - 2: Invalid parameters or configuration (ValidationError, ValueError)
    - 3: API or network error (ApiException) or unknown error
    """
    if isinstance(exc, ApiException) and exc.status == 404:
        return NOT_FOUND_EXIT_CODE
    return EXIT_CODES.get(type(exc).__name__, FALLBACK_EXIT_CODE)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function, reports any exception on stderr and maps
    it to an exit code using typer.Exit. typer.Exit raised by the command
    itself passes through untouched.

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=exit_code_for(e)) from e
