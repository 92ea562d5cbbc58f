"""Exceptions for contract violations, plus a logging helper for caught errors.

Request validation failures are never raised; they are returned as error
records by services.validator. The exceptions here signal programmer errors.
"""

import json
import logging
import traceback

log = logging.getLogger(__name__)


class ToolkitError(Exception):
    """Base class for errors raised by toolkit helpers."""


class ShouldBeUnreachableError(ToolkitError):
    """A code path that the caller's contract says can never run was reached."""


class WrongTypeError(ToolkitError):
    def __init__(self, name: str, value, detail: str = ""):
        self.name = name
        self.value = value
        self.detail = detail
        msg = f"The value {value!r} for '{name}' has the wrong type or format."
        if detail:
            msg = f"{msg} {detail}"
        super().__init__(msg)


class UnexpectedDuplicateError(ToolkitError):
    def __init__(self, kind: str, value):
        self.kind = kind
        self.value = value
        super().__init__(f"Unexpected duplicate {kind}: {value!r}")


def log_and_suppress_error(title: str, err: BaseException) -> bool:
    """Log a one-line summary of *err* under *title* and swallow it.

    Returns True when the summary was logged, False if building it failed.
    """
    details = "An error has occurred."
    try:
        name = type(err).__name__ if err is not None else "Unknown error"
        details = f"{details} #### name: {name}"
        message = str(err) if err is not None and str(err) else "An unknown error occurred"
        details = f"{details} #### message: {message}"
        cause = err.__cause__ if err is not None else None
        details = f"{details} #### cause: {json.dumps(repr(cause) if cause else 'Unknown cause')}"
        stack = traceback.format_tb(err.__traceback__) if err is not None else []
        details = f"{details} #### stack: {' | '.join(s.strip() for s in stack)}"

        log.error("%s: %s", title, details)
        return True
    except Exception as handle_err:  # noqa: BLE001
        log.error(
            "%s: An error occurred while handling a different error. "
            "#### error: %r #### original error: %r",
            title,
            handle_err,
            err,
        )

    return False
