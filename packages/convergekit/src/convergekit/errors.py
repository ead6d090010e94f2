from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_INTERNAL, ERR_PREREQ, ERR_PROBE, ERR_TIMEOUT


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class ProbeError(ScriptError):
    """A single external call (kubectl, JSON decode, DNS) failed."""

    def __init__(self, message: str, code: int = ERR_PROBE, kind: str = "probe_error") -> None:
        super().__init__(message, code, kind)


class PreconditionFailed(ScriptError):
    """A check could not start because something it depends on is missing."""

    def __init__(self, message: str, code: int = ERR_PREREQ, kind: str = "precondition_failed") -> None:
        super().__init__(message, code, kind)


class ConvergenceTimeout(ScriptError, AssertionError):
    """Raised when an awaited condition did not hold before the deadline.

    Subclasses ``AssertionError`` so test runners report it as a failed
    assertion rather than an error in the harness itself.
    """

    def __init__(self, description: str, last_error: BaseException | None = None) -> None:
        if last_error is not None:
            message = f"timeout during check {description} with error {last_error}"
        else:
            message = f"timeout during check {description}"
        super().__init__(message, ERR_TIMEOUT, "convergence_timeout")
        self.description = description
        self.last_error = last_error
