"""Exceptions raised by the rules layer."""

from __future__ import annotations

from landak.domain.enums import RejectReason


class ActionRejected(RuntimeError):
    """Raised when an action's preconditions do not hold.

    The reducer catches it and reports the reason while leaving the state
    untouched.
    """

    def __init__(self, reason: RejectReason, detail: str | None = None) -> None:
        super().__init__(detail or str(reason))
        self.reason = reason
        self.detail = detail or str(reason)
