"""Exceptions raised by the sumcheck protocols."""

from __future__ import annotations


class SumcheckError(Exception):
    """Base class for every error raised by this package."""


class RejectError(SumcheckError):
    """The verifier rejects a proof."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason if reason is not None else "proof rejected")
        self.reason = reason


class SerializationError(SumcheckError):
    """A value could not be serialized or deserialized."""


class RNGError(SumcheckError):
    """The random generator could not produce output."""