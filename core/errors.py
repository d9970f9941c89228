"""Custom errors with tracking IDs."""

import secrets

from utils.timestamp import format_timestamp


class HashIDError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        # Not a HashID: the clock may be the thing that failed.
        self.error_id = secrets.token_hex(8)
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class MalformedInputError(HashIDError, ValueError):
    """A hash, timestamp or identifier of the wrong size or shape."""

    def __init__(self, message, component=None, expected=None, actual=None, **kwargs):
        context = kwargs.pop("context", {})
        if component:
            context["component"] = component
        if expected is not None:
            context["expected"] = expected
        if actual is not None:
            context["actual"] = actual
        super().__init__(message, context=context, **kwargs)

    @property
    def component(self):
        return self.context.get("component")


class ClockUnavailableError(HashIDError):
    """The clock failed to produce a timestamp sample."""

    def __init__(self, message, clock=None, **kwargs):
        context = kwargs.pop("context", {})
        if clock is not None:
            context["clock"] = repr(clock)
        super().__init__(message, context=context, **kwargs)


class BuilderConsumedError(HashIDError):
    """build() called on a builder that already built."""
