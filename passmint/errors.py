"""Exception types raised by passmint."""


class PassmintError(Exception):
    """Base class for every passmint failure."""


class ConfigurationError(PassmintError, ValueError):
    """The request can never be satisfied as configured (not retried)."""


class PolicyViolation(PassmintError):
    """A candidate was rejected.  Consumed by the retry loop."""

    def __init__(self, result):
        self.result = result
        codes = ", ".join(v.code for v in result.violations)
        super().__init__(f"Candidate rejected ({codes})")


class ExhaustedSearchSpaceError(PassmintError):
    """No acceptable candidate was found within the attempt ceiling."""

    def __init__(self, message: str, attempts: int):
        self.attempts = attempts
        super().__init__(message)
