"""Exceptions raised by value-validation-lib.

Validators never raise while checking a value. These errors only surface
when a validator is being built: from a malformed pattern, or from a
declarative definition that does not describe a built-in rule.
"""


class ValueValidationError(Exception):
    """Base class for all value-validation-lib errors."""


class InvalidPatternError(ValueValidationError, ValueError):
    """A regular expression handed to Match or Email failed to compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class ValidatorConfigError(ValueValidationError, ValueError):
    """A declarative validator definition is malformed."""

    def __init__(self, message: str, name: str = None):
        self.name = name
        if name:
            message = f"Validator '{name}': {message}"
        super().__init__(message)
