"""
Validators - stateless rules over a single value

Every validator answers one question: does this value satisfy my rule?
The answer is always True or False. A value of the wrong type, or no value
at all, is an ordinary unsatisfied result and never an exception.

Validators are frozen once built and hold no per-call state, so a single
instance can be shared freely between callers and threads.

Example:
    from value_validation import Range, Min, Max, valid_email

    Range(Min(10), Max(100)).is_satisfied(50)    # True
    valid_email().is_satisfied("a@@x.com")       # False
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Real
from typing import Any, Union

from .exceptions import InvalidPatternError, ValidatorConfigError
from .type_probe import ValueKind, is_zero_value, probe, size_of

logger = logging.getLogger(__name__)

# Local part: groups of [A-Za-z0-9!#$%^&*_+-] joined by single dots.
# Domain: dot-separated labels that start and end with a letter or digit,
# with at least one dot before the final label.
EMAIL_PATTERN = re.compile(
    r"\A[a-zA-Z0-9!#$%^&*_+-]+(?:\.[a-zA-Z0-9!#$%^&*_+-]+)*"
    r"@"
    r"(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?\Z"
)


class Validator(ABC):
    """
    Abstract base class for all validators.

    Subclasses implement is_satisfied(). Calling the validator directly
    is the same as calling is_satisfied().
    """

    @abstractmethod
    def is_satisfied(self, value: Any) -> bool:
        """
        Check a single value against this rule.

        Args:
            value: Any value, including None

        Returns:
            True if the value satisfies the rule, False otherwise
        """

    def __call__(self, value: Any) -> bool:
        return self.is_satisfied(value)


def _check_bound(rule: str, name: str, value: Any):
    """Reject numeric bounds that would make comparisons fail at check time."""
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise ValidatorConfigError(
            f"{name} must be a number, got {type(value).__name__}", name=rule
        )
    if isinstance(value, Decimal) and value.is_nan():
        raise ValidatorConfigError(f"{name} must not be NaN", name=rule)


def _check_size(rule: str, name: str, value: Any):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidatorConfigError(
            f"{name} must be an integer, got {type(value).__name__}", name=rule
        )


@dataclass(frozen=True)
class Required(Validator):
    """Value must be present and not the zero value of its type."""

    def is_satisfied(self, value: Any) -> bool:
        return not is_zero_value(value)


@dataclass(frozen=True)
class Min(Validator):
    """Value must be an integer no smaller than min (inclusive)."""

    min: Real

    def __post_init__(self):
        _check_bound("Min", "min", self.min)

    def is_satisfied(self, value: Any) -> bool:
        return probe(value) is ValueKind.INTEGER and value >= self.min


@dataclass(frozen=True)
class Max(Validator):
    """Value must be an integer no larger than max (inclusive)."""

    max: Real

    def __post_init__(self):
        _check_bound("Max", "max", self.max)

    def is_satisfied(self, value: Any) -> bool:
        return probe(value) is ValueKind.INTEGER and value <= self.max


@dataclass(frozen=True)
class Range(Validator):
    """
    Value must satisfy both the Min and the Max rule.

    Bounds are not cross-checked: a Range whose min exceeds its max is
    accepted and is unsatisfiable for every input.
    """

    min: Min
    max: Max

    def is_satisfied(self, value: Any) -> bool:
        return self.min.is_satisfied(value) and self.max.is_satisfied(value)


@dataclass(frozen=True)
class MinSize(Validator):
    """Text or sequence must hold at least min characters/elements."""

    min: int

    def __post_init__(self):
        _check_size("MinSize", "min", self.min)

    def is_satisfied(self, value: Any) -> bool:
        size = size_of(value)
        return size is not None and size >= self.min


@dataclass(frozen=True)
class MaxSize(Validator):
    """Text or sequence must hold at most max characters/elements."""

    max: int

    def __post_init__(self):
        _check_size("MaxSize", "max", self.max)

    def is_satisfied(self, value: Any) -> bool:
        size = size_of(value)
        return size is not None and size <= self.max


@dataclass(frozen=True)
class Length(Validator):
    """Text or sequence must hold exactly length characters/elements."""

    length: int

    def __post_init__(self):
        _check_size("Length", "length", self.length)

    def is_satisfied(self, value: Any) -> bool:
        return size_of(value) == self.length


def _compile(pattern: Union[str, re.Pattern]) -> re.Pattern:
    source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    if isinstance(source, (bytes, bytearray)):
        # a bytes pattern cannot search text
        raise InvalidPatternError(repr(source), "pattern must be text, not bytes")
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        compiled = re.compile(pattern)
    except (re.error, TypeError) as e:
        raise InvalidPatternError(str(pattern), str(e)) from e
    logger.debug(f"Compiled pattern {pattern!r}")
    return compiled


@dataclass(frozen=True)
class Match(Validator):
    """
    Text must contain at least one match of pattern.

    Matching is unanchored (re.search); anchor the pattern itself to
    require a whole-string match. A pattern string is compiled when the
    validator is built, so a malformed pattern fails here with
    InvalidPatternError rather than on first use.
    """

    pattern: re.Pattern

    def __post_init__(self):
        # frozen dataclass: bypass __setattr__ to store the compiled form
        object.__setattr__(self, "pattern", _compile(self.pattern))

    def is_satisfied(self, value: Any) -> bool:
        if probe(value) is not ValueKind.TEXT:
            return False
        return self.pattern.search(value) is not None


@dataclass(frozen=True)
class Email(Validator):
    """Text must be a well-formed e-mail address (see EMAIL_PATTERN)."""

    matcher: Match = field(default_factory=lambda: Match(EMAIL_PATTERN))

    def __post_init__(self):
        # the address grammar is fixed; only a matcher built on EMAIL_PATTERN is accepted
        if not isinstance(self.matcher, Match) or self.matcher.pattern != EMAIL_PATTERN:
            raise InvalidPatternError(
                repr(getattr(self.matcher, "pattern", self.matcher)),
                "Email only accepts a Match on EMAIL_PATTERN",
            )

    def is_satisfied(self, value: Any) -> bool:
        return self.matcher.is_satisfied(value)


def valid_required() -> Required:
    return Required()


def valid_min(minimum: Real) -> Min:
    return Min(minimum)


def valid_max(maximum: Real) -> Max:
    return Max(maximum)


def valid_range(minimum: Real, maximum: Real) -> Range:
    return Range(Min(minimum), Max(maximum))


def valid_min_size(minimum: int) -> MinSize:
    return MinSize(minimum)


def valid_max_size(maximum: int) -> MaxSize:
    return MaxSize(maximum)


def valid_length(length: int) -> Length:
    return Length(length)


def valid_match(pattern: Union[str, re.Pattern]) -> Match:
    return Match(pattern)


def valid_email() -> Email:
    return Email(Match(EMAIL_PATTERN))
