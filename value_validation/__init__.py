"""
value-validation-lib: Composable value validators

This library provides small, stateless validators for user-supplied values:
- Presence (Required)
- Integer bounds (Min, Max, Range)
- Size bounds for text and sequences (MinSize, MaxSize, Length)
- Regular expression match (Match)
- E-mail address well-formedness (Email)
- Declarative construction from dicts and YAML documents

Every validator exposes is_satisfied(value) -> bool, which never raises.

Example:
    from value_validation import valid_range, valid_email

    valid_range(10, 100).is_satisfied(50)            # True
    valid_email().is_satisfied("user@example.com")   # True
"""

from .config_loader import ValidatorConfigLoader, build_validator, load_validators
from .exceptions import InvalidPatternError, ValidatorConfigError, ValueValidationError
from .type_probe import ValueKind, probe
from .validators import (
    EMAIL_PATTERN,
    Email,
    Length,
    Match,
    Max,
    MaxSize,
    Min,
    MinSize,
    Range,
    Required,
    Validator,
    valid_email,
    valid_length,
    valid_match,
    valid_max,
    valid_max_size,
    valid_min,
    valid_min_size,
    valid_range,
    valid_required,
)

__version__ = "0.1.0"
__all__ = [
    "Validator",
    "Required",
    "Min",
    "Max",
    "Range",
    "MinSize",
    "MaxSize",
    "Length",
    "Match",
    "Email",
    "EMAIL_PATTERN",
    "valid_required",
    "valid_min",
    "valid_max",
    "valid_range",
    "valid_min_size",
    "valid_max_size",
    "valid_length",
    "valid_match",
    "valid_email",
    "ValueKind",
    "probe",
    "build_validator",
    "load_validators",
    "ValidatorConfigLoader",
    "ValueValidationError",
    "InvalidPatternError",
    "ValidatorConfigError",
]
