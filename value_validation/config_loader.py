"""
Declarative validator construction from plain data and YAML documents.

A definition is a dict naming one of the built-in rules plus its parameters:

    {"rule": "range", "min": 10, "max": 100}
    {"rule": "match", "pattern": "[abc]{3}\\d*"}
    {"rule": "email"}

Definitions are checked against DEFINITION_SCHEMA with jsonschema before
anything is built, so a malformed definition fails with
ValidatorConfigError instead of producing a half-configured validator.

A YAML document groups named definitions under a top-level 'validators' key:

    validators:
      age:
        rule: range
        min: 18
        max: 130
      contact:
        rule: email
"""

import logging
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from .exceptions import ValidatorConfigError
from .validators import (
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

logger = logging.getLogger(__name__)

_NUMBER = {"type": "number"}
_SIZE = {"type": "integer", "minimum": 0}


def _rule(name: str, **params) -> dict:
    """Build the schema branch for one rule name and its required params."""
    properties = {"rule": {"const": name}}
    properties.update(params)
    return {
        "type": "object",
        "properties": properties,
        "required": ["rule"] + sorted(params),
        "additionalProperties": False,
    }


DEFINITION_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["rule"],
    "properties": {
        "rule": {
            "enum": [
                "required", "min", "max", "range",
                "min_size", "max_size", "length",
                "match", "email",
            ]
        }
    },
    "oneOf": [
        _rule("required"),
        _rule("min", min=_NUMBER),
        _rule("max", max=_NUMBER),
        _rule("range", min=_NUMBER, max=_NUMBER),
        _rule("min_size", min=_SIZE),
        _rule("max_size", max=_SIZE),
        _rule("length", length=_SIZE),
        _rule("match", pattern={"type": "string"}),
        _rule("email"),
    ],
}

DOCUMENT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["validators"],
    "properties": {
        "validators": {
            "type": "object",
            "additionalProperties": {"type": "object"},
        }
    },
}

_definition_checker = Draft7Validator(DEFINITION_SCHEMA)
_document_checker = Draft7Validator(DOCUMENT_SCHEMA)

_BUILDERS = {
    "required": lambda d: valid_required(),
    "min": lambda d: valid_min(d["min"]),
    "max": lambda d: valid_max(d["max"]),
    "range": lambda d: valid_range(d["min"], d["max"]),
    "min_size": lambda d: valid_min_size(int(d["min"])),
    "max_size": lambda d: valid_max_size(int(d["max"])),
    "length": lambda d: valid_length(int(d["length"])),
    "match": lambda d: valid_match(d["pattern"]),
    "email": lambda d: valid_email(),
}


def _first_error(checker: Draft7Validator, instance: Any) -> Optional[str]:
    error = best_match(checker.iter_errors(instance))
    if error is None:
        return None
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    return f"{error_path}: {error.message}"


def build_validator(definition: Dict[str, Any], name: str = None) -> Validator:
    """
    Build a validator from a declarative definition.

    Args:
        definition: Dict with a 'rule' key and the rule's parameters
        name: Optional name used in error messages

    Returns:
        Ready-to-use validator

    Raises:
        ValidatorConfigError: If the definition does not describe a built-in rule
        InvalidPatternError: If a 'match' definition carries a malformed pattern
    """
    message = _first_error(_definition_checker, definition)
    if message:
        rule = definition.get("rule") if isinstance(definition, dict) else None
        if isinstance(rule, str) and rule not in _BUILDERS:
            message = f"unknown rule {rule!r}"
        else:
            message = f"invalid definition at {message}"
        raise ValidatorConfigError(message, name=name)

    validator = _BUILDERS[definition["rule"]](definition)
    logger.debug(
        "Built validator from definition",
        extra={'validator_name': name, 'rule': definition["rule"]}
    )
    return validator


class ValidatorConfigLoader:
    """Loads named validator definitions from a YAML document."""

    def __init__(self, source: Union[str, Path]):
        """
        Load and build every validator defined in a YAML document.

        Args:
            source: Filesystem path, file:// URI, or http(s):// URI

        Raises:
            ValidatorConfigError: If the document or any definition is malformed
            ValueError: If the URI scheme is not supported
            RuntimeError: If a remote document cannot be fetched
        """
        self.source = str(source)
        self.config = self._load_config_from_uri(self.source)

        message = _first_error(_document_checker, self.config)
        if message:
            raise ValidatorConfigError(f"Invalid document {self.source} at {message}")

        self.validators = {
            name: build_validator(definition, name=name)
            for name, definition in self.config["validators"].items()
        }
        logger.info(
            f"Loaded {len(self.validators)} validators from {self.source}"
        )

    def _load_config_from_uri(self, uri: str) -> Any:
        """Load a YAML document from a path or URI."""
        parsed = urllib.parse.urlparse(uri)

        if parsed.scheme == '':
            return self._load_yaml(uri)

        if parsed.scheme == 'file':
            path = urllib.parse.unquote(parsed.path)
            return self._load_yaml(path)

        elif parsed.scheme in ('http', 'https'):
            return self._parse_yaml(self._fetch_uri(uri), uri)

        else:
            raise ValueError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")

    def _load_yaml(self, path: str) -> Any:
        """Load a YAML file from disk."""
        with open(path, 'r') as f:
            return self._parse_yaml(f.read(), path)

    def _parse_yaml(self, content: str, origin: str) -> Any:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValidatorConfigError(f"Malformed YAML in {origin}: {e}") from e

    def _fetch_uri(self, uri: str) -> str:
        """Fetch content from HTTP/HTTPS URI."""
        try:
            with urllib.request.urlopen(uri) as response:
                return response.read().decode('utf-8')
        except Exception as e:
            raise RuntimeError(f"Failed to fetch config from {uri}: {e}") from e

    def get_config(self) -> Dict[str, Any]:
        """Get the raw configuration document."""
        return self.config

    def get_validators(self) -> Dict[str, Validator]:
        """Get all validators keyed by name."""
        return dict(self.validators)

    def get_validator(self, name: str) -> Validator:
        """
        Get one validator by name.

        Raises:
            KeyError: If no validator with that name was defined
        """
        if name not in self.validators:
            raise KeyError(f"No validator named '{name}' in {self.source}")
        return self.validators[name]


def load_validators(source: Union[str, Path]) -> Dict[str, Validator]:
    """Load a YAML document and return its validators keyed by name."""
    return ValidatorConfigLoader(source).get_validators()
