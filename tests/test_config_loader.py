"""
Tests for declarative validator construction

Covers build_validator() on plain dicts and ValidatorConfigLoader on
YAML documents read from paths and file:// URIs.
"""
import textwrap

import pytest

from value_validation import (
    Email,
    InvalidPatternError,
    Range,
    Required,
    ValidatorConfigError,
    ValidatorConfigLoader,
    build_validator,
    load_validators,
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


@pytest.fixture
def config_file(tmp_path):
    """YAML document defining one validator per rule."""
    path = tmp_path / "validators.yaml"
    path.write_text(textwrap.dedent("""\
        validators:
          name:
            rule: required
          age:
            rule: range
            min: 18
            max: 130
          quantity:
            rule: min
            min: 1
          discount:
            rule: max
            max: 50
          username:
            rule: min_size
            min: 3
          bio:
            rule: max_size
            max: 140
          country_code:
            rule: length
            length: 2
          sku:
            rule: match
            pattern: '^[A-Z]{3}-\\d{4}$'
          contact:
            rule: email
        """))
    return path


class TestBuildValidator:
    """Test build_validator() on plain definitions."""

    @pytest.mark.parametrize("definition,expected", [
        ({"rule": "required"}, valid_required()),
        ({"rule": "min", "min": 10}, valid_min(10)),
        ({"rule": "max", "max": 10}, valid_max(10)),
        ({"rule": "range", "min": 10, "max": 100}, valid_range(10, 100)),
        ({"rule": "min_size", "min": 2}, valid_min_size(2)),
        ({"rule": "max_size", "max": 3}, valid_max_size(3)),
        ({"rule": "length", "length": 2}, valid_length(2)),
        ({"rule": "match", "pattern": r"[abc]{3}\d*"}, valid_match(r"[abc]{3}\d*")),
        ({"rule": "email"}, valid_email()),
    ])
    def test_builds_each_rule(self, definition, expected):
        """Test that each definition builds the same validator as its constructor."""
        assert build_validator(definition) == expected

    def test_inverted_range_is_accepted(self):
        """Test that min > max is not rejected at construction."""
        validator = build_validator({"rule": "range", "min": 100, "max": 10})
        assert isinstance(validator, Range)
        assert not validator.is_satisfied(50)

    @pytest.mark.parametrize("definition", [
        {},
        {"min": 10},
        {"rule": "min"},
        {"rule": "min", "min": "10"},
        {"rule": "min", "min": True},
        {"rule": "range", "min": 10},
        {"rule": "length", "length": -1},
        {"rule": "min_size", "min": 1.5},
        {"rule": "match"},
        {"rule": "match", "pattern": 5},
        {"rule": "email", "pattern": ".*"},
        {"rule": ["min"]},
        "email",
        None,
    ])
    def test_malformed_definitions(self, definition):
        """Test that malformed definitions raise ValidatorConfigError."""
        with pytest.raises(ValidatorConfigError):
            build_validator(definition)

    def test_unknown_rule(self):
        """Test that an unknown rule name is reported as such."""
        with pytest.raises(ValidatorConfigError, match="unknown rule 'ip_addr'"):
            build_validator({"rule": "ip_addr"}, name="server")

    def test_unknown_rule_message(self):
        """Test that an unknown rule is reported without the schema path prefix."""
        with pytest.raises(ValidatorConfigError) as exc_info:
            build_validator({"rule": "ip_addr"})
        assert str(exc_info.value) == "unknown rule 'ip_addr'"

    def test_schema_error_message(self):
        """Test that schema failures report where the definition is wrong."""
        with pytest.raises(ValidatorConfigError, match="^invalid definition at "):
            build_validator({"rule": "min", "min": "10"})

    @pytest.mark.parametrize("definition,expected", [
        ({"rule": "min_size", "min": 2.0}, valid_min_size(2)),
        ({"rule": "max_size", "max": 3.0}, valid_max_size(3)),
        ({"rule": "length", "length": 2.0}, valid_length(2)),
    ])
    def test_integral_float_sizes(self, definition, expected):
        """Test that whole-number floats in size definitions build integer bounds."""
        assert build_validator(definition) == expected

    def test_error_names_the_validator(self):
        """Test that the validator name appears in the error message."""
        with pytest.raises(ValidatorConfigError, match="Validator 'age'"):
            build_validator({"rule": "range"}, name="age")

    def test_invalid_pattern(self):
        """Test that a malformed pattern surfaces as InvalidPatternError."""
        with pytest.raises(InvalidPatternError):
            build_validator({"rule": "match", "pattern": "[unclosed"})


class TestValidatorConfigLoader:
    """Test loading validators from YAML documents."""

    def test_loads_all_validators(self, config_file):
        """Test that every defined validator is built."""
        loader = ValidatorConfigLoader(config_file)
        validators = loader.get_validators()
        assert set(validators) == {
            "name", "age", "quantity", "discount", "username",
            "bio", "country_code", "sku", "contact",
        }
        assert isinstance(validators["name"], Required)
        assert isinstance(validators["contact"], Email)

    def test_loaded_validators_work(self, config_file):
        """Test that loaded validators apply their rules."""
        loader = ValidatorConfigLoader(config_file)
        assert loader.get_validator("age").is_satisfied(42)
        assert not loader.get_validator("age").is_satisfied(17)
        assert loader.get_validator("sku").is_satisfied("ABC-1234")
        assert not loader.get_validator("sku").is_satisfied("abc-1234")
        assert loader.get_validator("country_code").is_satisfied("NZ")
        assert loader.get_validator("contact").is_satisfied("user@example.com")
        assert not loader.get_validator("name").is_satisfied("")

    def test_file_uri(self, config_file):
        """Test loading from a file:// URI."""
        validators = load_validators(config_file.as_uri())
        assert len(validators) == 9

    def test_get_config_returns_document(self, config_file):
        """Test that the raw document is available."""
        loader = ValidatorConfigLoader(str(config_file))
        assert loader.get_config()["validators"]["age"] == {
            "rule": "range", "min": 18, "max": 130
        }

    def test_unknown_validator_name(self, config_file):
        """Test that looking up an undefined name raises KeyError."""
        loader = ValidatorConfigLoader(config_file)
        with pytest.raises(KeyError):
            loader.get_validator("missing")

    def test_get_validators_returns_copy(self, config_file):
        """Test that callers cannot mutate the loader's validators."""
        loader = ValidatorConfigLoader(config_file)
        loader.get_validators().clear()
        assert len(loader.get_validators()) == 9

    @pytest.mark.parametrize("content", [
        "",
        "- a\n- b\n",
        "other: {}\n",
        "validators: []\n",
        "validators:\n  x: 5\n",
    ])
    def test_malformed_documents(self, tmp_path, content):
        """Test that documents without a validators mapping are rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        with pytest.raises(ValidatorConfigError):
            ValidatorConfigLoader(path)

    def test_malformed_yaml(self, tmp_path):
        """Test that YAML syntax errors are reported as config errors."""
        path = tmp_path / "bad.yaml"
        path.write_text("validators: [unclosed\n")
        with pytest.raises(ValidatorConfigError, match="Malformed YAML"):
            ValidatorConfigLoader(path)

    def test_bad_definition_names_validator(self, tmp_path):
        """Test that a bad definition inside a document is reported by name."""
        path = tmp_path / "bad.yaml"
        path.write_text("validators:\n  age:\n    rule: range\n    min: 1\n")
        with pytest.raises(ValidatorConfigError, match="Validator 'age'"):
            ValidatorConfigLoader(path)

    def test_unsupported_scheme(self):
        """Test that unsupported URI schemes are rejected."""
        with pytest.raises(ValueError, match="Unsupported URI scheme"):
            ValidatorConfigLoader("ftp://example.com/validators.yaml")

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ValidatorConfigLoader(tmp_path / "nope.yaml")

    def test_fetch_failure(self, monkeypatch):
        """Test that a failed remote fetch raises RuntimeError."""
        def fail(uri):
            raise OSError("connection refused")

        monkeypatch.setattr("urllib.request.urlopen", fail)
        with pytest.raises(RuntimeError, match="Failed to fetch config"):
            ValidatorConfigLoader("https://example.com/validators.yaml")

    def test_remote_document(self, monkeypatch):
        """Test loading a document fetched over HTTP."""
        class FakeResponse:
            def __enter__(self):
                return self

            def __exit__(self, *args):
                return False

            def read(self):
                return b"validators:\n  contact:\n    rule: email\n"

        monkeypatch.setattr("urllib.request.urlopen", lambda uri: FakeResponse())
        validators = load_validators("https://example.com/validators.yaml")
        assert validators["contact"].is_satisfied("user@example.com")
