"""Tests for event field validation."""

from datetime import datetime, timezone

import pytest

from trubrics.exceptions import ValidationError
from trubrics.validation import validate_properties, validate_request


class TestMandatory:
    def test_all_present(self):
        validate_request(strings=["a", "b"], mandatory=["a", "b"])

    def test_missing_mandatory(self):
        with pytest.raises(ValidationError, match="Mandatory"):
            validate_request(strings=["event", None], mandatory=["event", None])

    def test_falsy_but_present_is_not_missing(self):
        validate_request(numbers=[0], mandatory=[0])


class TestStrings:
    def test_optional_none_is_skipped(self):
        validate_request(strings=["a", None])

    def test_empty_string(self):
        with pytest.raises(ValidationError, match="non-empty"):
            validate_request(strings=[""])

    def test_non_string(self):
        with pytest.raises(ValidationError):
            validate_request(strings=[42])


class TestNumbers:
    def test_integer(self):
        validate_request(numbers=[1200, None])

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="Integer"):
            validate_request(numbers=[1.5])

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            validate_request(numbers=[True])

    def test_numeric_string_rejected(self):
        with pytest.raises(ValidationError):
            validate_request(numbers=["12"])


class TestTimestamps:
    def test_datetime(self):
        validate_request(timestamps=[datetime.now(timezone.utc), None])

    def test_iso_string_rejected(self):
        with pytest.raises(ValidationError, match="datetime"):
            validate_request(timestamps=["2024-01-15T00:00:00Z"])


class TestProperties:
    def test_dict_or_none(self):
        validate_properties({"plan": "pro"})
        validate_properties(None)

    def test_non_dict(self):
        with pytest.raises(ValidationError):
            validate_properties(["plan", "pro"])
