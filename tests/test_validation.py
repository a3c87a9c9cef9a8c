"""Tests for wren.validation — the required rule and validate()."""

import pytest

from wren.http.forms import FormData
from wren.validation import ValidationResult, required, validate


class TestRequired:
    @pytest.mark.parametrize("value", ["", " ", "\t\n"])
    def test_blank_values_fail(self, value: str) -> None:
        assert required(value) == "This field is required"

    @pytest.mark.parametrize("value", ["Ada", "on", " x "])
    def test_non_blank_values_pass(self, value: str) -> None:
        assert required(value) is None


class TestValidate:
    def test_all_present(self) -> None:
        result = validate({"name": "Ada", "terms": "yes"}, {"name": [required], "terms": [required]})

        assert result
        assert result.is_valid
        assert result.data == {"name": "Ada", "terms": "yes"}
        assert result.errors == {}

    def test_missing_field_is_validated_as_empty(self) -> None:
        result = validate({"name": "Ada"}, {"name": [required], "terms": [required]})

        assert not result
        assert result.errors == {"terms": ["This field is required"]}
        assert result.data == {"name": "Ada"}

    def test_required_stops_further_rules(self) -> None:
        seen: list[str] = []

        def spy(value: str) -> str | None:
            seen.append(value)
            return None

        result = validate({}, {"name": [required, spy]})
        assert not result
        assert seen == []

    def test_custom_rules_run_in_order(self) -> None:
        def no_digits(value: str) -> str | None:
            return "No digits" if any(c.isdigit() for c in value) else None

        def short(value: str) -> str | None:
            return "Too long" if len(value) > 3 else None

        result = validate({"name": "Ada1"}, {"name": [required, no_digits, short]})
        assert result.errors == {"name": ["No digits", "Too long"]}

    def test_values_are_not_stripped(self) -> None:
        result = validate({"dob": " 1815 "}, {"dob": [required]})
        assert result.data == {"dob": " 1815 "}

    def test_accepts_form_data(self) -> None:
        form = FormData({"name": ["Ada", "Augusta"]})

        result = validate(form, {"name": [required]})
        assert result.data == {"name": "Ada"}

    def test_result_is_immutable(self) -> None:
        result = ValidationResult(data={}, errors={})
        with pytest.raises(AttributeError):
            result.errors = {"x": ["y"]}  # type: ignore[misc]
