from pydantic import field_validator

from core.validation import CamelModel, Invalid, Valid, check_length, validate


class Sample(CamelModel):
    display_name: str
    is_private: bool = False

    @field_validator("display_name")
    @classmethod
    def _name(cls, value: str) -> str:
        return check_length(value, 3, 5, "Name")


def test_valid_result_wraps_model():
    result = validate(Sample, {"displayName": "Alice", "isPrivate": True})
    assert isinstance(result, Valid)
    assert result.value.display_name == "Alice"
    assert result.value.is_private is True


def test_snake_case_is_accepted_too():
    result = validate(Sample, {"display_name": "Bob"})
    assert isinstance(result, Valid)


def test_invalid_result_carries_first_message():
    result = validate(Sample, {"displayName": "Al"})
    assert result == Invalid("Name must be at least 3 characters")


def test_missing_field_message():
    result = validate(Sample, {})
    assert result == Invalid("displayName is required")


def test_non_object_payload():
    result = validate(Sample, ["not", "an", "object"])
    assert isinstance(result, Invalid)
