import pytest

from task_tracker.domain.task_models import TaskPriority
from task_tracker.domain.validation import parse_task_id, validate_create, validate_update


class TestValidateCreate:
    def test_accepts_and_sanitizes(self) -> None:
        result = validate_create({"title": "  Buy milk ", "description": " 2% ", "priority": "HIGH", "id": 99})
        assert result.ok
        data = result.value
        assert data.title == "Buy milk"
        assert data.description == "2%"
        assert data.priority is TaskPriority.high
        assert data.completed is False
        assert not hasattr(data, "id")

    def test_defaults(self) -> None:
        data = validate_create({"title": "a", "description": "b"}).value
        assert data.priority is TaskPriority.medium
        assert data.completed is False

    @pytest.mark.parametrize("raw,expected", [(True, True), (False, False), ("true", True), ("FALSE", False)])
    def test_completed_coercion(self, raw, expected) -> None:
        data = validate_create({"title": "a", "description": "b", "completed": raw}).value
        assert data.completed is expected

    def test_empty_body(self) -> None:
        result = validate_create({})
        assert not result.ok
        assert result.error == "Request body is required"

    def test_empty_title_reports_title_and_description(self) -> None:
        result = validate_create({"title": ""})
        assert result.error == "Validation failed"
        assert result.details == ["Title is required", "Description is required"]

    def test_collects_every_field_error_in_order(self) -> None:
        result = validate_create({"title": 5, "description": "   ", "completed": "yes", "priority": "urgent"})
        assert result.details == [
            "Title must be a string",
            "Description cannot be empty or contain only whitespace",
            "Completed must be a boolean value (true or false)",
            "Priority must be one of: low, medium, high",
        ]

    def test_id_only_body_counts_as_empty(self) -> None:
        assert validate_create({"id": 5}).error == "Request body is required"

    def test_length_limits(self) -> None:
        assert validate_create({"title": "a" * 200, "description": "b" * 1000}).ok
        result = validate_create({"title": "a" * 201, "description": "b" * 1001})
        assert result.details == [
            "Title cannot exceed 200 characters",
            "Description cannot exceed 1000 characters",
        ]

    def test_limit_applies_after_trimming(self) -> None:
        assert validate_create({"title": "  " + "a" * 200 + "  ", "description": "d"}).ok

    @pytest.mark.parametrize("value", [1, 0, None])
    def test_completed_rejects_non_booleans(self, value) -> None:
        result = validate_create({"title": "a", "description": "b", "completed": value})
        assert result.details == ["Completed must be a boolean value (true or false)"]

    def test_priority_must_be_string(self) -> None:
        result = validate_create({"title": "a", "description": "b", "priority": 3})
        assert result.details == ["Priority must be a string"]


class TestValidateUpdate:
    def test_empty_body_rejected_before_filtering(self) -> None:
        result = validate_update({})
        assert result.error == "Request body is required"

    def test_id_only_body_counts_as_empty(self) -> None:
        assert validate_update({"id": 5}).error == "Request body is required"

    def test_only_unknown_fields(self) -> None:
        result = validate_update({"foo": 1, "id": 3})
        assert result.error == "No valid fields provided"
        assert result.details == ["Allowed fields are: title, description, completed, priority"]

    def test_unknown_fields_dropped(self) -> None:
        result = validate_update({"title": " New ", "foo": 1, "id": 3, "createdAt": "x"})
        assert result.ok
        assert result.value.changes() == {"title": "New"}

    def test_completed_string_stored_as_bool(self) -> None:
        assert validate_update({"completed": "true"}).value.changes() == {"completed": True}

    def test_priority_normalized(self) -> None:
        assert validate_update({"priority": "Low"}).value.changes() == {"priority": TaskPriority.low}

    def test_explicit_empty_title(self) -> None:
        result = validate_update({"title": ""})
        assert result.details == ["Title cannot be empty or contain only whitespace"]

    def test_null_description_is_type_error(self) -> None:
        result = validate_update({"description": None})
        assert result.details == ["Description must be a string"]

    def test_partial_invalid(self) -> None:
        result = validate_update({"title": "Valid title", "priority": "invalid"})
        assert result.error == "Validation failed"
        assert result.details == ["Priority must be one of: low, medium, high"]


@pytest.mark.parametrize("raw", ["abc", "0", "-1", "1.5", "1abc", " 1", "", "9" * 5000])
def test_parse_task_id_rejects(raw) -> None:
    result = parse_task_id(raw)
    assert not result.ok


def test_parse_task_id_accepts_positive_integer() -> None:
    result = parse_task_id("42")
    assert result.ok
    assert result.value == 42
