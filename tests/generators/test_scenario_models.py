"""Tests for scenario generation models."""

import pytest

from featuregen.errors import ErrorKind, InvalidScenarioTypeError
from featuregen.generators.models import (
    DataTable,
    ExamplesTable,
    ScenarioType,
    Step,
    StepKeyword,
    TestScenario,
)

VOCABULARY = [
    "required_fields",
    "all_fields",
    "validation_error",
    "auth_error",
    "not_found",
    "edge_case",
]


class TestScenarioType:
    def test_exactly_six_members(self):
        assert [t.value for t in ScenarioType] == VOCABULARY

    @pytest.mark.parametrize("value", VOCABULARY)
    def test_round_trip(self, value):
        scenario_type = ScenarioType.parse(value)

        assert str(scenario_type) == value
        assert ScenarioType.parse(str(scenario_type)) is scenario_type

    @pytest.mark.parametrize(
        "value",
        ["", "Auth_Error", "AUTH_ERROR", " auth_error", "auth_error ", "auth-error", "smoke", None, 3],
    )
    def test_rejects_outside_vocabulary(self, value):
        with pytest.raises(InvalidScenarioTypeError) as exc_info:
            ScenarioType.parse(value)

        error = exc_info.value
        assert repr(value) in str(error)
        assert error.kind == ErrorKind.INVALID_SCENARIO_TYPE
        assert error.details["allowed"] == VOCABULARY

    def test_parse_member(self):
        assert ScenarioType.parse(ScenarioType.NOT_FOUND) is ScenarioType.NOT_FOUND

    def test_display_name(self):
        assert ScenarioType.VALIDATION_ERROR.display_name == "Validation Error"


class TestDataTable:
    def test_row_width_checked(self):
        with pytest.raises(ValueError, match="expected 2"):
            DataTable(headers=("a", "b"), rows=(("1",),))

    def test_to_dict(self):
        table = ExamplesTable(headers=("credentials",), rows=(("missing",), ("invalid",)))

        assert table.to_dict() == {"headers": ["credentials"], "rows": [["missing"], ["invalid"]]}


class TestTestScenario:
    def _scenario(self, **kwargs):
        defaults = dict(
            name="Example",
            scenario_type=ScenarioType.REQUIRED_FIELDS,
            steps=(Step(StepKeyword.GIVEN, "the API is available"),),
        )
        defaults.update(kwargs)
        return TestScenario(**defaults)

    def test_plain_scenario(self):
        scenario = self._scenario()

        assert scenario.keyword == "Scenario"
        assert not scenario.is_outline
        assert scenario.example_count == 0

    def test_outline(self):
        scenario = self._scenario(examples=ExamplesTable(headers=("x",), rows=(("1",), ("2",))))

        assert scenario.keyword == "Scenario Outline"
        assert scenario.example_count == 2

    def test_is_immutable(self):
        scenario = self._scenario()

        with pytest.raises(AttributeError):
            scenario.name = "other"

    def test_with_tag(self):
        scenario = self._scenario(tags=("@positive",))

        tagged = scenario.with_tag("@smoke")

        assert tagged.tags == ("@positive", "@smoke")
        assert scenario.tags == ("@positive",)
        assert tagged.with_tag("@smoke") is tagged

    def test_to_dict(self):
        data = self._scenario(tags=("@positive",)).to_dict()

        assert data["type"] == "required_fields"
        assert data["steps"] == [{"keyword": "Given", "text": "the API is available"}]
        assert data["step_count"] == 1
