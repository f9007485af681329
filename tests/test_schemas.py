"""Tests for the selection analysis input schemas."""

import pytest

from selection_analysis.schemas import UserProfile, WorkoutSelections


class TestNullProfileFields:
    """Null values from upstream payloads fall back to defaults."""

    @pytest.mark.parametrize(
        "payload",
        [
            {"goals": None},
            {"preferences": None},
            {"preferences": {"workoutStyle": None}},
            {"basicLimitations": None},
            {"basicLimitations": {"availableEquipment": None}},
            {"basicLimitations": {"availableLocations": None}},
            {"enhancedLimitations": {
                "equipmentConstraints": None,
                "locationConstraints": None,
                "mobilityLimitations": None,
            }},
        ],
        ids=lambda p: next(iter(p)),
    )
    def test_null_accepted(self, payload):
        profile = UserProfile.model_validate(payload)

        assert profile.goals == []
        assert profile.preferences.workout_style == []
        assert profile.basic_limitations.available_equipment == []
        assert profile.basic_limitations.available_locations == []

    def test_null_sections_become_unanswered(self):
        profile = UserProfile.model_validate({"basicLimitations": None})
        assert profile.basic_limitations.injuries is None

    def test_null_enhanced_lists(self):
        profile = UserProfile.model_validate({"enhancedLimitations": {"mobilityLimitations": None}})
        assert profile.enhanced_limitations.mobility_limitations == []

    def test_explicit_empty_injuries_kept(self):
        profile = UserProfile.model_validate({"basicLimitations": {"injuries": []}})
        assert profile.basic_limitations.injuries == []


class TestWorkoutSelections:
    """Shorthand and null handling for selections."""

    def test_bare_values(self):
        selections = WorkoutSelections(focus="yoga", energy=4, duration=20)

        assert selections.energy.rating == 4
        assert selections.duration.duration == 20

    def test_null_equipment(self):
        assert WorkoutSelections.model_validate({"equipment": None}).equipment == []
