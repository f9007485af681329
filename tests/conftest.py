"""Shared fixtures for selection analysis tests."""

import pytest

from selection_analysis.analysis.inputs import extract_facts
from selection_analysis.analysis.service import SelectionAnalysisService
from selection_analysis.config import features
from selection_analysis.schemas import AnalysisContext, UserProfile, WorkoutSelections


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def profile():
    """Intermediate user with strength goals and a home gym."""
    return UserProfile(
        user_id="user-1",
        fitness_level="intermediate",
        goals=["Build strength"],
        basic_limitations={
            "injuries": [],
            "available_equipment": ["Dumbbells", "Resistance Bands", "Yoga Mat"],
            "available_locations": ["Home", "Garage"],
        },
        age=32,
    )


@pytest.fixture
def selections():
    return WorkoutSelections(focus="strength", energy=6, duration=30, equipment=["Dumbbells"])


@pytest.fixture
def context():
    return AnalysisContext(user_experience="intermediate", time_of_day="afternoon", previous_workouts=1)


@pytest.fixture
def beginner_profile():
    return UserProfile(
        user_id="user-2",
        fitness_level="beginner",
        goals=["Build muscle"],
        basic_limitations={"injuries": [], "available_equipment": ["Dumbbells"]},
    )


@pytest.fixture
def make_facts():
    """Build SelectionFacts from keyword overrides of the three inputs."""

    def _make(profile=None, selections=None, context=None):
        return extract_facts(
            UserProfile.model_validate(profile or {}),
            WorkoutSelections.model_validate(selections or {}),
            AnalysisContext.model_validate(context or {}),
        )

    return _make


@pytest.fixture
def service(clock):
    with SelectionAnalysisService.new_test_instance(clock=clock) as svc:
        yield svc


@pytest.fixture(autouse=True)
def reset_feature_flags(monkeypatch):
    """Isolate in-memory flag overrides and rollouts between tests."""
    monkeypatch.setattr(features, "DEFAULT_FEATURE_FLAGS", dict(features.DEFAULT_FEATURE_FLAGS))
    monkeypatch.setattr(features, "_rollout_configs", {})
    for name in features.DEFAULT_FEATURE_FLAGS:
        monkeypatch.delenv(f"APP_FEATURE_{name.upper()}", raising=False)
