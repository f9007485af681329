"""Keyword lookup tables that classify free-text labels into categories.

Goals, focus labels, health conditions and equipment names arrive as free
text. Each table maps a category to the keywords that identify it; a label
belongs to every category with a keyword occurring in it (case-insensitive
substring match). Extending a classification means editing a table, not
the analyzers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class KeywordClassifier:
    """Classify text by substring keywords.

    Example:
        >>> goals = KeywordClassifier({"strength": ("strength", "muscle")})
        >>> goals.matches("Build Muscle", "strength")
        True
        >>> goals.categories("yoga")
        ()
    """

    def __init__(self, table: Mapping[str, Iterable[str]]) -> None:
        self._table: dict[str, tuple[str, ...]] = {
            category: tuple(keyword.lower() for keyword in keywords)
            for category, keywords in table.items()
        }

    @property
    def table(self) -> dict[str, tuple[str, ...]]:
        return dict(self._table)

    def keywords(self, category: str) -> tuple[str, ...]:
        return self._table.get(category, ())

    def matches(self, text: str | None, category: str) -> bool:
        """Check whether text contains any keyword of a category."""
        if not text:
            return False
        lowered = text.lower()
        return any(keyword in lowered for keyword in self._table.get(category, ()))

    def categories(self, text: str | None) -> tuple[str, ...]:
        """Return every category of text, in table order."""
        return tuple(category for category in self._table if self.matches(text, category))

    def first(self, text: str | None, default: str | None = None) -> str | None:
        """Return the first matching category in table order."""
        for category in self._table:
            if self.matches(text, category):
                return category
        return default

    def any_matches(self, texts: Iterable[str], category: str) -> bool:
        return any(self.matches(text, category) for text in texts)

    def count(self, texts: Iterable[str], category: str) -> int:
        return sum(1 for text in texts if self.matches(text, category))


# =============================================================================
# Goals
# =============================================================================

class GoalCategory:
    STRENGTH = "strength"
    CARDIO = "cardio"
    WEIGHT_LOSS = "weight_loss"
    FLEXIBILITY = "flexibility"


GOAL_KEYWORDS: dict[str, tuple[str, ...]] = {
    GoalCategory.STRENGTH: ("strength", "muscle", "power", "build"),
    GoalCategory.CARDIO: ("cardio", "endurance", "stamina", "heart"),
    GoalCategory.WEIGHT_LOSS: ("weight", "fat", "slim", "lean"),
    GoalCategory.FLEXIBILITY: ("flexibility", "mobility", "stretch", "yoga"),
}

# Focus label that serves each goal category best
GOAL_RECOMMENDED_FOCUS: dict[str, str] = {
    GoalCategory.STRENGTH: "Strength Training",
    GoalCategory.CARDIO: "Cardio",
    GoalCategory.WEIGHT_LOSS: "Quick Sweat",
    GoalCategory.FLEXIBILITY: "Flexibility",
}


# =============================================================================
# Workout Focus
# =============================================================================

class FocusCategory:
    STRENGTH = "strength"
    CARDIO = "cardio"
    WEIGHT_LOSS = "weight_loss"
    FLEXIBILITY = "flexibility"
    HIGH_INTENSITY = "high_intensity"
    HIGH_IMPACT = "high_impact"
    ADVANCED = "advanced"
    BEGINNER = "beginner"
    COMPLEX = "complex"
    LARGE_SPACE = "large_space"
    SPACE_EFFICIENT = "space_efficient"

    # Categories a goal category can be satisfied by
    GOAL_TYPES: tuple[str, ...] = (STRENGTH, CARDIO, WEIGHT_LOSS, FLEXIBILITY)


FOCUS_KEYWORDS: dict[str, tuple[str, ...]] = {
    FocusCategory.STRENGTH: ("strength", "muscle", "power"),
    FocusCategory.CARDIO: ("cardio", "endurance", "sweat", "burn"),
    FocusCategory.WEIGHT_LOSS: ("weight", "burn", "sweat", "fat"),
    FocusCategory.FLEXIBILITY: ("flexibility", "mobility", "stretch", "yoga"),
    FocusCategory.HIGH_INTENSITY: ("high intensity", "hiit", "quick sweat", "burn"),
    FocusCategory.HIGH_IMPACT: ("high intensity", "hiit", "quick sweat", "jump", "plyometric"),
    FocusCategory.ADVANCED: ("advanced", "intense", "power"),
    FocusCategory.BEGINNER: ("beginner", "easy", "gentle"),
    FocusCategory.COMPLEX: ("advanced", "complex", "skill"),
    FocusCategory.LARGE_SPACE: ("cardio", "endurance", "circuit"),
    FocusCategory.SPACE_EFFICIENT: ("strength", "bodyweight", "flexibility"),
}


# =============================================================================
# Health Conditions
# =============================================================================

class ConditionCategory:
    JOINT = "joint"
    BACK = "back"
    CARDIOVASCULAR = "cardiovascular"
    MOBILITY = "mobility"
    RESPIRATORY = "respiratory"
    METABOLIC = "metabolic"
    NEUROLOGICAL = "neurological"


CONDITION_KEYWORDS: dict[str, tuple[str, ...]] = {
    ConditionCategory.JOINT: ("knee", "shoulder", "hip", "ankle", "joint", "arthritis"),
    ConditionCategory.BACK: ("back", "spine", "disc", "hernia"),
    ConditionCategory.CARDIOVASCULAR: ("heart", "cardio", "blood pressure", "circulation"),
    ConditionCategory.MOBILITY: ("mobility", "flexibility", "range of motion", "stiffness"),
    ConditionCategory.RESPIRATORY: ("asthma", "breathing", "lung", "respiratory"),
    ConditionCategory.METABOLIC: ("diabetes", "metabolic", "insulin", "blood sugar"),
    ConditionCategory.NEUROLOGICAL: ("balance", "coordination", "neurological", "cognitive"),
}


# =============================================================================
# Equipment
# =============================================================================

class EquipmentCategory:
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    LARGE = "large"
    HIGH_QUALITY = "high_quality"
    BASIC = "basic"


EQUIPMENT_KEYWORDS: dict[str, tuple[str, ...]] = {
    EquipmentCategory.STRENGTH: ("dumbbell", "barbell", "resistance band", "kettlebell", "weight"),
    EquipmentCategory.CARDIO: ("treadmill", "bike", "elliptical", "rower", "cardio"),
    EquipmentCategory.FLEXIBILITY: ("yoga mat", "foam roller", "stretching strap", "block"),
    EquipmentCategory.LARGE: ("treadmill", "bike", "elliptical", "rower", "rack", "bench"),
    EquipmentCategory.HIGH_QUALITY: ("barbell", "rack", "bench", "treadmill", "elliptical"),
    EquipmentCategory.BASIC: ("dumbbell", "resistance band", "yoga mat"),
}

# Equipment each workout type needs, by focus category
REQUIRED_EQUIPMENT: dict[str, tuple[str, ...]] = {
    FocusCategory.STRENGTH: ("dumbbells", "barbell", "resistance bands", "kettlebell"),
    FocusCategory.CARDIO: ("treadmill", "bike", "elliptical", "rower"),
    FocusCategory.FLEXIBILITY: ("yoga mat", "foam roller", "stretching strap"),
}

# Locations that offer room for large equipment and circuits
LARGE_SPACE_LOCATIONS: tuple[str, ...] = ("gym", "outdoor", "park", "garage", "studio")


goal_classifier = KeywordClassifier(GOAL_KEYWORDS)
focus_classifier = KeywordClassifier(FOCUS_KEYWORDS)
condition_classifier = KeywordClassifier(CONDITION_KEYWORDS)
equipment_classifier = KeywordClassifier(EQUIPMENT_KEYWORDS)
location_classifier = KeywordClassifier({"large_space": LARGE_SPACE_LOCATIONS})


def equipment_matches(available: str, required: str) -> bool:
    """Match equipment names loosely: "Dumbbells" satisfies "dumbbell" and vice versa."""
    a = available.strip().lower().rstrip("s")
    r = required.strip().lower().rstrip("s")
    if not a or not r:
        return False
    return r in a or a in r
