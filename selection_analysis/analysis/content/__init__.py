"""Static content registries: insights, suggestions and educational content."""

from .education import (
    ALL_EDUCATIONAL_CONTENT,
    EducationalContentTemplate,
    get_applicable_content,
    get_beginner_content,
    get_content_by_category,
    get_low_score_content,
)
from .insights import (
    Insight,
    InsightTemplate,
    InsightType,
    get_overall_insight,
    select_factor_insight,
)
from .selection import select_templates
from .suggestions import (
    ALL_SUGGESTIONS,
    SuggestionTemplate,
    get_applicable_suggestions,
    get_low_score_suggestions,
    get_quick_fix_suggestions,
    get_suggestions_by_category,
)

__all__ = [
    "ALL_EDUCATIONAL_CONTENT",
    "ALL_SUGGESTIONS",
    "EducationalContentTemplate",
    "Insight",
    "InsightTemplate",
    "InsightType",
    "SuggestionTemplate",
    "get_applicable_content",
    "get_applicable_suggestions",
    "get_beginner_content",
    "get_content_by_category",
    "get_low_score_content",
    "get_low_score_suggestions",
    "get_overall_insight",
    "get_quick_fix_suggestions",
    "get_suggestions_by_category",
    "select_factor_insight",
    "select_templates",
]
