"""
Static catalog data: habit templates, category lexicon and chain templates.

This is configuration, not computed state. Callers may pass their own
lists to the suggestion engine instead.
"""

from typing import Any, Dict, List

from .exceptions import ValidationError
from .models.habit import HabitType
from .models.stack import StackTemplate
from .models.suggestion import HabitCategory, HabitTemplate


# =============================================================================
# Habit Templates
# =============================================================================

DEFAULT_HABIT_TEMPLATES: List[Dict[str, Any]] = [
    # Fitness
    {
        "name": "Morning Stretch",
        "icon": "figure.flexibility",
        "color": "#F97316",
        "category": "fitness",
        "keywords": ["exercise", "workout", "gym", "run", "yoga"],
        "complementary_categories": ["fitness", "health", "sleep"],
    },
    {
        "name": "Evening Walk",
        "icon": "figure.walk",
        "color": "#10B981",
        "category": "fitness",
        "keywords": ["exercise", "run", "steps"],
        "complementary_categories": ["fitness", "mindfulness", "health"],
    },
    # Health
    {
        "name": "Drink Water",
        "icon": "drop.fill",
        "color": "#06B6D4",
        "category": "health",
        "keywords": ["water", "hydration", "health"],
        "complementary_categories": ["fitness", "nutrition", "health"],
    },
    {
        "name": "Take Vitamins",
        "icon": "pill.fill",
        "color": "#F59E0B",
        "category": "health",
        "keywords": ["vitamin", "supplement", "health", "medicine"],
        "complementary_categories": ["health", "nutrition"],
    },
    # Mindfulness
    {
        "name": "Meditate",
        "icon": "brain.head.profile",
        "color": "#8B5CF6",
        "category": "mindfulness",
        "keywords": ["meditation", "mindful", "calm", "breathe"],
        "complementary_categories": ["sleep", "self_care", "productivity"],
    },
    {
        "name": "Gratitude Journal",
        "icon": "heart.text.square.fill",
        "color": "#EC4899",
        "category": "mindfulness",
        "keywords": ["journal", "gratitude", "write", "diary"],
        "complementary_categories": ["mindfulness", "self_care", "productivity"],
    },
    {
        "name": "Deep Breathing",
        "icon": "wind",
        "color": "#06B6D4",
        "category": "mindfulness",
        "keywords": ["breathe", "relax", "stress", "anxiety"],
        "complementary_categories": ["mindfulness", "health", "sleep"],
    },
    # Productivity
    {
        "name": "Plan Tomorrow",
        "icon": "calendar.badge.clock",
        "color": "#3B82F6",
        "category": "productivity",
        "keywords": ["plan", "organize", "schedule", "todo"],
        "complementary_categories": ["productivity", "learning"],
    },
    {
        "name": "Review Goals",
        "icon": "target",
        "color": "#8B5CF6",
        "category": "productivity",
        "keywords": ["goal", "review", "progress", "track"],
        "complementary_categories": ["productivity", "mindfulness"],
    },
    {
        "name": "No Phone First Hour",
        "icon": "iphone.slash",
        "color": "#EF4444",
        "category": "productivity",
        "keywords": ["phone", "digital", "detox", "morning"],
        "complementary_categories": ["productivity", "mindfulness", "self_care"],
    },
    # Learning
    {
        "name": "Read 20 Pages",
        "icon": "book.fill",
        "color": "#10B981",
        "category": "learning",
        "keywords": ["read", "book", "learn", "study"],
        "complementary_categories": ["learning", "productivity", "mindfulness"],
    },
    {
        "name": "Learn Language",
        "icon": "globe",
        "color": "#3B82F6",
        "category": "learning",
        "keywords": ["language", "learn", "duolingo", "study"],
        "complementary_categories": ["learning", "productivity"],
    },
    {
        "name": "Practice Skill",
        "icon": "star.fill",
        "color": "#F59E0B",
        "category": "learning",
        "keywords": ["practice", "skill", "hobby", "instrument"],
        "complementary_categories": ["learning", "self_care"],
    },
    # Self care
    {
        "name": "Skincare Routine",
        "icon": "sparkles",
        "color": "#F472B6",
        "category": "self_care",
        "keywords": ["skin", "face", "beauty", "routine"],
        "complementary_categories": ["self_care", "health"],
    },
    {
        "name": "Screen-Free Evening",
        "icon": "moon.stars.fill",
        "color": "#6366F1",
        "category": "self_care",
        "keywords": ["screen", "evening", "relax", "sleep"],
        "complementary_categories": ["self_care", "sleep", "mindfulness"],
    },
    {
        "name": "Connect with Friend",
        "icon": "person.2.fill",
        "color": "#EC4899",
        "category": "self_care",
        "keywords": ["friend", "social", "call", "connect"],
        "complementary_categories": ["self_care", "mindfulness"],
    },
    # Nutrition
    {
        "name": "Eat Vegetables",
        "icon": "leaf.fill",
        "color": "#22C55E",
        "category": "nutrition",
        "keywords": ["vegetable", "healthy", "eat", "food", "diet"],
        "complementary_categories": ["nutrition", "health", "fitness"],
    },
    {
        "name": "No Sugar",
        "icon": "xmark.circle.fill",
        "color": "#EF4444",
        "category": "nutrition",
        "keywords": ["sugar", "diet", "healthy", "food"],
        "complementary_categories": ["nutrition", "health"],
    },
    {
        "name": "Meal Prep",
        "icon": "fork.knife",
        "color": "#F97316",
        "category": "nutrition",
        "keywords": ["meal", "cook", "prep", "food"],
        "complementary_categories": ["nutrition", "health", "productivity"],
    },
    # Sleep
    {
        "name": "Sleep by 11 PM",
        "icon": "bed.double.fill",
        "color": "#6366F1",
        "category": "sleep",
        "keywords": ["sleep", "bed", "rest", "night"],
        "complementary_categories": ["sleep", "health", "self_care"],
    },
    {
        "name": "No Caffeine After 2 PM",
        "icon": "cup.and.saucer.fill",
        "color": "#78716C",
        "category": "sleep",
        "keywords": ["caffeine", "coffee", "sleep", "energy"],
        "complementary_categories": ["sleep", "health"],
    },
    {
        "name": "Wind Down Routine",
        "icon": "moon.fill",
        "color": "#8B5CF6",
        "category": "sleep",
        "keywords": ["wind", "evening", "relax", "sleep", "night"],
        "complementary_categories": ["sleep", "self_care", "mindfulness"],
    },
]

HABIT_TEMPLATES: List[HabitTemplate] = [
    HabitTemplate(**template) for template in DEFAULT_HABIT_TEMPLATES
]


# =============================================================================
# Category Lexicon
# =============================================================================

# Case-insensitive substrings; "work" also matches "workout".
CATEGORY_KEYWORDS: Dict[HabitCategory, List[str]] = {
    HabitCategory.HEALTH: ["water", "vitamin", "medicine", "health"],
    HabitCategory.FITNESS: ["exercise", "workout", "run", "gym", "walk", "stretch"],
    HabitCategory.MINDFULNESS: ["meditat", "mindful", "gratitude", "journal", "breathe"],
    HabitCategory.PRODUCTIVITY: ["plan", "goal", "work", "task", "focus"],
    HabitCategory.LEARNING: ["read", "learn", "study", "book", "practice"],
    HabitCategory.SELF_CARE: ["skin", "self", "relax", "care"],
    HabitCategory.NUTRITION: ["eat", "food", "meal", "diet", "vegetable", "calorie"],
    HabitCategory.SLEEP: ["sleep", "bed", "rest", "night"],
}

SYNCED_TYPE_CATEGORIES: Dict[HabitType, HabitCategory] = {
    HabitType.SYNCED_WATER: HabitCategory.HEALTH,
    HabitType.SYNCED_CALORIES: HabitCategory.NUTRITION,
    HabitType.SYNCED_SLEEP: HabitCategory.SLEEP,
}


# =============================================================================
# Chain Templates
# =============================================================================

DEFAULT_STACK_TEMPLATES: List[Dict[str, Any]] = [
    {
        "name": "Morning Routine",
        "description": "Start your day right with energy",
        "icon": "sunrise.fill",
        "color": "#F59E0B",
        "habits": [
            {"name": "Wake Up Early", "icon": "alarm.fill", "color": "#F59E0B"},
            {"name": "Drink Water", "icon": "drop.fill", "color": "#06B6D4"},
            {"name": "Morning Meditation", "icon": "brain.head.profile", "color": "#8B5CF6"},
            {"name": "Exercise", "icon": "figure.run", "color": "#10B981"},
            {"name": "Healthy Breakfast", "icon": "fork.knife", "color": "#F97316"},
        ],
    },
    {
        "name": "Evening Wind-Down",
        "description": "Prepare for restful sleep",
        "icon": "moon.stars.fill",
        "color": "#8B5CF6",
        "habits": [
            {"name": "No Screens", "icon": "iphone.slash", "color": "#EF4444"},
            {"name": "Read a Book", "icon": "book.fill", "color": "#3B82F6"},
            {"name": "Journal", "icon": "pencil.and.scribble", "color": "#EC4899"},
            {"name": "Evening Stretch", "icon": "figure.flexibility", "color": "#10B981"},
            {"name": "Sleep on Time", "icon": "bed.double.fill", "color": "#8B5CF6"},
        ],
    },
    {
        "name": "Productivity Block",
        "description": "Deep work session for focus",
        "icon": "bolt.fill",
        "color": "#3B82F6",
        "habits": [
            {"name": "Plan Tasks", "icon": "checklist", "color": "#F59E0B"},
            {"name": "Focus Session", "icon": "timer", "color": "#3B82F6"},
            {"name": "Take a Break", "icon": "cup.and.saucer.fill", "color": "#10B981"},
            {"name": "Review Progress", "icon": "chart.bar.fill", "color": "#8B5CF6"},
        ],
    },
    {
        "name": "Fitness Chain",
        "description": "Complete workout routine",
        "icon": "figure.run",
        "color": "#10B981",
        "habits": [
            {"name": "Warm Up", "icon": "figure.walk", "color": "#F59E0B"},
            {"name": "Cardio", "icon": "heart.fill", "color": "#EF4444"},
            {"name": "Strength Training", "icon": "dumbbell.fill", "color": "#3B82F6"},
            {"name": "Cool Down", "icon": "wind", "color": "#06B6D4"},
            {"name": "Stretch", "icon": "figure.flexibility", "color": "#10B981"},
        ],
    },
    {
        "name": "Mindfulness Practice",
        "description": "Mental wellness routine",
        "icon": "brain.head.profile",
        "color": "#EC4899",
        "habits": [
            {"name": "Breathwork", "icon": "wind", "color": "#06B6D4"},
            {"name": "Meditation", "icon": "brain.head.profile", "color": "#8B5CF6"},
            {"name": "Gratitude", "icon": "heart.fill", "color": "#EC4899"},
            {"name": "Journaling", "icon": "pencil.and.scribble", "color": "#F59E0B"},
        ],
    },
    {
        "name": "Self-Care Sunday",
        "description": "Weekly self-care ritual",
        "icon": "sparkles",
        "color": "#EC4899",
        "habits": [
            {"name": "Sleep In", "icon": "bed.double.fill", "color": "#8B5CF6"},
            {"name": "Skincare Routine", "icon": "face.smiling.fill", "color": "#EC4899"},
            {"name": "Healthy Meal Prep", "icon": "carrot.fill", "color": "#10B981"},
            {"name": "Relaxing Activity", "icon": "leaf.fill", "color": "#06B6D4"},
        ],
    },
    {
        "name": "Study Session",
        "description": "Effective learning routine",
        "icon": "book.closed.fill",
        "color": "#3B82F6",
        "habits": [
            {"name": "Review Notes", "icon": "doc.text.fill", "color": "#F59E0B"},
            {"name": "Active Learning", "icon": "brain.fill", "color": "#8B5CF6"},
            {"name": "Practice Problems", "icon": "pencil.and.ruler.fill", "color": "#3B82F6"},
            {"name": "Quick Quiz", "icon": "questionmark.circle.fill", "color": "#10B981"},
        ],
    },
]

STACK_TEMPLATES: List[StackTemplate] = [
    StackTemplate(**template) for template in DEFAULT_STACK_TEMPLATES
]


def get_stack_template(name: str) -> StackTemplate:
    """Look up a chain template by name (case-insensitive)."""
    wanted = name.strip().lower()
    for template in STACK_TEMPLATES:
        if template.name.lower() == wanted:
            return template
    raise ValidationError(f"Unknown stack template: {name}", field="template")
