"""Static payloads served when an upstream lookup fails or returns nothing."""

from __future__ import annotations

from healthdata.api.models import (
    Activity,
    ActivitySuggestions,
    EducationContent,
    FoodComposition,
    FoodItem,
    GlobalHealthStat,
    HealthComparison,
    Nutrients,
    Weather,
)

# ── Weather / activity ──


def fallback_activity_suggestions() -> ActivitySuggestions:
    return ActivitySuggestions(
        weather=Weather(temperature=20, condition="clear", description="Clear sky"),
        activities=[
            Activity(name="Indoor Walking", intensity="Light", duration=30, calories=150, indoor=True),
            Activity(name="Home Workout", intensity="Moderate", duration=45, calories=200, indoor=True),
        ],
    )


# ── Food ──

FALLBACK_FOODS: dict[str, FoodItem] = {
    "apple": FoodItem(
        name="Apple", portion="1 medium (182g)",
        calories=95, carbs=25, protein=0.5, fat=0.3, fiber=4.4, glycemic_index=36,
    ),
    "banana": FoodItem(
        name="Banana", portion="1 medium (118g)",
        calories=105, carbs=27, protein=1.3, fat=0.4, fiber=3.1, glycemic_index=51,
    ),
    "chicken": FoodItem(
        name="Chicken Breast", portion="100g, cooked",
        calories=165, carbs=0, protein=31, fat=3.6, fiber=0,
    ),
    "broccoli": FoodItem(
        name="Broccoli", portion="1 cup (91g)",
        calories=31, carbs=6, protein=2.6, fat=0.3, fiber=2.4, glycemic_index=15,
    ),
    "rice": FoodItem(
        name="White Rice", portion="1 cup cooked (158g)",
        calories=205, carbs=45, protein=4.3, fat=0.4, fiber=0.6, glycemic_index=73,
    ),
    "bread": FoodItem(
        name="Whole Wheat Bread", portion="1 slice (28g)",
        calories=69, carbs=12, protein=3.6, fat=1.1, fiber=1.9, glycemic_index=74,
    ),
    "egg": FoodItem(
        name="Egg", portion="1 large (50g)",
        calories=72, carbs=0.4, protein=6.3, fat=5, fiber=0,
    ),
    "milk": FoodItem(
        name="Milk", portion="1 cup (244g)",
        calories=122, carbs=12, protein=8.1, fat=4.8, fiber=0, glycemic_index=27,
    ),
}

DEFAULT_FOOD_KEYS = ("apple", "banana", "chicken")


def fallback_foods(query: str) -> list[FoodItem]:
    """Static foods whose key overlaps the query, else a default trio."""
    q = query.lower()
    matched = [food for key, food in FALLBACK_FOODS.items() if key in q or q in key]
    if matched and q:
        return [f.model_copy() for f in matched]
    return [FALLBACK_FOODS[k].model_copy() for k in DEFAULT_FOOD_KEYS]


_FALLBACK_COMPOSITIONS: dict[str, FoodComposition] = {
    "apple": FoodComposition(
        name="Apple",
        nutrients=Nutrients(calories=95, carbs=25, protein=0.5, fat=0.3, fiber=4.4, sugar=19, sodium=2),
        serving_size="1 medium apple (182g)",
        ingredients="Apple",
        glycemic_index=36,
    ),
    "banana": FoodComposition(
        name="Banana",
        nutrients=Nutrients(calories=105, carbs=27, protein=1.3, fat=0.4, fiber=3.1, sugar=14, sodium=1),
        serving_size="1 medium banana (118g)",
        ingredients="Banana",
        glycemic_index=51,
    ),
    "chicken": FoodComposition(
        name="Chicken Breast",
        nutrients=Nutrients(calories=165, carbs=0, protein=31, fat=3.6, fiber=0, sugar=0, sodium=74),
        serving_size="100g, cooked",
        ingredients="Chicken breast",
    ),
}


def fallback_composition(food_name: str) -> FoodComposition:
    lowered = food_name.lower()
    for key, composition in _FALLBACK_COMPOSITIONS.items():
        if key in lowered:
            return composition.model_copy(deep=True)
    return FoodComposition(
        name=food_name,
        nutrients=Nutrients(calories=100, carbs=15, protein=5, fat=2, fiber=2, sugar=5, sodium=50),
    )


# ── Health education ──

EDUCATION_CONTENT: dict[str, EducationContent] = {
    "diabetes": EducationContent(
        title="Understanding Diabetes",
        summary="Learn about diabetes management, prevention, and lifestyle modifications.",
        url="https://medlineplus.gov/diabetes.html",
        sections={
            "symptoms": [
                "Increased thirst and urination",
                "Fatigue",
                "Blurred vision",
                "Slow healing of cuts and bruises",
            ],
            "management": [
                "Regular blood glucose monitoring",
                "Balanced diet with controlled carbohydrates",
                "Regular physical activity",
                "Medication adherence if prescribed",
            ],
        },
    ),
    "nutrition": EducationContent(
        title="Healthy Eating Guidelines",
        summary="Discover the principles of balanced nutrition and healthy eating habits.",
        url="https://medlineplus.gov/nutrition.html",
        sections={
            "guidelines": [
                "Eat plenty of fruits and vegetables",
                "Choose whole grains over refined grains",
                "Include lean proteins in your diet",
                "Limit added sugars and processed foods",
            ],
            "benefits": [
                "Better blood sugar control",
                "Weight management",
                "Improved energy levels",
                "Reduced risk of chronic diseases",
            ],
        },
    ),
}

GENERAL_EDUCATION = EducationContent(
    title="Health Information",
    summary="General health information and guidelines.",
    sections={
        "recommendations": [
            "Maintain a balanced diet",
            "Stay physically active",
            "Get adequate sleep",
            "Manage stress levels",
        ],
    },
)


def fallback_education(topic: str) -> EducationContent:
    content = EDUCATION_CONTENT.get(topic.lower(), GENERAL_EDUCATION)
    return content.model_copy(deep=True)


# ── Global health statistics ──

GLOBAL_HEALTH_STATS: dict[str, dict[str, GlobalHealthStat]] = {
    "diabetes_prevalence": {
        "us": GlobalHealthStat(
            value=10.5,
            comparison=HealthComparison(global_average=8.5, percent_difference=23.5),
        ),
        "global": GlobalHealthStat(value=8.5),
    },
    "obesity_prevalence": {
        "us": GlobalHealthStat(
            value=36.2,
            comparison=HealthComparison(global_average=13.1, percent_difference=176.3),
        ),
        "global": GlobalHealthStat(value=13.1),
    },
}

EMPTY_HEALTH_STAT = GlobalHealthStat(value=0, comparison=HealthComparison())


def fallback_global_health(indicator: str, country: str) -> GlobalHealthStat:
    """Static figure for the country, else the global one, else a zero record."""
    by_country = GLOBAL_HEALTH_STATS.get(indicator)
    if by_country is None:
        return EMPTY_HEALTH_STAT.model_copy(deep=True)
    stat = by_country.get(country.lower()) or by_country["global"]
    return stat.model_copy(deep=True)
