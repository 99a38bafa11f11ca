"""Tests for nutrition analysis."""

from datetime import date

from healthdata.api.models import FoodEntry, HealthProfile
from healthdata.services.nutrition import (
    analyze_nutrition,
    average_intake,
    default_recommendations,
)


def _healthy(day: int) -> FoodEntry:
    return FoodEntry(name="Salad", date=date(2026, 3, day), carbs=40, fiber=30, calories=400)


def test_few_entries_returns_defaults(week_of_entries):
    recs = analyze_nutrition(week_of_entries[:2])
    assert [r.name for r in recs] == [
        "Non-starchy vegetables",
        "Quinoa instead of white rice",
        "Greek yogurt",
    ]


def test_defaults_add_nuts_for_diabetes(diabetic_profile):
    recs = default_recommendations(diabetic_profile)
    assert recs[-1].name == "Nuts and seeds"
    assert len(recs) == 4


def test_diabetic_high_carb_profile(week_of_entries, diabetic_profile):
    recs = analyze_nutrition(week_of_entries, diabetic_profile)
    assert [r.name for r in recs] == [
        "Reduce simple carbohydrates",
        "Increase fiber intake",
        "Add cinnamon to your diet",
        "Include berries in your meals",
        "Choose high-protein snacks",
    ]


def test_pre_diabetes_counts_as_diabetes(week_of_entries):
    profile = HealthProfile(medical_conditions=["Pre-diabetes"])
    names = [r.name for r in analyze_nutrition(week_of_entries, profile)]
    assert "Reduce simple carbohydrates" in names


def test_high_carbs_without_diabetes_not_flagged(week_of_entries):
    names = [r.name for r in analyze_nutrition(week_of_entries, HealthProfile())]
    assert "Reduce simple carbohydrates" not in names
    assert names[0] == "Increase fiber intake"


def test_healthy_diet_pads_with_defaults():
    entries = [_healthy(d) for d in (1, 2, 3)]
    recs = analyze_nutrition(entries, HealthProfile(country="mx"))
    assert [r.name for r in recs] == [
        "Nopales (Cactus)",
        "Non-starchy vegetables",
        "Quinoa instead of white rice",
        "Greek yogurt",
    ]


def test_results_unique_and_capped(week_of_entries, diabetic_profile):
    recs = analyze_nutrition(week_of_entries, diabetic_profile)
    names = [r.name for r in recs]
    assert len(names) == len(set(names)) <= 5


def test_average_intake(week_of_entries):
    avg = average_intake(week_of_entries)
    assert avg["carbs"] == 170
    assert avg["fiber"] == 3
    assert avg["calories"] == 600


def test_average_intake_empty():
    assert average_intake([])["calories"] == 0
