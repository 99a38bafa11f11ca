"""Diet recommendations from a week of logged food entries."""

from __future__ import annotations

from healthdata.api.models import FoodEntry, HealthProfile, Recommendation

MIN_ENTRIES = 3
MIN_RECOMMENDATIONS = 3
MAX_RECOMMENDATIONS = 5
HIGH_CARBS = 150  # grams, average per entry
LOW_FIBER = 25  # grams, average per entry

DEFAULT_RECOMMENDATIONS = [
    Recommendation(
        name="Non-starchy vegetables",
        description="Fill half your plate with vegetables like broccoli, spinach, and bell peppers.",
        benefits=[
            "Low in carbohydrates",
            "High in fiber and nutrients",
            "Helps maintain healthy blood sugar",
        ],
        glycemic_index=15,
    ),
    Recommendation(
        name="Quinoa instead of white rice",
        description="Quinoa has more protein and fiber than white rice with a lower glycemic impact.",
        benefits=[
            "Higher in protein and fiber",
            "Contains all nine essential amino acids",
            "More gradual effect on blood sugar",
        ],
        glycemic_index=53,
    ),
    Recommendation(
        name="Greek yogurt",
        description="Greek yogurt is higher in protein and lower in carbs than regular yogurt.",
        benefits=[
            "High protein content",
            "Contains probiotics for gut health",
            "Versatile food for meals or snacks",
        ],
        glycemic_index=11,
    ),
]

NUTS_AND_SEEDS = Recommendation(
    name="Nuts and seeds",
    description=(
        "A small handful of nuts or seeds provides healthy fats and protein "
        "with minimal impact on blood sugar."
    ),
    benefits=[
        "Rich in healthy fats and protein",
        "Contains fiber and micronutrients",
        "Minimal impact on blood glucose",
    ],
    glycemic_index=15,
)

REDUCE_CARBS = Recommendation(
    name="Reduce simple carbohydrates",
    description="Your carbohydrate intake is higher than recommended for diabetes management.",
    benefits=[
        "Better blood glucose control",
        "Reduced insulin resistance",
        "Lower risk of blood sugar spikes",
    ],
)

MORE_FIBER = Recommendation(
    name="Increase fiber intake",
    description="Add more high-fiber foods like leafy greens, beans, and whole grains to your diet.",
    benefits=[
        "Improved blood sugar regulation",
        "Enhanced satiety and weight management",
        "Better digestive health",
    ],
)

DIABETES_FOODS = [
    Recommendation(
        name="Add cinnamon to your diet",
        description="Studies suggest cinnamon may help improve insulin sensitivity and lower blood sugar.",
        benefits=["May improve insulin sensitivity", "Contains antioxidants"],
        glycemic_index=5,
    ),
    Recommendation(
        name="Include berries in your meals",
        description="Berries are low on the glycemic index and rich in antioxidants and fiber.",
        benefits=["Blood sugar-friendly fruit option", "Rich in vitamins and antioxidants"],
        glycemic_index=40,
    ),
]

PROTEIN_SNACKS = Recommendation(
    name="Choose high-protein snacks",
    description="Protein-rich snacks can help maintain energy levels and support weight management.",
    benefits=[
        "Helps build and maintain muscle",
        "Increases satiety",
        "Supports weight management goals",
    ],
)

CULTURAL_FOODS: dict[str, list[Recommendation]] = {
    "us": [
        Recommendation(
            name="Blackberries and blueberries",
            description="Native North American berries that are low on the glycemic index.",
            benefits=["Rich in antioxidants", "Low glycemic impact", "High in fiber"],
            glycemic_index=25,
        ),
    ],
    "in": [
        Recommendation(
            name="Bitter gourd (Karela)",
            description="Traditional vegetable known for its blood sugar lowering properties.",
            benefits=[
                "May help lower blood glucose levels",
                "Rich in vitamins and minerals",
                "Low calorie content",
            ],
            glycemic_index=20,
        ),
    ],
    "mx": [
        Recommendation(
            name="Nopales (Cactus)",
            description="Traditional Mexican food that helps regulate blood sugar.",
            benefits=[
                "May help lower blood glucose",
                "Rich in fiber and antioxidants",
                "Low calorie content",
            ],
            glycemic_index=10,
        ),
    ],
    "ng": [
        Recommendation(
            name="African yam bean",
            description="High-protein legume popular in West Africa with a low glycemic index.",
            benefits=[
                "High in protein and fiber",
                "Contains essential amino acids",
                "Slow-release energy source",
            ],
            glycemic_index=30,
        ),
    ],
}


def default_recommendations(profile: HealthProfile | None = None) -> list[Recommendation]:
    recs = [r.model_copy() for r in DEFAULT_RECOMMENDATIONS]
    if profile is not None and profile.has_diabetes:
        recs.append(NUTS_AND_SEEDS.model_copy())
    return recs


def cultural_recommendations(country: str | None) -> list[Recommendation]:
    if not country:
        return []
    return [r.model_copy() for r in CULTURAL_FOODS.get(country.lower(), [])]


def average_intake(entries: list[FoodEntry]) -> dict[str, float]:
    """Mean calories and macronutrients per entry."""
    fields = ("calories", "carbs", "protein", "fat", "fiber")
    if not entries:
        return {f: 0.0 for f in fields}
    return {f: sum(getattr(e, f) for e in entries) / len(entries) for f in fields}


def analyze_nutrition(
    entries: list[FoodEntry], profile: HealthProfile | None = None
) -> list[Recommendation]:
    """Up to five recommendations, unique by name, for the given entries.

    With fewer than three entries there is not enough signal, so the
    defaults are returned unchanged.
    """
    profile = profile or HealthProfile()
    if len(entries) < MIN_ENTRIES:
        return default_recommendations(profile)

    avg = average_intake(entries)
    recs: list[Recommendation] = []

    if profile.has_diabetes and avg["carbs"] > HIGH_CARBS:
        recs.append(REDUCE_CARBS)
    if avg["fiber"] < LOW_FIBER:
        recs.append(MORE_FIBER)
    if profile.has_diabetes:
        recs.extend(DIABETES_FOODS)
    if profile.activity_level == "sedentary":
        recs.append(PROTEIN_SNACKS)
    recs.extend(cultural_recommendations(profile.country))

    if len(recs) < MIN_RECOMMENDATIONS:
        recs.extend(default_recommendations(profile))

    unique: dict[str, Recommendation] = {}
    for rec in recs:
        unique.setdefault(rec.name, rec)
    return [r.model_copy() for r in list(unique.values())[:MAX_RECOMMENDATIONS]]
