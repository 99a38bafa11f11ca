"""Pydantic models for lookup results and health records."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field


class Weather(BaseModel):
    temperature: float  # Celsius
    condition: str
    description: str


class Activity(BaseModel):
    name: str
    intensity: str
    duration: int  # minutes
    calories: int
    suitable: bool = True
    indoor: bool = False


class ActivitySuggestions(BaseModel):
    weather: Weather
    activities: list[Activity] = Field(default_factory=list)


class FoodItem(BaseModel):
    name: str
    portion: str = "100g"
    calories: float = 0
    carbs: float = 0
    protein: float = 0
    fat: float = 0
    fiber: float = 0
    glycemic_index: int | None = None


class Nutrients(BaseModel):
    calories: float = 0
    carbs: float = 0
    protein: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0


class FoodComposition(BaseModel):
    name: str
    nutrients: Nutrients = Field(default_factory=Nutrients)
    serving_size: str = "100g"
    ingredients: str = "Not available"
    glycemic_index: int | None = None


class EducationContent(BaseModel):
    title: str
    summary: str
    source: str = "MedlinePlus"
    url: str = "https://medlineplus.gov"
    # topic-specific bullet lists, e.g. "symptoms", "management", "guidelines"
    sections: dict[str, list[str]] = Field(default_factory=dict)


class HealthComparison(BaseModel):
    global_average: float = 0
    percent_difference: float = 0


class GlobalHealthStat(BaseModel):
    value: float = 0
    year: int | None = None
    comparison: HealthComparison | None = None


class Recommendation(BaseModel):
    name: str
    description: str
    benefits: list[str] = Field(default_factory=list)
    glycemic_index: int = 0  # 0 when not applicable


class FoodEntry(BaseModel):
    """One logged food item."""

    name: str
    date: dt.date
    meal_type: str = "snack"
    portion: str = ""
    calories: float = 0
    carbs: float = 0
    protein: float = 0
    fat: float = 0
    fiber: float = 0
    glycemic_index: int | None = None


class HealthProfile(BaseModel):
    medical_conditions: list[str] = Field(default_factory=list)
    activity_level: str | None = None
    country: str | None = None

    @property
    def has_diabetes(self) -> bool:
        return any(
            c in self.medical_conditions for c in ("Type 2 Diabetes", "Pre-diabetes")
        )


class ProgressEntry(BaseModel):
    """A single care-plan goal measurement."""

    goal_id: str
    date: dt.date
    value: float
    notes: str | None = None
