"""Weather-based exercise suggestions."""

from __future__ import annotations

from healthdata.api.models import Activity, ActivitySuggestions, Weather

BAD_WEATHER = ("rain", "snow", "storm")


def is_bad_weather(condition: str) -> bool:
    condition = condition.lower()
    return any(word in condition for word in BAD_WEATHER)


def suggest_activities(weather: Weather) -> ActivitySuggestions:
    """Indoor options when it rains, snows or storms; outdoor ones otherwise.

    Outdoor activities are flagged unsuitable outside a comfortable
    temperature band (walking and cycling 10-30 °C, swimming above 20 °C).
    """
    temp = weather.temperature
    if is_bad_weather(weather.condition):
        activities = [
            Activity(name="Indoor Walking", intensity="Light", duration=30, calories=150, indoor=True),
            Activity(name="Home Workout", intensity="Moderate", duration=45, calories=200, indoor=True),
            Activity(name="Yoga", intensity="Light to Moderate", duration=30, calories=120, indoor=True),
        ]
    else:
        mild = 10 < temp < 30
        activities = [
            Activity(name="Walking", intensity="Light", duration=30, calories=150, suitable=mild),
            Activity(name="Cycling", intensity="Moderate", duration=45, calories=300, suitable=mild),
            Activity(name="Swimming", intensity="High", duration=60, calories=400, suitable=temp > 20),
        ]
    return ActivitySuggestions(weather=weather, activities=activities)
