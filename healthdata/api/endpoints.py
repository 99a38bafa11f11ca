"""Typed fetch functions for the upstream health data APIs."""

from __future__ import annotations

import logging
from typing import Any

from healthdata.api.client import HealthAPIClient
from healthdata.api.models import (
    EducationContent,
    FoodComposition,
    FoodItem,
    GlobalHealthStat,
    Nutrients,
    Weather,
)

log = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
OPENFOODFACTS_SEARCH_URL = "https://world.openfoodfacts.org/cgi/search.pl"
MEDLINEPLUS_CONNECT_URL = "https://connect.medlineplus.gov/service"
WHO_GHO_URL = "https://ghoapi.azureedge.net/api"

# Friendly indicator names -> WHO Global Health Observatory codes.
WHO_INDICATORS = {
    "diabetes_prevalence": "NCD_DIABETES_PREVALENCE_AGESTD",
    "obesity_prevalence": "NCD_BMI_30A",
}

# Two-letter codes used by callers -> WHO ISO3 spatial codes.
WHO_COUNTRIES = {
    "us": "USA",
    "in": "IND",
    "mx": "MEX",
    "ng": "NGA",
    "gb": "GBR",
    "ca": "CAN",
    "global": "GLOBAL",
}


def _num(value: Any) -> float:
    """Lenient float parse: Open Food Facts mixes numbers and numeric strings."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _text(value: Any) -> str:
    # MedlinePlus wraps text as {"_value": "..."}
    if isinstance(value, dict):
        return str(value.get("_value", ""))
    return str(value or "")


async def get_current_weather(
    client: HealthAPIClient,
    latitude: float,
    longitude: float,
    *,
    api_key: str,
) -> Weather:
    """Fetch current conditions in metric units."""
    data = await client.get(
        OPENWEATHER_URL,
        params={"lat": latitude, "lon": longitude, "appid": api_key, "units": "metric"},
    )
    conditions = data["weather"][0]
    return Weather(
        temperature=data["main"]["temp"],
        condition=conditions["main"].lower(),
        description=conditions["description"],
    )


async def _search_products(
    client: HealthAPIClient, query: str, page_size: int
) -> list[dict]:
    data = await client.get(
        OPENFOODFACTS_SEARCH_URL,
        params={
            "search_terms": query,
            "search_simple": 1,
            "action": "process",
            "json": 1,
            "page_size": page_size,
        },
    )
    return data.get("products") or []


async def search_foods(
    client: HealthAPIClient, query: str, *, page_size: int = 5
) -> list[FoodItem]:
    """Search Open Food Facts. Nutrient values are per 100 g."""
    products = await _search_products(client, query, page_size)
    items = []
    for product in products:
        nutriments = product.get("nutriments") or {}
        items.append(
            FoodItem(
                name=product.get("product_name") or "Unknown Food",
                portion=product.get("serving_size") or "100g",
                calories=_num(nutriments.get("energy-kcal_100g")),
                carbs=_num(nutriments.get("carbohydrates_100g")),
                protein=_num(nutriments.get("proteins_100g")),
                fat=_num(nutriments.get("fat_100g")),
                fiber=_num(nutriments.get("fiber_100g")),
            )
        )
    return items


async def get_food_composition(
    client: HealthAPIClient, food_name: str
) -> FoodComposition | None:
    """Composition of the best Open Food Facts match, or None if nothing matches."""
    products = await _search_products(client, food_name, 1)
    if not products:
        return None
    product = products[0]
    nutriments = product.get("nutriments") or {}
    return FoodComposition(
        name=product.get("product_name") or food_name,
        nutrients=Nutrients(
            calories=_num(nutriments.get("energy-kcal_100g")),
            carbs=_num(nutriments.get("carbohydrates_100g")),
            protein=_num(nutriments.get("proteins_100g")),
            fat=_num(nutriments.get("fat_100g")),
            fiber=_num(nutriments.get("fiber_100g")),
            sugar=_num(nutriments.get("sugars_100g")),
            sodium=_num(nutriments.get("sodium_100g")),
        ),
        serving_size=product.get("serving_size") or "100g",
        ingredients=product.get("ingredients_text") or "Not available",
    )


async def get_health_education(
    client: HealthAPIClient, topic: str, *, language: str = "en"
) -> list[EducationContent]:
    """Fetch MedlinePlus Connect entries for a topic."""
    data = await client.get(
        MEDLINEPLUS_CONNECT_URL,
        params={
            "mainSearchCriteria.v.dn": topic,
            "knowledgeResponseType": "application/json",
            "informationRecipient.languageCode.c": language,
        },
    )
    entries = (data.get("feed") or {}).get("entry") or []
    results = []
    for entry in entries:
        links = entry.get("link") or []
        url = links[0].get("href") if links else None
        results.append(
            EducationContent(
                title=_text(entry.get("title")),
                summary=_text(entry.get("summary")),
                url=url or "https://medlineplus.gov",
            )
        )
    return results


async def get_indicator_value(
    client: HealthAPIClient, indicator_code: str, spatial_code: str
) -> GlobalHealthStat | None:
    """Latest WHO GHO value for one indicator and location, or None."""
    data = await client.get(
        f"{WHO_GHO_URL}/{indicator_code}",
        params={
            "$filter": f"SpatialDim eq '{spatial_code}'",
            "$orderby": "TimeDim desc",
        },
    )
    rows = [r for r in data.get("value") or [] if r.get("NumericValue") is not None]
    if not rows:
        return None
    latest = max(rows, key=lambda r: r.get("TimeDim") or 0)
    return GlobalHealthStat(value=latest["NumericValue"], year=latest.get("TimeDim"))
