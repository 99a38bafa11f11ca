"""Entry point for the healthdata command-line tool."""

from __future__ import annotations

import argparse
import asyncio
import logging

from rich.console import Console

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="healthdata", description="Cached health data lookups"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    weather = sub.add_parser("weather", help="activity suggestions for the weather")
    weather.add_argument("--lat", type=float)
    weather.add_argument("--lon", type=float)

    food = sub.add_parser("food", help="search foods by name")
    food.add_argument("query")
    food.add_argument("--composition", action="store_true", help="detailed nutrients")

    education = sub.add_parser("education", help="health education content")
    education.add_argument("topic")
    education.add_argument("--language", default="en")

    stats = sub.add_parser("stats", help="global health statistics")
    stats.add_argument("indicator", help="e.g. diabetes_prevalence")
    stats.add_argument("--country", default="us")
    return parser


async def run(args: argparse.Namespace) -> str:
    from healthdata.config import load_settings
    from healthdata.services.data_service import HealthDataService

    async with HealthDataService(load_settings()) as service:
        if args.command == "weather":
            result = await service.get_activity_suggestions(args.lat, args.lon)
        elif args.command == "food" and args.composition:
            result = await service.get_food_composition(args.query)
        elif args.command == "food":
            foods = await service.search_food(args.query)
            return "[" + ",".join(f.model_dump_json() for f in foods) + "]"
        elif args.command == "education":
            result = await service.get_health_education(args.topic, args.language)
        else:
            result = await service.get_global_health(args.indicator, args.country)
    return result.model_dump_json()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    console.print_json(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
