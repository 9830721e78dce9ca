#!/usr/bin/env python3
"""
Score weather reliability for every flight in a flights CSV.

Adds reliability and recommendation columns. Without OPENWEATHERMAP_API_KEY,
or for destinations without known coordinates, mock weather is used and the
weather_source column says so.

Usage:
    uv run python scripts/check_reliability.py data/flights.csv
    uv run python scripts/check_reliability.py data/flights.csv -o scored.csv
"""

import argparse
import sys

import pandas as pd
from tqdm import tqdm

from galleyops.config import get_settings
from galleyops.log import configure_logging
from galleyops.reference.weather import (
    OpenWeatherMapClient,
    calculate_reliability,
    get_weather,
    reliability_recommendation,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Score flight reliability from destination weather")
    parser.add_argument("flights", help="Flights CSV with a destination column")
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output CSV file. Default: overwrite input",
    )
    args = parser.parse_args()

    configure_logging(level="WARNING")
    settings = get_settings()
    client = None
    if settings.openweathermap_api_key:
        client = OpenWeatherMapClient(settings.openweathermap_api_key, timeout=settings.weather_timeout)

    try:
        df = pd.read_csv(args.flights)
    except (OSError, pd.errors.ParserError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if "destination" not in df.columns:
        print("Error: CSV has no destination column", file=sys.stderr)
        sys.exit(1)

    # One lookup per destination
    scores = {}
    for destination in tqdm(sorted(df["destination"].dropna().unique()), desc="Weather"):
        weather = get_weather(str(destination), client=client)
        scores[destination] = (
            calculate_reliability(weather),
            "mock" if weather.mock else "live",
        )

    df["reliability"] = df["destination"].map(lambda d: scores.get(d, (None, None))[0])
    df["weather_source"] = df["destination"].map(lambda d: scores.get(d, (None, None))[1])
    df["recommendation"] = df["reliability"].map(
        lambda r: reliability_recommendation(r) if pd.notna(r) else ""
    )

    output = args.output or args.flights
    df.to_csv(output, index=False)
    print(f"Wrote {len(df)} rows to {output}", file=sys.stderr)


if __name__ == "__main__":
    main()
