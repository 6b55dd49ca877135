#!/usr/bin/env python3
"""Example using a custom location and search settings with landsat-overpass.

This example resolves a place name, predicts passes with a refined
closest-approach time, and runs the 3x3 pixel grid analysis.
"""

from datetime import timedelta

from landsat_overpass import (
    GroundPoint,
    LandsatAnalyzer,
    OverpassConfig,
    OverpassScheduler,
    OverpassSearch,
    load_elements,
    resolve_location,
)


def main():
    # Resolve a place name via OpenStreetMap
    paris = resolve_location("Paris")
    print(f"Monitoring location: {paris.label}")
    print(f"  Coordinates: {paris.latitude}, {paris.longitude}")
    print()

    # Scan every 30 seconds for up to a week, giving up after 20 seconds
    search = OverpassSearch(step=timedelta(seconds=30), max_steps=20160, timeout=20)
    scheduler = OverpassScheduler(load_elements(), search=search)

    for result in scheduler.predict(paris, refine=True):
        print(f"{result.satellite_name}: {result.format_time()}")

    # Area analysis around explicit coordinates
    config = OverpassConfig.from_env(grid_max_workers=9)
    analyzer = LandsatAnalyzer.from_config(config)
    report = analyzer.analyze_area(
        GroundPoint(latitude=48.8566, longitude=2.3522, name="Paris"),
        cloud_cover=30,
        date_range="2024-06-01 to 2024-08-31",
    )

    print("\n3x3 grid:")
    print(report.to_dataframe().to_string(index=False))


if __name__ == "__main__":
    main()
