#!/usr/bin/env python3
"""Basic usage example for landsat-overpass.

This example predicts the next Landsat 8 and 9 overpasses over Boulder
and looks up the most recent surface reflectance scene covering it.
"""

from landsat_overpass import CatalogError, LandsatAnalyzer


def main():
    # Wire up the default services (LandsatLook STAC, Nominatim)
    analyzer = LandsatAnalyzer.from_config()

    print("Analyzing 40.0, -105.0...")
    try:
        report = analyzer.analyze("40.0,-105.0", cloud_cover=70)
    except CatalogError as e:
        print(f"Scene catalog unavailable: {e}")
        return

    print("\nNext overpasses:")
    for overpass in report.overpasses:
        print(f"  {overpass.satellite_name}: {overpass.format_time()}")

    print(f"\nStatus: {report.message}")
    if report.scene:
        print(f"  Scene: {report.scene['scene_id']}")
        print(f"  Cloud cover: {report.scene['cloud_cover']}%")
        for code, url in report.reflectance.items():
            print(f"  {code}: {url}")

    # The whole report is available as JSON
    print("\nReport data available via report.to_json()")


if __name__ == "__main__":
    main()
