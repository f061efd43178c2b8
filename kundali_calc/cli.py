"""
cli.py
======
Command-line front end.

    kundali-calc chart --date 1990-06-15 --time 10:30 \
        --lat 28.6139 --lon 77.2090 --tz Asia/Kolkata
    kundali-calc chart ... --json
    kundali-calc transits [--at 2024-01-01T00:00:00Z]
"""

import argparse
import json
import sys
from datetime import datetime
from typing import List, Optional

from .config import configure_logging, get_settings
from .core.zodiac import format_dms
from .errors import KundaliError
from .tools.kundali import KundaliResult, TransitReport, current_transits, generate_kundali


def print_section(title: str):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def format_planet_table(chart: KundaliResult) -> str:
    lines = [f"{'Planet':<12} {'Sign':<14} {'Degree':<12} {'Nakshatra':<22} {'Pada':<5} {'House':<6}"]
    lines.append("─" * 75)
    for p in chart.planets:
        retro = " ℞" if p.is_retrograde else "  "
        lines.append(
            f"{p.name:<12} {p.sign:<14} {p.degree_formatted():<12} "
            f"{p.nakshatra:<22} {p.nakshatra_pada:<5} H{p.house}"
            f"{retro}"
        )
    return "\n".join(lines)


def format_transit_table(report: TransitReport) -> str:
    lines = [f"{'Planet':<12} {'Sign':<14} {'Degree':<12}"]
    lines.append("─" * 40)
    for t in report.transits:
        retro = " ℞" if t.is_retrograde else ""
        lines.append(f"{t.planet:<12} {t.sign:<14} {format_dms(t.degree):<12}{retro}")
    return "\n".join(lines)


def print_chart(chart: KundaliResult):
    asc = chart.ascendant
    print_section("LAGNA")
    print(f"  {asc.sign} {format_dms(asc.degree)}  ({asc.nakshatra} pada {asc.nakshatra_pada})")
    print(f"  Ayanamsa (Lahiri): {format_dms(chart.ayanamsa)}")

    print_section("PLANETS")
    print(format_planet_table(chart))

    print_section("PANCHANG")
    pan = chart.panchang
    print(f"  Vara     : {pan.vara}")
    print(f"  Tithi    : {pan.tithi.name}  ({pan.moon_phase})")
    print(f"  Nakshatra: {pan.nakshatra.name} pada {pan.nakshatra.pada}")
    print(f"  Yoga     : {pan.yoga.name}")
    print(f"  Karana   : {pan.karana.name}")
    print(f"  Sunrise  : {pan.sun_times.sunrise_formatted()}   Sunset: {pan.sun_times.sunset_formatted()}")

    print_section("VIMSHOTTARI DASHA")
    for period in chart.dashas:
        print(f"  {period.lord:<8} {period.start:%Y-%m-%d} → {period.end:%Y-%m-%d}"
              f"  ({period.duration_years:.2f} y)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kundali-calc",
                                     description="Sidereal Vedic birth chart calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    chart = sub.add_parser("chart", help="compute a birth chart")
    chart.add_argument("--date", required=True, help="birth date YYYY-MM-DD")
    chart.add_argument("--time", required=True, help="birth time HH:MM (24h, local)")
    chart.add_argument("--lat", required=True, type=float, help="latitude, north positive")
    chart.add_argument("--lon", required=True, type=float, help="longitude, east positive")
    chart.add_argument("--tz", default="UTC", help="IANA zone or fixed offset (default UTC)")
    chart.add_argument("--json", action="store_true", help="print the full result as JSON")

    transits = sub.add_parser("transits", help="current planetary transits")
    transits.add_argument("--at", type=datetime.fromisoformat,
                          help="ISO-8601 moment (default: now, UTC)")
    transits.add_argument("--json", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings())

    try:
        if args.command == "chart":
            result = generate_kundali({
                "dateOfBirth": args.date,
                "timeOfBirth": args.time,
                "latitude": args.lat,
                "longitude": args.lon,
                "timezone": args.tz,
            })
            if args.json:
                print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
            else:
                print_chart(result)
        else:
            report = current_transits(args.at)
            if args.json:
                print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
            else:
                print_section(f"TRANSITS  {report.calculated_at:%Y-%m-%d %H:%M} UTC")
                print(format_transit_table(report))
    except KundaliError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0
