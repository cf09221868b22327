"""Approximate the phase of the moon for a calendar date."""

from __future__ import annotations

import argparse
import math
from datetime import date, datetime, timezone

SYNODIC_MONTH = 29.53058867
REFERENCE_NEW_MOON_JD = 2451549.5


def moon_phase(date: date) -> float:
    """Return the fraction of the lunar cycle elapsed on ``date``."""
    y = float(date.year)
    m = float(date.month)
    day = float(date.day)
    if m < 3.0:
        y -= 1.0
        m += 12.0

    a = math.floor(y / 100.0)
    b = 2.0 - a + math.floor(a / 4.0)
    jd = (
        math.floor(365.25 * (y + 4716.0))
        + math.floor(30.6001 * (m + 1.0))
        + day
        + b
        - 1524.5
    )

    new_moons = (jd - REFERENCE_NEW_MOON_JD) / SYNODIC_MONTH
    fraction, _ = math.modf(new_moons)
    return fraction


def phase_description(phase: float) -> tuple[str, str]:
    """Name the phase and give its emoji."""
    if phase < 0.03 or phase > 0.97:
        return ("New Moon", "🌑")
    if phase < 0.22:
        return ("Waxing Crescent", "🌒")
    if phase < 0.28:
        return ("First Quarter", "🌓")
    if phase < 0.47:
        return ("Waxing Gibbous", "🌔")
    if phase < 0.53:
        return ("Full Moon", "🌕")
    if phase < 0.72:
        return ("Waning Gibbous", "🌖")
    if phase < 0.78:
        return ("Last Quarter", "🌗")
    return ("Waning Crescent", "🌘")


def main(argv: list[str] | None = None) -> int:
    """Print the moon phase for today (UTC) or for a given date."""
    parser = argparse.ArgumentParser(description="Show the phase of the moon.")
    parser.add_argument(
        "date",
        nargs="?",
        type=date.fromisoformat,
        help="date as YYYY-MM-DD (default: today, UTC)",
    )
    args = parser.parse_args(argv)
    today = args.date or datetime.now(timezone.utc).date()
    desc, emoji = phase_description(moon_phase(today))
    print(f"Date: {today.isoformat()}")
    print(f"Moon Phase: {emoji} {desc}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())