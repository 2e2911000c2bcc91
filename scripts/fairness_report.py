#!/usr/bin/env python3
"""Print a fairness and best-times report for a demo distributed team.

Usage:
    # From the repo root:
    python scripts/fairness_report.py
    python scripts/fairness_report.py --at 2025-02-01T17:00:00Z --top 3

The team, meeting time and meeting title are fixed demo data; the report
shows per-person sacrifice for the proposed time, the meeting's fairness
index, the best alternative UTC hours and whether the meeting should go
async instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure the repo root is on sys.path so `from clockalign…` imports work
_repo_root = Path(__file__).resolve().parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from clockalign.config.settings import BEST_TIMES_TOP_N, LOG_LEVEL  # noqa: E402
from clockalign.engine.async_nudge import analyze_for_async_nudge  # noqa: E402
from clockalign.engine.golden_windows import find_best_times  # noqa: E402
from clockalign.engine.local_time import timezone_spread_hours, to_utc  # noqa: E402
from clockalign.engine.sacrifice_score import (  # noqa: E402
    calculate_meeting_total_sacrifice,
    calculate_score_for_timezone,
)
from clockalign.models.golden_window import EnergyType, Participant  # noqa: E402
from clockalign.models.nudge import MeetingType, NudgeInput  # noqa: E402
from clockalign.presentation import (  # noqa: E402
    format_hour,
    format_points,
    get_impact_emoji,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s  %(levelname)-7s  %(name)-32s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("fairness_report")


# ── Demo team ────────────────────────────────────────────────────────────

DEMO_TEAM = [
    Participant(id="maya", name="Maya", timezone="America/Los_Angeles"),
    Participant(id="oliver", name="Oliver", timezone="Europe/London", energy_type=EnergyType.EARLY_BIRD),
    Participant(id="priya", name="Priya", timezone="Asia/Kolkata"),
    Participant(id="kenji", name="Kenji", timezone="Asia/Tokyo", energy_type=EnergyType.NIGHT_OWL),
]
DEMO_ORGANIZER = "maya"
DEMO_TITLE = "Weekly status update"


def build_report(at: str, top_n: int) -> list[str]:
    instant = to_utc(at)
    lines = [f"Proposed: {DEMO_TITLE!r} at {instant:%Y-%m-%d %H:%M} UTC", ""]

    scores = []
    for person in DEMO_TEAM:
        score = calculate_score_for_timezone(
            instant,
            person.timezone,
            duration_minutes=30,
            is_recurring=True,
            is_organizer=person.id == DEMO_ORGANIZER,
        )
        scores.append(score)
        lines.append(
            f"  {get_impact_emoji(score.impact_level)} {person.display_name:<8} "
            f"{format_points(score.points):>5} pts  {score.breakdown}"
        )

    totals = calculate_meeting_total_sacrifice(scores)
    lines += [
        "",
        f"Total {format_points(totals.total_points)} pts, fairness index {totals.fairness_index:.2f}",
    ]
    if totals.imbalance_warning:
        lines.append(f"  ! {totals.imbalance_warning}")

    lines += ["", "Best UTC hours:"]
    best = find_best_times(DEMO_TEAM, top_n=top_n, require_all_available=False, reference_date=instant)
    for ranked in best:
        lines.append(
            f"  {ranked.rank}. {format_hour(ranked.utc_hour):>5} UTC  "
            f"quality {ranked.quality_score:>3}  {ranked.recommendation.value:<9} {ranked.summary}"
        )

    nudge = analyze_for_async_nudge(NudgeInput(
        title=DEMO_TITLE,
        meeting_type=MeetingType.STANDUP,
        duration_minutes=30,
        participant_count=len(DEMO_TEAM),
        total_sacrifice_points=totals.total_points,
        max_individual_sacrifice=totals.max_points,
        is_recurring=True,
        timezone_spread=timezone_spread_hours([p.timezone for p in DEMO_TEAM], instant),
        average_energy=best[0].slot.average_energy if best else None,
    ))
    lines += ["", f"Async nudge ({nudge.nudge_strength}/100): {nudge.message}"]
    if nudge.should_nudge:
        lines.append(f"  Estimated {nudge.estimated_hours_saved}h saved per occurrence")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--at", default="2025-02-01T17:00:00Z", help="proposed meeting time (ISO-8601, UTC)")
    parser.add_argument("--top", type=int, default=BEST_TIMES_TOP_N, help="number of best hours to list")
    args = parser.parse_args(argv)

    logger.info(f"Building fairness report for {len(DEMO_TEAM)} participants")
    print("\n".join(build_report(args.at, args.top)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
