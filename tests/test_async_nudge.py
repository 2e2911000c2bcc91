"""Tests for the async nudge analyzer and the reclaimed-hours summary."""

import logging

import pytest
from dataclasses import replace
from datetime import datetime, timezone

from clockalign.engine.async_nudge import (
    ASYNC_ALTERNATIVES,
    analyze_for_async_nudge,
    collect_reasons,
    estimate_hours_saved,
    find_best_alternatives,
    get_urgency,
)
from clockalign.engine.reclaimed import calculate_reclaimed_stats
from clockalign.models.nudge import (
    AsyncDecision,
    AsyncDecisionRecord,
    AsyncType,
    MeetingType,
    NudgeInput,
    OrganizerPreference,
    ReasonType,
    Urgency,
)
from clockalign.models.sacrifice import Trend


@pytest.fixture
def make_meeting():
    """Factory for NudgeInput; defaults contribute no weight at all."""
    def _factory(**overrides):
        defaults = {
            "title": "Roadmap",
            "duration_minutes": 30,
            "participant_count": 3,
            "total_sacrifice_points": 0,
            "max_individual_sacrifice": 0,
        }
        defaults.update(overrides)
        return NudgeInput(**defaults)

    return _factory


# ═══════════════════════════════════════════════════════════════════════════
# Async Nudge Analyzer
# ═══════════════════════════════════════════════════════════════════════════


class TestAsyncNudge:
    def test_recurring_standup_across_timezones_nudges(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting(
            title="Daily Standup",
            meeting_type=MeetingType.STANDUP,
            participant_count=5,
            total_sacrifice_points=45,
            max_individual_sacrifice=15,
            is_recurring=True,
            timezone_spread=12,
        ))
        assert result.should_nudge
        assert result.nudge_strength > 50
        assert result.urgency in (Urgency.MODERATE, Urgency.STRONG)
        assert len(result.suggested_alternatives) >= 1

    def test_standup_details(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting(
            title="Daily Standup",
            meeting_type=MeetingType.STANDUP,
            participant_count=5,
            total_sacrifice_points=45,
            max_individual_sacrifice=15,
            is_recurring=True,
            timezone_spread=12,
        ))
        assert result.nudge_strength == 100
        assert result.urgency == Urgency.STRONG
        assert result.primary_reason.type == ReasonType.HIGH_SACRIFICE
        assert result.primary_reason.weight == 35
        assert [a.type for a in result.suggested_alternatives] == [AsyncType.DOC, AsyncType.SLACK, AsyncType.LOOM]
        assert result.estimated_hours_saved == 5.6
        assert result.message == (
            "⚠️ Recommendation: This meeting has a high sacrifice score. "
            "Someone's waking up early or staying late. Try 📝 Shared Document instead?"
        )

    def test_one_on_one_does_not_nudge(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting(
            title="1:1 with Sarah",
            meeting_type=MeetingType.ONE_ON_ONE,
            participant_count=2,
            total_sacrifice_points=4,
            max_individual_sacrifice=2,
            timezone_spread=0,
        ))
        assert not result.should_nudge
        assert result.nudge_strength < 25
        assert result.urgency == Urgency.LOW

    def test_threshold_is_inclusive(self, make_meeting):
        at = analyze_for_async_nudge(make_meeting(max_individual_sacrifice=12.5, timezone_spread=12.5))
        below = analyze_for_async_nudge(make_meeting(max_individual_sacrifice=12, timezone_spread=12.5))
        assert (at.nudge_strength, at.should_nudge, at.urgency) == (50, True, Urgency.MODERATE)
        assert (below.nudge_strength, below.should_nudge, below.urgency) == (49, False, Urgency.LOW)

    def test_organizer_preference_scales_strength(self, make_meeting):
        base = make_meeting(total_sacrifice_points=30, max_individual_sacrifice=6, timezone_spread=5)
        neutral = analyze_for_async_nudge(base)
        prefer_async = analyze_for_async_nudge(replace(base, organizer_preference=OrganizerPreference.PREFER_ASYNC))
        prefer_sync = analyze_for_async_nudge(replace(base, organizer_preference=OrganizerPreference.PREFER_SYNC))
        assert (prefer_sync.nudge_strength, neutral.nudge_strength, prefer_async.nudge_strength) == (28, 46, 55)
        assert prefer_async.should_nudge and not neutral.should_nudge

    def test_sync_preferred_types_are_halved(self, make_meeting):
        base = make_meeting(total_sacrifice_points=30, max_individual_sacrifice=10, timezone_spread=10)
        for meeting_type in (MeetingType.BRAINSTORM, MeetingType.ONE_ON_ONE, MeetingType.PLANNING):
            halved = analyze_for_async_nudge(replace(base, meeting_type=meeting_type))
            assert halved.nudge_strength == 32
        assert analyze_for_async_nudge(replace(base, meeting_type=MeetingType.REVIEW)).nudge_strength == 64

    def test_strength_capped_at_100(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting(
            title="Weekly status update",
            total_sacrifice_points=100,
            max_individual_sacrifice=50,
            timezone_spread=20,
            is_recurring=True,
            duration_minutes=90,
            participant_count=12,
            organizer_preference=OrganizerPreference.PREFER_ASYNC,
        ))
        assert result.nudge_strength == 100

    @pytest.mark.parametrize("field", [
        "total_sacrifice_points", "max_individual_sacrifice", "timezone_spread", "participant_count",
    ])
    def test_strength_non_decreasing_in_inputs(self, make_meeting, field):
        strengths = [
            analyze_for_async_nudge(make_meeting(**{field: value})).nudge_strength
            for value in (0, 2, 5, 8, 12, 20, 40)
        ]
        assert strengths == sorted(strengths)

    def test_recurring_long_meeting_weight(self, make_meeting):
        short = collect_reasons(make_meeting(is_recurring=True, duration_minutes=30))
        long = collect_reasons(make_meeting(is_recurring=True, duration_minutes=60))
        assert [r.weight for r in short if r.type == ReasonType.RECURRING_COST] == [10]
        assert [r.weight for r in long if r.type == ReasonType.RECURRING_COST] == [20]

    def test_only_first_pattern_counts(self, make_meeting):
        reasons = collect_reasons(make_meeting(title="Weekly status demo"))
        patterns = [r for r in reasons if r.type == ReasonType.PATTERN_MATCH]
        assert len(patterns) == 1
        assert patterns[0].weight == 12.5

    def test_short_meeting_and_many_participants(self, make_meeting):
        reasons = {r.type: r.weight for r in collect_reasons(make_meeting(duration_minutes=15, participant_count=6))}
        assert reasons == {ReasonType.DURATION: 10, ReasonType.PARTICIPANT_COUNT: 10}

    def test_no_reasons_message(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting())
        assert result.reasons == ()
        assert result.primary_reason is None
        assert result.nudge_strength == 0
        assert result.message == "💡 Quick thought: This meeting might work well async."

    def test_timezone_spread_message(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting(timezone_spread=13.5))
        assert result.primary_reason.type == ReasonType.TIMEZONE_SPREAD
        assert "With 13.5 hours between participants" in result.message

    def test_reasons_sorted_by_weight(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting(
            total_sacrifice_points=10, max_individual_sacrifice=10, timezone_spread=3,
        ))
        weights = [r.weight for r in result.reasons]
        assert weights == sorted(weights, reverse=True)
        assert result.primary_reason.type == ReasonType.INDIVIDUAL_SACRIFICE

    def test_nudge_is_logged(self, make_meeting, caplog):
        caplog.set_level(logging.INFO, logger="clockalign.engine.async_nudge")
        analyze_for_async_nudge(make_meeting(title="Team FYI", total_sacrifice_points=60, timezone_spread=12))
        assert "Async nudge for 'Team FYI'" in caplog.text

    def test_to_dict(self, make_meeting):
        data = analyze_for_async_nudge(make_meeting(timezone_spread=12)).to_dict()
        assert data["urgency"] == "low"
        assert data["primary_reason"]["type"] == "timezone_spread"
        assert len(data["suggested_alternatives"]) == 3

    # ── Low energy ──

    @pytest.mark.parametrize("energy,weight", [(0, 30), (-10, 30), (20, 24), (49, 15)])
    def test_low_energy_weight(self, make_meeting, energy, weight):
        reasons = collect_reasons(make_meeting(average_energy=energy))
        assert [(r.type, r.weight) for r in reasons] == [(ReasonType.LOW_ENERGY, weight)]

    @pytest.mark.parametrize("energy", [None, 50, 80, 100])
    def test_no_low_energy_reason_at_or_above_threshold(self, make_meeting, energy):
        assert collect_reasons(make_meeting(average_energy=energy)) == []

    def test_strength_non_increasing_in_energy(self, make_meeting):
        strengths = [
            analyze_for_async_nudge(make_meeting(timezone_spread=10, average_energy=energy)).nudge_strength
            for energy in (0, 10, 25, 40, 49, 50, 80, 100)
        ]
        assert strengths == sorted(strengths, reverse=True)

    def test_low_energy_message(self, make_meeting):
        result = analyze_for_async_nudge(make_meeting(average_energy=20))
        assert result.primary_reason.type == ReasonType.LOW_ENERGY
        assert result.primary_reason.details == "Average energy: 20%"
        assert "Available times have low cognitive energy" in result.message

    # ── Loose string inputs ──

    def test_one_on_one_alias_is_halved(self, make_meeting):
        base = make_meeting(total_sacrifice_points=30, max_individual_sacrifice=10, timezone_spread=10)
        assert analyze_for_async_nudge(replace(base, meeting_type="1on1")).nudge_strength == 32
        assert analyze_for_async_nudge(replace(base, meeting_type="one_on_one")).nudge_strength == 32

    def test_unknown_meeting_type_is_not_scaled(self, make_meeting):
        meeting = make_meeting(
            total_sacrifice_points=30, max_individual_sacrifice=10, timezone_spread=10, meeting_type="retro",
        )
        assert analyze_for_async_nudge(meeting).nudge_strength == 64

    def test_organizer_preference_strings(self, make_meeting):
        base = make_meeting(total_sacrifice_points=30, max_individual_sacrifice=10, timezone_spread=10)
        assert analyze_for_async_nudge(replace(base, organizer_preference="prefer_async")).nudge_strength == 77
        assert analyze_for_async_nudge(replace(base, organizer_preference="whenever")).nudge_strength == 64

    def test_enum_fallbacks(self):
        assert MeetingType("1on1") is MeetingType.ONE_ON_ONE
        assert MeetingType("retro") is MeetingType.OTHER
        assert OrganizerPreference("") is OrganizerPreference.NEUTRAL
        assert AsyncType("fax") is AsyncType.OTHER


class TestAlternatives:
    def test_catalog_has_six_entries(self):
        assert set(ASYNC_ALTERNATIVES) == set(AsyncType)
        assert all(alt.message_template for alt in ASYNC_ALTERNATIVES.values())

    def test_demo_prefers_loom(self, make_meeting):
        alternatives = find_best_alternatives(make_meeting(title="Sprint demo"))
        assert alternatives[0].type == AsyncType.LOOM
        assert alternatives[0].suitability_score == 100

    def test_review_prefers_doc(self, make_meeting):
        alternatives = find_best_alternatives(make_meeting(title="Design review"))
        assert [a.type for a in alternatives[:2]] == [AsyncType.DOC, AsyncType.LOOM]

    def test_decision_prefers_poll(self, make_meeting):
        assert find_best_alternatives(make_meeting(title="Vote on launch decision"))[0].type == AsyncType.POLL

    def test_short_meeting_prefers_slack(self, make_meeting):
        alternatives = find_best_alternatives(make_meeting(title="Roadmap", duration_minutes=10))
        assert alternatives[0].type == AsyncType.SLACK
        assert alternatives[0].suitability_score == 70

    def test_at_most_three(self, make_meeting):
        assert len(find_best_alternatives(make_meeting())) == 3

    def test_message_template_renders_title(self):
        message = ASYNC_ALTERNATIVES[AsyncType.LOOM].render_message("Q3 kickoff")
        assert "Q3 kickoff" in message


class TestEstimates:
    def test_hours_saved(self, make_meeting):
        assert estimate_hours_saved(make_meeting(duration_minutes=60, participant_count=4)) == 5
        assert estimate_hours_saved(make_meeting(duration_minutes=30, participant_count=5, is_recurring=True)) == 5.6
        assert estimate_hours_saved(make_meeting(participant_count=0)) == 0

    @pytest.mark.parametrize("strength,urgency", [
        (0, Urgency.LOW), (49, Urgency.LOW), (50, Urgency.MODERATE),
        (74, Urgency.MODERATE), (75, Urgency.STRONG), (100, Urgency.STRONG),
    ])
    def test_urgency_bands(self, strength, urgency):
        assert get_urgency(strength) == urgency


# ═══════════════════════════════════════════════════════════════════════════
# Reclaimed hours
# ═══════════════════════════════════════════════════════════════════════════


def _record(decision, hours, async_type=None):
    return AsyncDecisionRecord(
        decision=decision,
        hours_saved=hours,
        async_type=async_type,
        created_at=datetime(2026, 2, 10, 12, tzinfo=timezone.utc),
    )


@pytest.fixture
def decision_records():
    return [
        _record(AsyncDecision.WENT_ASYNC, 2.0, AsyncType.LOOM),
        _record(AsyncDecision.WENT_ASYNC, 3.0, AsyncType.DOC),
        _record(AsyncDecision.WENT_ASYNC, 1.0),
        _record(AsyncDecision.SCHEDULED_ANYWAY, 5.0, AsyncType.LOOM),
    ]


class TestReclaimedStats:
    def test_only_went_async_counts(self, decision_records):
        stats = calculate_reclaimed_stats(decision_records)
        assert stats.total_hours_reclaimed == 6
        assert stats.meetings_converted == 3
        assert stats.average_hours_per_meeting == 2

    def test_by_type_has_every_type(self, decision_records):
        stats = calculate_reclaimed_stats(decision_records)
        assert set(stats.by_type) == set(AsyncType)
        assert (stats.by_type[AsyncType.LOOM].hours, stats.by_type[AsyncType.LOOM].count) == (2, 1)
        assert stats.by_type[AsyncType.OTHER].count == 1
        assert stats.by_type[AsyncType.POLL].count == 0

    def test_empty(self):
        stats = calculate_reclaimed_stats([])
        assert (stats.total_hours_reclaimed, stats.meetings_converted, stats.average_hours_per_meeting) == (0, 0, 0)
        assert (stats.trend, stats.trend_percent) == (Trend.STABLE, 0)

    def test_no_previous_period_is_stable(self, decision_records):
        stats = calculate_reclaimed_stats(decision_records, None)
        assert (stats.trend, stats.trend_percent) == (Trend.STABLE, 0)

    def test_empty_previous_period_is_up(self, decision_records):
        stats = calculate_reclaimed_stats(decision_records, [])
        assert (stats.trend, stats.trend_percent) == (Trend.UP, 100)

    def test_empty_previous_and_current_is_stable(self):
        stats = calculate_reclaimed_stats([], [])
        assert (stats.trend, stats.trend_percent) == (Trend.STABLE, 0)

    def test_previous_zero_is_up(self, decision_records):
        previous = [_record(AsyncDecision.SCHEDULED_ANYWAY, 4.0)]
        stats = calculate_reclaimed_stats(decision_records, previous)
        assert (stats.trend, stats.trend_percent) == (Trend.UP, 100)

    @pytest.mark.parametrize("previous_hours,trend,percent", [
        (5.0, Trend.UP, 20),
        (6.5, Trend.STABLE, -8),
        (10.0, Trend.DOWN, -40),
    ])
    def test_trend_with_dead_band(self, decision_records, previous_hours, trend, percent):
        previous = [_record(AsyncDecision.WENT_ASYNC, previous_hours)]
        stats = calculate_reclaimed_stats(decision_records, previous)
        assert (stats.trend, stats.trend_percent) == (trend, percent)

    def test_raw_string_decisions(self):
        stats = calculate_reclaimed_stats([_record("went_async", 1.5, "slack")])
        assert stats.by_type[AsyncType.SLACK].hours == 1.5

    def test_unknown_strings_are_tolerated(self):
        stats = calculate_reclaimed_stats([
            _record("went_async", 1.0, "carrier_pigeon"),
            _record("maybe_later", 4.0, "doc"),
        ])
        assert stats.meetings_converted == 1
        assert stats.by_type[AsyncType.OTHER].hours == 1.0

    def test_to_dict_keys_are_strings(self, decision_records):
        data = calculate_reclaimed_stats(decision_records).to_dict()
        assert data["by_type"]["doc"] == {"hours": 3.0, "count": 1}
        assert data["trend"] == "stable"
