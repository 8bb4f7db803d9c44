import pytest

from easyseas.casino.golden_hours import (
    active_sessions,
    find_golden_hours,
    personalized_play_estimate,
    time_overlap,
)
from easyseas.casino.summary import summarize_cruise
from easyseas.models import GoldenWindow, PlayingHours, PlayingSession, TimeWindow


def test_overlap_across_midnight():
    assert time_overlap("22:00", "02:00", "23:00", "01:00") == [(23 * 60, 25 * 60)]


def test_no_overlap():
    assert time_overlap("10:00", "14:00", "18:00", "20:00") == []


def test_touching_windows_do_not_overlap():
    assert time_overlap("10:00", "14:00", "14:00", "16:00") == []


def test_after_midnight_session_meets_late_casino():
    assert time_overlap("22:00", "02:00", "00:30", "01:30") == [(1470, 1530)]


def test_overnight_session_meets_early_bird():
    assert time_overlap("05:00", "07:30", "22:00", "06:00") == [(29 * 60, 30 * 60)]


def test_late_session_meets_after_midnight_casino():
    hours = PlayingHours(enabled=True, sessions=[PlayingSession(name="Late", start_time="23:00", end_time="01:00")])
    assert find_golden_hours([TimeWindow("00:30", "05:00", "Port night")], hours) == [
        GoldenWindow("00:30", "01:00", 30, "Late"),
    ]


def test_open_ended_casino_window():
    assert time_overlap("17:30", None, "20:00", "22:00") == [(1200, 1320)]


def test_active_sessions(night_owl_hours):
    assert [s.name for s in active_sessions(night_owl_hours)] == ["Night owl"]
    night_owl_hours.enabled = False
    assert active_sessions(night_owl_hours) == []
    assert active_sessions(None) == []


def test_find_golden_hours(night_owl_hours):
    windows = [TimeWindow("22:00", "02:00", "Main casino"), TimeWindow("22:00", "02:00", "Duplicate")]
    assert find_golden_hours(windows, night_owl_hours) == [GoldenWindow("23:00", "01:00", 120, "Night owl")]


def test_find_golden_hours_sorted_by_start():
    hours = PlayingHours(enabled=True, sessions=[
        PlayingSession(name="Evening", start_time="20:00", end_time="22:00"),
        PlayingSession(name="Morning", start_time="06:00", end_time="07:00"),
    ])
    windows = [TimeWindow("05:00", "07:30", "Early bird"), TimeWindow("10:00", None, "Main casino")]
    assert [w.label for w in find_golden_hours(windows, hours)] == ["Morning", "Evening"]


def test_golden_hours_need_enabled_preferences(night_owl_hours):
    night_owl_hours.enabled = False
    assert find_golden_hours([TimeWindow("22:00", "02:00")], night_owl_hours) == []


def test_default_play_estimate(caribbean_cruise):
    estimate = personalized_play_estimate(summarize_cruise(caribbean_cruise))
    assert [d.sessions for d in estimate.days] == [1, 4, 1, 4, 0]
    assert estimate.estimated_play_hours == 23.0
    assert estimate.estimated_points == 10 * 384
    assert estimate.play_days == 4
    assert estimate.golden_hours_total == 0
    assert estimate.days[-1].notes == "Casino closed - no play"


def test_play_estimate_with_golden_hours(caribbean_cruise, night_owl_hours):
    estimate = personalized_play_estimate(summarize_cruise(caribbean_cruise), night_owl_hours)
    assert [d.hours_played for d in estimate.days] == [1.0, 2.0, 1.0, 1.0, 0.0]
    assert estimate.golden_hours_total == pytest.approx(5.0)
    assert estimate.estimated_points == 4 * 384
    assert estimate.days[1].golden_windows == [GoldenWindow("23:00", "01:00", 120, "Night owl")]
    assert estimate.days[0].notes == "1 golden session: 23:00-00:00"


def test_play_estimate_without_overlap(caribbean_cruise):
    hours = PlayingHours(enabled=True, sessions=[PlayingSession(name="Lunch", start_time="12:00", end_time="13:00")])
    estimate = personalized_play_estimate(summarize_cruise(caribbean_cruise), hours)
    assert estimate.days[0].notes == "Casino open but no overlap with your playing hours"
    assert estimate.days[0].sessions == 0
    assert estimate.days[1].sessions == 1
