import pytest

from bms_notechart import judgments
from bms_notechart.judgments import Judgment


def test_judge_time_windows_are_strict():
    assert judgments.judge_time(0.0, 0.0) == Judgment.PGREAT
    assert judgments.judge_time(0.019, 0.0) == Judgment.PGREAT
    assert judgments.judge_time(0.02, 0.0) == Judgment.GREAT
    assert judgments.judge_time(0.0, 0.05) == Judgment.GOOD
    assert judgments.judge_time(0.15, 0.0) == Judgment.OFFBEAT


def test_outside_every_window():
    assert judgments.judge_time(0.0, 1.0) == judgments.UNJUDGED
    assert judgments.judge_time(1.0, 0.0) == judgments.MISSED


def test_judge_end_time_uses_release_windows():
    assert judgments.judge_end_time(0.03, 0.0) == Judgment.PGREAT
    assert judgments.judge_time(0.03, 0.0) == Judgment.GREAT


def test_custom_timegates():
    table = judgments.ABSOLUTE_BEGINNER_TIMEGATES
    assert judgments.judge_time(0.09, 0.0, table) == Judgment.GREAT
    assert judgments.judge_time(0.09, 0.0) == Judgment.GOOD


@pytest.mark.parametrize(
    "difficulty, level, expected",
    [
        (1, 1, "ABSOLUTE_BEGINNER_TIMEGATES"),
        (2, 2, "ABSOLUTE_BEGINNER_TIMEGATES"),
        (3, 3, "TRANSITIONAL_BEGINNER_LV3_TIMEGATES"),
        (3, 4, "TRANSITIONAL_BEGINNER_LV4_TIMEGATES"),
        (4, 5, "TRANSITIONAL_BEGINNER_LV5_TIMEGATES"),
        (4, 6, "NORMAL_TIMEGATES"),
        (5, 1, "NORMAL_TIMEGATES"),
        (0, 0, "NORMAL_TIMEGATES"),
    ],
)
def test_get_timegates(difficulty, level, expected):
    assert judgments.get_timegates(difficulty, level) is getattr(judgments, expected)


def test_tutorial_timegates():
    assert judgments.get_timegates(5, 12, tutorial=True) is judgments.ABSOLUTE_BEGINNER_TIMEGATES
    assert (
        judgments.get_timegates(5, 12, tutorial=True, note_time=99.9)
        is judgments.ABSOLUTE_BEGINNER_TIMEGATES
    )
    assert (
        judgments.get_timegates(1, 1, tutorial=True, note_time=100)
        is judgments.NORMAL_TIMEGATES
    )


def test_timegate_lookup():
    assert judgments.timegate(Judgment.GREAT) == 0.05
    assert judgments.timegate(Judgment.GOOD, judgments.ABSOLUTE_BEGINNER_TIMEGATES) == 0.18
    with pytest.raises(ValueError):
        judgments.timegate(Judgment.MISSED)


def test_bad_judgments():
    assert not judgments.is_bad(Judgment.GOOD)
    assert judgments.is_bad(Judgment.OFFBEAT)
    assert judgments.breaks_combo(Judgment.OFFBEAT)
    assert judgments.breaks_combo(Judgment.MISSED)
    assert not judgments.breaks_combo(Judgment.GOOD)
    assert not judgments.breaks_combo(Judgment.UNJUDGED)


def test_weight():
    assert [judgments.weight(j) for j in Judgment] == [0, 0, 100, 80, 50, 0]


def test_timegates_must_be_positive():
    with pytest.raises(ValueError):
        judgments.Timegate(value=Judgment.PGREAT, timegate=0, end_timegate=0.1)


@pytest.mark.parametrize(
    "judgment, breaks",
    [
        (Judgment.PGREAT, False),
        (Judgment.GREAT, False),
        (Judgment.GOOD, False),
        (Judgment.OFFBEAT, True),
        (Judgment.MISSED, True),
    ],
)
def test_combo_breaks_from_offbeat(judgment, breaks):
    assert judgments.breaks_combo(judgment) is breaks
