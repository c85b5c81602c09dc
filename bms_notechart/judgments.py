from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional


class Judgment(IntEnum):
    MISSED = -1
    UNJUDGED = 0
    PGREAT = 1
    GREAT = 2
    GOOD = 3
    OFFBEAT = 4


UNJUDGED = Judgment.UNJUDGED
MISSED = Judgment.MISSED


@dataclass(frozen=True)
class Timegate:
    value: Judgment
    # max |delta| in seconds for a note hit / a long note release
    timegate: float
    end_timegate: float

    def __post_init__(self):
        if self.timegate <= 0 or self.end_timegate <= 0:
            raise ValueError(f"timegates must be positive, got {self.timegate}/{self.end_timegate}")


Timegates = tuple[Timegate, ...]


def _timegates(*rows: tuple[float, float]) -> Timegates:
    return tuple(
        Timegate(value=Judgment(i + 1), timegate=timegate, end_timegate=end_timegate)
        for i, (timegate, end_timegate) in enumerate(rows)
    )


NORMAL_TIMEGATES = _timegates((0.02, 0.04), (0.05, 0.1), (0.1, 0.2), (0.2, 0.2))

TRANSITIONAL_BEGINNER_LV5_TIMEGATES = _timegates(
    (0.021, 0.042), (0.06, 0.12), (0.12, 0.2), (0.2, 0.2)
)
TRANSITIONAL_BEGINNER_LV4_TIMEGATES = _timegates(
    (0.022, 0.044), (0.07, 0.14), (0.14, 0.2), (0.2, 0.2)
)
TRANSITIONAL_BEGINNER_LV3_TIMEGATES = _timegates(
    (0.023, 0.046), (0.08, 0.16), (0.16, 0.2), (0.2, 0.2)
)
ABSOLUTE_BEGINNER_TIMEGATES = _timegates(
    (0.024, 0.048), (0.1, 0.18), (0.18, 0.2), (0.2, 0.2)
)

# in tutorial mode, notes before this many seconds use the beginner table
TUTORIAL_CUTOFF_SECONDS = 100

# difficulty 5 (INSANE) and up never gets a beginner table
INSANE_DIFFICULTY = 5

_BEGINNER_TIMEGATES_BY_LEVEL = {
    1: ABSOLUTE_BEGINNER_TIMEGATES,
    2: ABSOLUTE_BEGINNER_TIMEGATES,
    3: TRANSITIONAL_BEGINNER_LV3_TIMEGATES,
    4: TRANSITIONAL_BEGINNER_LV4_TIMEGATES,
    5: TRANSITIONAL_BEGINNER_LV5_TIMEGATES,
}


def get_timegates(
    difficulty: int,
    level: int,
    tutorial: bool = False,
    note_time: Optional[float] = None,
) -> Timegates:
    """
    Pick the timegate table for a song.

    :param difficulty: ``#DIFFICULTY`` of the chart (1 BEGINNER .. 5 INSANE).
    :param level: ``#PLAYLEVEL`` of the chart.
    :param tutorial: Whether the song is played as a tutorial.
    :param note_time: Time of the note being judged; only tutorials look at it.
    """
    if tutorial:
        if not note_time or note_time < TUTORIAL_CUTOFF_SECONDS:
            return ABSOLUTE_BEGINNER_TIMEGATES
        return NORMAL_TIMEGATES
    if difficulty >= INSANE_DIFFICULTY:
        return NORMAL_TIMEGATES
    return _BEGINNER_TIMEGATES_BY_LEVEL.get(level, NORMAL_TIMEGATES)


def judge_time_with(
    f: Callable[[Timegate], float],
) -> Callable[[float, float, Timegates], Judgment]:
    def judge(game_time: float, note_time: float, timegates: Timegates = NORMAL_TIMEGATES) -> Judgment:
        delta = abs(game_time - note_time)
        for gate in timegates:
            if delta < f(gate):
                return gate.value
        return UNJUDGED if game_time < note_time else MISSED

    return judge


judge_time = judge_time_with(lambda gate: gate.timegate)
judge_end_time = judge_time_with(lambda gate: gate.end_timegate)


def timegate(judgment: Judgment, timegates: Timegates = NORMAL_TIMEGATES) -> float:
    for gate in timegates:
        if gate.value == judgment:
            return gate.timegate
    raise ValueError(f"No timegate for {judgment!r}")


# OFFBEAT and worse
def is_bad(judgment: Judgment) -> bool:
    return judgment >= Judgment.OFFBEAT


def breaks_combo(judgment: Judgment) -> bool:
    return judgment == MISSED or is_bad(judgment)


def weight(judgment: Judgment) -> int:
    if judgment == Judgment.PGREAT:
        return 100
    if judgment == Judgment.GREAT:
        return 80
    if judgment == Judgment.GOOD:
        return 50
    return 0
