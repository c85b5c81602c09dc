import logging
from dataclasses import dataclass
from typing import Literal, Union

from custom_bms_io import BMSChart
from .speedcore import Speedcore, Segment
from .utils import to_number

logger = logging.getLogger(__name__)

DEFAULT_BPM = 60.0

# stop durations in the #STOPxx header are in 1/192 notes
STOP_UNITS_PER_BEAT = 48

# at the same beat, a tempo change applies before a stop
_PRECEDENCE = {"bpm": 1, "stop": 2}


@dataclass(kw_only=True)
class TimingSegment(Segment):
    bpm: float


@dataclass
class BPMTimingAction:
    beat: float
    bpm: float
    type: Literal["bpm"] = "bpm"


@dataclass
class StopTimingAction:
    beat: float
    stop_beats: float
    type: Literal["stop"] = "stop"


TimingAction = Union[BPMTimingAction, StopTimingAction]


class Timing:
    """
    Conversion between musical time (beats) and metric time (seconds).

    Built from an initial BPM and a list of actions (tempo changes and
    stops). Use ``Timing.from_chart`` to get one from a compiled chart.
    """

    def __init__(self, initial_bpm: float, actions: list[TimingAction]):
        bpm = initial_bpm
        beat = 0.0
        seconds = 0.0
        segments: list[TimingSegment] = [
            TimingSegment(t=0, x=0, dx=bpm / 60, bpm=bpm, inclusive=True)
        ]
        actions = sorted(actions, key=lambda a: (a.beat, _PRECEDENCE[a.type]))
        for action in actions:
            action_seconds = seconds + (action.beat - beat) * 60 / bpm
            if isinstance(action, BPMTimingAction):
                bpm = action.bpm
                segments.append(
                    TimingSegment(
                        t=action_seconds, x=action.beat, dx=bpm / 60, bpm=bpm, inclusive=True
                    )
                )
            elif isinstance(action, StopTimingAction):
                segments.append(
                    TimingSegment(t=action_seconds, x=action.beat, dx=0, bpm=bpm, inclusive=True)
                )
                action_seconds += (action.stop_beats or 0) * 60 / bpm
                segments.append(
                    TimingSegment(
                        t=action_seconds, x=action.beat, dx=bpm / 60, bpm=bpm, inclusive=False
                    )
                )
            else:
                raise ValueError(f"Unrecognized timing action: {action!r}")
            beat = action.beat
            seconds = action_seconds
        self._speedcore: Speedcore[TimingSegment] = Speedcore(segments)
        self._event_beats = list(dict.fromkeys(action.beat for action in actions))

    def beat_to_seconds(self, beat: float) -> float:
        return self._speedcore.t(beat)

    def seconds_to_beat(self, seconds: float) -> float:
        return self._speedcore.x(seconds)

    def bpm_at_beat(self, beat: float) -> float:
        return self._speedcore.segment_at_x(beat).bpm

    def get_event_beats(self) -> list[float]:
        return self._event_beats[:]

    @staticmethod
    def from_chart(chart: BMSChart) -> "Timing":
        actions: list[TimingAction] = []
        for obj in chart.objects.all():
            beat = chart.measure_to_beat(obj.measure, obj.fraction)
            if obj.channel == "03":
                try:
                    bpm = float(int(obj.value, 16))
                except ValueError:
                    logger.debug("Ignoring non-hexadecimal BPM change %r", obj.value)
                    continue
                actions.append(BPMTimingAction(beat=beat, bpm=bpm))
            elif obj.channel == "08":
                bpm = to_number(chart.headers.get("bpm" + obj.value))
                if bpm is None:
                    continue
                actions.append(BPMTimingAction(beat=beat, bpm=bpm))
            elif obj.channel == "09":
                stop = to_number(chart.headers.get("stop" + obj.value))
                actions.append(
                    StopTimingAction(beat=beat, stop_beats=(stop or 0) / STOP_UNITS_PER_BEAT)
                )
        # a tempo of zero would make every later beat unreachable
        for action in actions[:]:
            if isinstance(action, BPMTimingAction) and action.bpm <= 0:
                logger.debug("Ignoring non-positive BPM change %r at beat %s", action.bpm, action.beat)
                actions.remove(action)

        initial_bpm = to_number(chart.headers.get("bpm"))
        if not initial_bpm or initial_bpm <= 0:
            logger.debug("No usable #BPM header, defaulting to %s", DEFAULT_BPM)
            initial_bpm = DEFAULT_BPM
        return Timing(initial_bpm, actions)
