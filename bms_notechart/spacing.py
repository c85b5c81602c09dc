from typing import Optional

from custom_bms_io import BMSChart
from .speedcore import Speedcore, Segment
from .utils import to_number

SPACING_CHANNEL = "SP"


class Spacing:
    """
    Relationship between beats and the note spacing factor (HI-SPEED).

    Spacing keyframes come from ``#SPEEDxx`` headers placed on the ``SP``
    channel and are interpolated linearly::

        #SPEED01 1.0
        #SPEED02 2.0
        #001SP:01010202

    Here the factor starts at 1.0x and gradually becomes 2.0x. Without
    any keyframe the factor is always 1.
    """

    def __init__(self, segments: list[Segment]):
        self._speedcore: Optional[Speedcore] = Speedcore(segments) if segments else None

    def factor(self, beat: float) -> float:
        if self._speedcore is None:
            return 1
        return self._speedcore.x(beat)

    @staticmethod
    def from_chart(chart: BMSChart) -> "Spacing":
        keyframes: list[tuple[float, float]] = []
        for obj in chart.objects.all_sorted():
            if obj.channel != SPACING_CHANNEL:
                continue
            factor = to_number(chart.headers.get("speed" + obj.value))
            if factor is None:
                continue
            keyframes.append((chart.measure_to_beat(obj.measure, obj.fraction), factor))
        return Spacing.from_keyframes(keyframes)

    @staticmethod
    def from_keyframes(keyframes: list[tuple[float, float]]) -> "Spacing":
        """
        :param keyframes: ``(beat, factor)`` pairs sorted by beat.
        """
        segments: list[Segment] = []
        for beat, factor in keyframes:
            if segments:
                previous = segments[-1]
                # keyframes on the same beat jump instead of interpolating
                if beat != previous.t:
                    previous.dx = (factor - previous.x) / (beat - previous.t)
            segments.append(Segment(t=beat, x=factor, dx=0, inclusive=True))
        if segments:
            segments.insert(0, Segment(t=0, x=segments[0].x, dx=0, inclusive=True))
        return Spacing(segments)
