from custom_bms_io import BMSChart
from .speedcore import Speedcore, Segment
from .utils import to_number

SCROLL_CHANNEL = "SC"


class Positioning:
    """
    Relationship between beats and the on-screen scroll position.

    Segments have ``t`` in beats, ``x`` as the total scroll amount at ``t``
    and ``dx`` as the scroll amount per beat (StepMania's ``#SCROLL``).
    """

    def __init__(self, segments: list[Segment]):
        self._speedcore = Speedcore(segments)

    def speed(self, beat: float) -> float:
        return self._speedcore.dx(beat)

    def position(self, beat: float) -> float:
        return self._speedcore.x(beat)

    @staticmethod
    def from_chart(chart: BMSChart) -> "Positioning":
        x = 0.0
        segments = [Segment(t=0, x=x, dx=1, inclusive=True)]
        for obj in chart.objects.all_sorted():
            if obj.channel != SCROLL_CHANNEL:
                continue
            beat = chart.measure_to_beat(obj.measure, obj.fraction)
            dx = to_number(chart.headers.get("scroll" + obj.value))
            if dx is None:
                continue
            previous = segments[-1]
            x += (beat - previous.t) * previous.dx
            if beat == 0 and len(segments) == 1:
                segments[0].dx = dx
            else:
                segments.append(Segment(t=beat, x=x, dx=dx, inclusive=True))
        return Positioning(segments)
