from typing import Callable, Generic, Sequence, TypeVar

from .segment import Segment

__all__ = ["Speedcore", "Segment"]

S = TypeVar("S", bound=Segment)


def _t(segment: Segment) -> float:
    return segment.t


def _x(segment: Segment) -> float:
    return segment.x


class Speedcore(Generic[S]):
    """
    Keyframed linear motion in one dimension.

    Each segment ``{t, x, dx}`` means ``x(t) == x`` at ``t`` and
    ``x(t + d) == x + dx * d`` afterwards, until the next segment starts.
    Timing uses it with ``t`` in seconds and ``x`` in beats: a song at 140 BPM
    that changes to 160 BPM at beat 32 and back to 140 BPM at beat 160 is::

        [Segment(t=0.000,  x=0,   dx=2.333),
         Segment(t=13.714, x=32,  dx=2.667),
         Segment(t=61.714, x=160, dx=2.333)]

    A STOP is a zero-rate segment followed by a non-inclusive one that
    resumes the tempo. A 2-beat stop at beat 32 of a 150 BPM song::

        [Segment(t=0.0,  x=0,  dx=2.5),
         Segment(t=12.8, x=32, dx=0),
         Segment(t=13.6, x=32, dx=2.5, inclusive=False)]

    Segments must be sorted by ``t`` (and therefore by ``x``); the last one
    extends to infinity.
    """

    def __init__(self, segments: Sequence[S]):
        if not segments:
            raise ValueError("Speedcore needs at least one segment")
        for segment in segments:
            if not isinstance(segment, Segment):
                raise ValueError(f"Expected a Segment, got {segment!r}")
        self._segments: list[S] = list(segments)

    @property
    def segments(self) -> list[S]:
        return self._segments[:]

    def _reached(self, index: int, target: Callable[[Segment], float], position: float) -> bool:
        if index >= len(self._segments):
            return False
        segment = self._segments[index]
        value = target(segment)
        return position >= value if segment.inclusive else position > value

    def _segment_at(self, target: Callable[[Segment], float], position: float) -> S:
        for i, segment in enumerate(self._segments):
            if not self._reached(i + 1, target, position):
                return segment
        raise RuntimeError("No segment matched the position (this should never happen)!")

    def segment_at_x(self, x: float) -> S:
        return self._segment_at(_x, x)

    def segment_at_t(self, t: float) -> S:
        return self._segment_at(_t, t)

    # inverse mapping; a zero rate is treated as 1 so holds do not divide by zero
    def t(self, x: float) -> float:
        segment = self.segment_at_x(x)
        return segment.t + (x - segment.x) / (segment.dx or 1)

    def x(self, t: float) -> float:
        segment = self.segment_at_t(t)
        return segment.x + (t - segment.t) * segment.dx

    def dx(self, t: float) -> float:
        return self.segment_at_t(t).dx
