DEFAULT_MEASURE_SIZE = 1.0
BEATS_PER_WHOLE_MEASURE = 4


class TimeSignatures:
    """
    Measure sizes indexed by measure number (starting at 0).

    A size of 1.0 is a 4/4 measure (4 beats); 0.75 is 3/4 or 6/8.

    ::

        time_signatures.set(1, 0.75)
        time_signatures.measure_to_beat(0, 0.5)  # => 2.0
        time_signatures.measure_to_beat(1, 0.5)  # => 5.5
        time_signatures.measure_to_beat(2, 0.0)  # => 7.0
    """

    def __init__(self):
        self._values: dict[int, float] = {}

    def set(self, measure: int, value: float) -> None:
        if value <= 0:
            raise ValueError(f"measure size must be positive, got {value}")
        self._values[measure] = value

    def get(self, measure: int) -> float:
        return self._values.get(measure, DEFAULT_MEASURE_SIZE)

    def get_beats(self, measure: int) -> float:
        return self.get(measure) * BEATS_PER_WHOLE_MEASURE

    def measure_to_beat(self, measure: int, fraction: float) -> float:
        total = sum(self.get_beats(i) for i in range(measure))
        return total + self.get_beats(measure) * fraction
