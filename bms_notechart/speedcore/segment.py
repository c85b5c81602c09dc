import math
from dataclasses import dataclass


@dataclass(kw_only=True)
class Segment:
    t: float
    x: float
    # change of x per unit of t
    dx: float
    # whether t itself belongs to this segment (else to the previous one)
    inclusive: bool = True

    def __post_init__(self):
        for name in ("t", "x", "dx"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Segment.{name} must be a number, got {value!r}")
            if math.isnan(value):
                raise ValueError(f"Segment.{name} must not be NaN")
        if not isinstance(self.inclusive, bool):
            raise ValueError(f"Segment.inclusive must be a boolean, got {self.inclusive!r}")
