import math
from typing import Optional


# header values like "#BPM 150" or "#SCROLL01 0.5"; None when missing or not a finite number
def to_number(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
