from .headers import BMSHeaders
from .objects import BMSObjects
from .time_signatures import TimeSignatures


class BMSChart:
    """
    A compiled chart: headers, objects and time signatures.

    ``#RANDOM`` blocks are already resolved by the time a chart exists, so a
    chart only holds the sentences that survived compilation. Use the
    derivations in ``bms_notechart`` (``Timing``, ``Notes``, ``SongInfo``...)
    to get anything useful out of it.
    """

    def __init__(self):
        self.headers = BMSHeaders()
        self.objects = BMSObjects()
        self.time_signatures = TimeSignatures()

    def measure_to_beat(self, measure: int, fraction: float) -> float:
        return self.time_signatures.measure_to_beat(measure, fraction)
