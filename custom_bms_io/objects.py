from .schemas import BMSObject, AUTO_KEYSOUND_CHANNEL


class BMSObjects:
    """
    Collection of the timed objects in a chart.

    Adding an object at the same channel, measure and fraction as an existing
    one replaces it in place, except on the auto keysound channel where
    objects accumulate.
    """

    def __init__(self):
        self._objects: list[BMSObject] = []

    def add(self, obj: BMSObject) -> None:
        if obj.channel != AUTO_KEYSOUND_CHANNEL:
            for i, test in enumerate(self._objects):
                if (
                    test.channel == obj.channel
                    and test.measure == obj.measure
                    and test.fraction == obj.fraction
                ):
                    self._objects[i] = obj
                    return
        self._objects.append(obj)

    def all(self) -> list[BMSObject]:
        return self._objects[:]

    # sorted() is stable, so ties keep insertion order
    def all_sorted(self) -> list[BMSObject]:
        return sorted(self._objects, key=lambda x: x.measure + x.fraction)

    def __len__(self) -> int:
        return len(self._objects)
