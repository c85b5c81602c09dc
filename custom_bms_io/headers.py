from typing import Callable, Iterator, Optional


class BMSHeaders:
    """
    Header sentences of a chart, such as ``#TITLE``, ``#ARTIST`` and ``#BPM``.

    Field names are case-insensitive. ``get`` returns the latest value set
    for a field and ``get_all`` returns every value in the order it was set,
    which matters for fields that may repeat, like ``#SUBTITLE``.
    """

    def __init__(self):
        self._data: dict[str, Optional[str]] = {}
        self._data_all: dict[str, list[Optional[str]]] = {}

    def each(self, callback: Callable[[str, Optional[str]], None]) -> None:
        for key, value in self._data.items():
            callback(key, value)

    def items(self) -> Iterator[tuple[str, Optional[str]]]:
        return iter(list(self._data.items()))

    def get(self, name: str) -> Optional[str]:
        return self._data.get(name.lower())

    def get_all(self, name: str) -> Optional[list[Optional[str]]]:
        values = self._data_all.get(name.lower())
        return list(values) if values is not None else None

    def set(self, name: str, value: Optional[str]) -> None:
        key = name.lower()
        self._data[key] = value
        self._data_all.setdefault(key, []).append(value)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._data

    def __len__(self) -> int:
        return len(self._data)
