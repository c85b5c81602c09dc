import re
from typing import Optional

import base36

from custom_bms_io import BMSChart

_WAV_HEADER = re.compile(r"^wav(\S\S)$", re.IGNORECASE)


class KeySounds:
    """Mapping from two-character keysound ids to sound file names."""

    def __init__(self, mapping: dict[str, str]):
        self._map = {key.lower(): value for key, value in mapping.items()}

    def get(self, id: str) -> Optional[str]:
        return self._map.get(id.lower())

    # ids are base-36 numbers ("01".."ZZ")
    @staticmethod
    def index_of(id: str) -> int:
        return base36.loads(id.lower())

    def files(self) -> list[str]:
        files: list[str] = []
        for _, file in sorted(self._map.items(), key=lambda x: _sort_key(x[0])):
            if file not in files:
                files.append(file)
        return files

    def all(self) -> dict[str, str]:
        return dict(self._map)

    def __len__(self) -> int:
        return len(self._map)

    @staticmethod
    def from_chart(chart: BMSChart) -> "KeySounds":
        mapping: dict[str, str] = {}
        for name, value in chart.headers.items():
            match = _WAV_HEADER.match(name)
            if not match or value is None:
                continue
            mapping[match.group(1).lower()] = value
        return KeySounds(mapping)


# ids that are not valid base-36 go last, in name order
def _sort_key(id: str) -> tuple[int, int, str]:
    try:
        return 0, KeySounds.index_of(id), id
    except ValueError:
        return 1, 0, id
