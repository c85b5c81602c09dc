from dataclasses import dataclass, field
from dataclasses_json import dataclass_json, LetterCase
from typing import Optional

from dataclasses_json.cfg import config


def exclude_none():
    return field(default=None, metadata=config(exclude=lambda x: x is None))


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(kw_only=True)
class BMSNote:
    beat: float
    keysound: str
    # set for long notes
    end_beat: Optional[float] = exclude_none()
    # None means a background (auto) keysound
    column: Optional[str] = exclude_none()
    # [bmson] seconds into the sound file to start / stop playback
    keysound_start: Optional[float] = exclude_none()
    keysound_end: Optional[float] = exclude_none()

    def __post_init__(self):
        if isinstance(self.beat, bool) or not isinstance(self.beat, (int, float)):
            raise ValueError(f"beat must be a number, got {self.beat!r}")
        if not isinstance(self.keysound, str):
            raise ValueError(f"keysound must be a string, got {self.keysound!r}")
        if self.end_beat is not None and self.end_beat < self.beat:
            raise ValueError(f"end_beat {self.end_beat} is before beat {self.beat}")
        if self.column is not None and not isinstance(self.column, str):
            raise ValueError(f"column must be a string, got {self.column!r}")

    @property
    def is_long(self) -> bool:
        return self.end_beat is not None
