from dataclasses import dataclass, field
from dataclasses_json import dataclass_json, LetterCase
from typing import Optional

from dataclasses_json.cfg import config

# channel used for background (auto) keysounds; objects on it never replace each other
AUTO_KEYSOUND_CHANNEL = "01"

# channel used for measure-size (time signature) sentences
TIME_SIGNATURE_CHANNEL = "02"


def exclude_none():
    return field(default=None, metadata=config(exclude=lambda x: x is None))


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class BMSObject:
    channel: str
    measure: int
    fraction: float
    value: str
    line_number: Optional[int] = exclude_none()

    def __post_init__(self):
        if not isinstance(self.channel, str) or len(self.channel) != 2:
            raise ValueError(f"channel must be a 2-character code, got {self.channel!r}")
        if not isinstance(self.value, str) or len(self.value) != 2:
            raise ValueError(f"value must be a 2-character code, got {self.value!r}")
        if self.measure < 0:
            raise ValueError(f"measure must be non-negative, got {self.measure}")
        if not 0 <= self.fraction < 1:
            raise ValueError(f"fraction must be in [0, 1), got {self.fraction}")

    @property
    def position(self) -> float:
        return self.measure + self.fraction


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class CompileWarning:
    line_number: int
    message: str
