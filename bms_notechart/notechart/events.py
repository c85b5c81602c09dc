from dataclasses import dataclass, field
from dataclasses_json import dataclass_json, LetterCase
from typing import Literal, Optional

from ..keysounds import KeySounds
from ..notes.note import BMSNote, exclude_none
from ..positioning import Positioning
from ..song_info import SongInfo
from ..spacing import Spacing
from ..timing import Timing

# max offsets (in ms) for +2 (PGREAT) and +1 (GREAT) in IIDX-style EX-score
ExpertJudgmentWindow = tuple[int, int]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(kw_only=True)
class GameEvent:
    beat: float
    # seconds from the start of the song
    time: float
    position: float


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(kw_only=True)
class SoundedEvent(GameEvent):
    keysound: str
    keysound_start: Optional[float] = exclude_none()
    keysound_end: Optional[float] = exclude_none()


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(kw_only=True)
class GameNote(SoundedEvent):
    id: int
    column: str
    end: Optional[GameEvent] = exclude_none()


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(kw_only=True)
class GameLandmine(GameEvent):
    id: int
    column: str


@dataclass(frozen=True)
class NoteInfo:
    # judgments a note can produce: 2 for long notes (press + release)
    combos: Literal[1, 2]


@dataclass
class NotechartImages:
    eyecatch: Optional[str] = None
    background: Optional[str] = None


@dataclass
class PlayerOptions:
    scratch: Literal["off", "left", "right"] = "left"
    double: bool = False

    def __post_init__(self):
        if self.scratch not in ("off", "left", "right"):
            raise ValueError(f"scratch must be 'off', 'left' or 'right', got {self.scratch!r}")


@dataclass(kw_only=True)
class NotechartInput:
    notes: list[BMSNote]
    timing: Timing
    keysounds: KeySounds
    song_info: SongInfo
    positioning: Positioning
    spacing: Spacing
    bar_lines: list[float]
    expert_judgment_window: ExpertJudgmentWindow = (18, 40)
    landmine_notes: list[BMSNote] = field(default_factory=list)
    images: Optional[NotechartImages] = None
