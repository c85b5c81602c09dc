from .version import __version__
from .speedcore import Speedcore, Segment
from .timing import Timing, TimingSegment, BPMTimingAction, StopTimingAction
from .positioning import Positioning
from .spacing import Spacing
from .keysounds import KeySounds
from .song_info import SongInfo, split_title
from .notes import Notes, BMSNote
from .notechart import (
    Notechart,
    NotechartInput,
    PlayerOptions,
    from_chart,
    load_notechart,
)
from . import judgments
