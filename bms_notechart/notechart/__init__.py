from .events import (
    GameEvent,
    SoundedEvent,
    GameNote,
    GameLandmine,
    NoteInfo,
    NotechartImages,
    NotechartInput,
    PlayerOptions,
    ExpertJudgmentWindow,
)
from .notechart import Notechart
from .loader import from_chart, load_notechart
