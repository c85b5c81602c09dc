import dataclasses
from typing import Optional

from ..notes.note import BMSNote
from .events import (
    GameEvent,
    GameLandmine,
    GameNote,
    NoteInfo,
    NotechartInput,
    PlayerOptions,
    SoundedEvent,
)

_REQUIRED_FIELDS = (
    "notes",
    "timing",
    "keysounds",
    "song_info",
    "positioning",
    "spacing",
    "bar_lines",
)

# columns that 5-key charts get shifted across
_COLUMNS_TO_SHIFT = ["1", "2", "3", "4", "5", "6", "7"]


class Notechart:
    """
    Everything the game needs to play one player's chart: playable notes,
    landmines, background keysounds and bar lines, all placed in both
    seconds and scroll position.
    """

    def __init__(self, data: NotechartInput, player_options: Optional[PlayerOptions] = None):
        for name in _REQUIRED_FIELDS:
            if getattr(data, name, None) is None:
                raise ValueError(f'Expected "data.{name}"')
        player_options = player_options or PlayerOptions()

        self.expert_judgment_window = data.expert_judgment_window
        bms_notes = _pre_transform(data.notes, player_options)

        self._timing = data.timing
        self._positioning = data.positioning
        self._spacing = data.spacing
        self._keysounds = data.keysounds
        self._song_info = data.song_info
        self._images = data.images
        self._duration = 0.0
        self._notes = self._generate_playable_notes(bms_notes)
        self._landmines = self._generate_landmines(data.landmine_notes or [])
        self._autos = self._generate_auto_keysound_events(bms_notes)
        self._bar_lines = [self._generate_event(beat) for beat in data.bar_lines]
        self._samples = self._generate_keysound_files()
        self._infos = {note.id: NoteInfo(combos=2 if note.end else 1) for note in self._notes}

    @property
    def notes(self) -> list[GameNote]:
        return self._notes

    @property
    def landmines(self) -> list[GameLandmine]:
        return self._landmines

    @property
    def autos(self) -> list[SoundedEvent]:
        return self._autos

    @property
    def samples(self) -> list[str]:
        return self._samples

    @property
    def keysounds(self) -> dict[str, str]:
        return self._keysounds.all()

    @property
    def bar_lines(self) -> list[GameEvent]:
        return self._bar_lines

    @property
    def columns(self) -> list[str]:
        return ["SC", "1", "2", "3", "4", "5", "6", "7"]

    # time of the last playable event
    @property
    def duration(self) -> float:
        return self._duration

    @property
    def song_info(self):
        return self._song_info

    @property
    def eyecatch_image(self) -> str:
        return (self._images and self._images.eyecatch) or "eyecatch_image.png"

    @property
    def background_image(self) -> str:
        return (self._images and self._images.background) or "back_image.png"

    def info(self, note: GameNote) -> Optional[NoteInfo]:
        return self._infos.get(note.id)

    def beat_to_seconds(self, beat: float) -> float:
        return self._timing.beat_to_seconds(beat)

    def beat_to_position(self, beat: float) -> float:
        return self._positioning.position(beat)

    def seconds_to_beat(self, seconds: float) -> float:
        return self._timing.seconds_to_beat(seconds)

    def seconds_to_position(self, seconds: float) -> float:
        return self.beat_to_position(self.seconds_to_beat(seconds))

    # bar line lookup, clamped to the last bar line
    def measure_to_beat(self, measure: int) -> float:
        if 0 <= measure < len(self._bar_lines):
            return self._bar_lines[measure].beat
        return self._bar_lines[-1].beat

    def bpm_at_beat(self, beat: float) -> float:
        return self._timing.bpm_at_beat(beat)

    def scroll_speed_at_beat(self, beat: float) -> float:
        return self._positioning.speed(beat)

    def spacing_at_beat(self, beat: float) -> float:
        return self._spacing.factor(beat)

    def get_key_mode(self, scratch: str) -> str:
        used_columns = {note.column for note in self._notes}
        if scratch == "off" and "1" not in used_columns and "7" not in used_columns:
            return "5K"
        if scratch == "left" and "6" not in used_columns and "7" not in used_columns:
            return "5K"
        if scratch == "right" and "1" not in used_columns and "2" not in used_columns:
            return "5K"
        return "7K"

    def _generate_playable_notes(self, bms_notes: list[BMSNote]) -> list[GameNote]:
        notes = []
        for note in bms_notes:
            if not note.column:
                continue
            event = self._generate_event(note.beat)
            game_note = GameNote(
                **dataclasses.asdict(event),
                id=len(notes) + 1,
                column=note.column,
                keysound=note.keysound,
                keysound_start=note.keysound_start,
                keysound_end=note.keysound_end,
            )
            self._update_duration(game_note)
            if note.end_beat is not None:
                game_note.end = self._generate_event(note.end_beat)
                self._update_duration(game_note.end)
            notes.append(game_note)
        return notes

    def _generate_landmines(self, bms_notes: list[BMSNote]) -> list[GameLandmine]:
        landmines = []
        for note in bms_notes:
            if not note.column:
                continue
            event = self._generate_event(note.beat)
            landmine = GameLandmine(
                **dataclasses.asdict(event), id=len(landmines) + 1, column=note.column
            )
            self._update_duration(landmine)
            landmines.append(landmine)
        return landmines

    def _generate_auto_keysound_events(self, bms_notes: list[BMSNote]) -> list[SoundedEvent]:
        return [
            SoundedEvent(
                **dataclasses.asdict(self._generate_event(note.beat)),
                keysound=note.keysound,
                keysound_start=note.keysound_start,
                keysound_end=note.keysound_end,
            )
            for note in bms_notes
            if not note.column
        ]

    def _generate_keysound_files(self) -> list[str]:
        files: list[str] = []
        for event in [*self._notes, *self._autos]:
            file = self._keysounds.get(event.keysound)
            if file and file not in files:
                files.append(file)
        return files

    def _update_duration(self, event: GameEvent) -> None:
        if event.time > self._duration:
            self._duration = event.time

    def _generate_event(self, beat: float) -> GameEvent:
        return GameEvent(
            beat=beat,
            time=self.beat_to_seconds(beat),
            position=self.beat_to_position(beat),
        )


# 7 keys when the 6th or 7th column is used
def _get_keys(bms_notes: list[BMSNote]) -> str:
    for note in bms_notes:
        if note.column in ("6", "7"):
            return "7K"
    return "5K"


def _shift_note(note: BMSNote, amount: int) -> BMSNote:
    if note.column not in _COLUMNS_TO_SHIFT:
        return note
    new_index = _COLUMNS_TO_SHIFT.index(note.column) + amount
    if new_index >= len(_COLUMNS_TO_SHIFT):
        raise ValueError(
            f"Column {note.column} cannot be shifted by {amount}: past the last column"
        )
    return dataclasses.replace(note, column=_COLUMNS_TO_SHIFT[new_index])


def _pre_transform(bms_notes: list[BMSNote], player_options: PlayerOptions) -> list[BMSNote]:
    keys = _get_keys(bms_notes)
    notes = list(bms_notes)
    if player_options.scratch == "off":
        notes = [
            dataclasses.replace(note, column=None) if note.column == "SC" else note
            for note in notes
        ]
    if keys == "5K":
        if player_options.scratch == "off":
            notes = [_shift_note(note, 1) for note in notes]
        elif player_options.scratch == "right":
            notes = [_shift_note(note, 2) for note in notes]
    return notes
