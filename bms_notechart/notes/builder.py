from typing import Optional

from custom_bms_io import BMSChart, BMSObject
from custom_bms_io.schemas import AUTO_KEYSOUND_CHANNEL
from . import channels
from .note import BMSNote

# leading channel character -> how its objects become notes
_NORMAL_NOTE_CHANNELS = ("1", "2", "D", "E")
_LANDMINE_CHANNELS = ("D", "E")
_LONG_NOTE_CHANNELS = ("5", "6")


class Notes:
    """
    The notes of a chart, playable or not.

    Notes with a column are playable; notes without one are background
    keysounds. Build one with ``Notes.from_chart(chart, mapping=...)``.
    """

    CHANNEL_MAPPING = channels

    def __init__(self, notes: list[BMSNote]):
        for note in notes:
            if not isinstance(note, BMSNote):
                raise ValueError(f"Expected a BMSNote, got {note!r}")
        self._notes = notes

    def count(self) -> int:
        return len(self._notes)

    def all(self) -> list[BMSNote]:
        return self._notes[:]

    @staticmethod
    def from_chart(chart: BMSChart, mapping: Optional[dict[str, str]] = None) -> "Notes":
        if mapping is None:
            mapping = channels.IIDX_P1
        return _BMSNoteBuilder(chart, mapping).build()


# 5x/6x long-note channels pair up with the 1x/2x note channels
def _normalize_channel(channel: str) -> str:
    channel = channel.upper()
    if channel[0] == "5":
        return "1" + channel[1:]
    if channel[0] == "6":
        return "2" + channel[1:]
    return channel


class _BMSNoteBuilder:
    def __init__(self, chart: BMSChart, mapping: dict[str, str]):
        if not isinstance(mapping, dict):
            raise TypeError(f"mapping must be a dict, got {type(mapping).__name__}")
        self._chart = chart
        self._mapping = {key.upper(): value for key, value in mapping.items()}
        self._ln_obj = (chart.headers.get("lnobj") or "").lower()

    def build(self) -> Notes:
        notes: list[BMSNote] = []
        # scratch state for this pass only, keyed by normalized channel
        last_note: dict[str, BMSNote] = {}
        active_ln: dict[str, BMSNote] = {}
        for obj in self._chart.objects.all_sorted():
            kind = obj.channel[0].upper()
            # landmine values are damage amounts, never background keysounds
            if kind in _LANDMINE_CHANNELS and obj.channel.upper() not in self._mapping:
                continue
            if obj.channel == AUTO_KEYSOUND_CHANNEL or kind in _NORMAL_NOTE_CHANNELS:
                self._handle_normal_note(obj, notes, last_note)
            elif kind in _LONG_NOTE_CHANNELS:
                self._handle_long_note(obj, notes, active_ln)
        return Notes(notes)

    def _handle_normal_note(
        self, obj: BMSObject, notes: list[BMSNote], last_note: dict[str, BMSNote]
    ) -> None:
        channel = _normalize_channel(obj.channel)
        beat = self._get_beat(obj)
        if self._ln_obj and obj.value.lower() == self._ln_obj:
            # LNOBJ turns the previous note on this channel into a long note
            if channel in last_note:
                last_note[channel].end_beat = beat
            return
        note = BMSNote(beat=beat, keysound=obj.value, column=self._mapping.get(channel))
        last_note[channel] = note
        notes.append(note)

    def _handle_long_note(
        self, obj: BMSObject, notes: list[BMSNote], active_ln: dict[str, BMSNote]
    ) -> None:
        channel = _normalize_channel(obj.channel)
        beat = self._get_beat(obj)
        if channel in active_ln:
            note = active_ln.pop(channel)
            note.end_beat = beat
            notes.append(note)
        else:
            active_ln[channel] = BMSNote(
                beat=beat, keysound=obj.value, column=self._mapping.get(channel)
            )

    def _get_beat(self, obj: BMSObject) -> float:
        return self._chart.measure_to_beat(obj.measure, obj.fraction)
