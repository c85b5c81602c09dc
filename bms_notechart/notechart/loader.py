import logging
from typing import Callable, Optional

import custom_bms_io as cbms
from custom_bms_io import BMSChart
from ..keysounds import KeySounds
from ..notes import Notes, BMSNote
from ..notes import channels
from ..positioning import Positioning
from ..song_info import SongInfo
from ..spacing import Spacing
from ..timing import Timing
from ..utils import to_number
from .events import ExpertJudgmentWindow, NotechartInput, PlayerOptions
from .notechart import Notechart

logger = logging.getLogger(__name__)


# #RANK -> EX-score judgment window
def _get_judgment_window(chart: BMSChart) -> ExpertJudgmentWindow:
    rank = to_number(chart.headers.get("rank"))
    if rank is None:
        logger.debug("No #RANK header, using the normal judgment window")
    match rank:
        case 0:
            return (8, 24)  # very hard
        case 1:
            return (15, 30)  # hard
        case 3:
            return (21, 60)  # easy
        case _:
            return (18, 40)  # normal


# one bar line per measure start, up to one measure past the last note
def _generate_bar_lines(notes: list[BMSNote], chart: BMSChart) -> list[float]:
    last_beat = max((note.end_beat or note.beat for note in notes), default=0)
    bar_lines = [0.0]
    current_beat = 0.0
    current_measure = 0
    while True:
        current_beat += chart.time_signatures.get_beats(current_measure)
        current_measure += 1
        bar_lines.append(current_beat)
        if current_beat > last_beat:
            break
    return bar_lines


def from_chart(chart: BMSChart, player_options: Optional[PlayerOptions] = None) -> Notechart:
    player_options = player_options or PlayerOptions()
    if player_options.double:
        mapping, landmine_mapping = channels.IIDX_DP, channels.IIDX_DP_LANDMINE
    else:
        mapping, landmine_mapping = channels.IIDX_P1, channels.IIDX_P1_LANDMINE

    notes = Notes.from_chart(chart, mapping=mapping).all()
    landmine_notes = Notes.from_chart(chart, mapping=landmine_mapping).all()

    data = NotechartInput(
        notes=notes,
        landmine_notes=landmine_notes,
        timing=Timing.from_chart(chart),
        keysounds=KeySounds.from_chart(chart),
        song_info=SongInfo.from_chart(chart),
        positioning=Positioning.from_chart(chart),
        spacing=Spacing.from_chart(chart),
        bar_lines=_generate_bar_lines(notes, chart),
        expert_judgment_window=_get_judgment_window(chart),
    )
    return Notechart(data, player_options)


def load_notechart(
    text: str,
    player_options: Optional[PlayerOptions] = None,
    format: Optional[str] = None,
    rng: Optional[Callable[[int], int]] = None,
) -> Notechart:
    """
    Compile chart source and assemble it into a Notechart.

    :param text: The chart source, already decoded.
    :param player_options: Scratch / double play options.
    :param format: ``"bms"`` or ``"dtx"``; detected from the text when omitted.
    :param rng: Random number generator for ``#RANDOM``.
    """
    format = format or cbms.detect(text) or "bms"
    result = cbms.compile(text, format=format, rng=rng)
    if result.warnings:
        logger.info("Compiled with %d warning(s)", len(result.warnings))
    return from_chart(result.chart, player_options)
