import re
from dataclasses import dataclass, field
from dataclasses_json import dataclass_json, LetterCase

from custom_bms_io import BMSChart
from .utils import to_number

# "Title -Sub-", "Title ～Sub～", "Title (Sub)", "Title [Sub]", "Title <Sub>", in priority order
SUBTITLE_PATTERNS = [
    re.compile(r"^(.*\S)\s*-(.+?)-$"),
    re.compile(r"^(.*\S)\s*～(.+?)～$"),
    re.compile(r"^(.*\S)\s*\((.+?)\)$"),
    re.compile(r"^(.*\S)\s*\[(.+?)\]$"),
    re.compile(r"^(.*\S)\s*<(.+?)>$"),
]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class SongInfo:
    title: str = "NO TITLE"
    artist: str = "NO ARTIST"
    genre: str = "NO GENRE"
    # one line each; often the difficulty name (NORMAL, HYPER, ANOTHER)
    subtitles: list[str] = field(default_factory=list)
    subartists: list[str] = field(default_factory=list)
    # 1 BEGINNER, 2 NORMAL, 3 HYPER, 4 ANOTHER, 5 INSANE
    difficulty: int = 0
    level: int = 0

    @staticmethod
    def from_chart(chart: BMSChart) -> "SongInfo":
        info = {}
        title = chart.headers.get("title")
        artist = chart.headers.get("artist")
        genre = chart.headers.get("genre")
        difficulty = _to_int(chart.headers.get("difficulty"))
        level = _to_int(chart.headers.get("playlevel"))
        subtitles = chart.headers.get_all("subtitle")
        subartists = chart.headers.get_all("subartist")
        if title is not None and subtitles is None:
            title, subtitles = split_title(title)
        if title:
            info["title"] = title
        if artist:
            info["artist"] = artist
        if genre:
            info["genre"] = genre
        if subtitles:
            info["subtitles"] = [s for s in subtitles if s is not None]
        if subartists:
            info["subartists"] = [s for s in subartists if s is not None]
        if difficulty:
            info["difficulty"] = difficulty
        if level:
            info["level"] = level
        return SongInfo(**info)


def split_title(title: str) -> tuple[str, list[str] | None]:
    """Split a bracketed subtitle off the end of a title.

    ``"Exargon [HYPER]"`` becomes ``("Exargon", ["HYPER"])``; a title without
    one of the known bracket styles comes back unchanged with ``None``.
    """
    for pattern in SUBTITLE_PATTERNS:
        match = pattern.match(title)
        if match:
            return match.group(1), [match.group(2)]
    return title, None


def _to_int(value: str | None) -> int:
    number = to_number(value)
    return int(number) if number else 0
