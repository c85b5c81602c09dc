import re
from typing import Literal, Optional

_DTX_HEADER = re.compile(r"^#[A-Za-z]\w*:")


def detect(data: str) -> Optional[Literal["bms", "dtx"]]:
    """Guess which dialect the chart source is written in.

    :returns: ``"dtx"`` if header sentences use ``#NAME:`` punctuation,
        ``"bms"`` if there are other control sentences, else ``None``.
    """
    has_sentences = False
    for line in data.splitlines():
        line = line.strip()
        if not line.startswith("#"):
            continue
        if _DTX_HEADER.match(line):
            return "dtx"
        has_sentences = True
    return "bms" if has_sentences else None
