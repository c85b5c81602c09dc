import logging
import math
import random
import re

from dataclasses import dataclass, field
from typing import Callable, Literal, Optional, TextIO
from .chart import BMSChart
from .schemas import BMSObject, CompileWarning, TIME_SIGNATURE_CHANNEL

logger = logging.getLogger(__name__)

Format = Literal["bms", "dtx"]

_CONTROL_MATCHERS = {
    "random": re.compile(r"^#RANDOM\s+(\d+)$", re.IGNORECASE),
    "if": re.compile(r"^#IF\s+(\d+)$", re.IGNORECASE),
    "else": re.compile(r"^#ELSE$", re.IGNORECASE),
    "endif": re.compile(r"^#ENDIF$", re.IGNORECASE),
    "endrandom": re.compile(r"^#ENDRANDOM$", re.IGNORECASE),
}

# the two dialects only differ in the punctuation after the channel / header name
MATCHERS = {
    "bms": {
        "time_signature": re.compile(rf"^#(\d\d\d){TIME_SIGNATURE_CHANNEL}:(\S*)$"),
        "channel": re.compile(r"^#(?:EXT\s+#)?(\d\d\d)(\S\S):(\S*)$"),
        "header": re.compile(r"^#(\w+)(?:\s+(\S.*))?$"),
    },
    "dtx": {
        "time_signature": re.compile(rf"^#(\d\d\d){TIME_SIGNATURE_CHANNEL}:\s*(\S*)$"),
        "channel": re.compile(r"^#(?:EXT\s+#)?(\d\d\d)(\S\S):\s*(\S*)$"),
        "header": re.compile(r"^#(\w+):(?:\s+(\S.*))?$"),
    },
}


@dataclass
class CompileResult:
    chart: BMSChart
    header_sentences: int = 0
    channel_sentences: int = 0
    control_sentences: int = 0
    skipped_sentences: int = 0
    malformed_sentences: int = 0
    warnings: list[CompileWarning] = field(default_factory=list)


# uniform integer in 1..n
def _default_rng(n: int) -> int:
    return 1 + math.floor(random.random() * n)


def _each_line(text: str):
    for index, line in enumerate(re.split(r"\r\n|\r|\n", text)):
        yield index + 1, line.strip()


def compile(
    text: str,
    format: Format = "bms",
    rng: Optional[Callable[[int], int]] = None,
) -> CompileResult:
    """
    Compile chart source text into a BMSChart.

    Malformed sentences never abort compilation; they are counted and
    reported in ``CompileResult.warnings``.

    :param text: The chart source, already decoded.
    :param format: ``"bms"`` or ``"dtx"``.
    :param rng: Called with ``n`` for every ``#RANDOM n``; must return an integer in ``1..n``.
    :return: A CompileResult holding the chart and diagnostics.
    """
    if format not in MATCHERS:
        raise ValueError(f"Unknown chart format {format!r} (expected one of {', '.join(MATCHERS)})")
    matcher = MATCHERS[format]
    rng = rng or _default_rng

    chart = BMSChart()
    result = CompileResult(chart=chart)
    random_stack: list[int] = []
    # the root entry is never popped: top level is never skipped
    skip_stack: list[bool] = [False]

    def warn(line_number: int, message: str) -> None:
        logger.warning("Line %d: %s", line_number, message)
        result.warnings.append(CompileWarning(line_number=line_number, message=message))

    def handle_channel_sentence(measure: int, channel: str, data: str, line_number: int) -> None:
        if len(data) % 2 != 0:
            warn(line_number, f"Channel data has an odd length, ignoring the last character: {data}")
        items = len(data) // 2
        for i in range(items):
            value = data[i * 2 : i * 2 + 2]
            if value == "00":
                continue
            chart.objects.add(
                BMSObject(
                    channel=channel,
                    measure=measure,
                    fraction=i / items,
                    value=value,
                    line_number=line_number,
                )
            )

    for line_number, line in _each_line(text):
        if not line.startswith("#"):
            continue

        if match := _CONTROL_MATCHERS["random"].match(line):
            result.control_sentences += 1
            random_stack.append(rng(int(match.group(1))))
            continue
        if match := _CONTROL_MATCHERS["if"].match(line):
            result.control_sentences += 1
            current = random_stack[-1] if random_stack else None
            skip_stack.append(current != int(match.group(1)))
            continue
        if _CONTROL_MATCHERS["else"].match(line):
            result.control_sentences += 1
            if len(skip_stack) > 1:
                skip_stack[-1] = not skip_stack[-1]
            else:
                warn(line_number, "#ELSE without a matching #IF, ignoring")
            continue
        if _CONTROL_MATCHERS["endif"].match(line):
            result.control_sentences += 1
            if len(skip_stack) > 1:
                skip_stack.pop()
            else:
                warn(line_number, "#ENDIF without a matching #IF, ignoring")
            continue
        if _CONTROL_MATCHERS["endrandom"].match(line):
            result.control_sentences += 1
            if random_stack:
                random_stack.pop()
            continue

        skipped = skip_stack[-1]
        if match := matcher["time_signature"].match(line):
            result.channel_sentences += 1
            if skipped:
                result.skipped_sentences += 1
                continue
            try:
                size = float(match.group(2))
            except ValueError:
                size = 0.0
            if size > 0 and math.isfinite(size):
                chart.time_signatures.set(int(match.group(1)), size)
            else:
                warn(line_number, f"Invalid measure size: {match.group(2)!r}")
        elif match := matcher["channel"].match(line):
            result.channel_sentences += 1
            if skipped:
                result.skipped_sentences += 1
                continue
            handle_channel_sentence(
                int(match.group(1)), match.group(2), match.group(3), line_number
            )
        elif match := matcher["header"].match(line):
            result.header_sentences += 1
            if skipped:
                result.skipped_sentences += 1
                continue
            chart.headers.set(match.group(1), match.group(2))
        else:
            result.malformed_sentences += 1
            warn(line_number, f"Invalid command: {line}")

    return result


def load(fp: TextIO, **options) -> BMSChart:
    return loads(fp.read(), **options)


def loads(data: str, **options) -> BMSChart:
    """
    Parse chart source into a BMSChart, discarding diagnostics.

    :param data: The chart source.
    :return: A BMSChart object.
    """
    return compile(data, **options).chart
