import custom_bms_io as cbms
from bms_notechart import SongInfo, Timing, Notes, from_chart
from pathlib import Path
import os, re, json

charts_dir = Path(os.environ.get("CHARTS_DIR", "charts"))
output_dir = Path("out")
CHART_SUFFIXES = {".bms", ".bme", ".bml", ".pms", ".dtx"}


def sanitize_level_name(name: str) -> str:
    sanitized_name = re.sub(r"[^a-zA-Z0-9 _-]", "", name)
    return sanitized_name


# "song.sjis.bms" forces Shift-JIS, "song.euc_kr.bms" EUC-KR, "song.utf8.bms" UTF-8
def read_chart_text(path: Path) -> str:
    data = path.read_bytes()
    if re.search(r"\.sjis\.\w+$", path.name, re.IGNORECASE):
        encodings = ["shift_jis"]
    elif re.search(r"\.euc_kr\.\w+$", path.name, re.IGNORECASE):
        encodings = ["euc_kr"]
    elif re.search(r"\.utf8\.\w+$", path.name, re.IGNORECASE):
        encodings = ["utf-8"]
    else:
        encodings = ["utf-8", "cp932"]
    for encoding in encodings:
        try:
            return data.decode(encoding).lstrip("\ufeff")
        except UnicodeDecodeError:
            continue
    return data.decode(encodings[-1], errors="replace")


for chart_path in sorted(charts_dir.iterdir()):
    if chart_path.suffix.lower() not in CHART_SUFFIXES:
        continue
    text = read_chart_text(chart_path)
    result = cbms.compile(text, format=cbms.detect(text) or "bms")
    chart = result.chart
    song_info = SongInfo.from_chart(chart)
    notechart = from_chart(chart)

    level_name: str = sanitize_level_name(song_info.title) or chart_path.stem
    output_files_dir = output_dir / level_name
    output_files_dir.mkdir(parents=True, exist_ok=True)

    summary = {
        "songInfo": song_info.to_dict(),
        "notes": Notes.from_chart(chart).count(),
        "playable": len(notechart.notes),
        "landmines": len(notechart.landmines),
        "autos": len(notechart.autos),
        "duration": notechart.duration,
        "bpmEvents": Timing.from_chart(chart).get_event_beats(),
        "samples": notechart.samples,
        "warnings": [w.to_dict() for w in result.warnings],
    }
    with open(output_files_dir / "notechart.json", "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=4, ensure_ascii=False)
    print(f"Compiled {chart_path.name} ({len(result.warnings)} warnings)")
