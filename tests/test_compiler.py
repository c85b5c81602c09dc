import logging

import pytest

import custom_bms_io as cbms


def compile_chart(text: str, **options) -> cbms.CompileResult:
    return cbms.compile(text, **options)


def test_headers_and_channels():
    result = compile_chart(
        "\n".join(
            [
                "#TITLE Hello World",
                "#BPM 140",
                "#00111:01020304",
                "this line is a comment",
            ]
        )
    )
    chart = result.chart
    assert chart.headers.get("title") == "Hello World"
    assert chart.headers.get("bpm") == "140"
    objects = chart.objects.all_sorted()
    assert [o.value for o in objects] == ["01", "02", "03", "04"]
    assert [o.fraction for o in objects] == [0, 0.25, 0.5, 0.75]
    assert all(o.measure == 1 and o.channel == "11" for o in objects)
    assert result.header_sentences == 2
    assert result.channel_sentences == 1
    assert result.warnings == []


def test_zero_values_are_not_objects():
    chart = compile_chart("#00111:00010000").chart
    objects = chart.objects.all()
    assert len(objects) == 1
    assert objects[0].fraction == 0.25


def test_line_endings_and_whitespace():
    chart = compile_chart("  #TITLE a  \r\n#ARTIST b\r#GENRE c\n").chart
    assert chart.headers.get("title") == "a"
    assert chart.headers.get("artist") == "b"
    assert chart.headers.get("genre") == "c"


def test_header_without_value():
    chart = compile_chart("#PLAYER").chart
    assert "player" in chart.headers
    assert chart.headers.get("player") is None


def test_time_signature():
    result = compile_chart("#00102:0.75")
    assert result.chart.time_signatures.get(1) == 0.75
    assert result.channel_sentences == 1
    assert result.chart.objects.all() == []


def test_invalid_time_signature_is_a_warning():
    result = compile_chart("#00102:abc")
    assert result.chart.time_signatures.get(1) == 1.0
    assert len(result.warnings) == 1
    assert result.warnings[0].line_number == 1


def test_random_if_taken():
    text = "\n".join(
        [
            "#RANDOM 1",
            "#IF 1",
            "#00111:01",
            "#00112:01",
            "#00113:01",
            "#ENDIF",
        ]
    )
    result = compile_chart(text)
    assert len(result.chart.objects.all()) == 3
    assert result.control_sentences == 3
    assert result.skipped_sentences == 0


def test_random_if_not_taken():
    text = "\n".join(
        [
            "#RANDOM 1",
            "#IF 2",
            "#00111:01",
            "#00112:01",
            "#TITLE hidden",
            "#ENDIF",
            "#00113:01",
        ]
    )
    result = compile_chart(text)
    assert [o.channel for o in result.chart.objects.all()] == ["13"]
    assert result.chart.headers.get("title") is None
    assert result.skipped_sentences == 3


def test_random_uses_rng():
    calls = []

    def rng(n):
        calls.append(n)
        return 2

    text = "\n".join(
        [
            "#RANDOM 3",
            "#IF 1",
            "#TITLE one",
            "#ENDIF",
            "#IF 2",
            "#TITLE two",
            "#ENDIF",
        ]
    )
    chart = compile_chart(text, rng=rng).chart
    assert calls == [3]
    assert chart.headers.get("title") == "two"


def test_default_rng_stays_in_range():
    text = "#RANDOM 2\n#IF 1\n#00111:01\n#ENDIF\n#IF 2\n#00112:01\n#ENDIF"
    for _ in range(20):
        objects = compile_chart(text).chart.objects.all()
        assert len(objects) == 1


def test_nested_random():
    values = iter([1, 2])
    text = "\n".join(
        [
            "#RANDOM 2",
            "#IF 1",
            "#RANDOM 2",
            "#IF 1",
            "#00111:01",
            "#ENDIF",
            "#IF 2",
            "#00112:01",
            "#ENDIF",
            "#ENDRANDOM",
            "#00113:01",
            "#ENDIF",
        ]
    )
    chart = compile_chart(text, rng=lambda n: next(values)).chart
    assert sorted(o.channel for o in chart.objects.all()) == ["12", "13"]


def test_else_branch():
    text = "#RANDOM 2\n#IF 1\n#TITLE one\n#ELSE\n#TITLE other\n#ENDIF"
    chart = compile_chart(text, rng=lambda n: 2).chart
    assert chart.headers.get("title") == "other"


def test_if_without_random_is_skipped():
    chart = compile_chart("#IF 1\n#TITLE hidden\n#ENDIF").chart
    assert chart.headers.get("title") is None


def test_unmatched_endif_is_ignored(caplog):
    text = "#ENDIF\n#RANDOM 1\n#IF 2\n#ENDIF\n#ENDIF\n#TITLE visible"
    with caplog.at_level(logging.WARNING, logger="custom_bms_io.loader"):
        result = compile_chart(text)
    assert result.chart.headers.get("title") == "visible"
    assert [w.line_number for w in result.warnings] == [1, 5]
    assert "#ENDIF" in caplog.text


def test_later_sentence_replaces_object():
    result = compile_chart("#00111:0102\n#00111:0003")
    assert [(o.fraction, o.value) for o in result.chart.objects.all_sorted()] == [
        (0, "01"),
        (0.5, "03"),
    ]


def test_auto_keysound_channel_accumulates():
    result = compile_chart("#00101:0102\n#00101:0304")
    assert len(result.chart.objects.all()) == 4


def test_malformed_sentences_are_warnings():
    result = compile_chart("#TITLE ok\n#!!!\n#\n#00111:01")
    assert result.malformed_sentences == 2
    assert [w.line_number for w in result.warnings] == [2, 3]
    assert result.chart.headers.get("title") == "ok"
    assert len(result.chart.objects.all()) == 1


def test_odd_length_channel_data():
    result = compile_chart("#00111:01020")
    assert [o.value for o in result.chart.objects.all_sorted()] == ["01", "02"]
    assert len(result.warnings) == 1


def test_ext_channel_sentence():
    chart = compile_chart("#EXT #00111:0101").chart
    assert len(chart.objects.all()) == 2


def test_dtx_format():
    text = "#TITLE: Song\n#BPM: 150\n#00111: 0101\n#00102: 0.5"
    chart = compile_chart(text, format="dtx").chart
    assert chart.headers.get("title") == "Song"
    assert chart.headers.get("bpm") == "150"
    assert len(chart.objects.all()) == 2
    assert chart.time_signatures.get(1) == 0.5


def test_unknown_format():
    with pytest.raises(ValueError):
        compile_chart("#TITLE x", format="osu")


def test_loads_and_load(tmp_path):
    path = tmp_path / "chart.bms"
    path.write_text("#TITLE file\n#00111:01", encoding="utf-8")
    with open(path, encoding="utf-8") as fp:
        chart = cbms.load(fp)
    assert chart.headers.get("title") == "file"
    assert cbms.loads("#TITLE text").headers.get("title") == "text"


def test_warning_serializes():
    result = compile_chart("#!")
    assert result.warnings[0].to_dict() == {"lineNumber": 1, "message": "Invalid command: #!"}


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#TITLE a\n#00111:01", "bms"),
        ("#TITLE: a\n#00111: 01", "dtx"),
        ("just some text", None),
        ("", None),
    ],
)
def test_detect(text, expected):
    assert cbms.detect(text) == expected
