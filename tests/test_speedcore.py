import pytest

from bms_notechart.speedcore import Speedcore, Segment


def tempo_core() -> Speedcore:
    # 140 BPM, 160 BPM from beat 32, back to 140 BPM at beat 160
    return Speedcore(
        [
            Segment(t=0, x=0, dx=140 / 60),
            Segment(t=32 * 60 / 140, x=32, dx=160 / 60),
            Segment(t=32 * 60 / 140 + 128 * 60 / 160, x=160, dx=140 / 60),
        ]
    )


def stop_core() -> Speedcore:
    # 150 BPM with a 2-beat stop at beat 32
    return Speedcore(
        [
            Segment(t=0, x=0, dx=2.5),
            Segment(t=12.8, x=32, dx=0),
            Segment(t=13.6, x=32, dx=2.5, inclusive=False),
        ]
    )


def test_x_at_t():
    core = tempo_core()
    assert core.x(0) == 0
    assert core.x(30) == pytest.approx(32 + (30 - 32 * 60 / 140) * 160 / 60)
    assert core.x(13.714285714285714) == pytest.approx(32)


def test_t_at_x():
    core = tempo_core()
    assert core.t(32) == pytest.approx(13.714285714, abs=1e-6)
    assert core.t(160) == pytest.approx(61.714285714, abs=1e-6)


def test_dx():
    core = tempo_core()
    assert core.dx(0) == pytest.approx(140 / 60)
    assert core.dx(20) == pytest.approx(160 / 60)
    assert core.dx(100) == pytest.approx(140 / 60)


def test_inverse_law_with_positive_rates():
    core = tempo_core()
    for t in [0, 0.5, 13.7, 13.8, 40, 61.7, 61.8, 500]:
        assert core.t(core.x(t)) == pytest.approx(t)


def test_last_segment_extrapolates():
    core = tempo_core()
    assert core.x(1000) == pytest.approx(160 + (1000 - core.t(160)) * 140 / 60)


def test_stop_holds_x():
    core = stop_core()
    assert core.x(12.8) == 32
    assert core.x(13.2) == 32
    assert core.x(13.6) == 32
    assert core.x(14.0) == pytest.approx(33)


def test_stop_inclusive_boundary():
    core = stop_core()
    # the last instant of the hold belongs to the zero-rate segment
    assert core.segment_at_t(13.6).dx == 0
    assert core.segment_at_t(13.6000001).dx == 2.5
    # reaching x=32 resolves to the start of the hold
    assert core.t(32) == pytest.approx(12.8)
    assert core.t(32.0000001) == pytest.approx(13.6, abs=1e-6)


def test_requires_segments():
    with pytest.raises(ValueError):
        Speedcore([])
    with pytest.raises(ValueError):
        Speedcore([{"t": 0, "x": 0, "dx": 1}])


def test_segment_validation():
    with pytest.raises(ValueError):
        Segment(t="0", x=0, dx=1)
    with pytest.raises(ValueError):
        Segment(t=0, x=float("nan"), dx=1)
    with pytest.raises(ValueError):
        Segment(t=0, x=0, dx=1, inclusive=1)
