import pytest

from mindviewer.indicator import Indicator


def test_defaults_start_at_minimum():
    gauge = Indicator("attention")
    assert gauge.value == 0.0
    assert gauge.angle == 135.0


def test_value_is_clamped():
    gauge = Indicator("meditation")
    gauge.set_value(150)
    assert gauge.value == gauge.maximum
    gauge.set_value(-5)
    assert gauge.value == gauge.minimum


def test_angle_spans_scale_arc():
    gauge = Indicator()
    start = gauge.angle
    gauge.set_value(100)
    assert gauge.angle - start == 270.0


def test_ticks_cover_scale():
    ticks = Indicator().ticks
    assert ticks[0] == 0.0
    assert ticks[-1] == 100.0
    assert all(b - a == 20.0 for a, b in zip(ticks, ticks[1:]))


def test_render_full_and_empty():
    gauge = Indicator("focus")
    empty = gauge.render(10)
    assert "focus" in empty
    assert "#" not in empty
    gauge.set_value(100)
    full = gauge.render(10)
    assert "-" not in full.split("[")[1].split("]")[0]
    assert full.endswith("100")


def test_render_bar_width_is_constant():
    gauge = Indicator("x")
    widths = set()
    for value in (0, 33, 50, 77, 100):
        gauge.set_value(value)
        bar = gauge.render(12).split("[")[1].split("]")[0]
        widths.add(len(bar))
    assert widths == {12}


def test_invalid_arguments():
    with pytest.raises(ValueError):
        Indicator("bad", 10, 10)
    with pytest.raises(ValueError):
        Indicator().render(0)