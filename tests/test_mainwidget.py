import pytest

from mindviewer.dataparser import DataParser
from mindviewer.icd import DataSourceType, EEGPacket
from mindviewer.mainwidget import Clock, Viewer, ViewerError


def total_seconds(clock):
    return ((clock.days * 24 + clock.hours) * 60 + clock.minutes) * 60 + clock.seconds


def test_fresh_clock_text():
    assert str(Clock()) == "0 d 0 h 0 m 0 s"


@pytest.mark.parametrize("ticks", [1, 59, 60, 61, 3599, 3600, 86399, 86400, 90061])
def test_clock_counts_every_tick(ticks):
    clock = Clock()
    for _ in range(ticks):
        clock.tick()
    assert total_seconds(clock) == ticks
    assert 0 <= clock.seconds < 60
    assert 0 <= clock.minutes < 60
    assert 0 <= clock.hours < 24


def test_clock_minute_rollover_text():
    clock = Clock()
    for _ in range(60):
        clock.tick()
    assert str(clock) == "0 d 0 h 1 m 0 s"


def test_clock_reset():
    clock = Clock(days=2, hours=3, minutes=4, seconds=5)
    clock.reset()
    assert total_seconds(clock) == 0


@pytest.mark.parametrize("action", ["play", "pause", "clear", "save"])
def test_actions_need_a_source(action):
    viewer = Viewer(DataParser())
    method = getattr(viewer, action)
    with pytest.raises(ViewerError):
        method()
    assert viewer.source is DataSourceType.NONE
    assert viewer.running is False
    assert f"Status: {viewer.status}" in viewer.render()


def test_select_none_is_rejected():
    viewer = Viewer()
    with pytest.raises(ViewerError):
        viewer.select_source(DataSourceType.NONE)
    assert viewer.source is DataSourceType.NONE


def test_select_source_starts_running():
    viewer = Viewer()
    viewer.select_source(DataSourceType.SIM)
    assert viewer.running
    assert viewer.source is DataSourceType.SIM


def test_play_while_running_is_rejected():
    viewer = Viewer()
    viewer.select_source(DataSourceType.SIM)
    with pytest.raises(ViewerError):
        viewer.play()


def test_pause_twice_is_rejected():
    viewer = Viewer()
    viewer.select_source(DataSourceType.SIM)
    viewer.pause()
    assert not viewer.running
    with pytest.raises(ViewerError):
        viewer.pause()


def test_update_fills_view():
    viewer = Viewer()
    viewer.select_source(DataSourceType.SIM)
    packet = EEGPacket(attention=70, meditation=30, power=5, total=3, raw=[1.0, 2.0])
    assert viewer.update(packet) is True
    assert viewer.attention.value == 70
    assert viewer.meditation.value == 30
    assert viewer.values["power"] == 5
    assert viewer.values["total"] == 3
    assert viewer.curve.series()["raw"] == [1.0, 2.0]
    assert total_seconds(viewer.clock) == 1


def test_update_while_paused_changes_nothing():
    viewer = Viewer()
    viewer.select_source(DataSourceType.SIM)
    viewer.pause()
    assert viewer.update(EEGPacket(attention=40, power=9)) is False
    assert viewer.attention.value == 0
    assert viewer.values["power"] == 0
    assert total_seconds(viewer.clock) == 0


def test_play_after_pause_clears_data():
    parser = DataParser()
    viewer = Viewer(parser)
    viewer.select_source(DataSourceType.SIM)
    viewer.update(EEGPacket(power=7, raw=[3.0], delta=11))
    parser.feed(b"\xaa\xaa\x04")
    parser.noise = 4
    viewer.pause()
    viewer.play()
    assert viewer.running
    assert all(value == 0 for value in viewer.values.values())
    assert all(values == [] for values in viewer.curve.series().values())
    assert len(parser) == 0
    assert parser.noise == 0


def test_save_simulated_and_local_are_rejected():
    viewer = Viewer()
    viewer.select_source(DataSourceType.SIM)
    with pytest.raises(ViewerError):
        viewer.save()
    viewer.select_source(DataSourceType.LOCAL)
    with pytest.raises(ViewerError):
        viewer.save()


def test_serial_capture_kept_when_saved(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    parser = DataParser()
    viewer = Viewer(parser)
    viewer.select_source(DataSourceType.COM)
    assert viewer.source is DataSourceType.COM
    assert viewer.running
    parser.feed(b"\xaa\xaa")
    assert len(parser) == 2
    viewer.save()
    parser.close()
    files = list(tmp_path.iterdir())
    assert len(files) == 1
    assert files[0].read_bytes() == b"\xaa\xaa"


def test_serial_capture_removed_when_not_saved(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    parser = DataParser()
    viewer = Viewer(parser)
    viewer.select_source(DataSourceType.COM)
    assert viewer.source is DataSourceType.COM
    assert len(list(tmp_path.iterdir())) == 1
    parser.feed(b"\xaa\xaa\x04")
    assert len(parser) == 3
    parser.close()
    assert list(tmp_path.iterdir()) == []


def test_render_shows_status_and_time():
    viewer = Viewer()
    viewer.select_source(DataSourceType.SIM)
    viewer.update(EEGPacket(attention=50))
    text = viewer.render()
    assert f"Time: {viewer.clock}" in text
    assert f"Status: {viewer.status}" in text
    assert viewer.attention.render() in text