from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from models.display import DisplayConfig
from models.records import Frame
from services.errors import SourceOpenError, SourceReadError
from services.tail import TailLoop, TailState
from storage.passthrough_log import PassThroughLog


class RecordingRenderer:
    def __init__(self) -> None:
        self.frames: List[Frame] = []

    def render(self, frame: Frame) -> None:
        self.frames.append(frame)


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


def _write(path: Path, lines: List[str]) -> Path:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="ascii")
    return path


def test_invalid_lines_are_skipped(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = _write(tmp_path / "data.txt", ["ID1,B,100,110,H,0", "ID2,B,120,h", "ID3,B,130,H"])
    log_path = tmp_path / "out.log"

    with PassThroughLog(log_path) as passthrough:
        loop = TailLoop(source, DisplayConfig(), renderer, passthrough=passthrough)
        summary = loop.run(max_cycles=1)

    assert [frame.readings for frame in renderer.frames] == [(100, 110), (130,)]
    assert summary.frames_rendered == 2
    assert summary.lines_skipped == 1
    assert log_path.read_text(encoding="ascii").splitlines() == ["ID1,B,100,110,H,0", "ID3,B,130,H"]


def test_passthrough_gets_sanitized_line(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = tmp_path / "data.txt"
    source.write_text(" A , B ,\t101, H\r\n", encoding="ascii")
    log_path = tmp_path / "out.log"

    with PassThroughLog(log_path) as passthrough:
        TailLoop(source, DisplayConfig(), renderer, passthrough=passthrough).run(max_cycles=1)

    assert log_path.read_text(encoding="ascii") == "A,B,101,H\n"


def test_unchanged_file_is_reread_each_cycle(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H", "B,110,H"])

    loop = TailLoop(source, DisplayConfig(), renderer)
    summary = loop.run(max_cycles=3)

    assert summary.cycles == 3
    assert summary.frames_rendered == 6
    assert [frame.readings for frame in renderer.frames] == [(100,), (110,)] * 3
    assert loop.state is TailState.stopped


def test_appended_lines_are_picked_up_on_reopen(tmp_path: Path) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H"])
    seen: List[Frame] = []

    class AppendingRenderer:
        def render(self, frame: Frame) -> None:
            seen.append(frame)
            if len(seen) == 1:
                with source.open("a", encoding="ascii") as handle:
                    handle.write("B,120,H\n")

    TailLoop(source, DisplayConfig(), AppendingRenderer()).run(max_cycles=2)

    assert [frame.readings for frame in seen] == [(100,), (120,), (100,), (120,)]


def test_no_follow_reads_once(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H", "B,110,H"])

    summary = TailLoop(source, DisplayConfig(), renderer, follow=False).run()

    assert summary.cycles == 1
    assert summary.frames_rendered == 2


def test_stop_ends_loop_at_line_boundary(tmp_path: Path) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H", "B,110,H", "B,120,H"])
    frames: List[Frame] = []

    class StoppingRenderer:
        def render(self, frame: Frame) -> None:
            frames.append(frame)
            loop.stop()

    loop = TailLoop(source, DisplayConfig(), StoppingRenderer())
    summary = loop.run()

    assert len(frames) == 1
    assert summary.cycles == 0


def test_frame_pacing_sleeps_after_each_frame(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H", "garbage!", "B,110,H"])
    pauses: List[float] = []

    config = DisplayConfig(frame_interval_micros=250_000)
    TailLoop(source, config, renderer, sleep=pauses.append).run(max_cycles=1)

    assert pauses == [0.25, 0.25]


def test_zero_interval_never_sleeps(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H"])
    pauses: List[float] = []

    TailLoop(source, DisplayConfig(), renderer, sleep=pauses.append).run(max_cycles=2)

    assert pauses == []


def test_long_lines_are_read_in_chunks(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,101,102,H"])

    config = DisplayConfig(max_line_length=9)
    summary = TailLoop(source, config, renderer).run(max_cycles=1)

    # read in chunks of 8: "B,100,10" then "1,102,H\n", which has no zone
    assert [frame.readings for frame in renderer.frames] == [(100, 10), ()]
    assert summary.lines_skipped == 0


def test_stray_bytes_are_skipped_not_fatal(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = tmp_path / "data.txt"
    source.write_bytes(b"B,\xff\xfe,H\nB,125,H\n")

    summary = TailLoop(source, DisplayConfig(), renderer).run(max_cycles=1)

    assert [frame.readings for frame in renderer.frames] == [(125,)]
    assert summary.lines_skipped == 1


def test_missing_source_is_fatal(tmp_path: Path, renderer: RecordingRenderer) -> None:
    loop = TailLoop(tmp_path / "missing.txt", DisplayConfig(), renderer)

    with pytest.raises(SourceOpenError) as excinfo:
        loop.run(max_cycles=1)

    assert excinfo.value.path == tmp_path / "missing.txt"
    assert renderer.frames == []


def test_read_failure_is_fatal(tmp_path: Path, renderer: RecordingRenderer, monkeypatch) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H"])

    class FailingHandle:
        def __enter__(self):
            return self

        def __exit__(self, *exc_info) -> None:
            return None

        def readline(self, limit: int) -> str:
            raise OSError(5, "Input/output error")

    loop = TailLoop(source, DisplayConfig(), renderer)
    monkeypatch.setattr(loop, "_open_source", lambda: FailingHandle())

    with pytest.raises(SourceReadError):
        loop.run(max_cycles=1)
    assert renderer.frames == []


def test_process_line_returns_frame(tmp_path: Path, renderer: RecordingRenderer) -> None:
    loop = TailLoop(tmp_path / "unused.txt", DisplayConfig(), renderer)

    assert loop.process_line("x") is None
    assert loop.process_line("B,99,H\n") == Frame(readings=(99,))
    assert renderer.frames == [Frame(readings=(99,))]


def test_follow_appends_source_again_on_each_pass(tmp_path: Path, renderer: RecordingRenderer) -> None:
    source = _write(tmp_path / "data.txt", ["B,100,H"])
    log_path = tmp_path / "out.log"

    with PassThroughLog(log_path) as passthrough:
        TailLoop(source, DisplayConfig(), renderer, passthrough=passthrough).run(max_cycles=3)

    assert log_path.read_text(encoding="ascii").splitlines() == ["B,100,H"] * 3
