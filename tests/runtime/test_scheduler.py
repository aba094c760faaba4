from __future__ import annotations

import numpy as np
import pytest

from crystal.frame import build_frame
from engine.export.base import SinkError
from engine.render.renderer import render_frame
from engine.runtime.scheduler import FrameScheduler, partition_frames
from engine.runtime.worker import FrameRenderError


def test_partition_ten_frames_three_threads() -> None:
    assert partition_frames(10, 3) == [(0, 4), (4, 8), (8, 10)]


@pytest.mark.parametrize(
    "frames,threads,expected",
    [
        (2, 4, [(0, 2)]),
        (1, 1, [(0, 1)]),
        (4, 4, [(0, 1), (1, 2), (2, 3), (3, 4)]),
        (10, 4, [(0, 3), (3, 6), (6, 9), (9, 10)]),
        (4, 3, [(0, 2), (2, 4)]),
    ],
)
def test_partition_cases(frames: int, threads: int, expected) -> None:
    assert partition_frames(frames, threads) == expected


@pytest.mark.parametrize("frames", range(1, 30))
@pytest.mark.parametrize("threads", [1, 2, 3, 5, 8])
def test_partition_covers_each_frame_once(frames: int, threads: int) -> None:
    chunks = partition_frames(frames, threads)
    covered = [f for start, end in chunks for f in range(start, end)]
    assert covered == list(range(frames))
    assert len(chunks) <= threads
    assert all(end > start for start, end in chunks)


def test_partition_rejects_invalid() -> None:
    with pytest.raises(ValueError):
        partition_frames(0, 1)
    with pytest.raises(ValueError):
        partition_frames(3, 0)


@pytest.mark.integration
def test_scheduler_emits_every_frame_once(make_config, recording_sink) -> None:
    cfg = make_config(frames=7, threads=3)
    report = FrameScheduler(cfg, recording_sink).run()
    assert report.frames == 7
    assert report.workers == 3
    assert sorted(f for f, _ in recording_sink.frames) == list(range(7))
    assert recording_sink.closed == 1


@pytest.mark.integration
def test_scheduler_output_matches_single_threaded_render(make_config, recording_sink) -> None:
    cfg = make_config(frames=5, threads=2, angles="1,1-2,1")
    FrameScheduler(cfg, recording_sink).run()
    colorizer = cfg.make_colorizer()
    for f, pixels in recording_sink.frames:
        np.testing.assert_array_equal(pixels, render_frame(build_frame(cfg, f), colorizer))


@pytest.mark.integration
def test_ordered_sink_receives_ascending_frames(make_config, ordered_sink) -> None:
    cfg = make_config(frames=9, threads=4)
    FrameScheduler(cfg, ordered_sink).run()
    assert [f for f, _ in ordered_sink.frames] == list(range(9))
    assert ordered_sink.closed == 1


class _FailingSink:
    ordered = False

    def __init__(self, fail_at: int) -> None:
        self.fail_at = fail_at
        self.closed = 0

    def emit(self, frame: int, pixels: np.ndarray) -> None:
        if frame == self.fail_at:
            raise SinkError(f"disk full at {frame}")

    def close(self) -> None:
        self.closed += 1


@pytest.mark.integration
def test_worker_failure_is_fatal_to_the_run(make_config) -> None:
    cfg = make_config(frames=6, threads=2)
    sink = _FailingSink(fail_at=4)
    with pytest.raises(FrameRenderError) as ei:
        FrameScheduler(cfg, sink).run()
    assert ei.value.frame_id == 4
    assert ei.value.worker == 1
    assert isinstance(ei.value.original, SinkError)
    assert sink.closed == 0
