"""
どこで: `engine.runtime.scheduler`。
何を: フレーム範囲 [0, N) を T 個の連続チャンクに分割し、チャンクごとに FrameWorker を起動・join する。
なぜ: ワーカが互いに素なフレーム範囲を持つことで、共有可変状態なしに並列描画するため。

分割規則:
- N < T なら 1 ワーカで全フレーム。
- それ以外は `chunk = ceil(N/T)`、`start = chunk*i`, `end = chunk*(i+1)`、最後のワーカは `end = N`。
  （ceil の切り上げで範囲外になったチャンクは捨てる）

順序:
- 順序付きシンク（GIF）は、全ワーカ join 後にフレーム番号でソートしてから単一スレッドで `emit` する。
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from math import ceil

from crystal.config import CrystalConfig
from engine.export.base import FrameSink

from .worker import FrameRenderError, FrameWorker

logger = logging.getLogger(__name__)


def partition_frames(frames: int, threads: int) -> list[tuple[int, int]]:
    """フレーム範囲を [start, end) のチャンク列へ分割する。"""
    if frames < 1:
        raise ValueError(f"frames must be >= 1, got {frames}")
    if threads < 1:
        raise ValueError(f"threads must be >= 1, got {threads}")
    if frames < threads:
        return [(0, frames)]
    chunk = ceil(frames / threads)
    chunks: list[tuple[int, int]] = []
    for i in range(threads):
        start = chunk * i
        end = frames if i == threads - 1 else chunk * (i + 1)
        if start >= frames:
            break
        chunks.append((start, min(end, frames)))
    return chunks


@dataclass(frozen=True)
class ScheduleReport:
    frames: int
    workers: int
    elapsed_sec: float


class FrameScheduler:
    """設定・シンクを受け取り、全フレームを並列に描画して書き出す。"""

    def __init__(
        self, config: CrystalConfig, sink: FrameSink, *, use_numba: bool | None = None
    ) -> None:
        self._config = config
        self._sink = sink
        self._use_numba = use_numba

    def chunks(self) -> list[tuple[int, int]]:
        return partition_frames(self._config.frames, self._config.threads)

    def run(self) -> ScheduleReport:
        """全ワーカを起動して join し、シンクを close する。

        いずれかのワーカが失敗した場合は、全ワーカの終了を待ってから最初の
        `FrameRenderError`（フレーム番号の小さいチャンク優先）を送出する。シンクは close しない。
        """
        t0 = time.perf_counter()
        workers = [
            FrameWorker(i, start, end, self._config, self._sink, use_numba=self._use_numba)
            for i, (start, end) in enumerate(self.chunks())
        ]
        for w in workers:
            logger.info("spawned worker %d for frames %d to %d", w.index, w.start_frame, w.end_frame)
            w.start()
        for w in workers:
            w.join()

        errors: list[FrameRenderError] = [w.error for w in workers if w.error is not None]
        if errors:
            logger.error("%d of %d worker(s) failed", len(errors), len(workers))
            raise errors[0]

        if self._sink.ordered:
            results = sorted(
                (item for w in workers for item in w.results), key=lambda item: item[0]
            )
            for frame_id, pixels in results:
                self._sink.emit(frame_id, pixels)
        self._sink.close()

        elapsed = time.perf_counter() - t0
        total = sum(w.rendered for w in workers)
        logger.info("rendered %d frame(s) on %d worker(s) in %.2fs", total, len(workers), elapsed)
        return ScheduleReport(frames=total, workers=len(workers), elapsed_sec=elapsed)


__all__ = ["partition_frames", "ScheduleReport", "FrameScheduler"]
