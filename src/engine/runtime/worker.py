"""
どこで: `engine.runtime` のワーカ実行層。
何を: 割り当てられた連続フレーム範囲 [start, end) を 1 本の OS スレッドで描画し、シンクへ渡す（または結果を保持する）。
      例外は `FrameRenderError` でフレーム番号の文脈付きに保持し、スケジューラが join 後に再送出する。
なぜ: ワーカ同士は通信せず、共有するのは読み取り専用の設定だけにして、ロック無しで並列化するため。

注意:
- 設定（CrystalConfig）は不変。カラーライザはワーカごとに設定から作り直す。
- `sink.ordered` が True のシンク（GIF）には直接書かず、(frame, pixels) を `results` に溜める。
"""

from __future__ import annotations

import logging
import threading

import numpy as np

from crystal.config import CrystalConfig
from crystal.frame import build_frame
from engine.export.base import FrameSink
from engine.render.renderer import FrameRenderer

logger = logging.getLogger(__name__)


class FrameRenderError(Exception):
    """ワーカ内の例外をラップしてフレーム番号等の文脈を付与。"""

    def __init__(self, frame_id: int | None, original: Exception, worker: int | None = None) -> None:
        super().__init__(f"FrameRenderError(frame_id={frame_id}, worker={worker}): {original}")
        self.frame_id = frame_id
        self.original = original
        self.worker = worker

    def __reduce__(self):
        # ピクル化時も文脈（frame_id / worker）を保ったまま再構築する
        return (self.__class__, (self.frame_id, self.original, self.worker))


class FrameWorker(threading.Thread):
    """フレーム範囲 [start, end) を描画するスレッド。"""

    def __init__(
        self,
        index: int,
        start: int,
        end: int,
        config: CrystalConfig,
        sink: FrameSink,
        *,
        use_numba: bool | None = None,
    ) -> None:
        super().__init__(name=f"FrameWorker-{index}", daemon=True)
        self.index = index
        self.start_frame = start
        self.end_frame = end
        self._config = config
        self._sink = sink
        self._use_numba = use_numba
        self.results: list[tuple[int, np.ndarray]] = []
        self.error: FrameRenderError | None = None
        self.rendered: int = 0

    def run(self) -> None:
        logger.info(
            "worker %d: rendering frames %d to %d", self.index, self.start_frame, self.end_frame
        )
        frame_id: int | None = None
        try:
            renderer = FrameRenderer(self._config.make_colorizer(), use_numba=self._use_numba)
            for frame_id in range(self.start_frame, self.end_frame):
                frame = build_frame(self._config, frame_id)
                pixels = renderer.render(frame)
                if self._sink.ordered:
                    self.results.append((frame_id, pixels))
                else:
                    self._sink.emit(frame_id, pixels)
                self.rendered += 1
                logger.debug("worker %d: rendered frame %d", self.index, frame_id)
        except Exception as e:
            # 例外を統一ログ（stacktrace 付き）。以降のフレームは描画しない
            logger.exception(
                "[worker] stage=render worker=%d frame_id=%s error=%s", self.index, frame_id, e
            )
            self.error = FrameRenderError(frame_id, e, worker=self.index)


__all__ = ["FrameRenderError", "FrameWorker"]
