"""
どこで: `engine.export.gif`。
何を: フレームを昇順に蓄積し、`close()` で 1 つのアニメーション GIF にエンコードするシンク。
なぜ: 単一ストリームのエンコーダは順序に敏感なため、スケジューラが整列後に渡すフレームだけを受け取るため。

注意:
- `ordered = True`。スケジューラは全ワーカ join 後にフレーム番号でソートしてから `emit` する。
- 昇順でない `emit` は SinkError（整列の取りこぼしを黙って書き出さない）。
"""

from __future__ import annotations

import logging
from pathlib import Path

import imageio.v3 as iio
import numpy as np

from util.paths import ensure_parent_dir

from .base import SinkError

logger = logging.getLogger(__name__)


class GifSink:
    """アニメーション GIF を 1 ファイルに書き出す。"""

    ordered = True

    def __init__(self, path: str | Path, *, duration_ms: float = 50.0, loop: int = 0) -> None:
        self._path = Path(path)
        self._duration_ms = float(duration_ms)
        self._loop = int(loop)
        self._frames: list[np.ndarray] = []
        self._last_frame: int | None = None
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def emit(self, frame: int, pixels: np.ndarray) -> None:
        if self._closed:
            raise SinkError("GifSink は既に close 済みです")
        if self._last_frame is not None and frame <= self._last_frame:
            raise SinkError(
                f"GIF フレームは昇順で渡す必要があります（{self._last_frame} の後に {frame}）"
            )
        self._last_frame = frame
        self._frames.append(pixels)

    def close(self) -> None:
        """蓄積したフレームをエンコードして書き出す（多重呼び出しは no-op）。"""
        if self._closed:
            return
        self._closed = True
        if not self._frames:
            raise SinkError(f"GIF に書き出すフレームがありません: {self._path}")
        logger.info("writing gif %s (%d frames)", self._path, len(self._frames))
        try:
            ensure_parent_dir(self._path)
            iio.imwrite(
                self._path,
                np.stack(self._frames),
                extension=".gif",
                plugin="pillow",
                is_batch=True,
                duration=self._duration_ms,
                loop=self._loop,
            )
        except Exception as e:
            raise SinkError(f"GIF の書き出しに失敗: {self._path}: {e}") from e
        finally:
            self._frames.clear()
        logger.info("wrote gif %s", self._path)


__all__ = ["GifSink"]
