"""
どこで: `engine.export.image`。
何を: 1 フレーム = 1 ラスタ画像（`{output}/{frame:06}.{format}`）として保存するシンク。
なぜ: ワーカごとに出力先が分かれるため、ロック無しで並行に書き出せるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path

import imageio.v3 as iio
import numpy as np

from util.paths import ensure_output_dir, frame_path

from .base import SinkError

logger = logging.getLogger(__name__)


class ImageSequenceSink:
    """フレームを連番画像として保存する（順不同・並行呼び出し可）。"""

    ordered = False

    def __init__(self, output: str | Path, image_format: str = "jpg") -> None:
        try:
            self._out_dir = ensure_output_dir(output)
        except OSError as e:
            raise SinkError(f"出力ディレクトリを作成できません: {output}") from e
        self._format = image_format

    @property
    def out_dir(self) -> Path:
        return self._out_dir

    def path_for(self, frame: int) -> Path:
        return frame_path(self._out_dir, frame, self._format)

    def emit(self, frame: int, pixels: np.ndarray) -> None:
        path = self.path_for(frame)
        try:
            iio.imwrite(path, pixels, extension=f".{self._format}")
        except Exception as e:
            raise SinkError(f"画像の書き出しに失敗: {path}: {e}") from e
        logger.debug("wrote %s", path)

    def close(self) -> None:
        # フレームごとに完結しているため後処理は無い
        return None


__all__ = ["ImageSequenceSink"]
