"""共通フィクスチャ。

- 小さな描画設定
- 呼び出しを記録するだけのシンク
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
import pytest

from crystal.config import CrystalConfig, build_config


class RecordingSink:
    """emit されたフレームを記録するだけのシンク（テスト用）。"""

    def __init__(self, ordered: bool = False) -> None:
        self.ordered = ordered
        self.frames: list[tuple[int, np.ndarray]] = []
        self.closed = 0

    def emit(self, frame: int, pixels: np.ndarray) -> None:
        self.frames.append((frame, pixels))

    def close(self) -> None:
        self.closed += 1


@pytest.fixture()
def make_config() -> Callable[..., CrystalConfig]:
    def _make(**overrides: Any) -> CrystalConfig:
        values: dict[str, Any] = {
            "width": 8,
            "height": 6,
            "angles": "5",
            "scale": 4,
            "colorizer": ["greyscale", "127"],
        }
        values.update(overrides)
        return build_config(values)

    return _make


@pytest.fixture()
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def ordered_sink() -> RecordingSink:
    return RecordingSink(ordered=True)
