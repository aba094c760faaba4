"""
どこで: `engine.export.base`。
何を: 描画済みフレームの受け手（シンク）のインタフェースと、書き出し失敗の例外。
なぜ: スケジューラが「画像連番」と「単一アニメーション」を同じ口で扱えるようにするため。
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class SinkError(RuntimeError):
    """ファイル書き込み/エンコードの失敗。元例外は `__cause__` に残す。"""


class FrameSink(Protocol):
    """フレームの受け手。

    - `ordered=False`: 各ワーカスレッドから任意順で `emit` してよい（出力先はフレームごとに別）。
    - `ordered=True`: フレーム番号の昇順に、単一スレッドから `emit` されなければならない。
    - `close()` は全フレーム受け渡し後に 1 度だけ呼ばれる。
    """

    ordered: bool

    def emit(self, frame: int, pixels: np.ndarray) -> None: ...

    def close(self) -> None: ...


__all__ = ["SinkError", "FrameSink"]
