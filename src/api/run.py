"""
どこで: `api.run`。
何を: 検証済み設定からシンクを選び、FrameScheduler で全フレームを描画・書き出す。
なぜ: CLI とライブラリ利用の双方から同じ 1 関数で実行できるようにするため。
"""

from __future__ import annotations

import logging

from crystal.config import CrystalConfig
from engine.export import FrameSink, make_sink
from engine.runtime.scheduler import FrameScheduler, ScheduleReport

logger = logging.getLogger(__name__)


def render(
    config: CrystalConfig,
    *,
    sink: FrameSink | None = None,
    use_numba: bool | None = None,
) -> ScheduleReport:
    """全フレームを描画して書き出す。

    Parameters
    ----------
    config : CrystalConfig
        `build_config` で検証済みの設定。
    sink : FrameSink | None
        出力先。None なら `image_format` から選ぶ（gif → GifSink、それ以外 → 連番画像）。
    use_numba : bool | None
        波動場カーネルの選択。None は環境設定 `QC_USE_NUMBA` に従う。
    """
    if sink is None:
        sink = make_sink(config)
    logger.info(
        "rendering %d frame(s) %dx%d angles=%s colorizer=%s threads=%d",
        config.frames,
        config.width,
        config.height,
        config.angles,
        config.colorizer.name,
        config.threads,
    )
    return FrameScheduler(config, sink, use_numba=use_numba).run()


__all__ = ["render"]
