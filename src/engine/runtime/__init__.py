"""
どこで: `engine.runtime` サブパッケージ。
何を: FrameScheduler/FrameWorker によるフレーム範囲の並列描画と例外伝播を提供。
なぜ: 描画（render）と書き出し（export）をつなぎ、スレッド間で共有可変状態を持たずに並列化するため。
"""

from .scheduler import FrameScheduler, ScheduleReport, partition_frames
from .worker import FrameRenderError, FrameWorker

__all__ = [
    "FrameScheduler",
    "ScheduleReport",
    "partition_frames",
    "FrameRenderError",
    "FrameWorker",
]
