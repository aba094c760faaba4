"""
どこで: `engine.export` サブパッケージ。
何を: 描画済みフレームのシンク（連番画像 / アニメーション GIF）と、設定からの選択。
なぜ: 出力形式の違いをスケジューラから隠し、`emit`/`close` の 2 操作に揃えるため。
"""

from __future__ import annotations

from crystal.config import CrystalConfig
from util.paths import gif_path

from .base import FrameSink, SinkError
from .gif import GifSink
from .image import ImageSequenceSink


def make_sink(config: CrystalConfig) -> FrameSink:
    """`image_format == "gif"` なら GifSink（`output` はファイル、ディレクトリなら既定名）、それ以外は連番画像。"""
    if config.is_gif:
        return GifSink(
            gif_path(config.output),
            duration_ms=config.gif_duration_ms,
            loop=config.gif_loop,
        )
    return ImageSequenceSink(config.output, config.image_format)


__all__ = ["FrameSink", "SinkError", "GifSink", "ImageSequenceSink", "make_sink"]
