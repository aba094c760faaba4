"""
どこで: `engine.render` サブパッケージ。
何を: RenderFrame → 画素バッファの入口（FrameRenderer / render_frame）。
なぜ: 計算（crystal）と並列実行/書き出し（runtime/export）の責務を分離するため。
"""

from .renderer import FrameRenderer, render_frame

__all__ = ["FrameRenderer", "render_frame"]
