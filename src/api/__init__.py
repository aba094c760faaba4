"""
どこで: `api` 入口（高レベル公開 API）。
何を: 設定構築 `build_config` と実行 `render` を再輸出。

Usage:
    from api import build_config, render

    config = build_config({"width": 400, "height": 400, "angles": "7", "scale": 32})
    render(config)
"""

from crystal.config import CrystalConfig, build_config

from .run import render

__all__ = [
    "build_config",
    "render",
    "CrystalConfig",
]

# バージョン情報
__version__ = "1.3.0"
