"""
どこで: `common` パッケージ。
何を: 結晶コア/エンジン双方で使う軽量ユーティリティ（BaseRegistry, 例外, 設定）。
なぜ: API 層から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry
from .errors import ConfigurationError, RenderDomainError

__all__ = [
    "BaseRegistry",
    "ConfigurationError",
    "RenderDomainError",
]
