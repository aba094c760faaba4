"""
どこで: `common.errors`
何を: 設定不正（起動時に致命）と数値ドメイン異常の例外階層を定義する。
なぜ: 描画開始前に拒否すべき入力と、描画中に到達した縮退入力を呼び出し側で区別するため。
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """角度/カラーライザ指定の書式不正、引数個数不一致、数値でない入力など。

    描画開始前に送出され、実行全体を中断する。
    """


class RenderDomainError(ArithmeticError):
    """描画中に到達した縮退した数値入力（重み総和 0 など）。

    検証済みの設定では発生しない。
    """


__all__ = ["ConfigurationError", "RenderDomainError"]
