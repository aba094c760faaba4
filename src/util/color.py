"""
どこで: `util.color`。
何を: 色指定の正規化/変換（Hex 文字列, RGB(A) 0–255 の数値列）を一元化。
なぜ: 2 色補間カラーライザと CLI/設定ファイルで同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

from typing import Sequence


def _clamp_u8(x: float) -> int:
    v = int(round(float(x)))
    return 0 if v < 0 else 255 if v > 255 else v


def parse_hex_color_str(s: str) -> tuple[int, int, int, int]:
    """Hex 文字列から RGBA(0–255) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r, g, b, a)


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ正規化する。

    - 受理: Hex 文字列, (r,g,b[,a]) の数値列（0–255。範囲外は飽和）
    - alpha 省略時は 255（不透明）
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[object] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        r, g, b = (_clamp_u8(float(c)) for c in seq[:3])  # type: ignore[arg-type]
        a = _clamp_u8(float(seq[3])) if len(seq) == 4 else 255  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    return (r, g, b, a)


def split_color_params(params: Sequence[str]) -> list[object]:
    """カラーライザ引数列を色のリストへ分割する。

    - Hex 文字列はそのまま 1 色。
    - 数値は 3 個または 4 個ずつ 1 色にまとめる（全数値・個数が 6 か 8 のときのみ）。
    """
    items = [p.strip() for p in params if p.strip()]
    if all(_is_number(p) for p in items):
        if len(items) not in (6, 8):
            raise ValueError(f"expected 6 or 8 numeric color components, got {len(items)}")
        n = len(items) // 2
        return [tuple(float(v) for v in items[:n]), tuple(float(v) for v in items[n:])]
    return list(items)


def _is_number(s: str) -> bool:
    try:
        float(s)
    except ValueError:
        return False
    return True


__all__ = [
    "parse_hex_color_str",
    "to_u8_rgba",
    "split_color_params",
]
