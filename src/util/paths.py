"""
どこで: `util.paths`。
何を: フレーム画像/GIF の出力先パスの生成と、出力ディレクトリの作成ユーティリティを提供する。
なぜ: ワーカごとに決定的なパス（`{output}/{frame:06}.{format}`）を得て、並行呼び出しでも安全にディレクトリを作るため。
"""

from __future__ import annotations

from pathlib import Path


def ensure_output_dir(output: str | Path) -> Path:
    """フレーム出力ディレクトリを作成して返す。

    - 親ディレクトリも同時に作成される。
    - 既存の場合もそのまま Path を返す。
    - 並行呼び出しに対して `exist_ok=True` で安全。
    """
    out = Path(output)
    out.mkdir(parents=True, exist_ok=True)
    return out


def ensure_parent_dir(path: str | Path) -> Path:
    """ファイル `path` の親ディレクトリを作成し、`path` を Path で返す。"""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def frame_path(output: str | Path, frame: int, image_format: str) -> Path:
    """フレーム番号 `frame` の画像パス（6 桁ゼロ埋め）。"""
    return Path(output) / f"{int(frame):06d}.{image_format}"


DEFAULT_GIF_NAME = "quasicrystal.gif"


def gif_path(output: str | Path) -> Path:
    """GIF の書き出し先。`output` がディレクトリ（既存 or 末尾区切り）なら既定名を付ける。"""
    raw = str(output)
    p = Path(raw)
    if raw.endswith(("/", "\\")) or p.is_dir():
        return p / DEFAULT_GIF_NAME
    return p


__all__ = ["ensure_output_dir", "ensure_parent_dir", "frame_path", "gif_path", "DEFAULT_GIF_NAME"]
