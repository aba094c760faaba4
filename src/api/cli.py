"""
どこで: `api.cli`（コンソールスクリプト `quasicrystals`）。
何を: コマンドライン引数と YAML 設定ファイルを統合して `CrystalConfig` を作り、描画を実行する。
なぜ: コアが受け取るのは検証済みの設定レコードだけにして、入力の解釈をこの層に閉じ込めるため。

Usage:
    quasicrystals 400 400 7 32 -f 60 -t 4 -o frames/
    quasicrystals 400 400 1,2,1-3 32 -c greyscale 127 -i gif -o out.gif -f 30
    quasicrystals --config quasicrystals.yaml -t 8

終了コード: 0 成功 / 1 描画・書き出し失敗 / 2 設定不正（argparse のエラー終了）。
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Sequence

from common import settings
from common.errors import ConfigurationError
from common.logging import setup_default_logging
from crystal.config import IMAGE_FORMATS, build_config
from engine.export.base import SinkError
from engine.runtime.worker import FrameRenderError
from util.utils import load_config, merge_config

from .run import render

logger = logging.getLogger(__name__)

COLORIZER_HELP = """Colorizer name followed by its comma-separated parameters, one of:
- 'greyscale <brightness>': brightness 0 makes it all black and 255 all white, 127 is neutral
- 'sawtooth <r>,<g>,<b>,<s>': sawtooth waves across the animation map a shade to color values;
  r,g,b are the per-channel offsets (0-0.5, loops after 0.5) and s is a saturation factor
- 'two_tone <color1>,<color2>': interpolate between two colors (#RRGGBB[AA] or r,g,b[,a] numbers)
Default: sawtooth 0,0.25,0.5,51"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quasicrystals",
        description="Render quasicrystal images and animations from superposed plane waves.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("width", nargs="?", type=int, help="Image width in pixels")
    p.add_argument("height", nargs="?", type=int, help="Image height in pixels")
    p.add_argument(
        "angles",
        nargs="?",
        help=(
            "Proportional angles between waves (e.g. 1,1 -> 90°, 180°).\n"
            "If only one number is given it will use that many waves evenly rotated.\n"
            "Each entry may be a dash-separated keyframe list (e.g. 1-3,1) to morph the angles."
        ),
    )
    p.add_argument("scale", nargs="?", type=float, help="Scaling factor, lower is more zoomed in")
    p.add_argument("-c", "--colorizer", nargs="+", metavar="ARG", help=COLORIZER_HELP)
    p.add_argument("-f", "--frames", type=int, help="Number of frames to generate (default 1)")
    p.add_argument("-o", "--output", help="Output directory, or file for gif (default ./)")
    p.add_argument(
        "-i",
        "--image-format",
        dest="image_format",
        help=f"Output format, one of {', '.join(sorted(IMAGE_FORMATS))} (default jpg)",
    )
    p.add_argument("-x", "--x-offset", dest="x_offset", type=float, help="X viewport offset")
    p.add_argument("-y", "--y-offset", dest="y_offset", type=float, help="Y viewport offset")
    p.add_argument(
        "-t",
        "--threads",
        type=int,
        help=f"Number of threads to use (default QC_THREADS={settings.get().DEFAULT_THREADS})",
    )
    p.add_argument(
        "-p",
        "--phase-speed",
        dest="phase_speed",
        help="Phase cycles over the animation, optionally dash-separated keyframes (default 1)",
    )
    p.add_argument(
        "--percent",
        action="store_true",
        default=None,
        help="Interpret the angle list as percentages of 180° instead of proportions",
    )
    p.add_argument(
        "--gif-duration",
        dest="gif_duration_ms",
        type=float,
        help="Duration of each gif frame in milliseconds (default 50)",
    )
    p.add_argument(
        "--gif-loop", dest="gif_loop", type=int, help="Gif loop count, 0 loops forever (default 0)"
    )
    p.add_argument("--config", help="YAML file with default values for any of these options")
    p.add_argument(
        "--no-numba",
        dest="use_numba",
        action="store_false",
        default=None,
        help="Evaluate the wave field with NumPy instead of the Numba kernel",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help=f"Logging level (default QC_LOG_LEVEL={settings.get().LOG_LEVEL})",
    )
    return p


_CONFIG_KEYS = (
    "width",
    "height",
    "angles",
    "scale",
    "colorizer",
    "frames",
    "output",
    "image_format",
    "x_offset",
    "y_offset",
    "threads",
    "phase_speed",
    "percent",
    "gif_duration_ms",
    "gif_loop",
)


def resolve_values(args: argparse.Namespace) -> dict[str, Any]:
    """YAML（あれば）→ CLI の順でトップレベル上書きした設定辞書を返す。"""
    base = load_config(args.config)
    cli = {k: getattr(args, k, None) for k in _CONFIG_KEYS}
    merged = merge_config(base, cli)
    if merged.get("threads") is None:
        merged["threads"] = settings.get().DEFAULT_THREADS
    return merged


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_default_logging(args.log_level or settings.get().LOG_LEVEL)

    try:
        config = build_config(resolve_values(args))
    except ConfigurationError as e:
        parser.error(str(e))

    try:
        report = render(config, use_numba=args.use_numba)
    except (FrameRenderError, SinkError) as e:
        logger.error("render failed: %s", e)
        return 1
    logger.info("done: %d frame(s) in %.2fs", report.frames, report.elapsed_sec)
    return 0


__all__ = ["build_parser", "resolve_values", "main"]
