"""
どこで: `crystal` パッケージ。
何を: 準結晶パターンのコア（AngleSet / 波動場 / カラーライザ / キーフレーム / 設定レコード）。
なぜ: 数値計算の判断をエンジン（並列化・書き出し）から切り離し、純関数として検証できるようにするため。
"""

from .angles import AngleSpec, derive_angles, parse_angle_spec
from .colorize import Greyscale, Sawtooth, TwoTone, make_colorizer
from .config import ColorizerSpec, CrystalConfig, build_config
from .frame import RenderFrame, build_frame
from .keyframes import Keyframes, parse_keyframes
from .wave import combine, frame_phase, scaled_point, shade_field, wave

__all__ = [
    "AngleSpec",
    "derive_angles",
    "parse_angle_spec",
    "Greyscale",
    "Sawtooth",
    "TwoTone",
    "make_colorizer",
    "ColorizerSpec",
    "CrystalConfig",
    "build_config",
    "RenderFrame",
    "build_frame",
    "Keyframes",
    "parse_keyframes",
    "combine",
    "frame_phase",
    "scaled_point",
    "shade_field",
    "wave",
]
