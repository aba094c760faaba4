"""
どこで: `crystal.config`
何を: 描画設定レコード `CrystalConfig`（不変）と、外部入力（CLI/YAML の辞書）からの構築・検証。
なぜ: 設定を 1 度だけ解析/検証してワーカ間で読み取り専用に共有し、不正入力を描画開始前に拒否するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from common.errors import ConfigurationError, RenderDomainError

from .angles import AngleSpec, derive_angles, parse_angle_spec
from .colorize import DEFAULT_COLORIZER, DEFAULT_COLORIZER_PARAMS, make_colorizer
from .keyframes import Keyframes, parse_keyframes

IMAGE_FORMATS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "bmp", "tif", "tiff", "gif"})
# alpha を保持できない形式
OPAQUE_FORMATS: frozenset[str] = frozenset({"jpg", "jpeg", "bmp"})


@dataclass(frozen=True, slots=True)
class ColorizerSpec:
    """カラーライザ名と未解析のパラメータ列。"""

    name: str = DEFAULT_COLORIZER
    params: tuple[str, ...] = DEFAULT_COLORIZER_PARAMS

    def build(self):
        return make_colorizer(self.name, self.params)


@dataclass(frozen=True, slots=True)
class CrystalConfig:
    """1 回の描画実行の設定。生成後は変更しない。"""

    width: int
    height: int
    scale: float
    angles: AngleSpec
    frames: int = 1
    x_offset: float = 0.0
    y_offset: float = 0.0
    phase_speed: Keyframes = field(default_factory=lambda: Keyframes.constant(1.0))
    colorizer: ColorizerSpec = field(default_factory=ColorizerSpec)
    output: str = "./"
    image_format: str = "jpg"
    threads: int = 1
    gif_duration_ms: float = 50.0
    gif_loop: int = 0

    @property
    def is_gif(self) -> bool:
        return self.image_format == "gif"

    def make_colorizer(self):
        return self.colorizer.build()


def validate(config: CrystalConfig) -> CrystalConfig:
    """設定全体を検証し、そのまま返す。不正は ConfigurationError。"""
    if config.width <= 0 or config.height <= 0:
        raise ConfigurationError(
            f"width/height must be > 0, got {config.width}x{config.height}"
        )
    if max(config.width, config.height) == 1:
        # ビューポート写像の分母 (max_dim - 1) が 0 になる
        raise ConfigurationError("at least one of width/height must be > 1")
    if not (math.isfinite(config.scale) and config.scale > 0.0):
        raise ConfigurationError(f"scale must be > 0, got {config.scale}")
    if config.frames < 1:
        raise ConfigurationError(f"frames must be >= 1, got {config.frames}")
    if config.threads < 1:
        raise ConfigurationError(f"threads must be >= 1, got {config.threads}")
    if not (math.isfinite(config.x_offset) and math.isfinite(config.y_offset)):
        raise ConfigurationError("x/y offsets must be finite")
    if config.image_format not in IMAGE_FORMATS:
        raise ConfigurationError(
            f"unsupported image format '{config.image_format}' "
            f"(choose from: {', '.join(sorted(IMAGE_FORMATS))})"
        )
    if config.gif_duration_ms <= 0.0:
        raise ConfigurationError(f"gif duration must be > 0 ms, got {config.gif_duration_ms}")
    if config.gif_loop < 0:
        raise ConfigurationError(f"gif loop count must be >= 0, got {config.gif_loop}")

    colorizer = config.make_colorizer()
    if colorizer.channels == 4 and config.image_format in OPAQUE_FORMATS:
        raise ConfigurationError(
            f"colorizer '{config.colorizer.name}' produces RGBA, "
            f"which '{config.image_format}' cannot store"
        )

    # 全フレームで AngleSet が導出できることを先に確かめる（重み総和 0 など）
    frames_to_check = range(config.frames) if config.angles.is_animated else range(1)
    for f in frames_to_check:
        try:
            derive_angles(config.angles, f, config.frames)
        except RenderDomainError as e:
            raise ConfigurationError(f"invalid angles '{config.angles}' at frame {f}: {e}") from e
    return config


# ---- 外部入力からの構築 ----------------------------------------------------


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        f = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e
    if not f.is_integer():
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(f)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e


_TRUE_TOKENS = frozenset({"true", "t", "yes", "y", "on", "1"})
_FALSE_TOKENS = frozenset({"false", "f", "no", "n", "off", "0"})


def _as_bool(name: str, value: Any) -> bool:
    # YAML の "false" 文字列などを真に化けさせない（トークンは env_bool と同じ）
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE_TOKENS:
            return True
        if s in _FALSE_TOKENS:
            return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _split_params(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(p.strip() for p in value.split(",") if p.strip())
    if isinstance(value, (int, float)):
        return (str(value),)
    if isinstance(value, Sequence):
        out: list[str] = []
        for v in value:
            out.extend(_split_params(v))
        return tuple(out)
    raise ConfigurationError(f"invalid colorizer parameters: {value!r}")


def parse_colorizer_spec(value: Any) -> ColorizerSpec:
    """カラーライザ指定を解釈する。

    受理形式:
    - `"sawtooth 0,0.25,0.5,51"`（名前とパラメータを空白区切り）
    - `["greyscale", "127"]`（CLI の nargs 形式）
    - `{"name": "two_tone", "params": ["#000000", "#ffffff"]}`（YAML）
    """
    if value is None:
        return ColorizerSpec()
    if isinstance(value, Mapping):
        name = value.get("name")
        params = value.get("params", ())
    elif isinstance(value, str):
        name, _, rest = value.strip().partition(" ")
        params = rest
    elif isinstance(value, Sequence) and value:
        name, params = value[0], list(value[1:])
    else:
        raise ConfigurationError(f"invalid colorizer specification: {value!r}")
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"colorizer name missing in {value!r}")
    spec = ColorizerSpec(name=name.strip(), params=_split_params(params))
    spec.build()  # 引数個数/数値の検証
    return spec


def _angle_text(value: Any) -> str:
    # YAML ではリスト（[1, 2, 1]）でも書ける
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def build_config(values: Mapping[str, Any]) -> CrystalConfig:
    """CLI/YAML 由来の辞書から検証済み `CrystalConfig` を構築する。

    必須: width, height, angles, scale。その他は既定値を持つ。
    """
    missing = [k for k in ("width", "height", "angles", "scale") if values.get(k) is None]
    if missing:
        raise ConfigurationError(f"missing required setting(s): {', '.join(missing)}")

    def get(key: str, default: Any) -> Any:
        v = values.get(key)
        return default if v is None else v

    phase_speed = get("phase_speed", "1")
    config = CrystalConfig(
        width=_as_int("width", values["width"]),
        height=_as_int("height", values["height"]),
        scale=_as_float("scale", values["scale"]),
        angles=parse_angle_spec(
            _angle_text(values["angles"]), percent=_as_bool("percent", get("percent", False))
        ),
        frames=_as_int("frames", get("frames", 1)),
        x_offset=_as_float("x_offset", get("x_offset", 0.0)),
        y_offset=_as_float("y_offset", get("y_offset", 0.0)),
        phase_speed=parse_keyframes(str(phase_speed)),
        colorizer=parse_colorizer_spec(values.get("colorizer")),
        output=str(get("output", "./")),
        image_format=str(get("image_format", "jpg")).strip().lower().lstrip("."),
        threads=_as_int("threads", get("threads", 1)),
        gif_duration_ms=_as_float("gif_duration_ms", get("gif_duration_ms", 50.0)),
        gif_loop=_as_int("gif_loop", get("gif_loop", 0)),
    )
    return validate(config)


__all__ = [
    "IMAGE_FORMATS",
    "ColorizerSpec",
    "CrystalConfig",
    "validate",
    "parse_colorizer_spec",
    "build_config",
]
