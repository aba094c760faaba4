"""
どこで: `crystal.colorize`
何を: 濃淡 shade（0–255 の浮動小数）を RGB(A) 画素へ写すカラーライザ戦略群と、その名前レジストリ。
なぜ: 戦略は設定時に 1 度だけ選び、画素ループ側は `colorizer(shade, frame, frames)` を呼ぶだけにするため。

戦略:
- greyscale(brightness): `v = byte(brightness*2 - 255 + shade)`。0 で黒寄り、255 で白寄り、127 でほぼ素通し。
- sawtooth(r, g, b, scalar): アニメーションのフレーム位置から各チャネルの三角波
  `|scalar*pi*asin(sin(pi*(offset + f/F)))|` を作り、`byte(|shade - saw|)` とする。
- two_tone(color1, color2): `c1 + (c2 - c1)*shade/255` のチャネル別線形補間。

すべて (shade, frame, frames, 固定パラメータ) の純関数。shade はスカラでも (H, W) 配列でもよく、
戻り値はそれぞれ (C,) / (H, W, C) の uint8。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, ClassVar, Sequence

import numpy as np

from common.base_registry import BaseRegistry
from common.errors import ConfigurationError
from util.color import split_color_params, to_u8_rgba

COLORIZERS = BaseRegistry()

DEFAULT_COLORIZER = "sawtooth"
DEFAULT_COLORIZER_PARAMS: tuple[str, ...] = ("0", "0.25", "0.5", "51")


def clamp_to_byte(values) -> np.ndarray:
    """0 方向へ切り捨ててから [0, 255] に飽和させた uint8。NaN は 0。"""
    a = np.asarray(values, dtype=np.float64)
    a = np.where(np.isnan(a), 0.0, a)
    return np.clip(np.trunc(a), 0.0, 255.0).astype(np.uint8)


def sawtooth(frame: int, frames: int, offset: float, scalar: float) -> float:
    """フレーム位置の三角波（arcsin(sin) による）。"""
    adjusted = offset + (frame / frames)
    return abs(scalar * math.pi * math.asin(math.sin(adjusted * math.pi)))


def _parse_floats(name: str, params: Sequence[str], arity: int) -> list[float]:
    if len(params) != arity:
        raise ConfigurationError(
            f"colorizer '{name}' takes {arity} parameter(s), got {len(params)}: {list(params)}"
        )
    out: list[float] = []
    for p in params:
        try:
            v = float(p)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"colorizer '{name}': non-numeric parameter '{p}'") from e
        if not math.isfinite(v):
            raise ConfigurationError(f"colorizer '{name}': non-finite parameter '{p}'")
        out.append(v)
    return out


@COLORIZERS.register("greyscale")
@dataclass(frozen=True, slots=True)
class Greyscale:
    brightness: float

    arity: ClassVar[int] = 1
    channels: ClassVar[int] = 3

    @classmethod
    def from_params(cls, params: Sequence[str]) -> "Greyscale":
        (brightness,) = _parse_floats("greyscale", params, cls.arity)
        return cls(brightness)

    def __call__(self, shade, frame: int, frames: int) -> np.ndarray:
        v = clamp_to_byte((self.brightness * 2.0 - 255.0) + np.asarray(shade, dtype=np.float64))
        return np.stack([v, v, v], axis=-1)


@COLORIZERS.register("sawtooth")
@dataclass(frozen=True, slots=True)
class Sawtooth:
    red: float
    green: float
    blue: float
    scalar: float

    arity: ClassVar[int] = 4
    channels: ClassVar[int] = 3

    @classmethod
    def from_params(cls, params: Sequence[str]) -> "Sawtooth":
        return cls(*_parse_floats("sawtooth", params, cls.arity))

    def __call__(self, shade, frame: int, frames: int) -> np.ndarray:
        s = np.asarray(shade, dtype=np.float64)
        chans = [
            clamp_to_byte(np.abs(s - sawtooth(frame, frames, offset, self.scalar)))
            for offset in (self.red, self.green, self.blue)
        ]
        return np.stack(chans, axis=-1)


@COLORIZERS.register("two_tone")
@dataclass(frozen=True, slots=True)
class TwoTone:
    color1: tuple[int, int, int, int]
    color2: tuple[int, int, int, int]

    arity: ClassVar[int] = 2

    @classmethod
    def from_params(cls, params: Sequence[str]) -> "TwoTone":
        try:
            colors = split_color_params(params)
            if len(colors) != cls.arity:
                raise ValueError(f"expected 2 colors, got {len(colors)}")
            c1, c2 = (to_u8_rgba(c) for c in colors)
        except ValueError as e:
            raise ConfigurationError(f"colorizer 'two_tone': {e}") from e
        return cls(c1, c2)

    @property
    def channels(self) -> int:
        return 4 if (self.color1[3] != 255 or self.color2[3] != 255) else 3

    def __call__(self, shade, frame: int, frames: int) -> np.ndarray:
        n = self.channels
        c1 = np.asarray(self.color1[:n], dtype=np.float64)
        c2 = np.asarray(self.color2[:n], dtype=np.float64)
        mix = np.asarray(shade, dtype=np.float64)[..., None] / 255.0
        return clamp_to_byte(c1 + (c2 - c1) * mix)


Colorizer = Callable[..., np.ndarray]


def make_colorizer(name: str, params: Sequence[str]) -> Greyscale | Sawtooth | TwoTone:
    """名前と文字列パラメータ列からカラーライザを生成する。不正は ConfigurationError。"""
    try:
        cls = COLORIZERS.get(name)
    except (KeyError, ValueError, TypeError) as e:
        raise ConfigurationError(
            f"unknown colorizer '{name}' (choose from: {', '.join(COLORIZERS.names())})"
        ) from e
    return cls.from_params(list(params))


__all__ = [
    "COLORIZERS",
    "DEFAULT_COLORIZER",
    "DEFAULT_COLORIZER_PARAMS",
    "Colorizer",
    "Greyscale",
    "Sawtooth",
    "TwoTone",
    "clamp_to_byte",
    "sawtooth",
    "make_colorizer",
]
