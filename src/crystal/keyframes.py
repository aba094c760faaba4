"""
どこで: `crystal.keyframes`
何を: ダッシュ区切りのステージ値（例: "0-50-100"）を保持し、フレーム番号から線形補間値を返す。
なぜ: 位相速度と各角度重みを同じ規則でアニメーションさせ、フレームごとに独立に解決できるようにするため。

補間規則:
- ステージが 1 つなら全フレームで一定。
- k ステージなら区間長 `trans = F/(k-1)` の k-1 区間に等分し、
  `seg = floor(f/trans)`, `nxt = ceil(f/trans)`, `progress = (f mod trans)/trans` として
  `from + progress*(to-from)` を返す。区間インデックスは最後のステージで頭打ち。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from common.errors import ConfigurationError

STAGE_SEPARATOR = "-"


@dataclass(frozen=True, slots=True)
class Keyframes:
    """ステージ値の不変タプル。"""

    stages: tuple[float, ...]

    def __post_init__(self) -> None:
        if not self.stages:
            raise ConfigurationError("keyframes need at least one stage value")

    @classmethod
    def constant(cls, value: float) -> "Keyframes":
        return cls((float(value),))

    @property
    def is_animated(self) -> bool:
        return len(self.stages) > 1

    def at(self, frame: int, frames: int) -> float:
        """フレーム `frame`（全 `frames`）における補間値。"""
        if not self.is_animated:
            return self.stages[0]
        last = len(self.stages) - 1
        trans = frames / last
        pos = frame / trans
        seg = min(math.floor(pos), last)
        nxt = min(math.ceil(pos), last)
        progress = (frame % trans) / trans
        start = self.stages[seg]
        end = self.stages[nxt]
        return start + progress * (end - start)

    def __str__(self) -> str:
        return STAGE_SEPARATOR.join(f"{v:g}" for v in self.stages)


def parse_keyframes(text: str) -> Keyframes:
    """`"12"` や `"1-2-1"` を Keyframes へ。数値でない/空のステージは ConfigurationError。"""
    raw = str(text).strip()
    if not raw:
        raise ConfigurationError("empty keyframe value")
    stages: list[float] = []
    for part in raw.split(STAGE_SEPARATOR):
        part = part.strip()
        if not part:
            raise ConfigurationError(f"empty stage in keyframe value '{raw}'")
        try:
            value = float(part)
        except ValueError as e:
            raise ConfigurationError(f"non-numeric stage '{part}' in '{raw}'") from e
        if not math.isfinite(value):
            raise ConfigurationError(f"non-finite stage '{part}' in '{raw}'")
        stages.append(value)
    return Keyframes(tuple(stages))


__all__ = ["Keyframes", "parse_keyframes", "STAGE_SEPARATOR"]
