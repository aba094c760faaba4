"""
どこで: `crystal.frame`
何を: 1 フレーム分の派生パラメータ `RenderFrame` と、それをフレーム番号から組み立てるアニメーション駆動。
なぜ: 位相/角度のフレーム依存をここで解決し、レンダラは受け取った値を読むだけにするため。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .angles import derive_angles
from .config import CrystalConfig
from .wave import frame_phase


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """フレーム番号・位相・AngleSet と共有の空間設定。描画後は破棄される。"""

    frame: int
    frames: int
    phase: float
    angles: np.ndarray
    scale: float
    width: int
    height: int
    x_offset: float = 0.0
    y_offset: float = 0.0


def build_frame(config: CrystalConfig, frame: int) -> RenderFrame:
    """設定とフレーム番号から RenderFrame を作る（位相速度・角度重みはキーフレーム補間）。"""
    speed = config.phase_speed.at(frame, config.frames)
    angles = derive_angles(config.angles, frame, config.frames)
    angles.setflags(write=False)
    return RenderFrame(
        frame=frame,
        frames=config.frames,
        phase=frame_phase(frame, config.frames, speed),
        angles=angles,
        scale=config.scale,
        width=config.width,
        height=config.height,
        x_offset=config.x_offset,
        y_offset=config.y_offset,
    )


__all__ = ["RenderFrame", "build_frame"]
