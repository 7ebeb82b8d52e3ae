from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TransformState:
    rotation_degrees: int = 0  # 0/90/180/270

    def normalized(self) -> "TransformState":
        rot = int(self.rotation_degrees) % 360
        # 90도 배수로 정규화
        rot = (round(rot / 90.0) * 90) % 360
        return TransformState(rot)

    def rotated_cw(self) -> "TransformState":
        return TransformState(self.normalized().rotation_degrees + 90).normalized()


@dataclass(frozen=True)
class TargetFrame:
    width: int
    height: int


@dataclass(frozen=True)
class RenderInstruction:
    path: str
    natural_width: int
    natural_height: int
    scaled_width: int
    scaled_height: int
    rotation_degrees: int = 0

    @property
    def scaled_size(self) -> tuple[int, int]:
        return (self.scaled_width, self.scaled_height)
