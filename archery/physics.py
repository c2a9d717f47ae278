"""
物理引擎 - 箭的飞行轨迹
"""
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .settings import (
    AIM_GUIDE_LENGTH, ARROW_GRAVITY, ARROW_LENGTH, BASE_POWER,
    BOUNDS_MARGIN, POWER_DISTANCE_DIVISOR,
)


@dataclass
class Bow:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Arrow:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0
    flying: bool = False
    length: int = ARROW_LENGTH
    gravity: float = ARROW_GRAVITY

    def rest_on(self, bow: Bow):
        """收回到弓上"""
        self.flying = False
        self.x = bow.x
        self.y = bow.y

    @property
    def heading(self) -> float:
        """飞行朝向，0 表示竖直向上"""
        return float(np.arctan2(self.vx, -self.vy))


def launch_power(distance: float) -> float:
    """靶子越远，出箭速度越快"""
    return BASE_POWER + distance / POWER_DISTANCE_DIVISOR


def launch_arrow(arrow: Arrow, bow: Bow, angle: float, distance: float):
    """从弓的位置按当前瞄准角放箭"""
    power = launch_power(distance)
    arrow.flying = True
    arrow.x = bow.x
    arrow.y = bow.y
    arrow.angle = angle
    arrow.vx = float(np.sin(angle)) * power
    arrow.vy = -float(np.cos(angle)) * power


def step_arrow(arrow: Arrow):
    """先按当前速度移动，再施加重力"""
    arrow.x += arrow.vx
    arrow.y += arrow.vy
    arrow.vy += arrow.gravity


def distance_to(arrow: Arrow, x: float, y: float) -> float:
    return float(np.hypot(arrow.x - x, arrow.y - y))


def out_of_bounds(arrow: Arrow, width: float, height: float,
                  margin: float = BOUNDS_MARGIN) -> bool:
    return (
        arrow.y < -margin
        or arrow.y > height + margin
        or arrow.x < -margin
        or arrow.x > width + margin
    )


def trajectory_preview(bow: Bow, angle: float,
                       length: float = AIM_GUIDE_LENGTH) -> Tuple[float, float]:
    """瞄准辅助线的终点"""
    return (
        bow.x + float(np.sin(angle)) * length,
        bow.y - float(np.cos(angle)) * length,
    )
