"""
靶子系统 - 环形计分表、命中判定与移动
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .settings import (
    BLACK, BLUE, GOLD, RED, WHITE,
    MOVE_BASE_SPEED, MOVE_SPEED_STEP, MOVING_TARGET_ROUND,
    RING_FORGIVENESS, TARGET_BASE_DISTANCE, TARGET_DISTANCE_STEP,
    TARGET_EDGE_MARGIN, TARGET_INITIAL_DISTANCE, TARGET_RADIUS,
)


@dataclass(frozen=True)
class Ring:
    radius: int
    points: int
    label: str
    color: Tuple[int, int, int]


# 从外到内，半径严格递减
RINGS = (
    Ring(90, 10, "Outer Ring", WHITE),
    Ring(70, 25, "Ring 4", BLACK),
    Ring(50, 50, "Ring 3", BLUE),
    Ring(30, 100, "Ring 2", RED),
    Ring(12, 200, "BULLSEYE!", GOLD),
)
BULLSEYE = RINGS[-1]


@dataclass
class Target:
    x: float = 0.0
    y: float = 0.0
    distance: int = TARGET_INITIAL_DISTANCE
    radius: int = TARGET_RADIUS
    move_speed: float = 0.0
    move_direction: int = 1
    rings: Tuple[Ring, ...] = field(default=RINGS)

    def place_for_round(self, round_no: int, width: float, height: float):
        """按回合设置距离、位置和移动速度"""
        self.distance = target_distance(round_no)
        self.x = width / 2
        self.y = height / 2 - self.distance / 2
        self.move_speed = move_speed(round_no)

    def update(self, width: float):
        """水平往返移动，靠近边缘时掉头"""
        if self.move_speed <= 0:
            return
        self.x += self.move_speed * self.move_direction
        if self.x > width - TARGET_EDGE_MARGIN:
            self.move_direction = -1
        if self.x < TARGET_EDGE_MARGIN:
            self.move_direction = 1


def target_distance(round_no: int) -> int:
    return TARGET_BASE_DISTANCE + (round_no - 1) * TARGET_DISTANCE_STEP


def move_speed(round_no: int) -> float:
    if round_no < MOVING_TARGET_ROUND:
        return 0.0
    return MOVE_BASE_SPEED + (round_no - MOVING_TARGET_ROUND) * MOVE_SPEED_STEP


def evaluate_hit(distance: float, rings=RINGS) -> Optional[Ring]:
    """
    根据箭到靶心的距离判定得分环

    从最外环向内逐环检查 distance <= radius + 5，环是嵌套的，
    一旦某环不包含该点，更内的环也不会包含，此时返回最后一个包含它的环。
    连最外环都不满足则返回 None（脱靶）。
    """
    hit = None
    for ring in rings:
        if distance > ring.radius + RING_FORGIVENESS:
            break
        hit = ring
    return hit
