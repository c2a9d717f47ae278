"""
瞄准摆动 - 弓在 ±60° 之间来回摆动
"""
from typing import Tuple

from .settings import AIM_BASE_SPEED, AIM_MAX_SPEED, AIM_RANGE, AIM_SPEED_STEP


def aim_speed_for_round(round_no: int) -> float:
    """摆动速度随回合线性增加，封顶 0.08 弧度/帧"""
    return min(AIM_MAX_SPEED, AIM_BASE_SPEED + (round_no - 1) * AIM_SPEED_STEP)


def advance_aim(angle: float, speed: float, direction: int,
                aim_range: float = AIM_RANGE) -> Tuple[float, int]:
    angle += speed * direction

    # 到达边界时夹紧并反向
    if angle >= aim_range:
        angle = aim_range
        direction = -1
    elif angle <= -aim_range:
        angle = -aim_range
        direction = 1

    return angle, direction
