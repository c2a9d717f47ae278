"""
游戏会话 - 回合推进、计分与状态机

所有可变状态都集中在 GameSession 里，由主循环持有。每帧调用
tick(session, now)，输入事件调用 press_shoot / start_game。定时切换
（回合结束后的 1.5 秒延迟、结果文字的显示时间）以截止时间字段表示，
在 tick 里与单调时钟比较。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .aim import advance_aim, aim_speed_for_round
from .physics import Arrow, Bow, distance_to, launch_arrow, out_of_bounds, step_arrow
from .settings import (
    BOW_BOTTOM_OFFSET, GOLD, HIT_GREEN, MAX_MISSES, MISS_RED,
    PULSE_HIT_MS, PULSE_RELEASE_MS, RESULT_DISPLAY_TIME, RESUME_DELAY,
    TARGET_HIT_PADDING,
)
from .target import BULLSEYE, Target, evaluate_hit


class GameState(Enum):
    START = "start"
    PLAYING = "playing"
    SHOOTING = "shooting"
    GAME_OVER = "gameOver"


ACTIVE_STATES = (GameState.PLAYING, GameState.SHOOTING)


@dataclass
class ResultMessage:
    text: str
    color: Tuple[int, int, int]
    expires_at: float


@dataclass
class GameSession:
    width: float
    height: float
    state: GameState = GameState.START
    score: int = 0
    round: int = 1
    misses: int = 0
    max_misses: int = MAX_MISSES
    best_score: int = 0
    aim_angle: float = 0.0
    aim_speed: float = aim_speed_for_round(1)
    aim_direction: int = 1
    bow: Bow = field(default_factory=Bow)
    arrow: Arrow = field(default_factory=Arrow)
    target: Target = field(default_factory=Target)
    resume_at: Optional[float] = None
    result: Optional[ResultMessage] = None
    pulses: List[int] = field(default_factory=list)

    @property
    def can_shoot(self) -> bool:
        return self.state == GameState.PLAYING and not self.arrow.flying

    def drain_pulses(self) -> List[int]:
        """取出待执行的震动反馈（毫秒）"""
        pulses, self.pulses = self.pulses, []
        return pulses


def new_session(width: float, height: float, best_score: int = 0) -> GameSession:
    session = GameSession(width=width, height=height, best_score=best_score)
    return reset(session)


def reset(session: GameSession) -> GameSession:
    """恢复到第一回合的初始状态（不改变 state）"""
    session.score = 0
    session.round = 1
    session.misses = 0

    session.aim_speed = aim_speed_for_round(1)
    session.aim_angle = 0.0
    session.aim_direction = 1

    session.bow.x = session.width / 2
    session.bow.y = session.height - BOW_BOTTOM_OFFSET
    session.arrow = Arrow(x=session.bow.x, y=session.bow.y)

    session.target.move_direction = 1
    session.target.place_for_round(session.round, session.width, session.height)

    session.resume_at = None
    session.result = None
    session.pulses.clear()
    return session


def start_game(session: GameSession, store=None) -> GameSession:
    """开始 / 重新开始：完整初始化后进入 playing"""
    reset(session)
    if store is not None:
        session.best_score = store.load()
    session.state = GameState.PLAYING
    return session


def resize(session: GameSession, width: float, height: float) -> GameSession:
    """画布尺寸变化，已有物体位置不做缩放"""
    session.width = width
    session.height = height
    return session


def show_result(session: GameSession, text: str, color, now: float):
    session.result = ResultMessage(text, color, now + RESULT_DISPLAY_TIME)


def press_shoot(session: GameSession, now: float, store=None) -> GameSession:
    """射击输入：开始界面下开始游戏，瞄准中则放箭，其余情况忽略"""
    if session.state == GameState.START:
        return start_game(session, store)
    if not session.can_shoot:
        return session
    return shoot(session)


def shoot(session: GameSession) -> GameSession:
    session.state = GameState.SHOOTING
    launch_arrow(session.arrow, session.bow, session.aim_angle, session.target.distance)
    session.pulses.append(PULSE_RELEASE_MS)
    return session


def tick(session: GameSession, now: float, store=None) -> GameSession:
    """推进一帧"""
    if session.result is not None and now >= session.result.expires_at:
        session.result = None

    if session.state not in ACTIVE_STATES:
        return session

    if session.resume_at is not None and now >= session.resume_at:
        session.resume_at = None
        session.state = GameState.PLAYING

    if not session.arrow.flying:
        session.aim_angle, session.aim_direction = advance_aim(
            session.aim_angle, session.aim_speed, session.aim_direction)

    session.target.update(session.width)

    if session.arrow.flying:
        step_arrow(session.arrow)
        target = session.target
        dist = distance_to(session.arrow, target.x, target.y)
        if (dist < target.radius + TARGET_HIT_PADDING
                or out_of_bounds(session.arrow, session.width, session.height)):
            resolve_shot(session, dist, now, store)

    return session


def resolve_shot(session: GameSession, distance: float, now: float,
                 store=None) -> GameSession:
    """箭停止飞行后计分，每支箭只调用一次"""
    ring = evaluate_hit(distance, session.target.rings)

    if ring is not None:
        session.score += ring.points
        color = GOLD if ring is BULLSEYE else HIT_GREEN
        show_result(session, f"{ring.label}\n+{ring.points}", color, now)
        session.pulses.append(PULSE_HIT_MS)
        return advance_round(session, now)

    session.misses += 1
    show_result(session, "MISS!", MISS_RED, now)

    if session.misses >= session.max_misses:
        return game_over(session, store)
    return advance_round(session, now)


def advance_round(session: GameSession, now: float) -> GameSession:
    """进入下一回合：提高难度，延迟后恢复射击"""
    session.round += 1
    session.arrow.rest_on(session.bow)
    session.aim_speed = aim_speed_for_round(session.round)
    session.target.place_for_round(session.round, session.width, session.height)
    session.resume_at = now + RESUME_DELAY
    return session


def game_over(session: GameSession, store=None) -> GameSession:
    session.state = GameState.GAME_OVER
    session.arrow.rest_on(session.bow)
    session.resume_at = None
    if store is not None:
        session.best_score = store.submit(session.score)
    elif session.score > session.best_score:
        session.best_score = session.score
    print(f"🎯 游戏结束: 得分 {session.score}, 回合 {session.round}, "
          f"最高分 {session.best_score}", flush=True)
    return session
