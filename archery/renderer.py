"""
场景绘制 - 天空、地面、靶子、弓、箭和瞄准线

只读取 GameSession，不修改任何游戏状态。
"""
import math

import numpy as np
import pygame

from .physics import trajectory_preview
from .session import GameState
from .settings import (
    AIM_GUIDE, ARROW_HEAD, BLACK, BOW_STRING, BOW_WOOD, DIRT, FLETCHING,
    GRASS, SKY_BOTTOM, SKY_TOP, STAND,
)

GROUND_HEIGHT = 20
GRASS_HEIGHT = 5
BOW_RADIUS = 30
DASH = 5


def _transform(points, origin, angle):
    """旋转局部坐标点后平移到 origin（y 轴向下，与画布一致）"""
    pts = np.asarray(points, dtype=np.float64)
    c, s = math.cos(angle), math.sin(angle)
    rot = np.array([[c, -s], [s, c]])
    world = pts @ rot.T + np.asarray(origin, dtype=np.float64)
    return [(float(x), float(y)) for x, y in world]


def draw_sky(surface):
    width, height = surface.get_size()
    top = np.array(SKY_TOP, dtype=np.float64)
    bottom = np.array(SKY_BOTTOM, dtype=np.float64)
    for i in range(height):
        t = i / max(1, height - 1)
        color = tuple(int(c) for c in top + (bottom - top) * t)
        pygame.draw.line(surface, color, (0, i), (width, i))


def draw_ground(surface):
    width, height = surface.get_size()
    pygame.draw.rect(surface, DIRT, (0, height - GROUND_HEIGHT, width, GROUND_HEIGHT))
    pygame.draw.rect(surface, GRASS, (0, height - GROUND_HEIGHT, width, GRASS_HEIGHT))


def draw_target(surface, target):
    # 从外到内绘制，内环覆盖在外环之上
    center = (round(target.x), round(target.y))
    for ring in target.rings:
        pygame.draw.circle(surface, ring.color, center, ring.radius)
        pygame.draw.circle(surface, BLACK, center, ring.radius, 2)

    post_height = max(0, int(surface.get_height() - target.y))
    pygame.draw.rect(surface, STAND, (int(target.x - 5), int(target.y), 10, post_height))


def draw_bow(surface, bow, angle):
    arc = [
        (BOW_RADIUS * math.cos(t), BOW_RADIUS * math.sin(t))
        for t in np.linspace(math.pi / 6, math.pi - math.pi / 6, 16)
    ]
    pygame.draw.lines(surface, BOW_WOOD, False, _transform(arc, (bow.x, bow.y), angle), 6)

    string = _transform([(25, -15), (25, 15)], (bow.x, bow.y), angle)
    pygame.draw.line(surface, BOW_STRING, string[0], string[1], 2)


def draw_arrow(surface, session):
    arrow = session.arrow
    if arrow.flying:
        origin, angle = (arrow.x, arrow.y), arrow.heading
    else:
        origin, angle = (session.bow.x, session.bow.y), session.aim_angle

    length = arrow.length
    shaft = _transform([(0, 0), (0, -length)], origin, angle)
    pygame.draw.line(surface, BOW_WOOD, shaft[0], shaft[1], 4)

    head = _transform([(0, -length), (-5, -length + 10), (5, -length + 10)], origin, angle)
    pygame.draw.polygon(surface, ARROW_HEAD, head)

    fletching = _transform([(-3, 0), (3, 0), (3, 8), (-3, 8)], origin, angle)
    pygame.draw.polygon(surface, FLETCHING, fletching)


def draw_aim_guide(surface, session):
    """半透明虚线，长度 200"""
    bow = session.bow
    end_x, end_y = trajectory_preview(bow, session.aim_angle)
    dx, dy = end_x - bow.x, end_y - bow.y
    length = math.hypot(dx, dy)
    if length == 0:
        return

    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    ux, uy = dx / length, dy / length
    for start in np.arange(0, length, DASH * 2):
        stop = min(start + DASH, length)
        pygame.draw.line(
            overlay, AIM_GUIDE,
            (bow.x + ux * start, bow.y + uy * start),
            (bow.x + ux * stop, bow.y + uy * stop), 1)
    surface.blit(overlay, (0, 0))


def draw_scene(surface, session):
    """绘制一帧游戏画面"""
    draw_sky(surface)
    draw_ground(surface)

    if session.state in (GameState.START, GameState.GAME_OVER):
        return

    draw_target(surface, session.target)
    # 飞行中弓停在放箭时的角度（瞄准角不再变化）
    draw_bow(surface, session.bow, session.aim_angle)
    draw_arrow(surface, session)

    if not session.arrow.flying and session.state == GameState.PLAYING:
        draw_aim_guide(surface, session)
