"""
窗口布局 - 计分栏、游戏画布、射击按钮
"""
from dataclasses import dataclass

import pygame

from .settings import MAX_SURFACE_HEIGHT, MAX_SURFACE_WIDTH, SURFACE_HEIGHT_RATIO

HUD_HEIGHT = 90
BUTTON_HEIGHT = 64
PADDING = 12


def fit_surface(window_width: int, window_height: int) -> int:
    """画布边长：min(窗口宽, 800) 与 min(60% 窗口高, 600) 中较小者"""
    max_width = min(window_width, MAX_SURFACE_WIDTH)
    max_height = min(window_height * SURFACE_HEIGHT_RATIO, MAX_SURFACE_HEIGHT)
    return max(1, int(min(max_width, max_height)))


@dataclass
class Layout:
    window: pygame.Rect
    hud: pygame.Rect
    surface: pygame.Rect
    button: pygame.Rect
    overlay_button: pygame.Rect


def compute_layout(window_width: int, window_height: int) -> Layout:
    size = fit_surface(window_width, window_height)
    left = (window_width - size) // 2

    hud = pygame.Rect(left, PADDING, size, HUD_HEIGHT)
    surface = pygame.Rect(left, hud.bottom + PADDING, size, size)
    button = pygame.Rect(left, surface.bottom + PADDING, size, BUTTON_HEIGHT)

    overlay_button = pygame.Rect(0, 0, min(240, size - 2 * PADDING), BUTTON_HEIGHT)
    overlay_button.center = (surface.centerx, surface.centery + size // 5)

    return Layout(
        window=pygame.Rect(0, 0, window_width, window_height),
        hud=hud,
        surface=surface,
        button=button,
        overlay_button=overlay_button,
    )
