"""
计分栏与提示界面 - 把会话状态投影成要显示的内容，再绘制出来
"""
from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

from .session import GameState
from .settings import BUTTON_BG, BUTTON_DISABLED, GOLD, HUD_BG, WHITE

LABELS_ZH = {
    "score": "得分",
    "round": "回合",
    "misses": "失误",
    "shoot": "TAP TO SHOOT",
    "flying": "FLYING...",
    "title": "点击射箭",
    "start_hint": "摆动到合适角度时点击放箭",
    "start": "开始游戏",
    "game_over": "游戏结束",
    "final_score": "最终得分",
    "final_round": "到达回合",
    "best": "最高分",
    "restart": "再来一局",
}

LABELS_EN = {
    "score": "Score",
    "round": "Round",
    "misses": "Misses",
    "shoot": "TAP TO SHOOT",
    "flying": "FLYING...",
    "title": "Tap Archery",
    "start_hint": "Tap when the bow lines up",
    "start": "START",
    "game_over": "GAME OVER",
    "final_score": "Final score",
    "final_round": "Round reached",
    "best": "Best",
    "restart": "PLAY AGAIN",
}


@dataclass
class HudView:
    score: int
    round: int
    misses: int
    max_misses: int
    result_text: Optional[str]
    result_color: Tuple[int, int, int]
    button_label: str
    button_enabled: bool
    overlay: Optional[str]          # "start" / "game_over" / None
    final_score: int
    final_round: int
    best_score: int


def project(session, now: float, labels=LABELS_EN) -> HudView:
    """会话 → 显示内容，不修改会话"""
    result = session.result
    if result is not None and now >= result.expires_at:
        result = None

    overlay = None
    if session.state == GameState.START:
        overlay = "start"
    elif session.state == GameState.GAME_OVER:
        overlay = "game_over"

    enabled = session.state == GameState.START or session.can_shoot
    flying_label = session.state == GameState.SHOOTING
    return HudView(
        score=session.score,
        round=session.round,
        misses=session.misses,
        max_misses=session.max_misses,
        result_text=result.text if result else None,
        result_color=result.color if result else WHITE,
        button_label=labels["flying"] if flying_label else labels["shoot"],
        button_enabled=enabled,
        overlay=overlay,
        final_score=session.score,
        final_round=session.round,
        best_score=session.best_score,
    )


def _blit_centered(screen, font, text, color, center):
    surf = font.render(text, True, color)
    screen.blit(surf, surf.get_rect(center=center))


def draw_hud(screen, view: HudView, layout, font, small_font, labels=LABELS_EN):
    hud = layout.hud
    pygame.draw.rect(screen, HUD_BG, hud, border_radius=10)

    columns = [
        (labels["score"], str(view.score)),
        (labels["round"], str(view.round)),
        (labels["misses"], f"{view.misses}/{view.max_misses}"),
    ]
    col_width = hud.width / len(columns)
    for i, (name, value) in enumerate(columns):
        cx = int(hud.left + col_width * (i + 0.5))
        _blit_centered(screen, small_font, name, WHITE, (cx, hud.top + 25))
        _blit_centered(screen, font, value, GOLD, (cx, hud.top + 62))

    # 射击按钮
    color = BUTTON_BG if view.button_enabled else BUTTON_DISABLED
    pygame.draw.rect(screen, color, layout.button, border_radius=12)
    _blit_centered(screen, font, view.button_label, WHITE, layout.button.center)

    surface = layout.surface
    if view.result_text:
        lines = view.result_text.split("\n")
        top = surface.centery - (len(lines) - 1) * 22
        for i, line in enumerate(lines):
            _blit_centered(screen, font, line, view.result_color,
                           (surface.centerx, top + i * 44))

    if view.overlay:
        draw_overlay(screen, view, layout, font, small_font, labels)


def draw_overlay(screen, view: HudView, layout, font, small_font, labels=LABELS_EN):
    """开始界面 / 结束界面"""
    surface = layout.surface
    shade = pygame.Surface(surface.size, pygame.SRCALPHA)
    shade.fill((0, 0, 0, 150))
    screen.blit(shade, surface.topleft)

    cx, cy = surface.center
    if view.overlay == "start":
        _blit_centered(screen, font, labels["title"], GOLD, (cx, cy - 60))
        _blit_centered(screen, small_font, labels["start_hint"], WHITE, (cx, cy - 15))
        button_text = labels["start"]
    else:
        _blit_centered(screen, font, labels["game_over"], GOLD, (cx, cy - 90))
        summary = [
            f"{labels['final_score']}: {view.final_score}",
            f"{labels['final_round']}: {view.final_round}",
            f"{labels['best']}: {view.best_score}",
        ]
        for i, line in enumerate(summary):
            _blit_centered(screen, small_font, line, WHITE, (cx, cy - 45 + i * 30))
        button_text = labels["restart"]

    pygame.draw.rect(screen, BUTTON_BG, layout.overlay_button, border_radius=12)
    _blit_centered(screen, font, button_text, WHITE, layout.overlay_button.center)
