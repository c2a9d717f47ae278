"""
点击射箭小游戏 - 主入口
Tap Archery: time the swinging bow, release, hit the rings.
"""
import argparse
import os
import sys
import time

import pygame

from archery.gesture import GestureTrigger
from archery.haptics import Haptics
from archery.hud import LABELS_EN, LABELS_ZH, draw_hud, project
from archery.layout import compute_layout
from archery.renderer import draw_scene
from archery.session import GameState, new_session, press_shoot, resize, start_game, tick
from archery.settings import (
    CAMERA_CHOICES, FONT_SIZE, FONT_SMALL, WINDOW_TITLE, ConfigError, load_config,
)
from archery.storage import BestScoreStore

BACKGROUND = (15, 23, 42)


def load_font(font_paths):
    """尝试加载中文字体，返回 (font, small_font, 成功标志)"""
    print("\n🔤 加载中文字体...", flush=True)

    for font_path in font_paths:
        if not os.path.exists(font_path):
            continue
        try:
            font = pygame.font.Font(font_path, FONT_SIZE)
            small_font = pygame.font.Font(font_path, FONT_SMALL)
            font.render("中文测试", True, (255, 255, 255))
            print(f"   ✅ 加载成功: {font_path}", flush=True)
            return font, small_font, True
        except (OSError, pygame.error) as e:
            print(f"   ⚠️ 加载失败 {font_path}: {e}", flush=True)

    print("❌ 没有可用的中文字体，使用默认字体", flush=True)
    return pygame.font.Font(None, FONT_SIZE + 8), pygame.font.Font(None, FONT_SMALL + 6), False


def create_gesture_trigger(config):
    """按配置打开摄像头和手势识别，任何一步失败都回退到点击模式"""
    if config.camera == "none":
        return None

    print("\n🔍 初始化摄像头...", flush=True)
    print(f"   模式: {config.camera}", flush=True)
    try:
        from archery.camera_adapter import create_camera
        from archery.hand_tracker import HandTracker
    except ImportError as e:
        print(f"⚠️ 手势识别依赖未安装，使用点击模式: {e}", flush=True)
        return None

    url = config.rtsp_url if config.camera == "rtsp" else config.video_path
    try:
        camera = create_camera(config.camera, url=url)
    except ValueError as e:
        print(f"⚠️ {e}，使用点击模式", flush=True)
        return None
    if camera is None:
        print("⚠️ 使用点击模式", flush=True)
        return None

    try:
        return GestureTrigger(camera, HandTracker())
    except Exception as e:
        print(f"⚠️ MediaPipe 手势识别不可用，回退到点击模式: {e}", flush=True)
        camera.stop()
        return None


class ArcheryGame:
    def __init__(self, config):
        self.config = config
        self.screen = pygame.display.set_mode(
            (config.window_width, config.window_height), pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        self.font, self.small_font, self.font_loaded = load_font(config.font_paths)
        self.labels = LABELS_ZH if self.font_loaded else LABELS_EN

        self.store = BestScoreStore(config.best_score_file)
        self.haptics = Haptics(enabled=config.haptics)
        self.gesture = create_gesture_trigger(config)

        self.layout = compute_layout(*self.screen.get_size())
        size = self.layout.surface.width
        self.surface = pygame.Surface((size, size))
        self.session = new_session(size, size, best_score=self.store.load())

    def on_resize(self, width, height):
        """只调整画布，不缩放已有的游戏状态"""
        self.layout = compute_layout(width, height)
        size = self.layout.surface.width
        self.surface = pygame.Surface((size, size))
        resize(self.session, size, size)

    def restart(self):
        start_game(self.session, self.store)

    def handle_press(self, pos, now):
        """鼠标点击或触摸，pos 为窗口坐标"""
        state = self.session.state
        if state in (GameState.START, GameState.GAME_OVER):
            if self.layout.overlay_button.collidepoint(pos):
                self.restart()
            elif state == GameState.START and (
                    self.layout.surface.collidepoint(pos)
                    or self.layout.button.collidepoint(pos)):
                press_shoot(self.session, now, self.store)
            return

        if self.layout.surface.collidepoint(pos) or self.layout.button.collidepoint(pos):
            press_shoot(self.session, now, self.store)

    def handle_event(self, event, now) -> bool:
        """处理一个事件，返回 False 表示退出"""
        if event.type == pygame.QUIT:
            return False

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_SPACE:
                press_shoot(self.session, now, self.store)
            elif event.key == pygame.K_r:
                self.restart()
            elif event.key == pygame.K_RETURN and self.session.state in (
                    GameState.START, GameState.GAME_OVER):
                self.restart()

        elif event.type == pygame.VIDEORESIZE:
            self.on_resize(event.w, event.h)

        elif event.type == pygame.MOUSEBUTTONDOWN:
            # 触摸会同时产生模拟鼠标事件，只处理真实鼠标
            if event.button == 1 and not getattr(event, "touch", False):
                self.handle_press(event.pos, now)

        elif event.type == pygame.FINGERDOWN:
            width, height = self.screen.get_size()
            self.handle_press((int(event.x * width), int(event.y * height)), now)

        else:
            self.haptics.handle_event(event)

        return True

    def draw(self, now):
        self.screen.fill(BACKGROUND)
        draw_scene(self.surface, self.session)
        self.screen.blit(self.surface, self.layout.surface.topleft)

        view = project(self.session, now, self.labels)
        draw_hud(self.screen, view, self.layout, self.font, self.small_font, self.labels)

    def run(self):
        """主游戏循环"""
        running = True
        while running:
            self.clock.tick(self.config.fps)
            now = time.monotonic()

            for event in pygame.event.get():
                if not self.handle_event(event, now):
                    running = False

            if self.gesture and self.gesture.poll():
                press_shoot(self.session, now, self.store)

            tick(self.session, now, self.store)
            for duration in self.session.drain_pulses():
                self.haptics.pulse(duration)

            self.draw(now)
            pygame.display.flip()

        # 清理
        if self.gesture:
            self.gesture.close()
        pygame.quit()


def list_cameras():
    from archery.camera_adapter import CameraAutoDetect

    print("🔍 检测可用摄像头...\n")
    usb_cams = CameraAutoDetect.detect_usb_cameras()
    print(f"USB 摄像头: {len(usb_cams)} 个")
    for cam in usb_cams:
        print(f"  /dev/video{cam['id']}: {cam['resolution']}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='点击射箭小游戏')
    parser.add_argument('--camera', '-c', choices=CAMERA_CHOICES,
                        help='手势输入的摄像头源 (默认: none, 只用点击)')
    parser.add_argument('--rtsp-url', '-u', type=str,
                        help='RTSP 流地址 (例如: rtsp://user:pass@ip:554/stream)')
    parser.add_argument('--video', type=str, dest='video_path',
                        help='用视频文件代替摄像头 (配合 --camera file)')
    parser.add_argument('--config', type=str, help='YAML 配置文件路径')
    parser.add_argument('--fps', type=int, help='帧率 (默认: 60)')
    parser.add_argument('--no-haptics', action='store_true', help='关闭手柄震动')
    parser.add_argument('--list', '-l', action='store_true',
                        help='列出可用摄像头并退出')
    args = parser.parse_args(argv)

    if args.list:
        list_cameras()
        return 0

    try:
        config = load_config(
            args.config,
            camera=args.camera,
            rtsp_url=args.rtsp_url,
            video_path=args.video_path,
            fps=args.fps,
            haptics=False if args.no_haptics else None,
        )
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    print("\n🏹 启动点击射箭...")
    print("=" * 40)
    print("控制方式:")
    print("  点击画面 / 按钮 / 空格: 放箭")
    print("  R: 重新开始    ESC: 退出")
    if config.camera != "none":
        print("  手势: 拇指食指捏住后张开放箭")
    print("=" * 40, flush=True)

    pygame.init()
    game = ArcheryGame(config)
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
