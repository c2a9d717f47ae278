"""
震动反馈 - 通过手柄的 rumble 接口，设备不支持时静默忽略
"""
import pygame


class Haptics:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.joysticks = {}
        if not enabled:
            return
        try:
            pygame.joystick.init()
        except pygame.error as e:
            print(f"⚠️ 手柄模块不可用，关闭震动: {e}", flush=True)
            self.enabled = False
            return
        self.refresh()

    def refresh(self):
        """重新扫描已连接的手柄"""
        if not self.enabled:
            return
        self.joysticks = {}
        for i in range(pygame.joystick.get_count()):
            js = pygame.joystick.Joystick(i)
            self.joysticks[js.get_instance_id()] = js
        if self.joysticks:
            print(f"✅ 震动设备: {len(self.joysticks)} 个手柄", flush=True)

    def handle_event(self, event):
        if event.type in (pygame.JOYDEVICEADDED, pygame.JOYDEVICEREMOVED):
            self.refresh()

    def pulse(self, duration_ms: int) -> bool:
        """短促震动，返回是否有设备响应"""
        if not self.enabled:
            return False
        done = False
        for js in self.joysticks.values():
            try:
                done = js.rumble(0.4, 1.0, duration_ms) or done
            except pygame.error:
                continue
        return done
