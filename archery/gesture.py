"""
手势放箭判定 - 拇指与食指捏合后张开即为放箭
"""
import numpy as np

PINCH_CLOSE = 40     # 捏合判定距离（像素，按 640x480 参考画面）
PINCH_OPEN = 70      # 张开判定距离
MIN_HOLD_FRAMES = 3  # 至少捏住的帧数，过滤抖动


class ReleaseDetector:
    """
    双阈值状态机：距离 < PINCH_CLOSE 进入捏合，捏住足够帧数后
    距离 > PINCH_OPEN 触发一次放箭。手离开画面则重置。
    """

    def __init__(self, close=PINCH_CLOSE, open_=PINCH_OPEN, min_hold=MIN_HOLD_FRAMES):
        self.close = close
        self.open = open_
        self.min_hold = min_hold
        self.held_frames = 0

    @property
    def pinching(self) -> bool:
        return self.held_frames > 0

    def reset(self):
        self.held_frames = 0

    def update(self, hand) -> bool:
        """
        Args:
            hand: {'thumb_tip': (x, y), 'index_tip': (x, y), ...} 或 None

        Returns:
            本帧是否放箭
        """
        if not hand or 'thumb_tip' not in hand or 'index_tip' not in hand:
            self.reset()
            return False

        tx, ty = hand['thumb_tip']
        ix, iy = hand['index_tip']
        gap = float(np.hypot(ix - tx, iy - ty))

        if gap < self.close:
            self.held_frames += 1
            return False

        if self.pinching and gap > self.open:
            fired = self.held_frames >= self.min_hold
            self.reset()
            return fired

        # 处于两个阈值之间：保持当前状态
        return False


class GestureTrigger:
    """摄像头 + 手部检测 + 放箭判定"""

    def __init__(self, camera, tracker, detector=None):
        self.camera = camera
        self.tracker = tracker
        self.detector = detector or ReleaseDetector()
        self._last_frame_time = None

    def poll(self) -> bool:
        """每帧调用一次，返回是否触发射击"""
        frame_time = self.camera.frame_time
        frame = self.camera.get_frame_safe()
        if frame is None or frame_time == self._last_frame_time:
            return False
        self._last_frame_time = frame_time
        return self.detector.update(self.tracker.detect(frame))

    def close(self):
        self.tracker.close()
        self.camera.stop()
