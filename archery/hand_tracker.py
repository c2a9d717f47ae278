"""
手部检测 - 封装 MediaPipe，输出拇指和食指指尖位置
"""
from pathlib import Path
from typing import Any

import cv2
import mediapipe as mp

TRACKING_WIDTH = 640
TRACKING_HEIGHT = 480


class HandTracker:
    """兼容 MediaPipe solutions / tasks 两种 API，只跟踪一只手"""

    def __init__(self):
        self.mp_hands: Any = None
        self.hands = None
        self.mode = "none"
        self._video_timestamp_ms = 0

        mp_solutions = getattr(mp, "solutions", None)
        mp_hands_module = getattr(mp_solutions, "hands", None)
        if mp_hands_module is not None:
            self.mp_hands = mp_hands_module
            self.hands = self.mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=1,
                min_detection_confidence=0.6,
                min_tracking_confidence=0.5,
            )
            self.mode = "solutions"
            print("✅ MediaPipe Hands 初始化成功: solutions API", flush=True)
            return

        from mediapipe.tasks import python as mp_python
        from mediapipe.tasks.python import vision

        model_candidates = [
            Path(__file__).resolve().parent / "hand_landmarker.task",
            Path.cwd() / "hand_landmarker.task",
        ]
        model_path = next((p for p in model_candidates if p.exists()), None)
        if model_path is None:
            raise FileNotFoundError("未找到 hand_landmarker.task 模型文件")

        options = vision.HandLandmarkerOptions(
            base_options=mp_python.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=1,
            min_hand_detection_confidence=0.6,
            min_hand_presence_confidence=0.5,
            min_tracking_confidence=0.5,
        )
        self.hands = vision.HandLandmarker.create_from_options(options)
        self.mode = "tasks"
        print(f"✅ MediaPipe Hands 初始化成功: tasks API ({model_path.name})", flush=True)

    @staticmethod
    def _to_ref(lm):
        return (int(lm.x * TRACKING_WIDTH), int(lm.y * TRACKING_HEIGHT))

    def detect(self, frame):
        """返回 {'thumb_tip', 'index_tip'}，没有手时返回 None"""
        if frame is None or self.hands is None:
            return None

        # 镜像，与玩家视角一致
        frame_rgb = cv2.cvtColor(cv2.flip(frame, 1), cv2.COLOR_BGR2RGB)

        if self.mode == "solutions":
            results = self.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return None
            landmark = results.multi_hand_landmarks[0].landmark
            points = self.mp_hands.HandLandmark
            return {
                'thumb_tip': self._to_ref(landmark[points.THUMB_TIP]),
                'index_tip': self._to_ref(landmark[points.INDEX_FINGER_TIP]),
            }

        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        self._video_timestamp_ms += 16
        results = self.hands.detect_for_video(mp_image, self._video_timestamp_ms)
        if not results.hand_landmarks:
            return None
        landmarks = results.hand_landmarks[0]
        return {
            'thumb_tip': self._to_ref(landmarks[4]),
            'index_tip': self._to_ref(landmarks[8]),
        }

    def close(self):
        if self.hands and hasattr(self.hands, "close"):
            self.hands.close()

