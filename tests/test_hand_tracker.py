from types import SimpleNamespace

import pytest

pytest.importorskip("cv2")
pytest.importorskip("mediapipe")
np = pytest.importorskip("numpy")

from archery.hand_tracker import HandTracker


class FakeHands:
    def __init__(self, landmarks):
        self.landmarks = landmarks

    def process(self, frame_rgb):
        if self.landmarks is None:
            return SimpleNamespace(multi_hand_landmarks=None)
        return SimpleNamespace(
            multi_hand_landmarks=[SimpleNamespace(landmark=self.landmarks)])


def make_tracker(landmarks):
    tracker = HandTracker.__new__(HandTracker)
    tracker.mode = "solutions"
    tracker.mp_hands = SimpleNamespace(
        HandLandmark=SimpleNamespace(THUMB_TIP=4, INDEX_FINGER_TIP=8))
    tracker.hands = FakeHands(landmarks)
    tracker._video_timestamp_ms = 0
    return tracker


def test_detect_returns_fingertips_only():
    landmarks = [SimpleNamespace(x=0.0, y=0.0) for _ in range(21)]
    landmarks[4] = SimpleNamespace(x=0.5, y=0.5)
    landmarks[8] = SimpleNamespace(x=0.25, y=0.75)
    tracker = make_tracker(landmarks)

    hand = tracker.detect(np.zeros((48, 64, 3), dtype=np.uint8))
    assert hand == {'thumb_tip': (320, 240), 'index_tip': (160, 360)}


def test_detect_without_hand():
    tracker = make_tracker(None)
    assert tracker.detect(np.zeros((48, 64, 3), dtype=np.uint8)) is None
    assert tracker.detect(None) is None
