"""
多源摄像头适配器 - 支持 USB / RTSP / 视频文件
"""
import threading
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import cv2
import numpy as np


class CameraSource(Enum):
    """摄像头来源类型"""
    USB = auto()       # USB 摄像头
    RTSP = auto()      # RTSP 网络流
    FILE = auto()      # 视频文件（调试手势用，循环播放）


@dataclass
class CameraConfig:
    """摄像头配置"""
    source: CameraSource
    device_id: int = 0          # USB 摄像头 ID
    url: str = ""               # RTSP 地址或视频文件路径
    width: int = 640
    height: int = 480
    fps: int = 30
    buffer_size: int = 1        # 减少延迟

    @property
    def label(self) -> str:
        if self.source == CameraSource.USB:
            return f"USB #{self.device_id}"
        return f"{self.source.name} {self.url}"


class CameraAdapter:
    """后台线程采集，主循环只取最新一帧"""

    def __init__(self, config: CameraConfig):
        self.config = config
        self.cap = None
        self.is_running = False
        self.capture_thread = None
        self.last_frame = None
        self.frame_time = 0.0

    def start(self) -> bool:
        source = self.config.source
        if source == CameraSource.USB:
            self.cap = cv2.VideoCapture(self.config.device_id)
            self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
            self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
            self.cap.set(cv2.CAP_PROP_FPS, self.config.fps)
        elif source == CameraSource.RTSP:
            self.cap = cv2.VideoCapture(self.config.url, cv2.CAP_FFMPEG)
        else:
            self.cap = cv2.VideoCapture(self.config.url)

        if not self.cap.isOpened():
            print(f"❌ 无法打开摄像头: {self.config.label}", flush=True)
            self.cap.release()
            self.cap = None
            return False

        self.cap.set(cv2.CAP_PROP_BUFFERSIZE, self.config.buffer_size)
        self.is_running = True
        self.capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self.capture_thread.start()
        print(f"✅ 摄像头已启动: {self.config.label}", flush=True)
        return True

    def _capture_loop(self):
        interval = 1.0 / max(1, self.config.fps)
        while self.is_running:
            ret, frame = self.cap.read()
            if not ret:
                if self.config.source == CameraSource.FILE:
                    # 视频播完从头再来
                    self.cap.set(cv2.CAP_PROP_POS_FRAMES, 0)
                time.sleep(0.01)
                continue

            self.last_frame = frame
            self.frame_time = time.time()

            if self.config.source == CameraSource.FILE:
                time.sleep(interval)

    def get_frame_safe(self) -> Optional[np.ndarray]:
        """非阻塞取最新帧"""
        return self.last_frame

    def stop(self):
        self.is_running = False
        if self.capture_thread:
            self.capture_thread.join(timeout=1.0)
        if self.cap:
            self.cap.release()
            self.cap = None
        print("✅ 摄像头已停止", flush=True)


class CameraAutoDetect:
    """自动检测可用摄像头"""

    @staticmethod
    def detect_usb_cameras(max_id: int = 10) -> list:
        available = []
        for i in range(max_id):
            cap = cv2.VideoCapture(i)
            if cap.isOpened():
                ret, _ = cap.read()
                if ret:
                    w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
                    h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
                    available.append({'id': i, 'resolution': f"{w}x{h}"})
            cap.release()
        return available


def create_camera(source_type: str = "auto", **kwargs) -> Optional[CameraAdapter]:
    """
    创建并启动摄像头适配器

    Args:
        source_type: "auto", "usb", "rtsp", "file"
        **kwargs:
            - device_id: USB 摄像头 ID
            - url: RTSP 地址或视频文件路径

    Returns:
        CameraAdapter 实例，启动失败返回 None
    """
    if source_type == "auto":
        usb_cams = CameraAutoDetect.detect_usb_cameras()
        if not usb_cams:
            print("❌ 未检测到可用摄像头", flush=True)
            return None
        print(f"✅ 发现 {len(usb_cams)} 个 USB 摄像头", flush=True)
        config = CameraConfig(source=CameraSource.USB, device_id=usb_cams[0]['id'])
    elif source_type == "usb":
        config = CameraConfig(source=CameraSource.USB,
                              device_id=kwargs.get('device_id', 0))
    elif source_type == "rtsp":
        config = CameraConfig(source=CameraSource.RTSP, url=kwargs.get('url', ''))
    elif source_type == "file":
        config = CameraConfig(source=CameraSource.FILE, url=kwargs.get('url', ''))
    else:
        raise ValueError(f"未知的摄像头类型: {source_type}")

    if config.source != CameraSource.USB and not config.url:
        raise ValueError(f"{source_type} 摄像头需要提供地址")

    adapter = CameraAdapter(config)
    if adapter.start():
        return adapter
    return None
