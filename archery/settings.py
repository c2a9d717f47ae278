"""
游戏配置 - 常量与可调参数
Tap Archery settings: rules, colours and the user config layer.
"""
import math
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

# 显示
FPS = 60
WINDOW_TITLE = "Tap Archery | 点击射箭"
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 900
MAX_SURFACE_WIDTH = 800
MAX_SURFACE_HEIGHT = 600
SURFACE_HEIGHT_RATIO = 0.6

# 规则
MAX_MISSES = 5
RESUME_DELAY = 1.5          # 回合结束后恢复射击的延迟（秒）
RESULT_DISPLAY_TIME = 1.5   # 结果文字显示时间（秒）

# 瞄准
AIM_RANGE = math.pi / 3
AIM_BASE_SPEED = 0.01
AIM_SPEED_STEP = 0.002
AIM_MAX_SPEED = 0.08

# 弓箭
BOW_BOTTOM_OFFSET = 50
ARROW_LENGTH = 40
ARROW_GRAVITY = 0.3
BASE_POWER = 15
POWER_DISTANCE_DIVISOR = 50
BOUNDS_MARGIN = 50
AIM_GUIDE_LENGTH = 200

# 靶子
TARGET_RADIUS = 90
TARGET_INITIAL_DISTANCE = 300
TARGET_BASE_DISTANCE = 250
TARGET_DISTANCE_STEP = 50
TARGET_HIT_PADDING = 10     # 飞行中碰撞判定的额外半径
RING_FORGIVENESS = 5        # 计分时每个环的宽容像素
MOVING_TARGET_ROUND = 5
MOVE_BASE_SPEED = 0.5
MOVE_SPEED_STEP = 0.1
TARGET_EDGE_MARGIN = 80

# 震动反馈（毫秒）
PULSE_RELEASE_MS = 50
PULSE_HIT_MS = 100

# 颜色
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GOLD = (255, 215, 0)
RED = (255, 0, 0)
BLUE = (0, 102, 255)
SKY_TOP = (135, 206, 235)
SKY_BOTTOM = (224, 246, 255)
DIRT = (139, 69, 19)
GRASS = (34, 139, 34)
STAND = (101, 67, 33)
BOW_WOOD = (139, 69, 19)
BOW_STRING = (51, 51, 51)
ARROW_HEAD = (102, 102, 102)
FLETCHING = (255, 0, 0)
AIM_GUIDE = (255, 255, 255, 128)
HIT_GREEN = (74, 222, 128)
MISS_RED = (255, 107, 107)
HUD_BG = (30, 41, 59)
BUTTON_BG = (234, 88, 12)
BUTTON_DISABLED = (120, 120, 120)

# 字体 - 按优先级排列
FONT_PATHS = [
    "/usr/share/fonts/truetype/arphic/ukai.ttc",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/arphic/uming.ttc",
]
FONT_SIZE = 36
FONT_SMALL = 24

BEST_SCORE_KEY = "archeryBestScore"
DEFAULT_BEST_SCORE_PATH = "~/.archery-tap/best_score.json"
DEFAULT_CONFIG_PATH = "~/.archery-tap.yaml"

CAMERA_CHOICES = ("none", "auto", "usb", "rtsp", "file")


class ConfigError(ValueError):
    """配置值无效"""


@dataclass
class GameConfig:
    """用户可覆盖的运行参数"""
    fps: int = FPS
    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT
    best_score_path: str = DEFAULT_BEST_SCORE_PATH
    haptics: bool = True
    camera: str = "none"
    rtsp_url: str = ""
    video_path: str = ""
    font_paths: List[str] = field(default_factory=lambda: list(FONT_PATHS))

    def __post_init__(self):
        if self.fps <= 0:
            raise ConfigError(f"fps 必须为正数: {self.fps}")
        if self.window_width <= 0 or self.window_height <= 0:
            raise ConfigError(
                f"窗口尺寸无效: {self.window_width}x{self.window_height}")
        if self.camera not in CAMERA_CHOICES:
            raise ConfigError(f"未知的摄像头类型: {self.camera}")

    @property
    def best_score_file(self) -> Path:
        return Path(os.path.expanduser(self.best_score_path))


def _coerce(name: str, raw, default):
    """把环境变量 / YAML 里的值转换成默认值的类型"""
    try:
        if isinstance(default, bool):
            if isinstance(raw, bool):
                return raw
            text = str(raw).strip().lower()
            if text in ("1", "true", "yes", "on"):
                return True
            if text in ("0", "false", "no", "off"):
                return False
            raise ValueError(raw)
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, list):
            if isinstance(raw, str):
                return [p for p in raw.split(os.pathsep) if p]
            return [str(p) for p in raw]
        return str(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"配置项 {name} 的值无效: {raw!r}") from None


def _read_yaml(path: Path) -> dict:
    """读取 YAML 配置中的 archery 段，失败时返回空字典"""
    if not path.exists():
        return {}
    import yaml

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        print(f"⚠️ 无法读取配置 {path}: {e}", flush=True)
        return {}
    except yaml.YAMLError as e:
        print(f"⚠️ 配置文件格式错误 {path}: {e}", flush=True)
        return {}
    if not isinstance(data, dict):
        return {}
    section = data.get("archery", data)
    return section if isinstance(section, dict) else {}


def load_config(path: Optional[str] = None, environ=None, **overrides) -> GameConfig:
    """
    读取配置：显式参数 > 环境变量 ARCHERY_<KEY> > YAML 文件 > 默认值

    Args:
        path: YAML 文件路径，默认读 ARCHERY_CONFIG 或 ~/.archery-tap.yaml
        environ: 环境变量映射（测试用）
        **overrides: 命令行参数，None 值会被忽略
    """
    environ = os.environ if environ is None else environ
    config_path = path or environ.get("ARCHERY_CONFIG", DEFAULT_CONFIG_PATH)
    file_values = _read_yaml(Path(os.path.expanduser(config_path)))

    defaults = GameConfig()
    values = {}
    for f in fields(GameConfig):
        default = getattr(defaults, f.name)
        env_key = f"ARCHERY_{f.name.upper()}"
        if overrides.get(f.name) is not None:
            raw = overrides[f.name]
        elif env_key in environ:
            raw = environ[env_key]
        elif f.name in file_values:
            raw = file_values[f.name]
        else:
            continue
        values[f.name] = _coerce(f.name, raw, default)
    return GameConfig(**values)
