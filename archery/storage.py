"""
最高分存储 - 本地 JSON 文件里的一个整数
"""
import json
from pathlib import Path

from .settings import BEST_SCORE_KEY


class BestScoreStore:
    """按固定键名保存最高分"""

    def __init__(self, path, key: str = BEST_SCORE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self) -> int:
        """读取最高分，文件缺失或损坏时返回 0"""
        if not self.path.exists():
            return 0
        try:
            with self.path.open("r", encoding="utf-8-sig") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError):
            return 0
        if not isinstance(raw, dict):
            return 0
        try:
            return max(0, int(raw.get(self.key) or 0))
        except (TypeError, ValueError):
            return 0

    def save(self, score: int) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump({self.key: int(score)}, f, indent=2)
        except OSError as e:
            print(f"⚠️ 最高分保存失败: {e}", flush=True)
            return False
        return True

    def submit(self, score: int) -> int:
        """仅当 score 超过已存最高分时写入，返回当前最高分"""
        if score > self.load() and self.save(score):
            print(f"🏆 新纪录: {score}", flush=True)
        return self.load()
