# archery module
from .session import GameSession, GameState, new_session, press_shoot, start_game, tick
from .storage import BestScoreStore
from .target import RINGS, evaluate_hit

__all__ = [
    'GameSession', 'GameState', 'new_session', 'press_shoot', 'start_game', 'tick',
    'BestScoreStore', 'RINGS', 'evaluate_hit',
]
