"""Cosmic Commander - arcade shooter engine, game loop and score client"""

from .simulation import World, InputSnapshot
from .driver import GameLoop, LoopState, FrameScheduler
from .events import CombatEvents, EventRecorder
from .manager import GameManager, Clock
from .api import ScoreClient, ScoreSubmission, ApiError
from .scoring import LocalScoreStore

__all__ = [
    'World',
    'InputSnapshot',
    'GameLoop',
    'LoopState',
    'FrameScheduler',
    'CombatEvents',
    'EventRecorder',
    'GameManager',
    'Clock',
    'ScoreClient',
    'ScoreSubmission',
    'ApiError',
    'LocalScoreStore',
]
