from .board import Cell, CellState, MinesweeperBoard
from .difficulty import BEGINNER, EXPERT, INTERMEDIATE, PRESETS, Difficulty
from .errors import GameOver, IllegalState, InvalidConfiguration, MinesweeperError, PersistenceError
from .game import CompletedGame, GameMode, GameSession, GameStatus
from .stats import StatisticsRecord, StatisticsStore

__all__ = [
    'Cell', 'CellState', 'MinesweeperBoard',
    'BEGINNER', 'INTERMEDIATE', 'EXPERT', 'PRESETS', 'Difficulty',
    'MinesweeperError', 'InvalidConfiguration', 'IllegalState', 'GameOver', 'PersistenceError',
    'CompletedGame', 'GameMode', 'GameSession', 'GameStatus',
    'StatisticsRecord', 'StatisticsStore',
]
