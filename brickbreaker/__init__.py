"""Brick Breaker Pro: a 15-level ball-and-paddle simulation with a pygame front end."""

from brickbreaker.clock import InputBuffer, SimulationClock
from brickbreaker.levels import generate_level
from brickbreaker.rules import GameController
from brickbreaker.session import Event, Session

__version__ = "1.0.0"

__all__ = [
    "Event",
    "GameController",
    "InputBuffer",
    "Session",
    "SimulationClock",
    "generate_level",
]
