"""Engine layer: game controller, conflict resolution, clock and input."""

from lightcycle.engine.clock import SimulationClock
from lightcycle.engine.conflict_resolver import ConflictResolver
from lightcycle.engine.game_controller import GameController, StepResult
from lightcycle.engine.input_map import InputMapper
from lightcycle.engine.input_queue import InputQueue

__all__ = ["ConflictResolver", "GameController", "InputMapper", "InputQueue", "SimulationClock", "StepResult"]
