"""AI layer: spatial heuristics, mode scorers and the decision engine."""

from lightcycle.ai.brain import DecisionEngine
from lightcycle.ai.scoring import SCORERS, MoveCandidate, MoveScorer

__all__ = ["DecisionEngine", "MoveCandidate", "MoveScorer", "SCORERS"]
