"""
Mechanics module - rule resolution systems.

This module provides stateless resolvers for the game rules:
- VisibilitySystem: Recomputes fog of war
- MovementResolver: Validates and executes moves
- BattleResolver: Resolves stack-versus-stack combat
- CaptureHandler: Grants resource and base bonuses
- TurnScheduler: Lifecycle transitions and player rotation
- DiplomacyLedger: Records diplomatic messages
- VictoryConditions: Checks game ending conditions

All resolvers are stateless - they take WorldState and return results
without modifying their own state.
"""

from .visibility import VisibilitySystem
from .combat import BattleResolver, BattleResult
from .movement import MovementResolver, MovementResult, MoveRejection, MoveValidationReport
from .capture import CaptureHandler, CaptureResult
from .scheduler import TurnScheduler, AdvanceResult
from .fact_check import DiplomacyAnalyzer, ClaimFactChecker, FactCheck
from .diplomacy import DiplomacyLedger, LedgerReport, LedgerEntry, DroppedMessage
from .victory import VictoryConditions, VictoryResult

__all__ = [
    "VisibilitySystem",
    "BattleResolver",
    "BattleResult",
    "MovementResolver",
    "MovementResult",
    "MoveRejection",
    "MoveValidationReport",
    "CaptureHandler",
    "CaptureResult",
    "TurnScheduler",
    "AdvanceResult",
    "DiplomacyAnalyzer",
    "ClaimFactChecker",
    "FactCheck",
    "DiplomacyLedger",
    "LedgerReport",
    "LedgerEntry",
    "DroppedMessage",
    "VictoryConditions",
    "VictoryResult",
]
