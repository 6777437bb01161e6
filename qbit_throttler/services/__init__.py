"""
Service layer for qBit Throttler.
"""
from qbit_throttler.services.decision_engine import DecisionEngine
from qbit_throttler.services.controller_manager import ControllerManager
from qbit_throttler.services.polling_monitor import PollingMonitor, LoopState, LoopTerminated

__all__ = [
    "DecisionEngine",
    "ControllerManager",
    "PollingMonitor",
    "LoopState",
    "LoopTerminated",
]
