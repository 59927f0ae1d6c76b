"""
Simulator dependency
"""

from typing import Optional

from ..clock import SystemClock
from ..config import get_config
from ..fx import FxRateTable
from ..simulator import TreasurySimulator

_simulator: Optional[TreasurySimulator] = None


def build_simulator() -> TreasurySimulator:
    """Simulator configured from the environment"""
    config = get_config()
    if config.seed_on_startup:
        return TreasurySimulator.from_seed(
            clock=SystemClock(), log_events=config.enable_event_logging
        )
    return TreasurySimulator(
        [], FxRateTable(), SystemClock(), log_events=config.enable_event_logging
    )


# Dependency to get the simulator
def get_simulator() -> TreasurySimulator:
    global _simulator
    if _simulator is None:
        _simulator = build_simulator()
    return _simulator
