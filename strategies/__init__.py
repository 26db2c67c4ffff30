"""
Interchangeable detection strategies
"""

from domain.errors import ConfigurationError

from .base import DetectionStrategy
from .heuristic import HeuristicMotionStrategy
from .landmark import LandmarkModelStrategy

STRATEGIES = {
    HeuristicMotionStrategy.NAME: HeuristicMotionStrategy,
    LandmarkModelStrategy.NAME: LandmarkModelStrategy,
}


def create_strategy(name, config):
    """Instantiate a strategy by its NAME."""
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown strategy {name!r}; choose from {sorted(STRATEGIES)}") from None
    return strategy_cls(config)


__all__ = [
    'DetectionStrategy',
    'HeuristicMotionStrategy',
    'LandmarkModelStrategy',
    'STRATEGIES',
    'create_strategy',
]
