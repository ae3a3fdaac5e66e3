"""Mistake detectors.

Each detector is a pure function of a ``MatchContext`` returning a
``DetectorOutcome``. ``DETECTORS`` fixes the order used to break timestamp
ties when the outcomes are merged.
"""

from collections.abc import Callable

from riftcoach.contracts.analysis import DetectorOutcome
from riftcoach.core.analysis.context import MatchContext

from .death import detect_deaths
from .objective import detect_objective_losses
from .resource import detect_resource_deficits
from .vision import detect_vision_gaps

Detector = Callable[[MatchContext], DetectorOutcome]

DETECTORS: tuple[Detector, ...] = (
    detect_deaths,
    detect_resource_deficits,
    detect_vision_gaps,
    detect_objective_losses,
)

__all__ = [
    "DETECTORS",
    "Detector",
    "detect_deaths",
    "detect_objective_losses",
    "detect_resource_deficits",
    "detect_vision_gaps",
]
