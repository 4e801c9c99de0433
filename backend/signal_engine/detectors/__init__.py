"""Single-indicator crossing detectors.

Public API:
- DetectorKind: closed enumeration of the nine detectors, in evaluation order
- DetectionContext: per-date inputs handed to every detector
- run_detectors: evaluate all detectors for one date
- get_detector / register_detector: registry access

Importing this package registers all built-in detectors.
"""

from signal_engine.detectors.base import DetectionContext, DetectorFn
from signal_engine.detectors.registry import (
    DetectorKind,
    detector_order,
    get_detector,
    register_detector,
    run_detectors,
)

# Import built-in detectors to trigger registration
import signal_engine.detectors.threshold  # noqa: F401
import signal_engine.detectors.crossover  # noqa: F401
import signal_engine.detectors.bands  # noqa: F401

__all__ = [
    "DetectionContext",
    "DetectorFn",
    "DetectorKind",
    "detector_order",
    "get_detector",
    "register_detector",
    "run_detectors",
]
