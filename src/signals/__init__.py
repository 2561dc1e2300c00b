"""Signal extraction for the ranking engine.

Turns sparse entity records into four numeric signals (estimated jobs,
estimated users, fact count, inbound references) using a declarative,
swappable heuristic weight table.
"""

from src.signals.extractor import (
    SignalExtractor,
    latest_time_series_value,
    parse_int,
    parse_number,
    round_half_up,
)
from src.signals.models import EntitySignals, Signal
from src.signals.references import build_inbound_links
from src.signals.weights import (
    ConfigValidationError,
    CustomWeight,
    JobWeights,
    SignalWeights,
    load_signal_weights,
)


__all__ = [
    "ConfigValidationError",
    "CustomWeight",
    "EntitySignals",
    "JobWeights",
    "Signal",
    "SignalExtractor",
    "SignalWeights",
    "build_inbound_links",
    "latest_time_series_value",
    "load_signal_weights",
    "parse_int",
    "parse_number",
    "round_half_up",
]
