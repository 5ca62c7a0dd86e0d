"""Domain services for probe registration and health aggregation."""

from .aggregation_engine import TIMED_OUT, AggregationEngine, aggregate_status
from .probe_registry import ProbeRegistry

__all__ = ["AggregationEngine", "ProbeRegistry", "TIMED_OUT", "aggregate_status"]
