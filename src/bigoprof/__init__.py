"""bigoprof: empirical Big O classification of measured growth."""
from .agents.analyst import Analyst, InvalidInput, MIN_SAMPLES, classify, samples_from_pairs
from .agents.profiler import GrowthProfiler, profile
from .sandbox.measure import OperationCounter, counted, geometric_sizes, timed
from .schemas import (
    Candidate,
    ComplexityClass,
    MeasurementAnomaly,
    ProfileResult,
    Sample,
)

__all__ = [
    "Analyst",
    "Candidate",
    "ComplexityClass",
    "GrowthProfiler",
    "InvalidInput",
    "MIN_SAMPLES",
    "MeasurementAnomaly",
    "OperationCounter",
    "ProfileResult",
    "Sample",
    "classify",
    "counted",
    "geometric_sizes",
    "profile",
    "samples_from_pairs",
    "timed",
]
