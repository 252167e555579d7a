"""
bigoprof.schemas  •  Pydantic-v2 records for growth profiling
-------------------------------------------------------------
These classes are the data exchanged between the profiler, the analyst,
the reporting helpers and the FastAPI layer.  DO NOT modify field names
or enum literals without bumping `SCHEMA_VERSION`.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict

SCHEMA_VERSION = "1.0.0"


def _log2_floor1(n: int) -> float:
    # log2 n clamped at 1 so the reference stays positive at n = 1
    return max(math.log2(n), 1.0)


# --------------------------------------------------------------------------- #
# 🔸 Enumerations
# --------------------------------------------------------------------------- #
class ComplexityClass(str, Enum):
    """Canonical Big O classes, declared from lowest to highest order."""
    CONSTANT      = "O(1)"
    LOGARITHMIC   = "O(log n)"
    LINEAR        = "O(n)"
    LINEARITHMIC  = "O(n log n)"
    QUADRATIC     = "O(n^2)"
    CUBIC         = "O(n^3)"
    EXPONENTIAL   = "O(2^n)"
    FACTORIAL     = "O(n!)"

    @property
    def rank(self) -> int:
        return list(ComplexityClass).index(self)

    def log_growth(self, n: int) -> float:
        """Natural log of the reference growth function f(n)."""
        return _LOG_GROWTH[self](n)

    def growth(self, n: int) -> float:
        """Reference growth function f(n); may overflow to inf for 2^n and n!."""
        try:
            return math.exp(self.log_growth(n))
        except OverflowError:
            return float("inf")


_LOG_GROWTH = {
    ComplexityClass.CONSTANT:     lambda n: 0.0,
    ComplexityClass.LOGARITHMIC:  lambda n: math.log(_log2_floor1(n)),
    ComplexityClass.LINEAR:       lambda n: math.log(n),
    ComplexityClass.LINEARITHMIC: lambda n: math.log(n) + math.log(_log2_floor1(n)),
    ComplexityClass.QUADRATIC:    lambda n: 2.0 * math.log(n),
    ComplexityClass.CUBIC:        lambda n: 3.0 * math.log(n),
    ComplexityClass.EXPONENTIAL:  lambda n: n * math.log(2.0),
    ComplexityClass.FACTORIAL:    lambda n: math.lgamma(n + 1),
}


# --------------------------------------------------------------------------- #
# 🔸 Measurements
# --------------------------------------------------------------------------- #
class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Sample(_Record):
    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    size: int   = Field(..., gt=0, description="Input size n")
    cost: float = Field(..., ge=0.0, allow_inf_nan=False,
                        description="Elapsed ms or operation count at n")

    def as_pair(self) -> Tuple[int, float]:
        return self.size, self.cost


class MeasurementAnomaly(_Record):
    """A sample cheaper than an earlier, smaller-size sample."""
    size: int
    cost: float
    previous_size: int
    previous_cost: float

    def describe(self) -> str:
        return (f"cost {self.cost:g} at n={self.size} is below "
                f"{self.previous_cost:g} at n={self.previous_size}")


class Candidate(_Record):
    complexity_class: ComplexityClass
    score: float


# --------------------------------------------------------------------------- #
# 🔸 Result
# --------------------------------------------------------------------------- #
class ProfileResult(_Record):
    complexity_class: ComplexityClass       = Field(..., serialization_alias="class")
    score: float                            = Field(..., ge=0.0,
                                                    description="Mean absolute log-ratio error")
    samples: List[Sample]
    candidates: List[Candidate]             = Field(default_factory=list)
    scores: Dict[str, float]                = Field(
        default_factory=dict, description="Score of every class, keyed by tag"
    )
    anomalies: List[MeasurementAnomaly]     = Field(default_factory=list)
    exponent: Optional[float]               = Field(
        None, description="Slope of log(cost) against log(size)"
    )
    schema_version: str                     = Field(default=SCHEMA_VERSION)

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1

    def to_record(self) -> Dict[str, Any]:
        """Plain structured form: {class, score, samples: [[size, cost], ...], ...}."""
        return {
            "class": self.complexity_class.value,
            "score": self.score,
            "samples": [[s.size, s.cost] for s in self.samples],
            "candidates": [
                {"class": c.complexity_class.value, "score": c.score}
                for c in self.candidates
            ],
            "ambiguous": self.ambiguous,
            "anomalies": [a.model_dump() for a in self.anomalies],
            "exponent": self.exponent,
        }


# --------------------------------------------------------------------------- #
# 🔸 External-facing payloads
# --------------------------------------------------------------------------- #
class ClassifyRequest(_Record):
    """Inbound object for FastAPI /classify and the CLI samples file.

    Items stay raw ([size, cost] pairs or {"size", "cost"} objects) so that
    agents.analyst.samples_from_pairs reports every bad value as InvalidInput.
    """
    samples: List[Any] = Field(
        ..., examples=[[[10, 1.0], [100, 10.0], [1000, 100.0]]]
    )
