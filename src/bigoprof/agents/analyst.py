# agents/analyst.py
import math
import numbers
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .base import Agent
from ..schemas import Candidate, ComplexityClass, MeasurementAnomaly, ProfileResult, Sample
from ..utils.config import Settings

MIN_SAMPLES = 3


class InvalidInput(ValueError):
    """Raised when sizes or measured costs cannot be profiled."""
    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)


def _check_size(n) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidInput("non_integer_size", f"Input size {n!r} is not an integer")
    if n <= 0:
        raise InvalidInput("non_positive_size", f"Input size {n} is not positive")
    return int(n)


def check_sizes(sizes: Iterable) -> List[int]:
    """Return sizes as a list of ints, or raise InvalidInput."""
    sizes = list(sizes)
    if len(sizes) < MIN_SAMPLES:
        raise InvalidInput(
            "too_few_sizes",
            f"At least {MIN_SAMPLES} sizes are required to fit a class, got {len(sizes)}",
        )
    sizes = [_check_size(n) for n in sizes]
    for prev, cur in zip(sizes, sizes[1:]):
        if cur <= prev:
            raise InvalidInput(
                "not_increasing",
                f"Input sizes must be strictly increasing, got {prev} then {cur}",
            )
    return sizes


def check_cost(size: int, cost) -> float:
    """Return cost as a float, or raise InvalidInput for negative/non-finite values."""
    if isinstance(cost, bool) or not isinstance(cost, numbers.Real):
        raise InvalidInput("invalid_cost", f"Cost at n={size} is not a real number: {cost!r}")
    try:
        value = float(cost)
    except OverflowError:
        raise InvalidInput("invalid_cost", f"Cost at n={size} is too large to represent")
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidInput("invalid_cost", f"Cost at n={size} must be finite and non-negative, got {value}")
    return value


class Analyst(Agent):
    """Ratio-test classification of measured growth."""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__("Analyst", settings)

    def run(self, samples: Sequence[Sample]) -> ProfileResult:
        samples = list(samples)
        self.log.info(f"Analyst starting with samples: {[s.as_pair() for s in samples]}")
        check_sizes([s.size for s in samples])

        fitted, anomalies = self._smooth(samples)
        pairs = self._log_ratios(fitted)

        if not pairs:
            self.log.warning("No usable cost ratios, defaulting to O(1)")
            best = ComplexityClass.CONSTANT
            return ProfileResult(
                complexity_class=best,
                score=0.0,
                samples=samples,
                candidates=[Candidate(complexity_class=best, score=0.0)],
                scores={cls.value: 0.0 for cls in ComplexityClass},
                anomalies=anomalies,
                exponent=self._exponent(fitted),
            )

        scores = {cls: self._score(cls, pairs) for cls in ComplexityClass}
        for cls, score in scores.items():
            self.log.debug(f"  {cls.value:<10} score={score:.6f}")

        best = self._pick_best(scores)
        candidates = self._candidates(scores, best)
        if len(candidates) > 1:
            self.log.warning(
                "Growth is ambiguous between "
                + ", ".join(f"{c.complexity_class.value} ({c.score:.4f})" for c in candidates)
            )

        result = ProfileResult(
            complexity_class=best,
            score=scores[best],
            samples=samples,
            candidates=candidates,
            scores={cls.value: score for cls, score in scores.items()},
            anomalies=anomalies,
            exponent=self._exponent(fitted),
        )
        self.log.info(f"Classified as {best.value} with score {scores[best]:.4f}")
        return result

    def _smooth(self, samples: List[Sample]) -> Tuple[List[Sample], List[MeasurementAnomaly]]:
        """Drop samples cheaper than an earlier one; keep a record of each."""
        kept = [samples[0]]
        anomalies = []
        peak = samples[0]
        for s in samples[1:]:
            if s.cost < peak.cost:
                anomaly = MeasurementAnomaly(
                    size=s.size,
                    cost=s.cost,
                    previous_size=peak.size,
                    previous_cost=peak.cost,
                )
                self.log.warning(f"Measurement anomaly: {anomaly.describe()}; excluded from fit")
                anomalies.append(anomaly)
                continue
            kept.append(s)
            peak = s

        if len(kept) < MIN_SAMPLES:
            self.log.warning(
                f"Only {len(kept)} monotone samples left, fitting all {len(samples)} unsmoothed"
            )
            return samples, anomalies
        return kept, anomalies

    def _log_ratios(self, fitted: List[Sample]) -> List[Tuple[int, int, float]]:
        pairs = []
        for a, b in zip(fitted, fitted[1:]):
            if a.cost == 0 and b.cost == 0:
                observed = 0.0
            elif a.cost == 0 or b.cost == 0:
                self.log.debug(f"Skipping pair n={a.size}->{b.size}: zero cost has no ratio")
                continue
            else:
                observed = math.log(b.cost) - math.log(a.cost)
            pairs.append((a.size, b.size, observed))
        return pairs

    @staticmethod
    def _score(cls: ComplexityClass, pairs: List[Tuple[int, int, float]]) -> float:
        """Mean absolute error between observed and expected log ratios."""
        total = 0.0
        for n1, n2, observed in pairs:
            expected = cls.log_growth(n2) - cls.log_growth(n1)
            total += abs(observed - expected)
        return total / len(pairs)

    def _pick_best(self, scores: Dict[ComplexityClass, float]) -> ComplexityClass:
        lowest = min(scores.values())
        # declaration order is growth order, so the first tied class is the simplest
        return next(
            cls for cls in ComplexityClass
            if scores[cls] - lowest <= self.settings.tie_tolerance
        )

    def _candidates(self, scores: Dict[ComplexityClass, float], best: ComplexityClass) -> List[Candidate]:
        limit = scores[best] + self.settings.ambiguity_tolerance
        close = [cls for cls in ComplexityClass if scores[cls] <= limit]
        close.sort(key=lambda cls: (cls is not best, scores[cls], cls.rank))
        return [Candidate(complexity_class=cls, score=scores[cls]) for cls in close]

    @staticmethod
    def _exponent(fitted: List[Sample]) -> Optional[float]:
        positive = [s for s in fitted if s.cost > 0]
        if len(positive) < 2:
            return None
        xs = np.log([float(s.size) for s in positive])
        ys = np.log([s.cost for s in positive])
        slope, _ = np.polyfit(xs, ys, 1)
        return float(slope)


def samples_from_pairs(items: Iterable) -> List[Sample]:
    """Convert Samples, [size, cost] pairs or {"size", "cost"} mappings, or raise InvalidInput."""
    samples = []
    for item in items:
        if isinstance(item, Sample):
            samples.append(item)
            continue
        if isinstance(item, dict) and set(item) == {"size", "cost"}:
            size, cost = item["size"], item["cost"]
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            size, cost = item
        else:
            raise InvalidInput(
                "invalid_sample",
                f"Expected a [size, cost] pair or {{'size', 'cost'}} object, got {item!r}",
            )
        samples.append(Sample(size=_check_size(size), cost=check_cost(size, cost)))
    return samples


def classify(
    samples: Iterable[Union[Sample, Tuple[int, float]]],
    *,
    settings: Optional[Settings] = None,
) -> ProfileResult:
    """Fit already-measured (size, cost) samples without running any work."""
    return Analyst(settings).run(samples_from_pairs(samples))
