# agents/profiler.py
from typing import Callable, Iterable, List, Optional

from .base import Agent
from .analyst import Analyst, check_cost, check_sizes
from ..schemas import ProfileResult, Sample
from ..utils.config import Settings

Work = Callable[[int], float]


class GrowthProfiler(Agent):
    """Empirical growth measurement for a single unit of work.

    ``work(n)`` is called once per size, strictly one after another, and must
    return the measured cost at that size (elapsed time or an operation
    count).  The profiler imposes no timeout: bounding the sizes for
    super-polynomial work is the caller's job.
    """

    def __init__(self, settings: Optional[Settings] = None, analyst: Optional[Analyst] = None):
        super().__init__("GrowthProfiler", settings)
        self.analyst = analyst or Analyst(self.settings)

    def run(self, work: Work, sizes: Iterable[int]) -> ProfileResult:
        """Measure ``work`` at every size and classify its growth.

        Raises:
            InvalidInput: if sizes are malformed (checked before any work runs)
                or work returns a negative or non-finite cost.
        """
        sizes = check_sizes(sizes)
        self.log.info(f"Profiler starting for {_describe(work)} over sizes {sizes}")

        samples = self._collect(work, sizes)
        result = self.analyst.run(samples)

        self.log.info(
            f"Profiler completed: {result.complexity_class.value} "
            f"(score {result.score:.4f}, {len(result.anomalies)} anomalies)"
        )
        return result

    def profile(self, work: Work, sizes: Iterable[int]) -> ProfileResult:
        return self.run(work, sizes)

    def _collect(self, work: Work, sizes: List[int]) -> List[Sample]:
        samples = []
        for i, n in enumerate(sizes):
            self.log.info(f"Measuring input size {n} ({i+1}/{len(sizes)})")
            cost = check_cost(n, work(n))
            self.log.info(f"  Cost: {cost:g}")
            samples.append(Sample(size=n, cost=cost))
        return samples


def _describe(work: Work) -> str:
    return getattr(work, "__qualname__", None) or repr(work)


def profile(work: Work, sizes: Iterable[int], *, settings: Optional[Settings] = None) -> ProfileResult:
    """profile(work, sizes) -> ProfileResult using a fresh GrowthProfiler."""
    return GrowthProfiler(settings).run(work, sizes)
