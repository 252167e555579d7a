"""
Growth Report Rendering

Turns a ProfileResult into the forms a caller actually reads: a plain-text
summary, a pandas DataFrame / CSV with the best class scaled onto the data,
and a log-log plot of measured cost against that reference curve.
"""

import math
from pathlib import Path
from typing import List, Optional
import warnings

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from ..schemas import ProfileResult
from ..utils.logger import get_logger

# Suppress matplotlib warnings
warnings.filterwarnings('ignore', category=UserWarning, module='matplotlib')

log = get_logger("Report")


def render_text(result: ProfileResult) -> str:
    """Human readable summary of a profiling run."""
    lines = [f"{result.complexity_class.value}  score={result.score:.4f}"]
    if result.exponent is not None:
        lines.append(f"log-log exponent: {result.exponent:.3f}")
    if result.ambiguous:
        lines.append(
            "ambiguous between: "
            + ", ".join(f"{c.complexity_class.value} ({c.score:.4f})" for c in result.candidates)
        )

    lines.append("samples:")
    anomalous = {a.size for a in result.anomalies}
    for s in result.samples:
        flag = "  (anomaly)" if s.size in anomalous else ""
        lines.append(f"  n={s.size:<10} cost={s.cost:g}{flag}")

    if result.anomalies:
        lines.append("warnings:")
        for a in result.anomalies:
            lines.append(f"  measurement anomaly: {a.describe()}")
    return "\n".join(lines)


def _reference_costs(result: ProfileResult) -> List[float]:
    """Best class's f(n) scaled by the geometric-mean constant of the fitted samples."""
    cls = result.complexity_class
    anomalous = {a.size for a in result.anomalies}
    fitted = [s for s in result.samples if s.cost > 0 and s.size not in anomalous]
    if not fitted:
        return [0.0 for _ in result.samples]

    log_scale = sum(math.log(s.cost) - cls.log_growth(s.size) for s in fitted) / len(fitted)
    costs = []
    for s in result.samples:
        try:
            costs.append(math.exp(log_scale + cls.log_growth(s.size)))
        except OverflowError:
            costs.append(float("nan"))
    return costs


def to_dataframe(result: ProfileResult) -> pd.DataFrame:
    """One row per sample: size, cost, reference_cost, anomaly."""
    anomalous = {a.size for a in result.anomalies}
    return pd.DataFrame({
        'size': [s.size for s in result.samples],
        'cost': [s.cost for s in result.samples],
        'reference_cost': _reference_costs(result),
        'anomaly': [s.size in anomalous for s in result.samples],
    })


def export_csv(result: ProfileResult, output_path: Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    to_dataframe(result).to_csv(output_path, index=False)
    log.info(f"Saved samples CSV to {output_path}")
    return output_path


def plot_growth(result: ProfileResult, output_path: Path, title: Optional[str] = None) -> Path:
    """Log-log plot of measured cost with the best-fitting reference curve."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = to_dataframe(result)

    sns.set_palette("husl")
    fig, ax = plt.subplots(figsize=(8, 6))

    clean = df[~df['anomaly']]
    flagged = df[df['anomaly']]
    ax.plot(clean['size'], clean['cost'], 'o-', label='measured')
    if not flagged.empty:
        ax.scatter(flagged['size'], flagged['cost'], marker='x', color='red', s=80,
                   label='anomaly (excluded)')
    ax.plot(df['size'], df['reference_cost'], '--',
            label=f"{result.complexity_class.value} reference")

    ax.set_xscale('log')
    # log scale cannot show zero cost
    if (df['cost'] > 0).all():
        ax.set_yscale('log')
    ax.set_xlabel('Input size n')
    ax.set_ylabel('Cost')
    ax.set_title(title or f"Growth: {result.complexity_class.value} (score {result.score:.3f})")
    ax.legend()

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    log.info(f"Saved growth plot to {output_path}")
    return output_path
