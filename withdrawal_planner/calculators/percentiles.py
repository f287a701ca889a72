"""Per-year percentile bands over a set of simulated paths.

Percentiles use the nearest-rank rule: the ``p`` percentile of ``n`` sorted
values is the element at index ``floor(n * p)``.  No interpolation is done,
so the estimate is biased slightly upward for small samples.  That is
intentional; it keeps every band value an actual simulated portfolio value.

Example
-------

>>> bands = summarize([[100.0, 50.0], [200.0, 0.0]], start_age=65)
>>> [(b.age, b.p10, b.p50, b.p90) for b in bands]
[(65, 100.0, 200.0, 200.0), (66, 0.0, 50.0, 50.0)]
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

PERCENTILES = (0.10, 0.50, 0.90)


@dataclass(frozen=True)
class PercentileBand:
    age: int
    p10: float
    p50: float
    p90: float


def _fit(series, n: int) -> np.ndarray:
    # Missing years (e.g. a short path) count as zero.
    arr = np.zeros(n)
    vals = np.asarray(series, dtype=float)[:n]
    arr[: len(vals)] = vals
    return arr


def summarize(
    paths: Sequence[Sequence[float]],
    start_age: int,
    years: Optional[int] = None,
) -> List[PercentileBand]:
    """Reduce ``paths`` to one :class:`PercentileBand` per simulated year.

    Parameters
    ----------
    paths : sequence of sequences
        Portfolio totals per year, one sequence per trial.
    start_age : int
        Age attached to the first year.
    years : int, optional
        Number of years to report.  Defaults to the longest path.  Shorter
        paths are padded with zeros.

    Returns
    -------
    list of PercentileBand
        Zero-valued bands when ``paths`` is empty but ``years`` is given.
    """
    if years is None:
        years = max((len(p) for p in paths), default=0)
    if years <= 0:
        return []
    if len(paths) == 0:
        return [PercentileBand(start_age + y, 0.0, 0.0, 0.0) for y in range(years)]

    stacked = np.vstack([_fit(p, years) for p in paths])  # n_paths x years
    ordered = np.sort(stacked, axis=0)
    count = ordered.shape[0]
    idx = [min(count - 1, int(np.floor(count * p))) for p in PERCENTILES]

    bands = []
    for y in range(years):
        p10, p50, p90 = (float(ordered[i, y]) for i in idx)
        bands.append(PercentileBand(age=start_age + y, p10=p10, p50=p50, p90=p90))
    return bands


def inflate_bands(bands: Sequence[PercentileBand], inflation: float) -> List[PercentileBand]:
    """Scale each band by ``(1 + inflation) ** (age - first_age)``.

    ``inflation`` is a decimal rate.  Used by the results view to switch
    between today's dollars and nominal dollars.
    """
    if not bands:
        return []
    first = bands[0].age
    out = []
    for b in bands:
        m = (1 + inflation) ** (b.age - first)
        out.append(PercentileBand(b.age, b.p10 * m, b.p50 * m, b.p90 * m))
    return out


def bands_frame(bands: Sequence[PercentileBand]) -> pd.DataFrame:
    return pd.DataFrame([asdict(b) for b in bands], columns=["age", "p10", "p50", "p90"])


__all__ = ["PERCENTILES", "PercentileBand", "summarize", "inflate_bands", "bands_frame"]
