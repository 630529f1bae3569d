"""Standard normal CDF approximation used by the closed-form pricer.

Abramowitz & Stegun, Handbook of Mathematical Functions, formula 26.2.17:

    N(x) = 1 - phi(x) * (b1*t + b2*t^2 + b3*t^3 + b4*t^4 + b5*t^5),  t = 1 / (1 + p*x)

for x >= 0, with N(-x) = 1 - N(x). Absolute error is below 7.5e-8 over the
whole real line, which is well inside the 2-decimal display precision of
every downstream metric.
"""

from __future__ import annotations

import numpy as np

P = 0.2316419
B1 = 0.319381530
B2 = -0.356563782
B3 = 1.781477937
B4 = -1.821255978
B5 = 1.330274429
INV_SQRT_2PI = 0.3989422804014327


def norm_pdf(x):
    x = np.asarray(x, dtype=float)
    return INV_SQRT_2PI * np.exp(-0.5 * x * x)


def norm_cdf(x):
    """Return N(x) for a scalar or array; scalars come back as ``float``."""
    arr = np.asarray(x, dtype=float)
    ax = np.abs(arr)
    t = 1.0 / (1.0 + P * ax)
    poly = t * (B1 + t * (B2 + t * (B3 + t * (B4 + t * B5))))
    tail = norm_pdf(ax) * poly
    result = np.where(arr >= 0.0, 1.0 - tail, tail)
    if result.ndim == 0:
        return float(result)
    return result


__all__ = ["norm_cdf", "norm_pdf"]
