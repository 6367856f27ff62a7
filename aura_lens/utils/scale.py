import math


def to_float(n: float) -> float:
    """float(n), saturating to +/-inf for ints too large to convert."""
    try:
        return float(n)
    except OverflowError:
        return math.inf if n > 0 else -math.inf


def round_half_up(x: float) -> int:
    """Round halves toward +infinity, so 2.5 -> 3 and -2.5 -> -2."""
    return int(math.floor(x + 0.5))


def clamp(n: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, n))


def clamp01(n: float | None) -> float:
    """Clamp a ratio into [0, 1]; missing or NaN ratios count as 0."""
    if n is None:
        return 0.0
    n = to_float(n)
    if math.isnan(n):
        return 0.0
    return clamp(n, 0.0, 1.0)


def log_score(value: float, cap: float) -> int:
    """Log-compress a raw count onto 0..100 so outliers don't flatten everyone else.

    `cap` is the raw value where the curve reaches 100; anything above it
    saturates at 100.
    """
    v = to_float(value)
    v = 0.0 if math.isnan(v) else max(0.0, v)
    c = max(1.0, to_float(cap))
    r = math.log10(1 + v) / math.log10(1 + c)
    return round_half_up(clamp(r * 100, 0, 100))
