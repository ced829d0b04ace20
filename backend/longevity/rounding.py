"""Half-up rounding for reported scores.

Python's ``round`` sends ties to the even neighbour (``round(84.5) == 84``),
which would drop a score of 84.5 out of the 85+ "Excellent" band. Scores
and averages here round ties upwards instead. Both helpers work on the exact
decimal value of the float, so a result only moves on a true tie.
"""

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

_HALF = Decimal("0.5")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity.

    >>> round_half_up(84.5), round_half_up(0.5), round_half_up(-2.5)
    (85, 1, -2)
    """
    return int((Decimal(value) + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def round_half_up_to(value: float, ndigits: int) -> float:
    """Round a non-negative value to ``ndigits`` decimals, ties upwards.

    >>> round_half_up_to(7.25, 1)
    7.3
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
