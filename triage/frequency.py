# triage/frequency.py

"""
Statistical fingerprints: Shannon entropy and Benford's-law digit deviation.
"""
from __future__ import annotations
import math
import re
from collections import Counter
from decimal import Decimal
from typing import Iterable, List, Sequence, Tuple, Union

Number = Union[int, float, Decimal, str]

DIGITS = 10
NEUTRAL_PROBABILITY = 0.1

_EXPONENT = re.compile(r"[eE][+-]?\d+$")

# Probability of digit d (columns 0-9) at significant position p (rows 0-4).
BENFORD_TABLE: Tuple[Tuple[float, ...], ...] = (
    (
        0.0,
        0.3010299956639812,
        0.17609125905568124,
        0.12493873660829992,
        0.09691001300805642,
        0.07918124604762482,
        0.06694678963061322,
        0.05799194697768673,
        0.05115252244738129,
        0.04575749056067514,
    ),
    (
        0.11967926859688073,
        0.1138901034075564,
        0.10882149900550823,
        0.10432956023095939,
        0.10030820226757937,
        0.09667723580232243,
        0.09337473578303615,
        0.09035198926960332,
        0.08757005357886138,
        0.08499735205769224,
    ),
    (
        0.1017843646442167,
        0.10137597744780127,
        0.10097219813704165,
        0.1005729321109262,
        0.1001780876279476,
        0.09978757569217742,
        0.09940130994496177,
        0.09901920656189599,
        0.09864118415477721,
        0.09826716367825329,
    ),
    (
        0.10017614693993555,
        0.100136888117578,
        0.1000976725946149,
        0.10005850028348687,
        0.10001937109690452,
        0.09998028494784099,
        0.09994124174952602,
        0.09990224141544911,
        0.09986328385937243,
        0.09982436899529125,
    ),
    (
        0.100017591505929,
        0.10001368113544618,
        0.10000977119522403,
        0.1000058616851637,
        0.1000019526051873,
        0.09999804395520129,
        0.09999413573512496,
        0.09999022794487125,
        0.09998632058435514,
        0.09998241365348551,
    ),
)


# --- entropy --------------------------------------------------------------------


def entropy_of_counts(counts: Iterable[int]) -> float:
    """Shannon entropy (bits) of a histogram of occurrence counts.

    Args:
        counts (Iterable[int]): Non-negative counts, one per symbol.

    Returns:
        float: ``-sum(p * log2(p))`` over non-zero bins; 0.0 for an empty or
        all-zero histogram.

    Raises:
        ValueError: If any count is negative.
    """
    values = list(counts)
    if any(c < 0 for c in values):
        raise ValueError("counts must be non-negative")

    total = sum(values)
    if total == 0:
        return 0.0

    entropy = 0.0
    for c in values:
        if c:
            p = c / total
            entropy -= p * math.log2(p)
    return entropy


def entropy_of_text(text: str) -> float:
    """Shannon entropy of a string over its Unicode code points."""
    if not text:
        return 0.0
    return entropy_of_counts(Counter(text).values())


def entropy_of_bytes(data: bytes) -> float:
    """Shannon entropy of a byte string (0.0 to 8.0 bits per byte)."""
    if not data:
        return 0.0
    return entropy_of_counts(Counter(bytes(data)).values())


# --- Benford's law --------------------------------------------------------------


def benford_reference(digit: int, position: int) -> float:
    """Expected probability of ``digit`` at significant ``position`` under Benford's law.

    Position 0 is the first significant digit, so ``benford_reference(0, 0)``
    is 0.0. Digits outside 0-9 and positions outside 0-4 fall back to 0.1.
    """
    if not 0 <= digit < DIGITS or not 0 <= position < len(BENFORD_TABLE):
        return NEUTRAL_PROBABILITY
    return BENFORD_TABLE[position][digit]


def _canonical(number: Number) -> str:
    """Render a number to the string whose digits are inspected."""
    if isinstance(number, str):
        text = number.strip()
    elif isinstance(number, float):
        text = repr(number)
    else:
        text = str(number)
    # the exponent of "1.5e-07" is not part of the significand
    return _EXPONENT.sub("", text)


def significant_digits(number: Number) -> List[int]:
    """Digits of ``number`` left to right, starting at the first non-zero digit.

    Sign, decimal point and other separators are ignored. A number with no
    non-zero digit (``0``, ``"0.0"``) has no significant digits.
    """
    digits = [int(ch) for ch in _canonical(number) if "0" <= ch <= "9"]
    for i, d in enumerate(digits):
        if d:
            return digits[i:]
    return []


def digit_frequencies(numbers: Iterable[Number], position: int) -> List[float]:
    """Relative frequency of each digit at a significant position.

    Numbers without a digit at ``position`` are skipped. The histogram is
    normalised by the count of digits actually observed, not by the count of
    input numbers.

    Args:
        numbers (Iterable[Number]): Values to inspect; strings are used verbatim.
        position (int): 0-indexed significant digit position.

    Returns:
        List[float]: Ten frequencies summing to 1.0, or ten zeros when nothing
        was observed.
    """
    tally = [0] * DIGITS
    if position >= 0:
        for n in numbers:
            digits = significant_digits(n)
            if position < len(digits):
                tally[digits[position]] += 1

    total = sum(tally)
    if total == 0:
        return [0.0] * DIGITS
    return [c / total for c in tally]


def benford_deviation(frequencies: Sequence[float], position: int) -> float:
    """Sum of absolute differences between observed and Benford frequencies.

    Values near 0 indicate Benford-conforming data; larger values flag
    synthetic, truncated or manipulated series. For two probability
    distributions the result is at most 2.0.

    Raises:
        ValueError: If ``frequencies`` does not hold exactly ten values.
    """
    if len(frequencies) != DIGITS:
        raise ValueError(f"expected {DIGITS} frequencies, got {len(frequencies)}")
    return sum(abs(f - benford_reference(d, position)) for d, f in enumerate(frequencies))


def _position_deviation(numbers: Iterable[Number], position: int) -> float:
    """Deviation at one position; 0.0 when no digit was observed there."""
    freqs = digit_frequencies(numbers, position)
    if not any(freqs):
        return 0.0
    return benford_deviation(freqs, position)


def benford_first_digit_deviation(numbers: Iterable[Number]) -> float:
    """Benford deviation of the first significant digit (0.0 for a series without one)."""
    return _position_deviation(numbers, 0)


def benford_multi_digit_deviation(numbers: Iterable[Number], positions: int = 3) -> float:
    """Summed Benford deviation over the first ``positions`` significant digits.

    Positions where no number has a digit contribute 0.0.
    """
    values = list(numbers)
    return sum(_position_deviation(values, pos) for pos in range(positions))
