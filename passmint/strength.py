"""Entropy and crack-time estimates for generated candidates.

Estimates are computed from how a value was *generated* (pool size, wordlist
size), not from inspecting the string.  Guess rates are illustrative.
"""

import math
from dataclasses import dataclass

from passmint.pools import SETS

FAST_GUESSES_PER_SEC = 1e10    # offline attack on a fast hash
ONLINE_GUESSES_PER_SEC = 10    # rate-limited login form

PRINTABLE_POOL = 94

# (upper bound in bits, label, meter percent)
_TIERS = [
    (35, "Weak", 20),
    (55, "Fair", 45),
    (75, "Strong", 70),
    (math.inf, "Very Strong", 90),
]


@dataclass(frozen=True)
class StrengthEstimate:
    bits: float
    label: str
    percent: int
    crack_fast_seconds: float
    crack_online_seconds: float

    @property
    def crack_fast(self) -> str:
        return format_duration(self.crack_fast_seconds)

    @property
    def crack_online(self) -> str:
        return format_duration(self.crack_online_seconds)


def entropy_password(length: int, pool_size: int) -> float:
    return length * math.log2(pool_size)


def entropy_passphrase(
    word_count: int,
    wordlist_size: int,
    append_digit: bool = False,
    append_symbol: bool = False,
) -> float:
    bits = word_count * math.log2(wordlist_size)
    if append_digit:
        bits += math.log2(len(SETS["digits"]))
    if append_symbol:
        bits += math.log2(len(SETS["symbols"]))
    return bits


def candidate_entropy(candidate) -> float:
    """Return the entropy in bits of a generated *candidate*."""
    if candidate.pool_size:
        bits = entropy_password(len(candidate.value) - candidate.padded, candidate.pool_size)
    else:
        bits = entropy_passphrase(
            candidate.word_count,
            candidate.wordlist_size,
            candidate.append_digit,
            candidate.append_symbol,
        )
    if candidate.padded:
        bits += candidate.padded * math.log2(candidate.pad_size)
    if candidate.truncated:
        bits = min(bits, len(candidate.value) * math.log2(PRINTABLE_POOL))
    return bits


def crack_seconds(bits: float, rate: float) -> float:
    """Expected seconds to find the value: half the search space at *rate*."""
    try:
        return (2.0 ** bits / 2) / rate
    except OverflowError:
        return math.inf


def format_duration(seconds: float) -> str:
    if not math.isfinite(seconds):
        return "\u2014"
    if seconds < 60:
        return f"{seconds:.1f} sec"
    if seconds < 3600:
        return f"{seconds / 60:.1f} min"
    if seconds < 86400:
        return f"{seconds / 3600:.1f} hr"
    return f"{seconds / 86400:.1f} days"


def strength_label(bits: float) -> tuple[str, int]:
    """Map *bits* to a qualitative label and a meter percentage."""
    for limit, label, pct in _TIERS:
        if bits < limit:
            return label, pct
    return _TIERS[-1][1], _TIERS[-1][2]


def estimate_strength(bits: float) -> StrengthEstimate:
    label, pct = strength_label(bits)
    return StrengthEstimate(
        bits=bits,
        label=label,
        percent=pct,
        crack_fast_seconds=crack_seconds(bits, FAST_GUESSES_PER_SEC),
        crack_online_seconds=crack_seconds(bits, ONLINE_GUESSES_PER_SEC),
    )
