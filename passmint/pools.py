"""Character pools and wordlists."""

import re
import string
from dataclasses import dataclass

from passmint.errors import ConfigurationError


SETS = {
    "lower":   string.ascii_lowercase,
    "upper":   string.ascii_uppercase,
    "digits":  string.digits,
    "symbols": "!@#$%^&*()-_=+[]{};:,.<>?",
}

AMBIGUOUS = frozenset("O0I1l")

# Built-in fallback wordlist
DEFAULT_WORDLIST = (
    "orbit", "cobalt", "lantern", "cipher", "rocket", "matrix", "forest", "signal", "ember", "nova",
    "radar", "vault", "pixel", "kernel", "silent", "thunder", "anchor", "vertex", "prism", "harbor",
    "titan", "cloud", "onyx", "quartz", "fusion", "delta", "phoenix", "aurora", "cosmic", "shield",
    "falcon", "magnet", "vector", "socket", "carbon", "jigsaw", "neon", "summit", "gravity", "zenith",
    "ripple", "cascade", "octave", "paradox", "mercury", "atlas", "nimbus", "spectrum", "wavelength",
    "safeguard", "firewall", "packet", "token", "hash", "salt", "harden", "monitor", "detect", "response",
    "secure", "policy", "access", "audit", "backup", "endpoint", "incident", "alert", "threat", "defense",
)

MIN_WORDLIST_SIZE = 2


# ── Character pool ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CharacterPool:
    """Enabled character groups after exclusions, in canonical order."""

    groups: tuple[tuple[str, str], ...]

    @property
    def chars(self) -> str:
        return "".join(chars for _, chars in self.groups)

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.groups)


def build_pool(request) -> CharacterPool:
    """Build the character pool for a password *request*.

    A group whose characters are all excluded is dropped rather than made
    mandatory.  Raises :class:`ConfigurationError` when nothing is left or
    the length cannot fit one character from each remaining group.
    """
    exclude = set(request.exclude)

    def keep(c: str) -> bool:
        if c in exclude:
            return False
        if request.no_ambiguous and c in AMBIGUOUS:
            return False
        return True

    groups = []
    for name, chars in SETS.items():
        if not getattr(request, name):
            continue
        kept = "".join(c for c in chars if keep(c))
        if kept:
            groups.append((name, kept))

    if not groups:
        raise ConfigurationError(
            "Select at least one character set "
            "(and ensure exclusions don't remove all characters)"
        )
    if request.length < len(groups):
        raise ConfigurationError(
            f"Length {request.length} is too short for {len(groups)} selected character sets"
        )
    return CharacterPool(tuple(groups))


# ── Wordlists ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WordList:
    words: tuple[str, ...]
    source: str  # "custom" or "built-in"

    @property
    def size(self) -> int:
        return len(self.words)


def dedupe_words(words) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling."""
    seen: set[str] = set()
    out: list[str] = []
    for w in words:
        key = w.lower()
        if key not in seen:
            seen.add(key)
            out.append(w)
    return out


def parse_custom_words(text: str) -> list[str]:
    """Split free-form *text* on newlines and commas into a clean wordlist."""
    raw = (w.strip() for w in re.split(r"[\n,]+", text or ""))
    return dedupe_words(w for w in raw if w)


def build_wordlist(request) -> WordList:
    """Resolve the wordlist for a passphrase or sentence *request*."""
    custom = dedupe_words(w.strip() for w in request.wordlist if w.strip())

    if custom:
        wordlist = WordList(tuple(custom), "custom")
    elif request.use_custom_only:
        raise ConfigurationError(
            "'Use my words only' is enabled but no words were provided"
        )
    else:
        wordlist = WordList(DEFAULT_WORDLIST, "built-in")

    if wordlist.size < MIN_WORDLIST_SIZE:
        raise ConfigurationError("Wordlist is too small. Add more words.")
    if not request.allow_repeats and request.words > wordlist.size:
        raise ConfigurationError(
            f"Not enough unique words for {request.words} picks "
            f"(wordlist has {wordlist.size}). Allow repeats or add more words."
        )
    return wordlist
