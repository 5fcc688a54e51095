"""Candidate strategies.

Each strategy produces one :class:`Candidate` per ``generate()`` call.
Base strategies (pool, wordlist, sentence) draw the value; decorators
(policy, no-repeat) wrap another strategy and reject by raising
:class:`~passmint.errors.PolicyViolation`.

All randomness goes through a :class:`random.Random` instance, by default
:class:`secrets.SystemRandom`.  ``randrange`` draws by rejection sampling,
so there is no modulo bias for ranges that are not a power of two.
"""

import abc
import dataclasses
import secrets
from dataclasses import dataclass

from passmint.errors import PolicyViolation
from passmint.history import fingerprint
from passmint.policy import PolicyResult, Violation, validate
from passmint.pools import SETS


@dataclass(frozen=True)
class Candidate:
    value: str
    mode: str
    pool_size: int = 0
    wordlist_size: int = 0
    word_count: int = 0
    append_digit: bool = False
    append_symbol: bool = False
    padded: int = 0          # digits added by policy repair
    pad_size: int = 0        # size of the digit set padding drew from
    truncated: bool = False  # cut down to the policy maximum


def default_rng():
    return secrets.SystemRandom()


def shuffle(items: list, rng) -> list:
    """Fisher-Yates shuffle of *items* in place."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def _pick(seq, rng):
    return seq[rng.randrange(len(seq))]


class CandidateStrategy(abc.ABC):
    @abc.abstractmethod
    def generate(self) -> Candidate:
        """Produce one candidate or raise PolicyViolation."""

    def commit(self, candidate: Candidate) -> None:
        """Called once with the candidate the caller accepted."""


# ── Password ───────────────────────────────────────────────────────────────


class PoolStrategy(CandidateStrategy):
    """Random characters from a :class:`~passmint.pools.CharacterPool`.

    One character is drawn from each group first so every enabled class is
    present, the rest come from the full pool, then the whole sequence is
    shuffled to remove the positional bias of the coverage step.
    """

    def __init__(self, pool, length: int, rng=None):
        self.pool = pool
        self.length = length
        self.rng = rng or default_rng()

    def generate(self) -> Candidate:
        chars = [_pick(group, self.rng) for _, group in self.pool.groups]
        alphabet = self.pool.chars
        while len(chars) < self.length:
            chars.append(_pick(alphabet, self.rng))
        shuffle(chars, self.rng)
        return Candidate("".join(chars), "password", pool_size=len(alphabet))


# ── Passphrase ─────────────────────────────────────────────────────────────


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


class WordlistStrategy(CandidateStrategy):
    mode = "passphrase"

    def __init__(
        self,
        wordlist,
        word_count: int,
        *,
        allow_repeats: bool = False,
        capitalize_words: bool = False,
        separator: str = "-",
        append_digit: bool = False,
        append_symbol: bool = False,
        rng=None,
    ):
        self.wordlist = wordlist
        self.word_count = word_count
        self.allow_repeats = allow_repeats
        self.capitalize_words = capitalize_words
        self.separator = separator
        self.append_digit = append_digit
        self.append_symbol = append_symbol
        self.rng = rng or default_rng()

    def draw_words(self) -> list[str]:
        words = list(self.wordlist.words)
        if not self.allow_repeats and self.word_count > len(words):
            # build_wordlist rejects this; guard direct construction too
            raise ValueError("Not enough unique words for that count")

        chosen = []
        for _ in range(self.word_count):
            if self.allow_repeats:
                pick = _pick(words, self.rng)
            else:
                pick = words.pop(self.rng.randrange(len(words)))
            chosen.append(capitalize(pick) if self.capitalize_words else pick)
        return chosen

    def render(self, words: list[str]) -> str:
        return self.separator.join(words)

    def suffix(self) -> str:
        out = ""
        if self.append_digit:
            out += _pick(SETS["digits"], self.rng)
        if self.append_symbol:
            out += _pick(SETS["symbols"], self.rng)
        return out

    def generate(self) -> Candidate:
        value = self.render(self.draw_words()) + self.suffix()
        return Candidate(
            value,
            self.mode,
            wordlist_size=len(self.wordlist.words),
            word_count=self.word_count,
            append_digit=self.append_digit,
            append_symbol=self.append_symbol,
        )


# ── Sentence ───────────────────────────────────────────────────────────────

DETERMINERS = ("the", "a", "every", "some", "this", "that", "my", "our", "one", "each")
VERBS = (
    "guards", "chases", "builds", "finds", "lifts", "paints",
    "scans", "follows", "signals", "carries", "hides", "tracks",
)
ADVERBS = (
    "quietly", "boldly", "swiftly", "gently", "rarely",
    "calmly", "brightly", "slowly", "eagerly", "often",
)
PREPOSITIONS = (
    "under", "beyond", "near", "across", "behind",
    "inside", "above", "beside", "through", "past",
)

SENTENCE_SLOTS = 4


class SentenceStrategy(WordlistStrategy):
    """Words rendered into a fixed sentence shape for easier recall.

    determiner word word verb adverb preposition determiner word word,
    followed by any words beyond the fourth.
    """

    mode = "sentence"

    def __init__(self, wordlist, word_count: int, **kwargs):
        if word_count < SENTENCE_SLOTS:
            raise ValueError(f"Sentence mode needs at least {SENTENCE_SLOTS} words")
        super().__init__(wordlist, word_count, **kwargs)

    def render(self, words: list[str]) -> str:
        rng = self.rng
        w1, w2, w3, w4, *tail = words
        parts = [
            capitalize(_pick(DETERMINERS, rng)), w1, w2,
            _pick(VERBS, rng), _pick(ADVERBS, rng), _pick(PREPOSITIONS, rng),
            _pick(DETERMINERS, rng), w3, w4,
            *tail,
        ]
        return " ".join(parts)


# ── Decorators ─────────────────────────────────────────────────────────────


def repair_edges(value: str, rng) -> str:
    """Swap leading/trailing whitespace with a random interior non-space character."""
    chars = list(value)
    if not chars:
        return value
    for edge in (0, len(chars) - 1):
        if not chars[edge].isspace():
            continue
        interior = [i for i in range(1, len(chars) - 1) if not chars[i].isspace()]
        if not interior:
            break
        j = _pick(interior, rng)
        chars[edge], chars[j] = chars[j], chars[edge]
    return "".join(chars)


class PolicyStrategy(CandidateStrategy):
    """Repair what can be repaired at the edges, then validate against *policy*.

    Repairs: pad with random characters from *pad_chars* up to the minimum
    length (skipped when *pad_chars* is empty), truncate to the maximum length,
    move boundary whitespace inward.  The result is always
    re-validated; anything still failing is rejected, never patched further.
    """

    def __init__(self, inner: CandidateStrategy, policy, rng=None, pad_chars: str = SETS["digits"]):
        self.inner = inner
        self.policy = policy
        self.pad_chars = pad_chars
        self.rng = rng or default_rng()

    def generate(self) -> Candidate:
        candidate = self.inner.generate()
        value = candidate.value
        padded = 0
        truncated = False

        min_length = self.policy.min_length
        if min_length is not None and len(value) < min_length and self.pad_chars:
            padded = min_length - len(value)
            value += "".join(_pick(self.pad_chars, self.rng) for _ in range(padded))
        if self.policy.max_length is not None and len(value) > self.policy.max_length:
            value = value[:self.policy.max_length]
            truncated = True
        if self.policy.forbid_edge_whitespace:
            value = repair_edges(value, self.rng)

        result = validate(value, self.policy)
        if not result.ok:
            raise PolicyViolation(result)

        return dataclasses.replace(
            candidate,
            value=value,
            padded=candidate.padded + padded,
            pad_size=len(self.pad_chars) if padded else candidate.pad_size,
            truncated=candidate.truncated or truncated,
        )

    def commit(self, candidate: Candidate) -> None:
        self.inner.commit(candidate)


class NoRepeatStrategy(CandidateStrategy):
    """Reject candidates already remembered under *scope*; remember on commit."""

    def __init__(self, inner: CandidateStrategy, history, scope: str):
        self.inner = inner
        self.history = history
        self.scope = scope

    def generate(self) -> Candidate:
        candidate = self.inner.generate()
        if self.history.has(self.scope, fingerprint(candidate.value)):
            raise PolicyViolation(PolicyResult((
                Violation("repeated", "Already generated with these settings"),
            )))
        return candidate

    def commit(self, candidate: Candidate) -> None:
        self.history.remember(self.scope, fingerprint(candidate.value))
        self.inner.commit(candidate)
