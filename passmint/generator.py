"""Generation entry point: compose a strategy, retry until acceptable, score."""

import logging
from collections import Counter
from dataclasses import dataclass

from passmint.config import GenerationRequest
from passmint.errors import ConfigurationError, ExhaustedSearchSpaceError, PolicyViolation
from passmint.history import scope_key
from passmint.pools import SETS, build_pool, build_wordlist
from passmint.strategies import (
    SENTENCE_SLOTS,
    Candidate,
    NoRepeatStrategy,
    PolicyStrategy,
    PoolStrategy,
    SentenceStrategy,
    WordlistStrategy,
    default_rng,
)
from passmint.strength import StrengthEstimate, candidate_entropy, estimate_strength

logger = logging.getLogger(__name__)

SMALL_CUSTOM_WORDLIST = 20


@dataclass(frozen=True)
class GenerationResult:
    candidate: Candidate
    strength: StrengthEstimate
    attempts: int
    warnings: tuple[str, ...] = ()

    @property
    def value(self) -> str:
        return self.candidate.value


def _check_pool_against_policy(request: GenerationRequest, pool) -> None:
    policy = request.policy
    if policy is None:
        return
    if policy.require_groups > len(pool.groups):
        raise ConfigurationError(
            f"Policy requires {policy.require_groups} character groups but only "
            f"{len(pool.groups)} are available ({', '.join(pool.names)})"
        )
    if (
        policy.min_length is not None
        and request.length < policy.min_length
        and "digits" not in pool.names
    ):
        raise ConfigurationError(
            f"Length {request.length} is below the policy minimum {policy.min_length} "
            "and there are no digits to pad with"
        )


def build_strategy(request: GenerationRequest, history=None, rng=None, wordlist=None):
    """Compose the strategy chain for *request*.

    Raises :class:`ConfigurationError` for requests that can never succeed.
    """
    rng = rng or default_rng()

    pad_chars = SETS["digits"]
    if request.mode == "password":
        pool = build_pool(request)
        _check_pool_against_policy(request, pool)
        # Padding stays inside the pool: same exclusions, no new groups.
        pad_chars = dict(pool.groups).get("digits", "")
        strategy = PoolStrategy(pool, request.length, rng)
    else:
        if wordlist is None:
            wordlist = build_wordlist(request)
        if request.mode == "sentence" and request.words < SENTENCE_SLOTS:
            raise ConfigurationError(
                f"Sentence mode needs at least {SENTENCE_SLOTS} words"
            )
        cls = SentenceStrategy if request.mode == "sentence" else WordlistStrategy
        strategy = cls(
            wordlist,
            request.words,
            allow_repeats=request.allow_repeats,
            capitalize_words=request.capitalize,
            separator=request.separator,
            append_digit=request.append_digit,
            append_symbol=request.append_symbol,
            rng=rng,
        )

    if request.policy is not None:
        strategy = PolicyStrategy(strategy, request.policy, rng, pad_chars=pad_chars)

    if request.no_repeat:
        if history is None:
            raise ConfigurationError("No-repeat generation needs a history store")
        strategy = NoRepeatStrategy(strategy, history, scope_key(request))

    return strategy


def wordlist_advisories(wordlist) -> tuple[str, ...]:
    if wordlist.source == "custom":
        msg = f"Using your custom list ({wordlist.size} unique words)."
        if wordlist.size < SMALL_CUSTOM_WORDLIST:
            msg += " Add more words for stronger passphrases."
        return (msg,)
    return (f"Using built-in list ({wordlist.size} words).",)


def _exhausted_message(request: GenerationRequest, rejections: Counter) -> str:
    msg = (
        f"No acceptable {request.mode} found in {request.max_attempts} attempts; "
        "the current settings leave too small a search space."
    )
    if request.mode == "password":
        msg += " Enable more character classes, relax exclusions, or adjust the length."
    else:
        msg += " Add wordlist entries, allow repeats, or raise the word count."
    if rejections:
        top = ", ".join(f"{code} x{n}" for code, n in rejections.most_common(3))
        msg += f" Most frequent rejections: {top}."
    return msg


def generate(request: GenerationRequest, history=None, rng=None) -> GenerationResult:
    """Generate one accepted candidate for *request* and estimate its strength.

    With ``request.no_repeat`` the accepted value is remembered in *history*
    before returning.  Raises :class:`ConfigurationError` for impossible
    settings and :class:`ExhaustedSearchSpaceError` when every attempt was
    rejected.
    """
    warnings: tuple[str, ...] = ()
    wordlist = None
    if request.word_based:
        wordlist = build_wordlist(request)
        warnings = wordlist_advisories(wordlist)

    strategy = build_strategy(request, history=history, rng=rng, wordlist=wordlist)
    rejections: Counter = Counter()

    for attempt in range(1, request.max_attempts + 1):
        try:
            candidate = strategy.generate()
        except PolicyViolation as exc:
            rejections.update(exc.result.codes)
            logger.debug("Attempt %d rejected: %s", attempt, ", ".join(exc.result.codes))
            continue

        strategy.commit(candidate)
        logger.info("Accepted %s after %d attempt(s)", request.mode, attempt)
        bits = candidate_entropy(candidate)
        return GenerationResult(candidate, estimate_strength(bits), attempt, warnings)

    logger.warning(
        "Gave up on %s generation after %d attempts (%s)",
        request.mode, request.max_attempts, dict(rejections),
    )
    raise ExhaustedSearchSpaceError(
        _exhausted_message(request, rejections), request.max_attempts,
    )


def generate_many(request: GenerationRequest, count: int, history=None, rng=None) -> list[GenerationResult]:
    return [generate(request, history=history, rng=rng) for _ in range(count)]
