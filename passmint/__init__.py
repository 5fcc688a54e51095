"""passmint -- credential generation utilities.

Passwords, passphrases and sentence-style mnemonics drawn from a
cryptographic random source, validated against a policy, kept unique with a
bounded history, and scored for entropy and crack time.
"""

from passmint.config import GenerationRequest
from passmint.errors import (
    ConfigurationError,
    ExhaustedSearchSpaceError,
    PassmintError,
    PolicyViolation,
)
from passmint.generator import GenerationResult, build_strategy, generate, generate_many
from passmint.history import JsonHistoryStore, MemoryHistoryStore, fingerprint, scope_key
from passmint.policy import Policy, PolicyResult, Violation, validate
from passmint.pools import build_pool, build_wordlist, parse_custom_words
from passmint.strategies import (
    Candidate,
    CandidateStrategy,
    NoRepeatStrategy,
    PolicyStrategy,
    PoolStrategy,
    SentenceStrategy,
    WordlistStrategy,
)
from passmint.strength import StrengthEstimate, candidate_entropy, estimate_strength

__all__ = [
    "Candidate",
    "CandidateStrategy",
    "ConfigurationError",
    "ExhaustedSearchSpaceError",
    "GenerationRequest",
    "GenerationResult",
    "JsonHistoryStore",
    "MemoryHistoryStore",
    "NoRepeatStrategy",
    "PassmintError",
    "Policy",
    "PolicyResult",
    "PolicyStrategy",
    "PolicyViolation",
    "PoolStrategy",
    "SentenceStrategy",
    "StrengthEstimate",
    "Violation",
    "WordlistStrategy",
    "build_pool",
    "build_strategy",
    "build_wordlist",
    "candidate_entropy",
    "estimate_strength",
    "fingerprint",
    "generate",
    "generate_many",
    "parse_custom_words",
    "scope_key",
    "validate",
]
