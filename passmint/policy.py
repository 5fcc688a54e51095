"""Policy validation for generated credentials.

:func:`validate` is a pure function: it never mutates its inputs and always
reports *every* rule a value breaks, so a caller can render a full checklist.
"""

import re
from dataclasses import dataclass
from typing import NamedTuple

from passmint.errors import ConfigurationError


# ── Policy ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Policy:
    min_length: int | None = None
    max_length: int | None = None
    require_groups: int = 0
    forbid_edge_whitespace: bool = True
    banned_substrings: tuple[str, ...] = ()
    personal_info: tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any iterable of strings from callers.
        object.__setattr__(self, "banned_substrings", tuple(self.banned_substrings))
        object.__setattr__(self, "personal_info", tuple(self.personal_info))

        if self.min_length is not None and self.min_length < 1:
            raise ConfigurationError("Minimum length must be at least 1")
        if self.max_length is not None and self.max_length < 1:
            raise ConfigurationError("Maximum length must be at least 1")
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ConfigurationError(
                f"Minimum length {self.min_length} exceeds maximum length {self.max_length}"
            )
        if not 0 <= self.require_groups <= len(GROUP_PATTERNS):
            raise ConfigurationError(
                f"Required groups must be between 0 and {len(GROUP_PATTERNS)}"
            )


class Violation(NamedTuple):
    code: str
    message: str


@dataclass(frozen=True)
class PolicyResult:
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(v.code for v in self.violations)


# ── Character groups ───────────────────────────────────────────────────────

GROUP_PATTERNS = {
    "lower":   re.compile(r"[a-z]"),
    "upper":   re.compile(r"[A-Z]"),
    "digits":  re.compile(r"\d"),
    "symbols": re.compile(r"[^a-zA-Z\d\s]"),
}


def groups_present(value: str) -> list[str]:
    """Return the names of the character groups that occur in *value*."""
    return [name for name, pattern in GROUP_PATTERNS.items() if pattern.search(value)]


def personal_tokens(identifiers) -> list[str]:
    """Split caller identifiers into lowercase tokens worth matching.

    Names are split on whitespace; parts shorter than 3 characters are too
    common to flag ("jo", "19") and are skipped.
    """
    tokens: list[str] = []
    for ident in identifiers:
        for part in str(ident).lower().split():
            if len(part) >= 3 and part not in tokens:
                tokens.append(part)
    return tokens


# ── Validation ─────────────────────────────────────────────────────────────


def validate(value: str, policy: Policy) -> PolicyResult:
    """Check *value* against *policy* and list every violated rule."""
    violations: list[Violation] = []
    length = len(value)

    if policy.min_length is not None and length < policy.min_length:
        violations.append(Violation(
            "too_short",
            f"Too short -- {length} characters, need at least {policy.min_length}",
        ))
    if policy.max_length is not None and length > policy.max_length:
        violations.append(Violation(
            "too_long",
            f"Too long -- {length} characters, limit is {policy.max_length}",
        ))

    present = groups_present(value)
    if len(present) < policy.require_groups:
        violations.append(Violation(
            "insufficient_groups",
            f"Insufficient group coverage -- {len(present)} of 4 character groups, "
            f"need {policy.require_groups}",
        ))

    if policy.forbid_edge_whitespace and value != value.strip():
        violations.append(Violation(
            "edge_whitespace", "Leading or trailing whitespace",
        ))

    lower = value.lower()
    for banned in policy.banned_substrings:
        if banned and banned.lower() in lower:
            violations.append(Violation(
                "banned_substring", f"Contains banned text '{banned}'",
            ))

    for token in personal_tokens(policy.personal_info):
        if token in lower:
            violations.append(Violation(
                "personal_info", f"Contains personal information ('{token}')",
            ))

    return PolicyResult(tuple(violations))
