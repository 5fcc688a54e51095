"""Tests for policy validation."""

import pytest

from passmint import ConfigurationError, Policy, validate
from passmint.policy import groups_present, personal_tokens


class TestValidate:
    def test_short_value_reports_every_rule(self):
        policy = Policy(min_length=12, max_length=32, require_groups=3)
        result = validate("ab", policy)
        assert not result.ok
        assert result.codes == ("too_short", "insufficient_groups")

    def test_idempotent(self):
        policy = Policy(
            min_length=12, require_groups=4,
            banned_substrings=["pass"], personal_info=["Ada Lovelace"],
        )
        assert validate(" password ada", policy) == validate(" password ada", policy)

    def test_passes(self):
        policy = Policy(min_length=8, max_length=16, require_groups=3)
        result = validate("aB3xyzQW", policy)
        assert result.ok
        assert result.violations == ()

    def test_too_long(self):
        result = validate("a" * 33, Policy(max_length=32))
        assert result.codes == ("too_long",)
        assert "33" in result.violations[0].message

    def test_edge_whitespace(self):
        assert validate(" abc", Policy()).codes == ("edge_whitespace",)
        assert validate("abc ", Policy()).codes == ("edge_whitespace",)
        assert validate("a bc", Policy()).ok

    def test_edge_whitespace_allowed(self):
        assert validate(" abc ", Policy(forbid_edge_whitespace=False)).ok

    def test_banned_substring_case_insensitive(self):
        result = validate("MyPassWord1", Policy(banned_substrings=["password", "qwerty"]))
        assert result.codes == ("banned_substring",)
        assert "password" in result.violations[0].message

    def test_personal_info(self):
        policy = Policy(personal_info=["John Smith", "1990"])
        result = validate("john1990!", policy)
        assert result.codes == ("personal_info", "personal_info")

    def test_all_violations_listed(self):
        policy = Policy(
            min_length=20, require_groups=4,
            banned_substrings=["password"], personal_info=["john"],
        )
        result = validate(" john password", policy)
        assert set(result.codes) == {
            "too_short", "insufficient_groups", "edge_whitespace",
            "banned_substring", "personal_info",
        }

    def test_empty_value(self):
        result = validate("", Policy(min_length=1, require_groups=1))
        assert result.codes == ("too_short", "insufficient_groups")


class TestGroups:
    def test_all_groups(self):
        assert groups_present("aB1!") == ["lower", "upper", "digits", "symbols"]

    def test_whitespace_is_not_a_symbol(self):
        assert groups_present("a b") == ["lower"]

    def test_personal_tokens_skip_short_parts(self):
        assert personal_tokens(["Jo Ann Smith", "19", "1990"]) == ["ann", "smith", "1990"]


class TestPolicyConfig:
    def test_min_above_max_raises(self):
        with pytest.raises(ConfigurationError, match="exceeds"):
            Policy(min_length=20, max_length=10)

    def test_require_groups_range(self):
        with pytest.raises(ConfigurationError):
            Policy(require_groups=5)

    def test_lists_become_tuples(self):
        policy = Policy(banned_substrings=["a"], personal_info=["b"])
        assert policy.banned_substrings == ("a",)
        assert policy.personal_info == ("b",)
