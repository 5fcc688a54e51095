"""Tests for the passmint command-line interface."""

import json

from passmint.cli import main


def _values(out: str) -> list[str]:
    """Generated values: the first field of each non-advisory output line."""
    return [
        line.split()[0] for line in out.splitlines()
        if line.startswith("  ") and not line.startswith(("   ", "  ! "))
    ]


class TestGenerateCommand:
    def test_password(self, capsys):
        assert main(["generate", "-n", "20", "--no-symbols", "-c", "3"]) == 0
        values = _values(capsys.readouterr().out)
        assert len(values) == 3
        assert all(len(v) == 20 and v.isalnum() for v in values)

    def test_reports_strength(self, capsys):
        main(["generate", "-n", "12"])
        out = capsys.readouterr().out
        assert "bits)" in out
        assert "Crack time:" in out

    def test_passphrase_from_wordlist_file(self, tmp_path, capsys):
        words = tmp_path / "words.txt"
        words.write_text("alpha\nbravo\ncharlie\ndelta\n")
        code = main([
            "generate", "-m", "passphrase", "-w", "4",
            "--wordlist", str(words), "--separator", "+",
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "Using your custom list (4 unique words)." in out
        value = _values(out)[0]
        assert sorted(value.split("+")) == ["alpha", "bravo", "charlie", "delta"]

    def test_empty_separator_falls_back_to_dash(self, tmp_path, capsys):
        words = tmp_path / "words.txt"
        words.write_text("alpha\nbravo\ncharlie\ndelta\n")
        code = main([
            "generate", "-m", "passphrase", "-w", "4",
            "--wordlist", str(words), "--separator", "",
        ])
        assert code == 0
        value = _values(capsys.readouterr().out)[0]
        assert sorted(value.split("-")) == ["alpha", "bravo", "charlie", "delta"]

    def test_configuration_error(self, capsys):
        code = main(["generate", "--no-lower", "--no-uppercase", "--no-digits", "--no-symbols"])
        assert code == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_bad_policy(self, capsys):
        code = main(["generate", "--min-length", "20", "--max-length", "10"])
        assert code == 1
        assert "exceeds" in capsys.readouterr().err

    def test_no_repeat_uses_history_file(self, tmp_path, capsys):
        path = tmp_path / "history.json"
        code = main(["generate", "--no-repeat", "--history", str(path), "-c", "2"])
        assert code == 0
        assert path.exists()
        data = json.loads(path.read_text())
        assert sum(len(digests) for digests in data.values()) == 2

    def test_no_repeat_exhausted(self, tmp_path, capsys):
        path = tmp_path / "history.json"
        args = [
            "generate", "-n", "1", "--no-uppercase", "--no-digits", "--no-symbols",
            "--exclude", "abcdefghijklmnopqrstuvw", "--no-repeat", "--history", str(path),
        ]
        assert main(args + ["-c", "3"]) == 0
        assert main(args) == 1
        assert "No acceptable password" in capsys.readouterr().err


class TestValidateCommand:
    def test_failure_checklist(self, capsys):
        code = main(["validate", "ab", "--min-length", "12", "--require-groups", "3"])
        assert code == 1
        out = capsys.readouterr().out
        assert "FAIL  'ab'" in out
        assert "Too short" in out
        assert "Insufficient group coverage" in out

    def test_pass(self, capsys):
        code = main(["validate", "Correct-Horse-9", "--min-length", "12", "--require-groups", "3"])
        assert code == 0
        assert "PASS" in capsys.readouterr().out

    def test_banned_and_personal(self, capsys):
        code = main(["validate", "ada1815secret", "--ban", "secret", "--personal", "Ada 1815"])
        assert code == 1
        out = capsys.readouterr().out
        assert "banned text 'secret'" in out
        assert "personal information ('ada')" in out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out
