"""passmint command-line interface.

Usage examples:
    python -m passmint generate -n 20 -c 5
    python -m passmint generate -m passphrase -w 6 --capitalize --append-digit
    python -m passmint generate -m sentence --wordlist words.txt
    python -m passmint generate --min-length 14 --require-groups 3 --no-repeat
    python -m passmint validate 'hunter2' --min-length 12 --require-groups 3
"""

import argparse
import logging
import sys
from pathlib import Path

from passmint import (
    GenerationRequest,
    JsonHistoryStore,
    PassmintError,
    Policy,
    generate_many,
    parse_custom_words,
    validate,
)
from passmint.config import MODES

DEFAULT_HISTORY_FILE = Path.home() / ".passmint_history.json"


def _add_policy_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--min-length", type=int, help="Minimum total length")
    p.add_argument("--max-length", type=int, help="Maximum total length")
    p.add_argument(
        "--require-groups", type=int, default=0,
        help="Minimum number of character groups present (0-4)",
    )
    p.add_argument(
        "--allow-edge-whitespace", action="store_true",
        help="Permit leading/trailing whitespace",
    )
    p.add_argument(
        "--ban", action="append", default=[], metavar="TEXT",
        help="Reject values containing TEXT (repeatable)",
    )
    p.add_argument(
        "--personal", action="append", default=[], metavar="TEXT",
        help="Personal info (name, birth year) that must not appear (repeatable)",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passmint",
        description="Generate and validate passwords and passphrases.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate credentials")
    gen_p.add_argument("-m", "--mode", choices=MODES, default="password")
    gen_p.add_argument(
        "-n", "--length", type=int, default=16,
        help="Password length (default: 16)",
    )
    gen_p.add_argument("--no-lower", action="store_true")
    gen_p.add_argument("--no-uppercase", action="store_true")
    gen_p.add_argument("--no-digits", action="store_true")
    gen_p.add_argument("--no-symbols", action="store_true")
    gen_p.add_argument(
        "--no-ambiguous", action="store_true",
        help="Leave out O, 0, I, 1 and l",
    )
    gen_p.add_argument("--exclude", default="", help="Characters to leave out")
    gen_p.add_argument(
        "-w", "--words", type=int, default=5,
        help="Word count for passphrase/sentence modes (default: 5)",
    )
    gen_p.add_argument("--wordlist", help="Custom words file (newline or comma separated)")
    gen_p.add_argument("--custom-only", action="store_true", help="Never fall back to built-in words")
    gen_p.add_argument("--separator", default="-")
    gen_p.add_argument("--capitalize", action="store_true")
    gen_p.add_argument("--append-digit", action="store_true")
    gen_p.add_argument("--append-symbol", action="store_true")
    gen_p.add_argument("--allow-repeats", action="store_true")
    _add_policy_args(gen_p)
    gen_p.add_argument(
        "--no-repeat", action="store_true",
        help="Never return a value produced before with the same settings",
    )
    gen_p.add_argument(
        "--history",
        help=f"History file for --no-repeat (default: {DEFAULT_HISTORY_FILE})",
    )
    gen_p.add_argument(
        "-c", "--count", type=int, default=1,
        help="Number of values to generate (default: 1)",
    )

    # ── validate ───────────────────────────────────────────────────────
    val_p = sub.add_parser("validate", help="Check passwords against a policy")
    val_p.add_argument("passwords", nargs="+", help="Passwords to check")
    _add_policy_args(val_p)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "generate":
            return _cmd_generate(args)
        if args.command == "validate":
            return _cmd_validate(args)
    except (PassmintError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


def _policy_from_args(args: argparse.Namespace) -> Policy | None:
    policy = Policy(
        min_length=args.min_length,
        max_length=args.max_length,
        require_groups=args.require_groups,
        forbid_edge_whitespace=not args.allow_edge_whitespace,
        banned_substrings=args.ban,
        personal_info=args.personal,
    )
    return None if policy == Policy() else policy


def _cmd_generate(args: argparse.Namespace) -> int:
    wordlist: list[str] = []
    if args.wordlist:
        wordlist = parse_custom_words(Path(args.wordlist).read_text(encoding="utf-8"))

    request = GenerationRequest(
        mode=args.mode,
        length=args.length,
        lower=not args.no_lower,
        upper=not args.no_uppercase,
        digits=not args.no_digits,
        symbols=not args.no_symbols,
        exclude=args.exclude,
        no_ambiguous=args.no_ambiguous,
        words=args.words,
        wordlist=wordlist,
        use_custom_only=args.custom_only,
        separator=args.separator or "-",
        capitalize=args.capitalize,
        append_digit=args.append_digit,
        append_symbol=args.append_symbol,
        allow_repeats=args.allow_repeats,
        policy=_policy_from_args(args),
        no_repeat=args.no_repeat,
    )

    history = None
    if args.no_repeat:
        history = JsonHistoryStore(args.history or DEFAULT_HISTORY_FILE)

    results = generate_many(request, args.count, history=history)
    for w in results[0].warnings if results else ():
        print(f"  ! {w}")
    for result in results:
        s = result.strength
        print(f"  {result.value}  ({s.label}, {s.bits:.1f} bits)")
        print(f"            Crack time: {s.crack_fast} offline, {s.crack_online} online")

    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    policy = _policy_from_args(args) or Policy()

    failed = False
    for pwd in args.passwords:
        result = validate(pwd, policy)
        if result.ok:
            print(f"  PASS  '{pwd}'")
            continue
        failed = True
        print(f"  FAIL  '{pwd}'")
        for v in result.violations:
            print(f"            ! {v.message}")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
