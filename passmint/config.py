"""Generation request: the validated configuration for one generation call."""

from dataclasses import dataclass, field, fields

from passmint.errors import ConfigurationError
from passmint.policy import Policy
from passmint.pools import parse_custom_words


MODES = ("password", "passphrase", "sentence")

DEFAULT_MAX_ATTEMPTS = 300
MAX_ATTEMPTS_LIMIT = 5000
MAX_LENGTH = 1024
MAX_WORDS = 64

# Option names used by the browser form, mapped to field names.
_OPTION_ALIASES = {
    "noAmbiguous": "no_ambiguous",
    "customWords": "wordlist",
    "useCustomOnly": "use_custom_only",
    "capWords": "capitalize",
    "appendDigit": "append_digit",
    "appendSymbol": "append_symbol",
    "allowRepeats": "allow_repeats",
    "noRepeat": "no_repeat",
    "maxAttempts": "max_attempts",
}


@dataclass(frozen=True)
class GenerationRequest:
    mode: str = "password"

    # password mode
    length: int = 16
    lower: bool = True
    upper: bool = True
    digits: bool = True
    symbols: bool = True
    exclude: str = ""
    no_ambiguous: bool = False

    # passphrase / sentence modes
    words: int = 5
    wordlist: tuple[str, ...] = ()
    use_custom_only: bool = False
    separator: str = "-"
    capitalize: bool = False
    append_digit: bool = False
    append_symbol: bool = False
    allow_repeats: bool = False

    # cross-cutting
    policy: Policy | None = None
    no_repeat: bool = False
    max_attempts: int = field(default=DEFAULT_MAX_ATTEMPTS)

    def __post_init__(self):
        if isinstance(self.wordlist, str):
            object.__setattr__(self, "wordlist", tuple(parse_custom_words(self.wordlist)))
        else:
            object.__setattr__(self, "wordlist", tuple(self.wordlist))

        if self.mode not in MODES:
            raise ConfigurationError(
                f"Unknown mode {self.mode!r} (expected one of: {', '.join(MODES)})"
            )
        if not 1 <= self.length <= MAX_LENGTH:
            raise ConfigurationError(f"Length must be between 1 and {MAX_LENGTH}")
        if not 1 <= self.words <= MAX_WORDS:
            raise ConfigurationError(f"Word count must be between 1 and {MAX_WORDS}")
        if not 1 <= self.max_attempts <= MAX_ATTEMPTS_LIMIT:
            raise ConfigurationError(
                f"Attempt ceiling must be between 1 and {MAX_ATTEMPTS_LIMIT}"
            )

    @property
    def word_based(self) -> bool:
        return self.mode != "password"

    @classmethod
    def from_options(cls, options: dict) -> "GenerationRequest":
        """Build a request from a mapping of form options.

        Accepts both the field names and the browser form's camelCase names.
        ``customWords`` may be free text; the request parses it like the form does.
        Unrecognised names raise :class:`ConfigurationError`.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unrecognised option {key!r}")
            kwargs[name] = value

        if isinstance(kwargs.get("policy"), dict):
            try:
                kwargs["policy"] = Policy(**kwargs["policy"])
            except TypeError as exc:
                raise ConfigurationError(f"Invalid policy: {exc}") from exc
        return cls(**kwargs)
