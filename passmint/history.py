"""No-repeat history: hashes of previously produced values, per scope.

Stores never see plaintext candidates, only SHA-256 fingerprints.  The
check (``has``) and the insert (``remember``) are separate calls; a store
shared between concurrent generation calls must be guarded by its owner.
"""

import dataclasses
import hashlib
import json
import logging
import os
from collections import OrderedDict
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_CAP = 4000

# Fields that change how a candidate is produced.  Attempt ceiling and the
# no-repeat switch itself do not open a new uniqueness space.
_UNSCOPED_FIELDS = {"no_repeat", "max_attempts"}


class HistoryStore(Protocol):
    def has(self, scope: str, digest: str) -> bool: ...

    def remember(self, scope: str, digest: str) -> None: ...


def fingerprint(value: str) -> str:
    """Return the hex SHA-256 of *value*."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def scope_key(request) -> str:
    """Derive an opaque scope key from the generation parameters of *request*."""
    params = {
        k: v for k, v in dataclasses.asdict(request).items()
        if k not in _UNSCOPED_FIELDS
    }
    canonical = json.dumps(params, sort_keys=True, separators=(",", ":"), default=list)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:32]


# ── In-memory store ────────────────────────────────────────────────────────


class MemoryHistoryStore:
    """Bounded per-scope history kept in process memory.

    Each scope holds at most *cap* digests; the oldest is evicted first.
    """

    def __init__(self, cap: int = DEFAULT_CAP):
        if cap < 1:
            raise ValueError("History cap must be at least 1")
        self.cap = cap
        self._scopes: dict[str, OrderedDict[str, None]] = {}

    def has(self, scope: str, digest: str) -> bool:
        return digest in self._scopes.get(scope, ())

    def remember(self, scope: str, digest: str) -> None:
        seen = self._scopes.setdefault(scope, OrderedDict())
        seen[digest] = None
        seen.move_to_end(digest)
        while len(seen) > self.cap:
            seen.popitem(last=False)

    def size(self, scope: str) -> int:
        return len(self._scopes.get(scope, ()))

    def clear(self, scope: str | None = None) -> None:
        if scope is None:
            self._scopes.clear()
        else:
            self._scopes.pop(scope, None)


# ── JSON file store ────────────────────────────────────────────────────────


class JsonHistoryStore(MemoryHistoryStore):
    """A :class:`MemoryHistoryStore` persisted to a JSON file.

    The file maps each scope key to its digests, oldest first.  It is
    rewritten after every ``remember`` so history survives restarts.
    """

    def __init__(self, path, cap: int = DEFAULT_CAP):
        super().__init__(cap)
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable history file %s: %s", self.path, exc)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed history file %s", self.path)
            return
        for scope, digests in data.items():
            if isinstance(digests, list):
                # Keep only the newest entries when the file exceeds the cap.
                self._scopes[scope] = OrderedDict.fromkeys(
                    str(d) for d in digests[-self.cap:]
                )

    def _save(self) -> None:
        payload = {scope: list(seen) for scope, seen in self._scopes.items()}
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(payload), encoding="utf-8")
        os.replace(tmp, self.path)

    def remember(self, scope: str, digest: str) -> None:
        super().remember(scope, digest)
        self._save()

    def clear(self, scope: str | None = None) -> None:
        super().clear(scope)
        self._save()
