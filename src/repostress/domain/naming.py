"""Node name rules and random-suffix candidate generation.

A free name is derived by appending ``"." + digit`` to the previous
candidate until the scope no longer holds it: ``asset`` -> ``asset.3``
-> ``asset.3.7``. Every draw extends the last candidate, so the name
space grows tenfold per collision.
"""

from __future__ import annotations

import random
from collections.abc import Iterator

from repostress.errors import InvalidNameError, NameSpaceExhaustedError

SUFFIX_SEPARATOR = "."
SUFFIX_RADIX = 10

_FORBIDDEN_CHARS = frozenset("/[]*|:")


def validate_name(name: str) -> str:
    """Return *name* if it is a legal node name, else raise InvalidNameError.

    Examples:
        >>> validate_name("asset.3")
        'asset.3'
    """
    if not name or name in (".", ".."):
        msg = f"Illegal node name: {name!r}"
        raise InvalidNameError(msg)
    if name != name.strip():
        msg = f"Node name has surrounding whitespace: {name!r}"
        raise InvalidNameError(msg)
    bad = sorted(_FORBIDDEN_CHARS.intersection(name))
    if bad:
        msg = f"Node name {name!r} contains forbidden characters: {''.join(bad)}"
        raise InvalidNameError(msg)
    return name


def split_path(path: str) -> list[str]:
    """Split an absolute repository path into its name segments."""
    if not path.startswith("/"):
        msg = f"Repository paths are absolute: {path!r}"
        raise InvalidNameError(msg)
    return [segment for segment in path.split("/") if segment]


def join_path(parent: str, name: str) -> str:
    """Join a parent path and a child name."""
    if parent == "/":
        return f"/{name}"
    return f"{parent}/{name}"


class SuffixNamer:
    """Draws ever longer suffixed candidates from one seeded random source.

    Parameters:
        rng: Random source; a fresh clock-seeded one when omitted.
        max_attempts: Upper bound on draws per :meth:`candidates` call.
            ``0`` or ``None`` means unbounded: if every candidate is taken
            the generator never ends.
    """

    def __init__(self, rng: random.Random | None = None, *, max_attempts: int | None = 32) -> None:
        self._random = rng if rng is not None else random.Random()
        self._max_attempts = max_attempts or None

    @property
    def max_attempts(self) -> int | None:
        return self._max_attempts

    def next_candidate(self, previous: str) -> str:
        """Append one random digit suffix to *previous*."""
        return f"{previous}{SUFFIX_SEPARATOR}{self._random.randrange(SUFFIX_RADIX)}"

    def candidates(self, base: str) -> Iterator[str]:
        """Yield accumulated candidates derived from *base*.

        Raises:
            NameSpaceExhaustedError: once ``max_attempts`` candidates were
                yielded and the caller asks for another one.
        """
        candidate = base
        attempts = 0
        while True:
            if self._max_attempts is not None and attempts >= self._max_attempts:
                raise NameSpaceExhaustedError(base, attempts, candidate)
            candidate = self.next_candidate(candidate)
            attempts += 1
            yield candidate
