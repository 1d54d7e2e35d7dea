"""Content digests for asset checksums and forest fingerprints.

xxhash64 is the default. SHA256 is there for digests that leave the process
and get compared by something else.
"""

import hashlib
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Protocol

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"
    SHA256 = "sha256"


class HashObject(Protocol):
    """The incremental interface shared by hashlib and xxhash objects."""

    def update(self, data: bytes, /) -> None: ...

    def hexdigest(self) -> str: ...


_CONSTRUCTORS: dict[Algorithm, Callable[[], HashObject]] = {
    Algorithm.XXHASH64: xxhash.xxh64,
    Algorithm.SHA256: hashlib.sha256,
}


def new_hasher(algorithm: Algorithm | str = Algorithm.XXHASH64) -> HashObject:
    """
    Fresh incremental hash object.

    Raises:
        ValueError: If the algorithm is unknown
    """
    try:
        return _CONSTRUCTORS[Algorithm(algorithm)]()
    except ValueError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None


def hash_chunks(
    chunks: Iterable[bytes],
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """Hex digest of the concatenation of ``chunks``."""
    hasher = new_hasher(algorithm)
    for chunk in chunks:
        hasher.update(chunk)
    digest = hasher.hexdigest()
    return digest[:truncate] if truncate else digest


def hash_bytes(
    data: bytes,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """Hex digest of ``data``."""
    return hash_chunks((data,), algorithm, truncate)


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """
    Hex digest of UTF-8 encoded text.

    Examples:
        >>> len(hash_string("[]"))
        16
    """
    return hash_bytes(text.encode("utf-8"), algorithm, truncate)


__all__ = [
    "Algorithm",
    "HashObject",
    "new_hasher",
    "hash_chunks",
    "hash_bytes",
    "hash_string",
]
