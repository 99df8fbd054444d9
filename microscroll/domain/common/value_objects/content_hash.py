"""Idempotency key of a speed-mode batch."""

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Self

_SHA256_HEX = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True)
class ContentHash:
    """Lower-case SHA-256 hex digest of a submission's content."""

    value: str

    def __post_init__(self) -> None:
        if not _SHA256_HEX.fullmatch(self.value):
            raise ValueError("ContentHash must be a 64 character SHA-256 hex digest")

    @classmethod
    def compute(cls, content: str) -> Self:
        if not content:
            raise ValueError("Cannot hash empty content")
        return cls(hashlib.sha256(content.encode("utf-8")).hexdigest())

    @classmethod
    def compute_from_parts(cls, *parts: object) -> Self:
        """
        Hash the compact JSON array of parts.

        Parts must be JSON types. Order matters, and a separator inside a
        string part can never shift the boundary between two parts.
        """
        return cls.compute(json.dumps(list(parts), separators=(",", ":")))
