from __future__ import annotations

import hashlib
import json
import logging
import random
import secrets
from dataclasses import dataclass
from typing import Any, Union

logger = logging.getLogger(__name__)

Seed = Union[int, str, bytes, None]

DUNGEON_LAYOUT = "dungeon_layout"


@dataclass(frozen=True)
class RNGManager:
    """Deterministic RNG source for a session.

    Each consumer asks for its own ``random.Random`` via ``context_rng`` so that
    drawing numbers in one place never shifts the sequence seen by another:

        rngm = RNGManager("my-seed")
        layout_rng = rngm.context_rng(DUNGEON_LAYOUT)

    The master seed can be an int, str, or bytes. ``None`` picks a random seed
    and logs it so a run can be reproduced later.
    """

    master_seed: Seed

    def __post_init__(self) -> None:
        if self.master_seed is None:
            seed_bytes = secrets.token_bytes(16)
            logger.info("No master seed provided; generated random seed: %s", seed_bytes.hex())
        else:
            seed_bytes = self._canonicalize_seed(self.master_seed)
            logger.debug("Using master seed: %r", self.master_seed)
        object.__setattr__(self, "_master_seed_bytes", seed_bytes)

    @staticmethod
    def _canonicalize_seed(seed: Seed) -> bytes:
        if isinstance(seed, bool):
            raise TypeError("Unsupported seed type: bool")
        if isinstance(seed, bytes):
            return seed
        if isinstance(seed, int):
            if seed < 0:
                raise ValueError("Integer seeds must be >= 0")
            length = (seed.bit_length() + 7) // 8 or 1
            return seed.to_bytes(length, "big", signed=False)
        if isinstance(seed, str):
            s = seed.strip()
            if s.startswith("0x"):
                try:
                    val = int(s, 16)
                except ValueError:
                    return s.encode("utf-8")
                length = (val.bit_length() + 7) // 8 or 1
                return val.to_bytes(length, "big", signed=False)
            return s.encode("utf-8")
        raise TypeError("Unsupported seed type: %r" % (type(seed),))

    def derive_seed(self, domain: str, *identifiers: Any) -> int:
        """Derive a 64-bit integer seed from the master seed and a domain name."""
        payload = {
            "domain": domain,
            "ids": identifiers,
            "master": self.seed_hex,
            "algo": "blake2b-64",
        }
        data = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        digest = hashlib.blake2b(data, digest_size=8).digest()
        seed_int = int.from_bytes(digest, "big", signed=False)
        logger.debug("Derived seed for domain=%s ids=%s -> %d", domain, identifiers, seed_int)
        return seed_int

    def context_rng(self, domain: str, *identifiers: Any) -> random.Random:
        return random.Random(self.derive_seed(domain, *identifiers))

    @property
    def seed_hex(self) -> str:
        return self._master_seed_bytes.hex()  # type: ignore[attr-defined]
