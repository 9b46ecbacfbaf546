from __future__ import annotations

from dataclasses import dataclass
import hashlib
import logging
import os


LOGGER = logging.getLogger(__name__)

ENV_ALGORITHM = "GLYPH_SECTION_HASH_ALGORITHM"
ENV_DIGEST_SIZE = "GLYPH_SECTION_HASH_DIGEST_SIZE"
ENV_KEY = "GLYPH_SECTION_HASH_KEY"

_BLAKE2_MAX_DIGEST = {"blake2b": 64, "blake2s": 32}
_BLAKE2_DEFAULT_DIGEST = 8


@dataclass(frozen=True)
class HashConfig:
    """Hasher settings shared by the full-section hash and the decomposed streams.

    `digest_size` and `key` only apply to the blake2 family, where `digest_size`
    defaults to 8. Other hashlib algorithms use their fixed digest and must leave
    both unset. Variable-length `shake_*` digests are not supported.
    """

    algorithm: str = "blake2b"
    digest_size: int | None = None
    key: bytes = b""

    def __post_init__(self) -> None:
        if self.algorithm not in hashlib.algorithms_available:
            raise ValueError(f"unknown hash algorithm: {self.algorithm}")
        if self.algorithm.startswith("shake_"):
            raise ValueError(f"variable-length hash algorithm `{self.algorithm}` is not supported")
        max_digest = _BLAKE2_MAX_DIGEST.get(self.algorithm)
        if max_digest is None:
            if self.key:
                raise ValueError(f"hash key is only supported for blake2 algorithms, not `{self.algorithm}`")
            if self.digest_size is not None:
                raise ValueError(f"digest_size is only supported for blake2 algorithms, not `{self.algorithm}`")
            return
        if self.digest_size is None:
            object.__setattr__(self, "digest_size", _BLAKE2_DEFAULT_DIGEST)
        assert self.digest_size is not None
        if self.digest_size < 1 or self.digest_size > max_digest:
            raise ValueError(f"{self.algorithm} digest_size must be in [1, {max_digest}]")
        if len(self.key) > max_digest:
            raise ValueError(f"{self.algorithm} key must be at most {max_digest} bytes")

    def new_digest(self) -> "hashlib._Hash":
        if self.algorithm in _BLAKE2_MAX_DIGEST:
            return getattr(hashlib, self.algorithm)(digest_size=self.digest_size, key=self.key)
        return hashlib.new(self.algorithm)

    @classmethod
    def from_env(
        cls,
        *,
        algorithm_env_var: str = ENV_ALGORITHM,
        digest_size_env_var: str = ENV_DIGEST_SIZE,
        key_env_var: str = ENV_KEY,
    ) -> "HashConfig":
        algorithm = os.getenv(algorithm_env_var, "").strip() or cls.algorithm
        digest_size = _parse_digest_size(digest_size_env_var, cls.digest_size)
        key = os.getenv(key_env_var, "").encode("utf-8")
        try:
            config = cls(algorithm=algorithm, digest_size=digest_size, key=key)
        except ValueError as exc:
            raise ValueError(f"invalid hash configuration from environment: {exc}") from exc
        LOGGER.debug("hash config from env: algorithm=%s digest_size=%s keyed=%s", algorithm, config.digest_size, bool(key))
        return config


def _parse_digest_size(env_var: str, default: int | None) -> int | None:
    raw = os.getenv(env_var, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{env_var} must be an integer, got `{raw}`") from exc


DEFAULT_HASH_CONFIG = HashConfig()
