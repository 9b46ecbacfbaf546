from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

import numpy as np

from .config import DEFAULT_HASH_CONFIG, HashConfig
from .ordered_float import OrderedFloat, canonical_bits


_TAG_NONE = b"\x00"
_TAG_BOOL = b"\x01"
_TAG_INT = b"\x02"
_TAG_FLOAT = b"\x03"
_TAG_STR = b"\x04"
_TAG_BYTES = b"\x05"
_TAG_SEQ = b"\x06"
_TAG_OBJ = b"\x07"


@runtime_checkable
class SupportsHashInto(Protocol):
    """Values that stream their own identity into a `SectionHasher`."""

    def hash_into(self, state: "SectionHasher") -> None:
        ...


class SectionHasher:
    """Deterministic streaming hasher over a hashlib digest.

    Every write is type-tagged and length-prefixed, so `("ab", "c")` and
    `("a", "bc")` never feed the same bytes. `finish()` may be called any number
    of times; writes after it keep extending the same stream.
    """

    def __init__(self, config: HashConfig | None = None) -> None:
        self._config = config or DEFAULT_HASH_CONFIG
        self._digest = self._config.new_digest()

    @property
    def config(self) -> HashConfig:
        return self._config

    def write_none(self) -> None:
        self._digest.update(_TAG_NONE)

    def write_bool(self, value: bool) -> None:
        self._digest.update(_TAG_BOOL)
        self._digest.update(b"\x01" if value else b"\x00")

    def write_int(self, value: int) -> None:
        value = int(value)
        raw = value.to_bytes(max(1, (value.bit_length() + 8) // 8), "little", signed=True)
        self._digest.update(_TAG_INT)
        self._write_len(len(raw))
        self._digest.update(raw)

    def write_float(self, value: float | OrderedFloat) -> None:
        bits = value.bits if isinstance(value, OrderedFloat) else canonical_bits(float(value))
        self._digest.update(_TAG_FLOAT)
        self._digest.update(bits.to_bytes(8, "little"))

    def write_str(self, value: str) -> None:
        raw = value.encode("utf-8", "surrogatepass")
        self._digest.update(_TAG_STR)
        self._write_len(len(raw))
        self._digest.update(raw)

    def write_bytes(self, value: bytes | bytearray | memoryview) -> None:
        raw = bytes(value)
        self._digest.update(_TAG_BYTES)
        self._write_len(len(raw))
        self._digest.update(raw)

    def write_sequence(self, values: Iterable[object]) -> None:
        items = tuple(values)
        self._digest.update(_TAG_SEQ)
        self._write_len(len(items))
        for item in items:
            self.write(item)

    def write(self, value: object) -> None:
        """Write any supported value; unknown objects go through `hash_into` or builtin `hash()`.

        Numbers follow Python equality: `True`, `1` and `1.0` feed the same
        bytes, so values that compare equal always hash equal.
        """

        if value is None:
            self.write_none()
        elif isinstance(value, OrderedFloat):
            self.write_float(value)
        elif isinstance(value, (bool, np.bool_, int, np.integer)):
            self.write_int(int(value))
        elif isinstance(value, (float, np.floating)):
            number = float(value)
            if number.is_integer():
                self.write_int(int(number))
            else:
                self.write_float(number)
        elif isinstance(value, str):
            self.write_str(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self.write_bytes(value)
        elif isinstance(value, (tuple, list)):
            self.write_sequence(value)
        elif isinstance(value, SupportsHashInto):
            self._digest.update(_TAG_OBJ)
            value.hash_into(self)
        else:
            self._digest.update(_TAG_OBJ)
            self.write_int(hash(value))

    def digest(self) -> bytes:
        return self._digest.digest()

    def finish(self) -> int:
        return int.from_bytes(self._digest.digest(), "little")

    def copy(self) -> "SectionHasher":
        clone = SectionHasher.__new__(SectionHasher)
        clone._config = self._config
        clone._digest = self._digest.copy()
        return clone

    def _write_len(self, length: int) -> None:
        self._digest.update(length.to_bytes(8, "little"))


def build_hasher(config: HashConfig | None = None) -> SectionHasher:
    return SectionHasher(config)
