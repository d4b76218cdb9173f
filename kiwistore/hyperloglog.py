"""HyperLogLog cardinality sketches with dense 6-bit registers."""

from __future__ import annotations

import math
import struct
from typing import Iterable

HLL_P = 14
HLL_REGISTERS = 1 << HLL_P
HLL_P_MASK = HLL_REGISTERS - 1
HLL_DENSE_SIZE = 6 * HLL_REGISTERS // 8
HLL_REGISTER_MAX = 63

_U64_MASK = (1 << 64) - 1
_U64_MAX = _U64_MASK
_SEED = 0x5F3759DF
_M = 0xC6A4A7935BD1E995
_R = 47
_TWO_32 = float(1 << 32)


def murmurhash64a(data: bytes) -> int:
    """Return the 64-bit MurmurHash64A of ``data`` with the sketch's fixed seed."""
    data = bytes(data)
    h = (_SEED ^ (len(data) * _M)) & _U64_MASK
    full = len(data) - len(data) % 8
    for (k,) in struct.iter_unpack("<Q", data[:full]):
        k = (k * _M) & _U64_MASK
        k ^= k >> _R
        k = (k * _M) & _U64_MASK
        h ^= k
        h = (h * _M) & _U64_MASK
    remainder = data[full:]
    if remainder:
        h ^= int.from_bytes(remainder, "little")
        h = (h * _M) & _U64_MASK
    h ^= h >> _R
    h = (h * _M) & _U64_MASK
    h ^= h >> _R
    return h


def _leading_zeros64(value: int) -> int:
    return 64 - value.bit_length()


def _round_to_u64(value: float) -> int:
    """Round half away from zero and saturate into the unsigned 64-bit range."""
    if math.isnan(value):
        return 0
    if value == math.inf:
        return _U64_MAX
    if value <= 0:
        return 0
    rounded = math.floor(value + 0.5)
    return min(rounded, _U64_MAX)


def _log(value: float) -> float:
    if value > 0:
        return math.log(value)
    if value == 0:
        return -math.inf
    return math.nan


class HyperLogLog:
    """A HyperLogLog sketch of 2**14 registers, six bits each."""

    def __init__(self, registers: Iterable[int] | None = None) -> None:
        if registers is None:
            self._registers = [0] * HLL_REGISTERS
            return
        values = list(registers)
        if len(values) != HLL_REGISTERS:
            raise ValueError(
                f"expected {HLL_REGISTERS} registers, got {len(values)}"
            )
        for value in values:
            if not 0 <= value <= HLL_REGISTER_MAX:
                raise ValueError(f"register value {value} out of range")
        self._registers = values

    @classmethod
    def from_bytes(cls, data: bytes) -> HyperLogLog:
        """Decode a sketch from its dense packed form."""
        data = bytes(data)
        if len(data) != HLL_DENSE_SIZE:
            raise ValueError(
                f"expected {HLL_DENSE_SIZE} bytes, got {len(data)}"
            )
        registers: list[int] = []
        for start in range(0, HLL_DENSE_SIZE, 3):
            word = int.from_bytes(data[start:start + 3], "little")
            registers.extend((word >> shift) & 0x3F for shift in (0, 6, 12, 18))
        return cls(registers)

    def to_bytes(self) -> bytes:
        """Encode the registers in the dense packed form, little-endian 6-bit fields."""
        out = bytearray()
        regs = self._registers
        for start in range(0, HLL_REGISTERS, 4):
            a, b, c, d = regs[start:start + 4]
            word = a | (b << 6) | (c << 12) | (d << 18)
            out += word.to_bytes(3, "little")
        return bytes(out)

    def register(self, index: int) -> int:
        """Return the value of register ``index``."""
        if not 0 <= index < HLL_REGISTERS:
            raise IndexError(f"register index {index} out of range")
        return self._registers[index]

    def add(self, element: bytes) -> bool:
        """Add ``element``; return True if a register changed."""
        hashed = murmurhash64a(element)
        index = hashed & HLL_P_MASK
        value = min(_leading_zeros64(hashed >> HLL_P) + 1, HLL_REGISTER_MAX)
        if value > self._registers[index]:
            self._registers[index] = value
            return True
        return False

    def add_all(self, elements: Iterable[bytes]) -> bool:
        """Add every element; return True if any register changed."""
        updated = False
        for element in elements:
            if self.add(element):
                updated = True
        return updated

    def merge(self, other: HyperLogLog) -> None:
        """Fold ``other`` into this sketch, keeping the larger register values."""
        self._registers = [
            max(mine, theirs)
            for mine, theirs in zip(self._registers, other._registers)
        ]

    def count(self) -> int:
        """Return the estimated number of distinct elements added."""
        m = float(HLL_REGISTERS)
        total = 0.0
        zero_regs = 0
        for value in self._registers:
            total += 1.0 / float(1 << value)
            if value == 0:
                zero_regs += 1

        if HLL_P == 4:
            alpha = 0.673
        elif HLL_P == 5:
            alpha = 0.697
        elif HLL_P == 6:
            alpha = 0.709
        else:
            alpha = 0.7213 / (1.0 + 1.079 / m)

        estimate = alpha * m * m / total
        if estimate <= 2.5 * m and zero_regs > 0:
            estimate = m * math.log(m / zero_regs)
        elif estimate > _TWO_32 / 30.0:
            estimate = -_TWO_32 * _log(1.0 - estimate / _TWO_32)
        return _round_to_u64(estimate)


def merged_count(sketches: Iterable[HyperLogLog]) -> int:
    """Estimate the cardinality of the union of ``sketches``; 0 if there are none."""
    merged = HyperLogLog()
    found = False
    for sketch in sketches:
        merged.merge(sketch)
        found = True
    return merged.count() if found else 0