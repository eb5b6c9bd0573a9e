"""Set-associative cache model driven by a trace of 32-bit addresses."""

from __future__ import annotations

import enum
import math
import random
import struct
from collections import Counter
from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO, Iterable, Iterator

from cachesim.policies import ReplacementPolicy, make_policy

_ADDRESS = struct.Struct("<I")
_ADDRESS_MASK = 0xFFFFFFFF


class MissKind(enum.Enum):
    """Why an access missed."""

    COMPULSORY = "compulsory"
    CONFLICT = "conflict"
    CAPACITY = "capacity"


@dataclass(frozen=True)
class CacheGeometry:
    """Number of sets, block size in bytes and associativity of a cache."""

    nsets: int
    bsize: int
    assoc: int

    def __post_init__(self) -> None:
        if self.nsets <= 0 or self.bsize <= 0 or self.assoc <= 0:
            raise ValueError("nsets, bsize and assoc must be positive")

    @property
    def index_bits(self) -> int:
        return self.nsets.bit_length() - 1

    @property
    def offset_bits(self) -> int:
        return self.bsize.bit_length() - 1

    @property
    def tag_bits(self) -> int:
        return 32 - self.offset_bits - self.index_bits

    @property
    def size(self) -> int:
        """Total capacity in bytes."""
        return self.nsets * self.bsize * self.assoc

    def split(self, address: int) -> tuple[int, int, int]:
        """Split an address into ``(tag, index, offset)``."""
        address &= _ADDRESS_MASK
        offset = address & ((1 << self.offset_bits) - 1)
        index = (address >> self.offset_bits) & ((1 << self.index_bits) - 1)
        tag = address >> (self.offset_bits + self.index_bits)
        return tag, index, offset


def _ratio(part: int, whole: int) -> float:
    return part / whole if whole else math.nan


@dataclass(frozen=True)
class SimulationResult:
    """Access counters gathered by a simulation."""

    accesses: int
    hits: int
    misses: int
    compulsory: int
    conflict: int
    capacity: int

    @property
    def hit_rate(self) -> float:
        return _ratio(self.hits, self.accesses)

    @property
    def miss_rate(self) -> float:
        return _ratio(self.misses, self.accesses)

    @property
    def compulsory_rate(self) -> float:
        return _ratio(self.compulsory, self.misses)

    @property
    def conflict_rate(self) -> float:
        return _ratio(self.conflict, self.misses)

    @property
    def capacity_rate(self) -> float:
        return _ratio(self.capacity, self.misses)


class CacheSimulator:
    """Cache whose lines hold a tag, or None while still invalid."""

    def __init__(self, geometry: CacheGeometry, policy: ReplacementPolicy) -> None:
        self.geometry = geometry
        self.policy = policy
        self._tags: list[list[int | None]] = [
            [None] * geometry.assoc for _ in range(geometry.nsets)
        ]
        self._accesses = 0
        self._hits = 0
        self._misses: Counter[MissKind] = Counter()

    def access(self, address: int) -> bool:
        """Look up one address; return True on a hit."""
        tag, index, _ = self.geometry.split(address)
        self._accesses += 1
        ways = self._tags[index]
        if tag in ways:
            self._hits += 1
            return True
        self._misses[self.classify_miss(index)] += 1
        victim = self.policy.choose_victim(index)
        ways[victim] = tag
        self.policy.touch(index, victim)
        return False

    def classify_miss(self, set_index: int) -> MissKind:
        """Classify a miss in ``set_index`` from the state of that set."""
        if None in self._tags[set_index]:
            return MissKind.COMPULSORY
        if self.geometry.assoc < self.geometry.nsets:
            return MissKind.CONFLICT
        return MissKind.CAPACITY

    def run(self, addresses: Iterable[int]) -> SimulationResult:
        """Access every address in turn and return the counters."""
        for address in addresses:
            self.access(address)
        return self.result()

    def result(self) -> SimulationResult:
        """Snapshot of the counters so far."""
        return SimulationResult(
            accesses=self._accesses,
            hits=self._hits,
            misses=sum(self._misses.values()),
            compulsory=self._misses[MissKind.COMPULSORY],
            conflict=self._misses[MissKind.CONFLICT],
            capacity=self._misses[MissKind.CAPACITY],
        )


def read_addresses(stream: BinaryIO) -> Iterator[int]:
    """Yield little-endian 32-bit addresses; a trailing partial word is ignored."""
    while len(chunk := stream.read(_ADDRESS.size)) == _ADDRESS.size:
        yield _ADDRESS.unpack(chunk)[0]


def simulate_file(
    path: str | PathLike[str],
    geometry: CacheGeometry,
    policy_name: str,
    seed: int | None = None,
) -> SimulationResult:
    """Simulate the trace stored in ``path``."""
    policy = make_policy(policy_name, geometry.nsets, geometry.assoc, random.Random(seed))
    simulator = CacheSimulator(geometry, policy)
    with open(path, "rb") as stream:
        return simulator.run(read_addresses(stream))