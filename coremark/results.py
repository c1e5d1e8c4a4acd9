"""Benchmark configuration and result record."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any

from coremark.matrix import MatrixParams

__all__ = ["Algorithm", "CoreResults", "TOTAL_DATA_SIZE", "NUM_ALGORITHMS"]

TOTAL_DATA_SIZE = 2 * 1000


class Algorithm(IntFlag):
    """Bit mask selecting which benchmark algorithms run."""

    LIST = 1 << 0
    MATRIX = 1 << 1
    STATE = 1 << 2
    ALL = LIST | MATRIX | STATE


NUM_ALGORITHMS = 3


@dataclass
class CoreResults:
    """Inputs, working data and CRC outputs of one benchmark context."""

    seed1: int = 0
    seed2: int = 0
    seed3: int = 0
    size: int = TOTAL_DATA_SIZE
    iterations: int = 0
    execs: Algorithm = Algorithm.ALL
    list: Any = None
    mat: MatrixParams | None = None
    state: bytearray = field(default_factory=bytearray)
    crc: int = 0
    crclist: int = 0
    crcmatrix: int = 0
    crcstate: int = 0
    err: int = 0

    def enabled(self, algorithm: Algorithm) -> bool:
        """Return whether every bit of ``algorithm`` is selected in ``execs``."""
        return (Algorithm(self.execs) & algorithm) == algorithm