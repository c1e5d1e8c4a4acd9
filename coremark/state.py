"""State-machine benchmark: classifying comma-separated number strings."""

from __future__ import annotations

from collections.abc import MutableSequence
from enum import IntEnum

from coremark.crc import crcu32

__all__ = [
    "CoreState",
    "NUM_STATES",
    "INT_PATTERNS",
    "FLOAT_PATTERNS",
    "SCI_PATTERNS",
    "ERR_PATTERNS",
    "init_state",
    "state_transition",
    "bench_state",
]


class CoreState(IntEnum):
    """States of the number-recognising machine."""

    START = 0
    INVALID = 1
    S1 = 2
    S2 = 3
    INT = 4
    FLOAT = 5
    EXPONENT = 6
    SCIENTIFIC = 7


NUM_STATES = len(CoreState)

INT_PATTERNS = (b"5012", b"1234", b"-874", b"+122")
FLOAT_PATTERNS = (b"35.54400", b".1234500", b"-110.700", b"+0.64400")
SCI_PATTERNS = (b"5.500e+3", b"-.123e-2", b"-87e+832", b"+0.6e-12")
ERR_PATTERNS = (b"T0.3e-1F", b"-T.T++Tq", b"1T3.4e4z", b"34.0e-T^")

_COMMA = ord(",")
_DOT = ord(".")
_SIGNS = (ord("+"), ord("-"))
_EXP_MARKS = (ord("e"), ord("E"))


def _is_digit(symbol: int) -> bool:
    return 0x30 <= symbol <= 0x39


def _pattern_for(seed: int) -> bytes:
    kind = seed & 0x7
    choice = (seed >> 3) & 0x3
    if kind <= 2:
        return INT_PATTERNS[choice]
    if kind <= 4:
        return FLOAT_PATTERNS[choice]
    if kind <= 6:
        return SCI_PATTERNS[choice]
    return ERR_PATTERNS[choice]


def init_state(size: int, seed: int) -> bytearray:
    """Build a zero-padded block of ``size`` bytes of comma-separated tokens.

    The tokens are chosen from the fixed pattern tables according to ``seed``.
    """
    if size < 1:
        raise ValueError("state block size must be at least 1")
    block = bytearray(size)
    limit = size - 1
    total = 0
    pending = b""
    while total + len(pending) + 1 < limit:
        if pending:
            block[total:total + len(pending)] = pending
            block[total + len(pending)] = _COMMA
            total += len(pending) + 1
        seed += 1
        pending = _pattern_for(seed)
    return block


def state_transition(
    data: bytes | bytearray,
    pos: int,
    transition_count: MutableSequence[int],
) -> tuple[CoreState, int]:
    """Scan one token of ``data`` starting at ``pos``.

    Transition counts are accumulated into ``transition_count`` (indexed by
    state). Returns the final state and the position just past the token.
    """
    state = CoreState.START
    end = len(data)
    while pos < end and data[pos] != 0 and state is not CoreState.INVALID:
        symbol = data[pos]
        pos += 1
        if symbol == _COMMA:
            break
        if state is CoreState.START:
            if _is_digit(symbol):
                state = CoreState.INT
            elif symbol in _SIGNS:
                state = CoreState.S1
            elif symbol == _DOT:
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
                transition_count[CoreState.INVALID] += 1
            transition_count[CoreState.START] += 1
        elif state is CoreState.S1:
            if _is_digit(symbol):
                state = CoreState.INT
            elif symbol == _DOT:
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
            transition_count[CoreState.S1] += 1
        elif state is CoreState.INT:
            if symbol == _DOT:
                state = CoreState.FLOAT
                transition_count[CoreState.INT] += 1
            elif not _is_digit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.INT] += 1
        elif state is CoreState.FLOAT:
            if symbol in _EXP_MARKS:
                state = CoreState.S2
                transition_count[CoreState.FLOAT] += 1
            elif not _is_digit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.FLOAT] += 1
        elif state is CoreState.S2:
            state = CoreState.EXPONENT if symbol in _SIGNS else CoreState.INVALID
            transition_count[CoreState.S2] += 1
        elif state is CoreState.EXPONENT:
            state = CoreState.SCIENTIFIC if _is_digit(symbol) else CoreState.INVALID
            transition_count[CoreState.EXPONENT] += 1
        elif state is CoreState.SCIENTIFIC:
            if not _is_digit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.INVALID] += 1
    return state, pos


def _scan(
    block: bytearray,
    final_counts: list[int],
    track_counts: list[int],
) -> None:
    pos = 0
    while pos < len(block) and block[pos] != 0:
        state, pos = state_transition(block, pos, track_counts)
        final_counts[state] += 1


def _corrupt(block: bytearray, key: int, step: int) -> None:
    key &= 0xFF
    for pos in range(0, len(block), step):
        if block[pos] != _COMMA:
            block[pos] ^= key


def bench_state(
    block: bytearray,
    seed1: int,
    seed2: int,
    step: int,
    crc: int,
) -> int:
    """Run the state machine over ``block`` before and after corrupting it.

    Every ``step``-th byte (other than commas) is XORed with ``seed1`` before
    the second pass and with ``seed2`` afterwards, so equal seeds leave the
    block unchanged. Returns ``crc`` updated with the state counts.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    final_counts = [0] * NUM_STATES
    track_counts = [0] * NUM_STATES
    _scan(block, final_counts, track_counts)
    _corrupt(block, seed1, step)
    _scan(block, final_counts, track_counts)
    _corrupt(block, seed2, step)
    for final, track in zip(final_counts, track_counts):
        crc = crcu32(final, crc)
        crc = crcu32(track, crc)
    return crc