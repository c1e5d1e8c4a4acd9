"""Linked-list benchmark: find, reverse, sort and restore a list in place."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Optional

from coremark.crc import crc16, crcu16
from coremark.matrix import bench_matrix
from coremark.state import bench_state

__all__ = [
    "ListData",
    "ListNode",
    "iter_nodes",
    "calc_func",
    "cmp_complex",
    "cmp_idx",
    "init_list",
    "find",
    "reverse",
    "remove",
    "undo_remove",
    "mergesort",
    "bench_list",
]

# Bytes per list element as laid out in the benchmark's memory block:
# room for a node of two 64-bit pointers plus the 4-byte data record.
_BYTES_PER_ITEM = 16 + 4


def _to_s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


@dataclass
class ListData:
    """Payload of a list cell.

    ``idx`` records the initial order. ``data16`` keeps a backup of the
    original data in its upper byte; bit 7 marks the lower 7 bits as a
    cached result, bits 0-2 select an operation and bits 3-6 feed it.
    """

    data16: int = 0
    idx: int = 0


@dataclass(eq=False)
class ListNode:
    """A cell of a singly linked list."""

    info: ListData
    next: Optional["ListNode"] = field(default=None, repr=False)


Comparator = Callable[[ListData, ListData, Any], int]


def iter_nodes(head: ListNode | None) -> Iterator[ListNode]:
    """Yield the nodes of the list starting at ``head``."""
    node = head
    while node is not None:
        yield node
        node = node.next


def calc_func(info: ListData, res: Any) -> int:
    """Return the 7-bit value encoded in ``info``, computing and caching it.

    Uncached values run the state or matrix benchmark (selected by the low
    three bits), fold the outcome into ``res.crc`` and store the result in
    the lower byte of ``info.data16``.
    """
    data = info.data16
    if (data >> 7) & 1:
        return data & 0x7F
    flag = data & 0x7
    dtype = (data >> 3) & 0xF
    dtype |= dtype << 4
    if flag == 0:
        dtype = max(dtype, 0x22)
        retval = _to_s16(
            bench_state(res.state, res.seed1, res.seed2, dtype, res.crc)
        )
        if res.crcstate == 0:
            res.crcstate = retval & 0xFFFF
    elif flag == 1:
        retval = _to_s16(bench_matrix(res.mat, dtype, res.crc))
        if res.crcmatrix == 0:
            res.crcmatrix = retval & 0xFFFF
    else:
        retval = data
    res.crc = crcu16(retval, res.crc)
    retval &= 0x7F
    info.data16 = _to_s16((data & 0xFF00) | 0x80 | retval)
    return retval


def cmp_complex(a: ListData, b: ListData, res: Any) -> int:
    """Compare two cells by their computed data values."""
    return calc_func(a, res) - calc_func(b, res)


def _regenerate(info: ListData) -> None:
    data = info.data16
    info.data16 = _to_s16((data & 0xFF00) | ((data >> 8) & 0xFF))


def cmp_idx(a: ListData, b: ListData, res: Any) -> int:
    """Compare two cells by index; with ``res`` of None, restore their data."""
    if res is None:
        _regenerate(a)
        _regenerate(b)
    return a.idx - b.idx


def _initial_items(count: int, seed: int) -> Iterator[ListData]:
    yield ListData(data16=_to_s16(0xFFFF), idx=0x7FFF)
    for i in range(count):
        datpat = (seed ^ i) & 0xF
        dat = (datpat << 3) | (i & 0x7)
        yield ListData(data16=_to_s16((dat << 8) | dat), idx=0x7FFF)


def init_list(blksize: int, seed: int) -> ListNode:
    """Build the benchmark list for a block of ``blksize`` bytes.

    The list starts with a fixed head cell and ends with a fixed tail cell;
    the cells between are filled and indexed according to ``seed``. The
    returned list is sorted by index.
    """
    count = blksize // _BYTES_PER_ITEM - 2
    if count < 3:
        raise ValueError("block too small to hold a list")
    seed = _to_s16(seed)
    head = ListNode(ListData(data16=_to_s16(0x8080), idx=0))
    for info in islice(_initial_items(count, seed), count - 2):
        head.next = ListNode(info, head.next)

    in_order = count // 5
    i = 1
    node = head.next
    while node is not None and node.next is not None:
        if i < in_order:
            node.info.idx = i
            i += 1
        else:
            pattern = (i ^ seed) & 0xFFFF
            i += 1
            node.info.idx = 0x3FFF & (((i & 0x7) << 8) | pattern)
        node = node.next
    return mergesort(head, cmp_idx, None)


def find(head: ListNode | None, info: ListData) -> ListNode | None:
    """Find a node by ``info.idx`` if non-negative, else by low data byte."""
    if info.idx >= 0:
        return next(
            (node for node in iter_nodes(head) if node.info.idx == info.idx),
            None,
        )
    return next(
        (
            node
            for node in iter_nodes(head)
            if (node.info.data16 & 0xFF) == info.data16
        ),
        None,
    )


def reverse(head: ListNode | None) -> ListNode | None:
    """Reverse the list in place and return its new head."""
    previous = None
    node = head
    while node is not None:
        following = node.next
        node.next = previous
        previous = node
        node = following
    return previous


def remove(item: ListNode) -> ListNode:
    """Remove the data of ``item`` from the list.

    The data of the following node is moved into ``item`` and that node is
    unlinked; it is returned carrying the removed data.
    """
    removed = item.next
    if removed is None:
        raise ValueError("cannot remove the last node of a list")
    item.info, removed.info = removed.info, item.info
    item.next = removed.next
    removed.next = None
    return removed


def undo_remove(removed: ListNode, modified: ListNode) -> ListNode:
    """Reverse a :func:`remove`, linking ``removed`` back after ``modified``."""
    removed.info, modified.info = modified.info, removed.info
    removed.next = modified.next
    modified.next = removed
    return removed


def mergesort(
    head: ListNode | None, cmp: Comparator, res: Any
) -> ListNode | None:
    """Sort the list in place with a stable bottom-up merge sort.

    ``cmp`` is called as ``cmp(a, b, res)`` on the cells' data and may
    modify them. Returns the new head.
    """
    if head is None:
        return None
    insize = 1
    while True:
        p = head
        head = None
        tail = None
        nmerges = 0
        while p is not None:
            nmerges += 1
            q = p
            psize = 0
            for _ in range(insize):
                psize += 1
                q = q.next
                if q is None:
                    break
            qsize = insize
            while psize > 0 or (qsize > 0 and q is not None):
                if psize == 0:
                    element, q = q, q.next
                    qsize -= 1
                elif qsize == 0 or q is None:
                    element, p = p, p.next
                    psize -= 1
                elif cmp(p.info, q.info, res) <= 0:
                    element, p = p, p.next
                    psize -= 1
                else:
                    element, q = q, q.next
                    qsize -= 1
                if tail is not None:
                    tail.next = element
                else:
                    head = element
                tail = element
            p = q
        tail.next = None
        if nmerges <= 1:
            return head
        insize *= 2


def bench_list(res: Any, finder_idx: int) -> int:
    """Run one pass of the list benchmark on ``res.list`` and return its CRC.

    Searches the list ``res.seed3`` times, reversing it each time, sorts it
    by data (when ``finder_idx`` is positive), removes and restores one cell
    and finally sorts it back into index order.
    """
    retval = 0
    found = 0
    missed = 0
    head = res.list
    info = ListData(data16=0, idx=_to_s16(finder_idx))

    for i in range(_to_s16(res.seed3)):
        info.data16 = i & 0xFF
        this_find = find(head, info)
        head = reverse(head)
        if this_find is None:
            missed += 1
            retval += (head.next.info.data16 >> 8) & 1
        else:
            found += 1
            if this_find.info.data16 & 0x1:
                retval += (this_find.info.data16 >> 9) & 1
            if this_find.next is not None:
                moved = this_find.next
                this_find.next = moved.next
                moved.next = head.next
                head.next = moved
        if info.idx >= 0:
            info.idx = _to_s16(info.idx + 1)
    retval = (retval + found * 4 - missed) & 0xFFFF

    if finder_idx > 0:
        head = mergesort(head, cmp_complex, res)
    removed = remove(head.next)
    start = find(head, info) or head.next
    for _ in iter_nodes(start):
        retval = crc16(head.info.data16, retval)
    undo_remove(removed, head.next)

    head = mergesort(head, cmp_idx, None)
    for _ in iter_nodes(head.next):
        retval = crc16(head.info.data16, retval)
    return retval