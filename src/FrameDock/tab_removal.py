"""
Deferred removal requests collected while the layout is being traversed.

Removing anything mid-traversal would shift the indices still being walked,
so the traversal records what should go and the compaction pass applies the
records once it is done. Records address their target by index:

    TabRemoval(surface, node, tab)   one tab of one node
    LeafRemoval(surface, node)       a whole (empty) node
    SurfaceRemoval(surface)          a floating surface and its WindowState

Indices must still be valid when a record is applied. Removing a tab shifts
every later tab of that node, removing a node shifts every later node, and
so on, so records have to be applied from the highest index down. Use
removal_order() to get that order; applying records in any other order
removes the wrong targets.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Union


@dataclass(frozen=True)
class TabRemoval:
    surface: int
    node: int
    tab: int


@dataclass(frozen=True)
class LeafRemoval:
    surface: int
    node: int


@dataclass(frozen=True)
class SurfaceRemoval:
    surface: int


RemovalRecord = Union[TabRemoval, LeafRemoval, SurfaceRemoval]


def removal_from(address) -> RemovalRecord:
    """
    Builds the record matching the shape of an address.

    A bare surface index or 1-tuple is a surface, a 2-tuple (surface, node)
    is a leaf and a 3-tuple (surface, node, tab) is a single tab.
    """
    if isinstance(address, int):
        return SurfaceRemoval(address)
    if isinstance(address, tuple):
        if len(address) == 1:
            return SurfaceRemoval(*address)
        if len(address) == 2:
            return LeafRemoval(*address)
        if len(address) == 3:
            return TabRemoval(*address)
    raise ValueError(f"Cannot build a removal record from address {address!r}")


def _sort_key(record: RemovalRecord) -> tuple:
    # Kind first: tabs, then leaves, then surfaces. Then highest index first.
    if isinstance(record, TabRemoval):
        return (0, -record.surface, -record.node, -record.tab)
    elif isinstance(record, LeafRemoval):
        return (1, -record.surface, -record.node)
    elif isinstance(record, SurfaceRemoval):
        return (2, -record.surface)
    raise TypeError(f"Not a removal record: {record!r}")


def removal_order(records: Iterable[RemovalRecord]) -> list[RemovalRecord]:
    """
    Returns the records deduplicated and in the order they must be applied.

    Tabs go before leaves and leaves before surfaces, since removing a
    container shifts the indices of everything after it. Within each kind the
    highest index is removed first, so no record invalidates one still waiting.
    """
    return sorted(set(records), key=_sort_key)
