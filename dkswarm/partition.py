"""Grouping of in-scope symbols into call-connected components."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field

from .callgraph import CallGraph
from .errors import InvalidPartitionError
from .group import SymbolRef


@dataclass(frozen=True)
class PartitionWarning:
    """Base class of warnings produced alongside a partition."""


@dataclass(frozen=True)
class FewerGroupsThanTarget(PartitionWarning):
    """Coupling is too dense or the scope too small to reach the target."""

    target: int
    got: int


@dataclass(frozen=True)
class MoreGroupsThanTarget(PartitionWarning):
    """There are more connected components than the target; none are merged."""

    target: int
    got: int


@dataclass(frozen=True)
class ScopeSymbolUnknown(PartitionWarning):
    """An in-scope name did not resolve to a known symbol."""

    name: str


@dataclass
class Group:
    """One connected component; symbols sorted by qualified name."""

    id: str
    symbols: list[SymbolRef] = field(default_factory=list)


@dataclass
class Partition:
    """Groups ordered by id (`g1`, `g2`, ...) plus any warnings."""

    groups: list[Group] = field(default_factory=list)
    warnings: list[PartitionWarning] = field(default_factory=list)


class _UnionFind:
    def __init__(self, ids: Iterable[uuid.UUID]) -> None:
        self._parent = {i: i for i in ids}

    def find(self, x: uuid.UUID) -> uuid.UUID:
        root = x
        while (parent := self._parent.get(root, root)) != root:
            root = parent
        cur = x
        while cur != root:
            nxt = self._parent.get(cur, root)
            self._parent[cur] = root
            cur = nxt
        return root

    def union(self, a: uuid.UUID, b: uuid.UUID) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self._parent[ra] = rb


def partition(in_scope: Iterable[str], graph: CallGraph, target_groups: int) -> Partition:
    """Split `in_scope` names into connected components of the undirected graph.

    Unknown names produce `ScopeSymbolUnknown` warnings and are skipped. A
    mismatch with `target_groups` only produces a warning; groups are never
    merged or split to meet it.
    """
    if target_groups < 1:
        raise InvalidPartitionError("target_groups must be >= 1")

    warnings: list[PartitionWarning] = []
    resolved: list[uuid.UUID] = []
    scope_set: set[uuid.UUID] = set()
    for name in in_scope:
        sid = graph.symbol_id_by_name(name)
        if sid is None:
            warnings.append(ScopeSymbolUnknown(name=name))
        elif sid not in scope_set:
            scope_set.add(sid)
            resolved.append(sid)

    if not resolved:
        return Partition(groups=[], warnings=warnings)

    uf = _UnionFind(resolved)
    for sid in resolved:
        for neighbour in graph.undirected_neighbours(sid):
            if neighbour in scope_set:
                uf.union(sid, neighbour)

    buckets: dict[uuid.UUID, list[uuid.UUID]] = {}
    for sid in resolved:
        buckets.setdefault(uf.find(sid), []).append(sid)

    # Engine ids are not stable across runs, so order by qualified names.
    member_lists = []
    for members in buckets.values():
        refs = [
            SymbolRef(
                qualified_name=sym.qualified_name,
                file_path=sym.file_path,
                kind=str(sym.kind),
            )
            for sym in (graph.symbol(m) for m in members)
            if sym is not None
        ]
        refs.sort(key=lambda r: r.qualified_name)
        member_lists.append(refs)
    member_lists.sort(key=lambda refs: refs[0].qualified_name)
    groups = [Group(id=f"g{n}", symbols=refs) for n, refs in enumerate(member_lists, start=1)]

    if len(groups) < target_groups:
        warnings.append(FewerGroupsThanTarget(target=target_groups, got=len(groups)))
    elif len(groups) > target_groups:
        warnings.append(MoreGroupsThanTarget(target=target_groups, got=len(groups)))

    return Partition(groups=groups, warnings=warnings)