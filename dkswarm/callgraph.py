"""Resolved call graph over a set of parsed symbols."""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import Iterable, Iterator

from .symbols import RawCallEdge, Symbol


class CallGraph:
    """Directed and undirected adjacency between known symbols."""

    def __init__(
        self,
        symbol_index: dict[str, uuid.UUID],
        by_id: dict[uuid.UUID, Symbol],
        adj: dict[uuid.UUID, set[uuid.UUID]],
        undirected: dict[uuid.UUID, set[uuid.UUID]],
        unresolved: int,
    ) -> None:
        self._symbol_index = symbol_index
        self._by_id = by_id
        self._adj = adj
        self._undirected = undirected
        self._unresolved = unresolved

    @classmethod
    def build(cls, symbols: Iterable[Symbol], edges: Iterable[RawCallEdge]) -> "CallGraph":
        """Resolve `edges` against `symbols`.

        Edges whose caller or callee is unknown are counted as unresolved and
        dropped. Self-loops are ignored so recursion couples nothing.
        """
        symbol_index: dict[str, uuid.UUID] = {}
        by_id: dict[uuid.UUID, Symbol] = {}
        for sym in symbols:
            symbol_index[sym.qualified_name] = sym.id
            # The short name is only a fallback; a qualified name wins.
            symbol_index.setdefault(sym.name, sym.id)
            by_id[sym.id] = sym

        adj: dict[uuid.UUID, set[uuid.UUID]] = defaultdict(set)
        undirected: dict[uuid.UUID, set[uuid.UUID]] = defaultdict(set)
        unresolved = 0
        for edge in edges:
            caller = symbol_index.get(edge.caller_name)
            callee = symbol_index.get(edge.callee_name)
            if caller is None or callee is None:
                unresolved += 1
                continue
            if caller == callee:
                continue
            adj[caller].add(callee)
            undirected[caller].add(callee)
            undirected[callee].add(caller)

        return cls(symbol_index, by_id, dict(adj), dict(undirected), unresolved)

    def symbol_id_by_name(self, name: str) -> uuid.UUID | None:
        """Look up a symbol id by qualified or short name."""
        return self._symbol_index.get(name)

    def successors(self, symbol_id: uuid.UUID) -> list[uuid.UUID]:
        """Symbols called by `symbol_id`."""
        return list(self._adj.get(symbol_id, ()))

    def undirected_neighbours(self, symbol_id: uuid.UUID) -> Iterator[uuid.UUID]:
        """Symbols that call or are called by `symbol_id`."""
        return iter(self._undirected.get(symbol_id, ()))

    def unresolved_count(self) -> int:
        """Number of edges that did not resolve to known symbols."""
        return self._unresolved

    def symbol(self, symbol_id: uuid.UUID) -> Symbol | None:
        return self._by_id.get(symbol_id)

    def all_symbols(self) -> Iterator[Symbol]:
        return iter(self._by_id.values())