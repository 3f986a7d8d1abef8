"""Explicit memoization of engine results across repeated identical inputs."""

from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, List, Optional, Tuple

from cell_selector.core.cell import CellSpec, ScenarioSpec
from cell_selector.core.matching import (
    DEFAULT_TOP_N,
    CellMatchResult,
    evaluate_cell,
    rank_matches,
)
from cell_selector.core.soa import SoaGrid, build_soa_grid

# Per-map entry limit; least recently used entries are evicted first
DEFAULT_MAXSIZE = 256


class EngineCache:
    """
    Memoizes SOA grids per cell id and evaluations per (cell id, scenario).

    Scenarios are frozen value objects, so they key by value. All entries for
    one id belong to the same cell record: caching a different record under
    that id drops every older grid and evaluation for it. Each map holds at
    most ``maxsize`` entries.
    """

    def __init__(self, maxsize: int = DEFAULT_MAXSIZE):
        if maxsize < 1:
            raise ValueError(f"maxsize ({maxsize}) must be >= 1")
        self.maxsize = maxsize
        self._grids: OrderedDict[str, Tuple[CellSpec, SoaGrid]] = OrderedDict()
        self._evaluations: OrderedDict[
            Tuple[str, ScenarioSpec], Tuple[CellSpec, Optional[CellMatchResult]]
        ] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def soa_grid(self, cell: CellSpec) -> SoaGrid:
        """Cached ``build_soa_grid``."""
        entry = self._grids.get(cell.id)
        if entry is not None and entry[0] == cell:
            self.hits += 1
            self._grids.move_to_end(cell.id)
            return entry[1]
        self.misses += 1
        self._drop_stale(cell)
        grid = build_soa_grid(cell)
        self._grids[cell.id] = (cell, grid)
        self._evict(self._grids)
        return grid

    def evaluate(self, cell: CellSpec, scenario: ScenarioSpec) -> Optional[CellMatchResult]:
        """Cached ``evaluate_cell``."""
        key = (cell.id, scenario)
        entry = self._evaluations.get(key)
        if entry is not None and entry[0] == cell:
            self.hits += 1
            self._evaluations.move_to_end(key)
            return entry[1]
        self.misses += 1
        self._drop_stale(cell)
        result = evaluate_cell(cell, scenario)
        self._evaluations[key] = (cell, result)
        self._evict(self._evaluations)
        return result

    def match(
        self,
        cells: Iterable[CellSpec],
        scenario: ScenarioSpec,
        top_n: int = DEFAULT_TOP_N,
    ) -> List[CellMatchResult]:
        """Same ranking as ``match_scenario_to_cells``, over cached evaluations."""
        return rank_matches((self.evaluate(cell, scenario) for cell in cells), top_n)

    def clear(self) -> None:
        """Drop all cached results and reset counters."""
        self._grids.clear()
        self._evaluations.clear()
        self.hits = 0
        self.misses = 0

    def _drop_stale(self, cell: CellSpec) -> None:
        grid_entry = self._grids.get(cell.id)
        if grid_entry is not None and grid_entry[0] != cell:
            del self._grids[cell.id]
        stale = [
            key for key, (cached, _) in self._evaluations.items()
            if key[0] == cell.id and cached != cell
        ]
        for key in stale:
            del self._evaluations[key]

    def _evict(self, entries: OrderedDict) -> None:
        while len(entries) > self.maxsize:
            entries.popitem(last=False)

    def __len__(self) -> int:
        return len(self._grids) + len(self._evaluations)
