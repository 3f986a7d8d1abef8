"""
Battery Cell Selector

Heuristic electrochemical estimation for choosing battery cells against
application workloads and deriving safe-operating-area current limits.
"""

from cell_selector.chemistry import Chemistry
from cell_selector.core.cell import CellSpec, ScenarioSpec
from cell_selector.core.matching import match_scenario_to_cells
from cell_selector.core.soa import build_soa_grid, get_default_soa_policy

__version__ = "1.0.0"
__all__ = [
    "Chemistry",
    "CellSpec",
    "ScenarioSpec",
    "build_soa_grid",
    "get_default_soa_policy",
    "match_scenario_to_cells",
]
