"""Core estimation, SOA and matching modules."""

from cell_selector.core.cache import EngineCache
from cell_selector.core.cell import (
    Application,
    CellSpec,
    Cooling,
    FormFactor,
    OperatingPoint,
    Priority,
    ScenarioSpec,
)
from cell_selector.core.estimator import (
    CellEstimate,
    estimate_life_cycles,
    estimate_ocv_v,
    estimate_operating_point,
    estimate_resistance_ohm,
    usable_soc_fraction,
)
from cell_selector.core.matching import (
    Bottleneck,
    CellMatchResult,
    ScoreResult,
    find_best_pack,
    match_scenario_to_cells,
    score_candidate,
)
from cell_selector.core.pack import PackCandidate, PackWarning
from cell_selector.core.soa import SoaGrid, SoaPolicy, build_soa_grid, get_default_soa_policy
from cell_selector.core.thermal_model import estimate_thermal_delta_tcont_c

__all__ = [
    "Application",
    "Bottleneck",
    "CellEstimate",
    "CellMatchResult",
    "CellSpec",
    "Cooling",
    "EngineCache",
    "FormFactor",
    "OperatingPoint",
    "PackCandidate",
    "PackWarning",
    "Priority",
    "ScenarioSpec",
    "ScoreResult",
    "SoaGrid",
    "SoaPolicy",
    "build_soa_grid",
    "estimate_life_cycles",
    "estimate_ocv_v",
    "estimate_operating_point",
    "estimate_resistance_ohm",
    "estimate_thermal_delta_tcont_c",
    "find_best_pack",
    "get_default_soa_policy",
    "match_scenario_to_cells",
    "score_candidate",
    "usable_soc_fraction",
]
