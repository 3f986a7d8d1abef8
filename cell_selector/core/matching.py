"""
Pack sizing and scenario-to-cell matching.

Sizes a series/parallel pack of each catalog cell for a scenario, checks it
against the workload's rate, thermal and life requirements, and ranks the
catalog by a bounded heuristic suitability score.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from cell_selector.chemistry import Chemistry
from cell_selector.core.cell import CellSpec, Priority, ScenarioSpec
from cell_selector.core.estimator import estimate_life_cycles, usable_soc_fraction
from cell_selector.core.pack import PackCandidate, PackWarning
from cell_selector.core.thermal_model import estimate_thermal_delta_tcont_c
from cell_selector.utils.math import clamp, round_half_up

DEFAULT_TOP_N = 10

# Score penalties
PEAK_RATE_PENALTY = 40.0
CONTINUOUS_RATE_PENALTY = 30.0
LOW_TEMP_CHARGE_PENALTY = 15.0
LOW_TEMP_DISCHARGE_PENALTY = 20.0
LIFE_SHORTFALL_PENALTY = 25.0
COST_TIER_PENALTY = 3.0
COST_PRIORITY_PENALTY = 10.0

# Priority-aligned bonuses
SAFETY_LFP_BONUS = 8.0
PERFORMANCE_PULSE_BONUS = 6.0
PERFORMANCE_PULSE_C_RATE = 10.0
COST_CHEAP_BONUS = 8.0


class Bottleneck(str, Enum):
    """Primary limitation reported for a scored candidate."""
    PEAK_RATE = "peak rate exceeded"
    CONTINUOUS_RATE = "continuous rate insufficient"
    LOW_TEMP_CHARGE = "low-temperature charge restricted"
    LOW_TEMP_DISCHARGE = "low-temperature discharge risk"
    CYCLE_LIFE = "cycle life insufficient"
    COST = "cost high"
    NONE = "no significant bottleneck"


@dataclass(frozen=True)
class ScoreResult:
    """Suitability score in [0, 100] and its attributed bottleneck."""

    score: float
    bottleneck: Bottleneck


@dataclass(frozen=True)
class CellMatchResult:
    """A catalog cell, its best pack for the scenario, and its score."""

    cell: CellSpec
    pack: PackCandidate
    score: float
    bottleneck: Bottleneck

    def to_dict(self) -> Dict[str, Any]:
        """Convert match result to dictionary."""
        return {
            "cell": self.cell.to_dict(),
            "pack": self.pack.to_dict(),
            "score": self.score,
            "bottleneck": self.bottleneck.value,
        }


def find_best_pack(cell: CellSpec, scenario: ScenarioSpec) -> Optional[PackCandidate]:
    """
    Size a pack of ``cell`` for ``scenario`` and evaluate per-cell stress.

    Series count rounds the voltage ratio; parallel count rounds the energy
    ratio (at least 1). Every applicable warning is emitted.

    Args:
        cell: Cell datasheet record
        scenario: Target pack and workload

    Returns:
        Pack candidate, or None when the voltage target is too low for a
        single cell (the cell is not applicable, not a fault)
    """
    series = round_half_up(scenario.nominal_voltage_v / cell.nominal_voltage_v)
    if series < 1:
        return None

    pack_nominal_v = series * cell.nominal_voltage_v
    parallel = max(1, round_half_up(scenario.energy_wh / (series * cell.energy_wh)))
    pack_energy_wh = series * parallel * cell.energy_wh

    peak_cell_a = scenario.peak_power_w / pack_nominal_v / parallel
    cont_cell_a = scenario.continuous_power_w / pack_nominal_v / parallel
    peak_c_rate = peak_cell_a / cell.capacity_ah
    cont_c_rate = cont_cell_a / cell.capacity_ah

    peak_margin = cell.max_discharge_c_pulse - peak_c_rate
    cont_margin = cell.max_discharge_c_cont - cont_c_rate

    avg_temp_c = scenario.ambient_midpoint_c
    delta_t = estimate_thermal_delta_tcont_c(cell, cont_cell_a, avg_temp_c, scenario.cooling)
    life_cycles = estimate_life_cycles(
        cell,
        usable_soc_fraction(scenario),
        avg_temp_c + delta_t * 0.5,
        cont_c_rate,
    )

    warnings = []
    if peak_margin < 0:
        warnings.append(PackWarning.PEAK_RATE_EXCEEDED)
    if cont_margin < 0:
        warnings.append(PackWarning.CONTINUOUS_RATE_EXCEEDED)
    if scenario.min_ambient_c < cell.temp_discharge_min:
        warnings.append(PackWarning.LOW_TEMP_DISCHARGE_RISK)
    if scenario.max_ambient_c + delta_t > cell.temp_discharge_max:
        warnings.append(PackWarning.HIGH_TEMP_DISCHARGE_RISK)
    if scenario.min_ambient_c < cell.temp_charge_min:
        warnings.append(PackWarning.LOW_TEMP_CHARGE_PROHIBITED)
    if life_cycles < scenario.expected_cycles:
        warnings.append(PackWarning.CYCLE_LIFE_BELOW_TARGET)

    return PackCandidate(
        series=series,
        parallel=parallel,
        pack_nominal_v=pack_nominal_v,
        pack_energy_wh=pack_energy_wh,
        peak_cell_a=peak_cell_a,
        cont_cell_a=cont_cell_a,
        peak_c_rate=peak_c_rate,
        cont_c_rate=cont_c_rate,
        peak_margin=peak_margin,
        cont_margin=cont_margin,
        estimated_delta_t_cont_c=delta_t,
        estimated_life_cycles=life_cycles,
        warnings=tuple(warnings),
    )


def score_candidate(
    cell: CellSpec,
    pack: PackCandidate,
    scenario: ScenarioSpec,
) -> ScoreResult:
    """
    Score a pack candidate from 100 down.

    Penalties are cumulative; the bottleneck label goes to the first one
    triggered in this order: peak rate, continuous rate, low-temperature
    charge, low-temperature discharge, cycle life, cost. Priority bonuses
    never change the label.

    Args:
        cell: Cell datasheet record
        pack: Candidate from ``find_best_pack``
        scenario: Target pack and workload

    Returns:
        Score clamped to [0, 100] and bottleneck
    """
    score = 100.0
    bottleneck = Bottleneck.NONE

    if pack.peak_margin < 0:
        score -= PEAK_RATE_PENALTY
        bottleneck = Bottleneck.PEAK_RATE
    elif pack.cont_margin < 0:
        score -= CONTINUOUS_RATE_PENALTY
        bottleneck = Bottleneck.CONTINUOUS_RATE

    if scenario.min_ambient_c < cell.temp_charge_min:
        score -= LOW_TEMP_CHARGE_PENALTY
        if bottleneck == Bottleneck.NONE:
            bottleneck = Bottleneck.LOW_TEMP_CHARGE
    if scenario.min_ambient_c < cell.temp_discharge_min:
        score -= LOW_TEMP_DISCHARGE_PENALTY
        if bottleneck == Bottleneck.NONE:
            bottleneck = Bottleneck.LOW_TEMP_DISCHARGE

    # Proportional to the shortfall, not a step
    life_ratio = pack.estimated_life_cycles / scenario.expected_cycles
    if life_ratio < 1:
        score -= LIFE_SHORTFALL_PENALTY * (1 - life_ratio)
        if bottleneck == Bottleneck.NONE:
            bottleneck = Bottleneck.CYCLE_LIFE

    score -= COST_TIER_PENALTY * (cell.cost_tier - 1)
    if scenario.priority == Priority.COST and cell.cost_tier > 3:
        score -= COST_PRIORITY_PENALTY
        if bottleneck == Bottleneck.NONE:
            bottleneck = Bottleneck.COST

    if scenario.priority == Priority.SAFETY and cell.chemistry_family.name == Chemistry.LFP:
        score += SAFETY_LFP_BONUS
    if (
        scenario.priority == Priority.PERFORMANCE
        and cell.max_discharge_c_pulse >= PERFORMANCE_PULSE_C_RATE
    ):
        score += PERFORMANCE_PULSE_BONUS
    if scenario.priority == Priority.COST and cell.cost_tier <= 2:
        score += COST_CHEAP_BONUS

    return ScoreResult(score=clamp(score, 0.0, 100.0), bottleneck=bottleneck)


def evaluate_cell(cell: CellSpec, scenario: ScenarioSpec) -> Optional[CellMatchResult]:
    """Size and score one cell; None if the cell is not applicable."""
    pack = find_best_pack(cell, scenario)
    if pack is None:
        return None
    result = score_candidate(cell, pack, scenario)
    return CellMatchResult(
        cell=cell,
        pack=pack,
        score=result.score,
        bottleneck=result.bottleneck,
    )


def rank_matches(
    results: Iterable[Optional[CellMatchResult]],
    top_n: int = DEFAULT_TOP_N,
) -> List[CellMatchResult]:
    """
    Sort results by descending score and keep the first ``top_n``.

    ``None`` entries are skipped. The sort is stable, so ties keep catalog
    order.
    """
    ranked = sorted(
        (r for r in results if r is not None),
        key=lambda r: r.score,
        reverse=True,
    )
    return ranked[:top_n]


def match_scenario_to_cells(
    cells: Iterable[CellSpec],
    scenario: ScenarioSpec,
    top_n: int = DEFAULT_TOP_N,
) -> List[CellMatchResult]:
    """
    Rank a cell catalog against a scenario.

    Args:
        cells: Catalog cells, in catalog order
        scenario: Target pack and workload
        top_n: Maximum number of results

    Returns:
        At most ``top_n`` results, best first
    """
    return rank_matches((evaluate_cell(cell, scenario) for cell in cells), top_n)


def matches_to_dataframe(results: Iterable[CellMatchResult]) -> pd.DataFrame:
    """Flatten ranked results into one row per cell."""
    rows = []
    for rank, r in enumerate(results, start=1):
        rows.append({
            "rank": rank,
            "cell_id": r.cell.id,
            "model": r.cell.model,
            "chemistry": r.cell.chemistry,
            "score": r.score,
            "bottleneck": r.bottleneck.value,
            "series": r.pack.series,
            "parallel": r.pack.parallel,
            "pack_energy_wh": r.pack.pack_energy_wh,
            "peak_c_rate": r.pack.peak_c_rate,
            "cont_c_rate": r.pack.cont_c_rate,
            "delta_t_cont_c": r.pack.estimated_delta_t_cont_c,
            "life_cycles": r.pack.estimated_life_cycles,
            "warnings": ", ".join(w.value for w in r.pack.warnings),
        })
    return pd.DataFrame(rows)
