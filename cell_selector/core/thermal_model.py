"""Steady-state thermal rise estimate for a cell in a pack."""

from __future__ import annotations

from cell_selector.core.cell import CellSpec, Cooling
from cell_selector.core.estimator import estimate_resistance_ohm

# Heuristic steady-state rise per watt of cell heat (°C/W)
COOLING_COEFFICIENTS = {
    Cooling.POOR: 0.18,
    Cooling.NORMAL: 0.12,
    Cooling.GOOD: 0.08,
}

# Thermal rise is evaluated at mid SOC
THERMAL_EVAL_SOC = 0.5


def estimate_thermal_delta_tcont_c(
    cell: CellSpec,
    cont_cell_a: float,
    ambient_c: float,
    cooling: Cooling | str,
) -> float:
    """
    Estimate steady-state temperature rise under continuous load.

    ΔT = I² * R(SOC=0.5, T_amb) * k_cooling

    Args:
        cell: Cell datasheet record
        cont_cell_a: Continuous per-cell current (A)
        ambient_c: Ambient temperature (°C)
        cooling: Cooling quality ('poor', 'normal' or 'good')

    Returns:
        Temperature rise above ambient (°C)
    """
    r_ohm = estimate_resistance_ohm(cell, THERMAL_EVAL_SOC, ambient_c)
    heat_w = cont_cell_a * cont_cell_a * r_ohm
    return heat_w * COOLING_COEFFICIENTS[Cooling(cooling)]
