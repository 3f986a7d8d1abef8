"""
Heuristic electrochemical estimators.

Maps a cell's static datasheet attributes plus an operating point (SOC,
temperature, current) to open-circuit voltage, internal resistance and
cycle life. Every function is total: inputs are clamped, never rejected.

Each derating factor is an independent multiplicative term built from
smoothstep transitions, so the SOA grid built on top has no artificial
discontinuities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from cell_selector.core.cell import Application, CellSpec, OperatingPoint, Priority, ScenarioSpec
from cell_selector.utils.math import clamp, round_half_up, smooth_step

# Resistance is never estimated below this share of the 25°C reference
RESISTANCE_FLOOR_RATIO = 0.6

# Life estimate floor (estimator uncertainty, not a physical limit)
MIN_LIFE_CYCLES = 200

# Reference depth of discharge of the datasheet cycle life
REFERENCE_DOD = 0.8
DOD_EXPONENT = 0.55

USABLE_SOC_BY_APPLICATION = {
    Application.STORAGE: 0.75,
    Application.EV: 0.80,
    Application.DRONE: 0.85,
}
USABLE_SOC_PRIORITY_ADJUSTMENT = {
    Priority.SAFETY: -0.12,
    Priority.COST: 0.06,
    Priority.PERFORMANCE: 0.04,
    Priority.BALANCED: 0.0,
}


@dataclass(frozen=True)
class CellEstimate:
    """Estimator outputs at one operating point."""

    ocv_v: float
    resistance_ohm: float
    terminal_voltage_v: Optional[float] = None
    heat_w: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert estimate to dictionary."""
        return {
            "ocv_v": self.ocv_v,
            "resistance_ohm": self.resistance_ohm,
            "terminal_voltage_v": self.terminal_voltage_v,
            "heat_w": self.heat_w,
        }


def estimate_ocv_v(cell: CellSpec, soc: float) -> float:
    """
    Estimate open circuit voltage for a given SOC.

    LFP and LTO follow a flat plateau with smooth knees at both ends; every
    other chemistry follows a sloped layered-oxide curve.

    Args:
        cell: Cell datasheet record
        soc: State of charge (0-1); out-of-range values are clamped

    Returns:
        Open circuit voltage (V) inside [voltage_min, voltage_max]
    """
    return cell.chemistry_family.get_ocv(soc, cell.voltage_min, cell.voltage_max)


def soc_resistance_factor(soc: float) -> float:
    """Resistance multiplier from SOC; stronger penalty at low SOC than at high SOC."""
    soc = clamp(soc, 0.0, 1.0)
    return 1.0 + 0.6 * (1.0 - smooth_step(0.10, 0.25, soc)) + 0.5 * smooth_step(0.80, 0.95, soc)


def cold_resistance_factor(temp_c: float) -> float:
    """Resistance multiplier below 15°C (up to 2.8x at -5°C and colder)."""
    return 1.0 + 1.8 * (1.0 - smooth_step(-5.0, 15.0, temp_c))


def hot_resistance_factor(temp_c: float) -> float:
    """Mild resistance reduction above 35°C, saturating at 55°C."""
    return 1.0 - 0.15 * smooth_step(35.0, 55.0, temp_c)


def estimate_resistance_ohm(cell: CellSpec, soc: float, temp_c: float) -> float:
    """
    Estimate DC internal resistance.

    R = R_25 * f_soc(SOC) * f_cold(T) * f_hot(T), floored at 60% of R_25.

    Args:
        cell: Cell datasheet record
        soc: State of charge (0-1); clamped
        temp_c: Cell temperature (°C)

    Returns:
        Internal resistance (Ohm)
    """
    r_ref = cell.resistance_ohm_25c
    r_ohm = (
        r_ref
        * soc_resistance_factor(soc)
        * cold_resistance_factor(temp_c)
        * hot_resistance_factor(temp_c)
    )
    return max(r_ohm, r_ref * RESISTANCE_FLOOR_RATIO)


def estimate_operating_point(cell: CellSpec, point: OperatingPoint) -> CellEstimate:
    """
    Evaluate the estimators at one operating point.

    When the point carries a current (positive = discharge) the loaded
    terminal voltage V = OCV - I*R and the ohmic heat I²R are included.
    """
    ocv = estimate_ocv_v(cell, point.state_of_charge)
    r_ohm = estimate_resistance_ohm(cell, point.state_of_charge, point.temperature_c)
    if point.current_a is None:
        return CellEstimate(ocv_v=ocv, resistance_ohm=r_ohm)

    terminal = clamp(ocv - point.current_a * r_ohm, cell.voltage_min, cell.voltage_max)
    return CellEstimate(
        ocv_v=ocv,
        resistance_ohm=r_ohm,
        terminal_voltage_v=terminal,
        heat_w=point.current_a**2 * r_ohm,
    )


def estimate_life_cycles(
    cell: CellSpec,
    usable_soc_fraction: float,
    avg_temp_c: float,
    cont_c_rate: float,
) -> int:
    """
    Extrapolate cycle life from the 80% DoD / 25°C datasheet point.

    Penalties (independent, multiplicative):
    - DoD: (0.8 / dod)^0.55 with dod clamped to [0.55, 0.95]
    - Temperature: -1.5%/°C above 30°C, -0.6%/°C below 10°C
    - Rate: -8% per C above 1C, capped at 3C of excess

    Args:
        cell: Cell datasheet record
        usable_soc_fraction: Average depth of discharge per cycle (0-1)
        avg_temp_c: Average cell temperature (°C)
        cont_c_rate: Continuous discharge C-rate

    Returns:
        Estimated cycles, never below 200
    """
    life = float(cell.cycle_life_80dod_25c)

    dod = clamp(usable_soc_fraction, 0.55, 0.95)
    life *= (REFERENCE_DOD / dod) ** DOD_EXPONENT

    if avg_temp_c > 30:
        life *= 1 - 0.015 * (avg_temp_c - 30)
    if avg_temp_c < 10:
        life *= 1 - 0.006 * (10 - avg_temp_c)

    if cont_c_rate > 1:
        life *= 1 - 0.08 * min(3.0, cont_c_rate - 1)

    return max(MIN_LIFE_CYCLES, round_half_up(life))


def usable_soc_fraction(scenario: ScenarioSpec) -> float:
    """
    Default usable SOC window for a scenario.

    Base window by application, shifted by priority, clamped to [0.6, 0.9].
    """
    base = USABLE_SOC_BY_APPLICATION.get(scenario.application, 0.80)
    adjustment = USABLE_SOC_PRIORITY_ADJUSTMENT[scenario.priority]
    return clamp(base + adjustment, 0.6, 0.9)
