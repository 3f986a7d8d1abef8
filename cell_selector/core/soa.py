"""
Safe-operating-area (SOA) grid builder.

Turns the estimators into a table of maximum allowable charge and discharge
current over a fixed SOC x temperature plane, and provides the default
recommended operating SOC window per chemistry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from cell_selector.core.cell import CellSpec
from cell_selector.core.estimator import estimate_ocv_v, estimate_resistance_ohm
from cell_selector.utils.math import clamp, round_half_up, smooth_step

# Grid axes: SOC 5..95 % and temperature -20..60 °C, both in 5-unit steps
SOC_AXIS_PCT = tuple(range(5, 96, 5))
TEMP_AXIS_C = tuple(range(-20, 61, 5))


def _frozen(values: Any, dtype: Any) -> np.ndarray:
    array = np.array(values, dtype=dtype)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class SoaGrid:
    """
    Maximum current tables over the SOC x temperature plane.

    ``discharge_a`` and ``charge_a`` are read-only integer arrays indexed
    ``[temp_index][soc_index]``; values are non-negative amperes.
    """

    soc_axis: np.ndarray
    temp_axis: np.ndarray
    discharge_a: np.ndarray
    charge_a: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        """(number of temperatures, number of SOC points)."""
        return (len(self.temp_axis), len(self.soc_axis))

    def current_at(self, temp_c: float, soc_pct: float, mode: str = "discharge") -> int:
        """
        Look up the grid entry at an exact axis point.

        Raises:
            KeyError: If ``temp_c`` or ``soc_pct`` is not on the grid axes
            ValueError: If mode is not 'discharge' or 'charge'
        """
        table = self._table(mode)
        t_idx = np.flatnonzero(self.temp_axis == temp_c)
        s_idx = np.flatnonzero(self.soc_axis == soc_pct)
        if t_idx.size == 0 or s_idx.size == 0:
            raise KeyError(f"({temp_c}°C, {soc_pct}%) is not on the grid axes")
        return int(table[t_idx[0], s_idx[0]])

    def to_dataframe(self, mode: str = "discharge") -> pd.DataFrame:
        """
        Grid as a DataFrame (rows: temperature °C, columns: SOC %).

        Args:
            mode: 'discharge' or 'charge'
        """
        df = pd.DataFrame(
            self._table(mode).copy(),
            index=pd.Index(self.temp_axis, name="temp_c"),
            columns=pd.Index(self.soc_axis, name="soc_pct"),
        )
        return df

    def to_dict(self) -> Dict[str, Any]:
        """Convert grid to nested lists."""
        return {
            "soc_axis": self.soc_axis.tolist(),
            "temp_axis": self.temp_axis.tolist(),
            "discharge_a": self.discharge_a.tolist(),
            "charge_a": self.charge_a.tolist(),
        }

    def _table(self, mode: str) -> np.ndarray:
        if mode == "discharge":
            return self.discharge_a
        if mode == "charge":
            return self.charge_a
        raise ValueError(f"Invalid mode '{mode}'. Must be 'discharge' or 'charge'")


@dataclass(frozen=True)
class SoaPolicy:
    """
    Default recommended operating SOC window.

    Advisory only: a chemistry-level default, not a computed safety boundary.
    """

    recommended_soc_min_pct: float
    recommended_soc_max_pct: float
    notes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert policy to dictionary."""
        return {
            "recommended_soc_min_pct": self.recommended_soc_min_pct,
            "recommended_soc_max_pct": self.recommended_soc_max_pct,
            "notes": list(self.notes),
        }


def get_default_soa_policy(cell: CellSpec) -> SoaPolicy:
    """
    Get the default SOC window for a cell's chemistry.

    LFP: 10-90%, LTO: 5-95%, everything else 15-85%.
    """
    chemistry = cell.chemistry_family
    return SoaPolicy(
        recommended_soc_min_pct=chemistry.recommended_soc_min_pct,
        recommended_soc_max_pct=chemistry.recommended_soc_max_pct,
        notes=tuple(chemistry.policy_notes),
    )


def thermal_limit_factor(temp_c: float) -> float:
    """
    Spec-current derating with temperature.

    Cold ramps 0.65 -> 1.0 between -10°C and 15°C; hot ramps 1.0 -> 0.65
    between 45°C and 60°C. Result clamped to [0.2, 1.0].
    """
    cold = 0.65 + 0.35 * smooth_step(-10.0, 15.0, temp_c)
    hot = 1.0 - 0.35 * smooth_step(45.0, 60.0, temp_c)
    return clamp(cold * hot, 0.2, 1.0)


def charge_risk_factor(cell: CellSpec, soc: float, temp_c: float) -> float:
    """
    Charge derating for lithium plating and high-temperature charge risk.

    Zero at or below ``temp_charge_min``, ramping to 1 over the next 15°C;
    reduced up to 75% between 85% and 98% SOC and up to 40% between 40°C
    and 55°C.
    """
    if temp_c < cell.temp_charge_min:
        return 0.0
    cold = smooth_step(cell.temp_charge_min, cell.temp_charge_min + 15.0, temp_c)
    high_soc = 1.0 - 0.75 * smooth_step(0.85, 0.98, soc)
    hot = 1.0 - 0.4 * smooth_step(40.0, 55.0, temp_c)
    return clamp(cold * high_soc * hot, 0.0, 1.0)


def build_soa_grid(cell: CellSpec) -> SoaGrid:
    """
    Build the charge/discharge current grid for a cell.

    For each (temperature, SOC) point:
    - Voltage-limited currents: (OCV - V_min) / R and (V_max - OCV) / R
    - Spec-limited currents: C-rate ceiling * capacity * thermal factor
      (charge additionally scaled by the charge-risk factor)
    - Result: the smaller of the two, rounded to whole amperes

    Args:
        cell: Cell datasheet record

    Returns:
        Freshly built SOA grid
    """
    spec_discharge_a = cell.max_discharge_c_cont * cell.capacity_ah
    spec_charge_a = cell.max_charge_c_cont * cell.capacity_ah

    discharge_rows = []
    charge_rows = []
    for temp_c in TEMP_AXIS_C:
        thermal = thermal_limit_factor(temp_c)
        discharge_row = []
        charge_row = []
        for soc_pct in SOC_AXIS_PCT:
            soc = soc_pct / 100
            ocv = estimate_ocv_v(cell, soc)
            r_ohm = estimate_resistance_ohm(cell, soc, temp_c)

            i_dis_volt = max(0.0, (ocv - cell.voltage_min) / r_ohm)
            i_chg_volt = max(0.0, (cell.voltage_max - ocv) / r_ohm)

            i_dis = min(i_dis_volt, spec_discharge_a * thermal)
            risk = charge_risk_factor(cell, soc, temp_c)
            i_chg = min(i_chg_volt, spec_charge_a * thermal * risk)

            discharge_row.append(max(0, round_half_up(i_dis)))
            charge_row.append(max(0, round_half_up(i_chg)))

        discharge_rows.append(discharge_row)
        charge_rows.append(charge_row)

    return SoaGrid(
        soc_axis=_frozen(SOC_AXIS_PCT, int),
        temp_axis=_frozen(TEMP_AXIS_C, int),
        discharge_a=_frozen(discharge_rows, int),
        charge_a=_frozen(charge_rows, int),
    )
