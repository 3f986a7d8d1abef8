"""Validation utilities for cell and scenario records."""

from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """Raised when a cell or scenario record is malformed."""

    pass


def _is_finite(*values: Any) -> bool:
    return all(isinstance(v, (int, float)) and math.isfinite(v) for v in values)


def validate_cell(cell: Any) -> list[str]:
    """
    Validate the static datasheet attributes of a cell.

    Args:
        cell: Object exposing the ``CellSpec`` attributes

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not cell.id:
        errors.append("id must not be empty")

    if not cell.chemistry:
        errors.append("chemistry must not be empty")

    numeric = (
        cell.capacity_ah,
        cell.nominal_voltage_v,
        cell.voltage_min,
        cell.voltage_max,
        cell.max_discharge_c_cont,
        cell.max_discharge_c_pulse,
        cell.max_charge_c_cont,
        cell.temp_charge_min,
        cell.temp_charge_max,
        cell.temp_discharge_min,
        cell.temp_discharge_max,
        cell.resistance_mohm_25c,
        cell.cycle_life_80dod_25c,
    )
    if not _is_finite(*numeric):
        # Ordering checks below are meaningless on NaN/inf
        errors.append("all numeric attributes must be finite numbers")
        return errors

    if cell.capacity_ah <= 0:
        errors.append(f"capacity_ah ({cell.capacity_ah}) must be > 0")

    if not (cell.voltage_min < cell.nominal_voltage_v < cell.voltage_max):
        errors.append(
            f"nominal_voltage_v ({cell.nominal_voltage_v}) must be strictly between "
            f"voltage_min ({cell.voltage_min}) and voltage_max ({cell.voltage_max})"
        )

    if cell.voltage_min <= 0:
        errors.append(f"voltage_min ({cell.voltage_min}) must be > 0")

    if cell.max_discharge_c_cont <= 0:
        errors.append(f"max_discharge_c_cont ({cell.max_discharge_c_cont}) must be > 0")

    if cell.max_discharge_c_pulse < cell.max_discharge_c_cont:
        errors.append(
            f"max_discharge_c_pulse ({cell.max_discharge_c_pulse}) must be >= "
            f"max_discharge_c_cont ({cell.max_discharge_c_cont})"
        )

    if cell.max_charge_c_cont < 0:
        errors.append(f"max_charge_c_cont ({cell.max_charge_c_cont}) must be >= 0")

    if cell.temp_charge_min > cell.temp_charge_max:
        errors.append(
            f"temp_charge_min ({cell.temp_charge_min}) must be <= "
            f"temp_charge_max ({cell.temp_charge_max})"
        )

    if cell.temp_discharge_min > cell.temp_discharge_max:
        errors.append(
            f"temp_discharge_min ({cell.temp_discharge_min}) must be <= "
            f"temp_discharge_max ({cell.temp_discharge_max})"
        )

    if cell.resistance_mohm_25c <= 0:
        errors.append(f"resistance_mohm_25c ({cell.resistance_mohm_25c}) must be > 0")

    if not isinstance(cell.cycle_life_80dod_25c, int) or cell.cycle_life_80dod_25c <= 0:
        errors.append(
            f"cycle_life_80dod_25c ({cell.cycle_life_80dod_25c}) must be a positive integer"
        )

    if not isinstance(cell.cost_tier, int) or cell.cost_tier < 1:
        errors.append(f"cost_tier ({cell.cost_tier}) must be an integer >= 1")

    return errors


def validate_scenario(scenario: Any) -> list[str]:
    """
    Validate a workload scenario.

    Args:
        scenario: Object exposing the ``ScenarioSpec`` attributes

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    numeric = (
        scenario.nominal_voltage_v,
        scenario.energy_wh,
        scenario.peak_power_w,
        scenario.continuous_power_w,
        scenario.min_ambient_c,
        scenario.max_ambient_c,
    )
    if not _is_finite(*numeric):
        errors.append("all numeric attributes must be finite numbers")
        return errors

    if scenario.nominal_voltage_v <= 0:
        errors.append(f"nominal_voltage_v ({scenario.nominal_voltage_v}) must be > 0")

    if scenario.energy_wh <= 0:
        errors.append(f"energy_wh ({scenario.energy_wh}) must be > 0")

    if scenario.peak_power_w < 0:
        errors.append(f"peak_power_w ({scenario.peak_power_w}) must be >= 0")

    if scenario.continuous_power_w < 0:
        errors.append(f"continuous_power_w ({scenario.continuous_power_w}) must be >= 0")

    if scenario.min_ambient_c > scenario.max_ambient_c:
        errors.append(
            f"min_ambient_c ({scenario.min_ambient_c}) must be <= "
            f"max_ambient_c ({scenario.max_ambient_c})"
        )

    if not isinstance(scenario.expected_cycles, int) or scenario.expected_cycles < 1:
        errors.append(
            f"expected_cycles ({scenario.expected_cycles}) must be a positive integer"
        )

    return errors
