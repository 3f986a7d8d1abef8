"""Catalog and scenario loading from YAML."""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from cell_selector.chemistry import Chemistry
from cell_selector.core.cell import CellSpec, ScenarioSpec


class CellConfigModel(BaseModel):
    """Cell catalog entry model."""

    id: str = Field(min_length=1)
    model: str = ""
    chemistry: str
    form_factor: str = "prismatic"

    capacity_ah: float = Field(gt=0)
    nominal_voltage_v: float = Field(gt=0)
    voltage_min: float = Field(gt=0)
    voltage_max: float = Field(gt=0)

    max_discharge_c_cont: float = Field(gt=0)
    max_discharge_c_pulse: float = Field(gt=0)
    max_charge_c_cont: float = Field(ge=0)

    temp_charge_min: float = Field(ge=-60, le=100)
    temp_charge_max: float = Field(ge=-60, le=100)
    temp_discharge_min: float = Field(ge=-60, le=100)
    temp_discharge_max: float = Field(ge=-60, le=100)

    resistance_mohm_25c: float = Field(gt=0)
    cycle_life_80dod_25c: int = Field(gt=0)
    cost_tier: int = Field(default=1, ge=1)
    mass_g: float | None = Field(default=None, gt=0)

    @field_validator("chemistry")
    @classmethod
    def validate_chemistry(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("chemistry must not be empty")
        if not Chemistry.is_registered(v):
            warnings.warn(
                f"Chemistry '{v}' is not registered; using the sloped layered-oxide curve"
            )
            return Chemistry.normalize(v)
        return Chemistry.from_name(v).name

    @field_validator("form_factor")
    @classmethod
    def validate_form_factor(cls, v: str) -> str:
        valid = ["cylindrical", "prismatic", "pouch"]
        if v.lower() not in valid:
            raise ValueError(f"Invalid form factor '{v}'. Must be one of: {valid}")
        return v.lower()

    def to_cell(self) -> CellSpec:
        """Build the validated cell record."""
        return CellSpec(**self.model_dump())


class ScenarioConfigModel(BaseModel):
    """Workload scenario model."""

    application: str = "EV"
    nominal_voltage_v: float = Field(gt=0)
    energy_wh: float = Field(gt=0)
    peak_power_w: float = Field(ge=0)
    continuous_power_w: float = Field(ge=0)
    min_ambient_c: float = Field(ge=-60, le=100)
    max_ambient_c: float = Field(ge=-60, le=100)
    expected_cycles: int = Field(gt=0)
    cooling: str = "normal"
    priority: str = "balanced"

    @field_validator("cooling")
    @classmethod
    def validate_cooling(cls, v: str) -> str:
        valid = ["poor", "normal", "good"]
        if v.lower() not in valid:
            raise ValueError(f"Invalid cooling '{v}'. Must be one of: {valid}")
        return v.lower()

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: str) -> str:
        valid = ["safety", "balanced", "performance", "cost"]
        if v.lower() not in valid:
            raise ValueError(f"Invalid priority '{v}'. Must be one of: {valid}")
        return v.lower()

    @field_validator("application")
    @classmethod
    def validate_application(cls, v: str) -> str:
        valid = ["EV", "Storage", "Drone", "Consumer", "PowerTool", "OutdoorPower"]
        by_lower = {name.lower(): name for name in valid}
        if v.lower() not in by_lower:
            raise ValueError(f"Invalid application '{v}'. Must be one of: {valid}")
        return by_lower[v.lower()]

    def to_scenario(self) -> ScenarioSpec:
        """Build the validated scenario record."""
        return ScenarioSpec(**self.model_dump())


def _read_yaml(path: str | Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with open(path, "r") as f:
        return yaml.safe_load(f)


def parse_catalog(raw: Any) -> list[CellSpec]:
    """
    Build cell records from a parsed catalog mapping.

    Args:
        raw: Mapping with a ``cells`` list, or the list itself

    Returns:
        Cells in catalog order

    Raises:
        ValueError: If the structure or any entry is invalid, or ids repeat
    """
    entries = raw.get("cells") if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise ValueError("Catalog must contain a 'cells' list")

    cells = []
    seen_ids = set()
    for entry in entries:
        cell = CellConfigModel.model_validate(entry).to_cell()
        if cell.id in seen_ids:
            raise ValueError(f"Duplicate cell id '{cell.id}' in catalog")
        seen_ids.add(cell.id)

        if (
            cell.temp_charge_min < cell.temp_discharge_min
            or cell.temp_charge_max > cell.temp_discharge_max
        ):
            warnings.warn(
                f"Cell '{cell.id}': charge temperature window is wider than its "
                f"discharge window"
            )
        cells.append(cell)
    return cells


def parse_scenario(raw: Any) -> ScenarioSpec:
    """
    Build a scenario from a parsed mapping.

    Accepts either ``{"scenario": {...}}`` or the flat mapping.

    Raises:
        ValueError: If the structure or any field is invalid
    """
    if not isinstance(raw, dict):
        raise ValueError("Scenario must be a mapping")
    data = raw.get("scenario", raw)
    return ScenarioConfigModel.model_validate(data).to_scenario()


def load_catalog(config_path: str | Path) -> list[CellSpec]:
    """
    Load a cell catalog from YAML file.

    Args:
        config_path: Path to YAML catalog file

    Returns:
        Validated cells in file order

    Raises:
        FileNotFoundError: If catalog file doesn't exist
        ValueError: If catalog is invalid
    """
    return parse_catalog(_read_yaml(config_path))


def load_scenario(config_path: str | Path) -> ScenarioSpec:
    """
    Load a workload scenario from YAML file.

    Raises:
        FileNotFoundError: If scenario file doesn't exist
        ValueError: If scenario is invalid
    """
    return parse_scenario(_read_yaml(config_path))


def save_scenario(scenario: ScenarioSpec, output_path: str | Path) -> None:
    """
    Save scenario to YAML file.

    Args:
        scenario: Scenario record
        output_path: Path to save YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.dump({"scenario": scenario.to_dict()}, f, default_flow_style=False, sort_keys=False)
