"""
Cell and workload value objects.

Defines the static cell datasheet record, the workload scenario a pack is
sized against, and the transient operating point the estimators evaluate.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from cell_selector.chemistry import BaseChemistry, Chemistry
from cell_selector.utils.validators import ValidationError, validate_cell, validate_scenario


class Cooling(str, Enum):
    """Pack thermal management quality."""
    POOR = "poor"
    NORMAL = "normal"
    GOOD = "good"


class Priority(str, Enum):
    """What the user optimizes for when ranking cells."""
    SAFETY = "safety"
    BALANCED = "balanced"
    PERFORMANCE = "performance"
    COST = "cost"


class Application(str, Enum):
    """Application class, used to pick the default usable SOC window."""
    EV = "EV"
    STORAGE = "Storage"
    DRONE = "Drone"
    CONSUMER = "Consumer"
    POWER_TOOL = "PowerTool"
    OUTDOOR_POWER = "OutdoorPower"


class FormFactor(str, Enum):
    """Cell can format."""
    CYLINDRICAL = "cylindrical"
    PRISMATIC = "prismatic"
    POUCH = "pouch"


@dataclass(frozen=True)
class CellSpec:
    """
    Static datasheet attributes of a single cell.

    Construction validates the record and raises ``ValidationError`` listing
    every inconsistency, so a malformed catalog entry is rejected at load time
    instead of producing silently wrong estimates.
    """

    id: str
    chemistry: str

    # Electrical (Ah, V)
    capacity_ah: float
    nominal_voltage_v: float
    voltage_min: float
    voltage_max: float

    # Rate ceilings (C-rate)
    max_discharge_c_cont: float
    max_discharge_c_pulse: float
    max_charge_c_cont: float

    # Operating windows (°C)
    temp_charge_min: float
    temp_charge_max: float
    temp_discharge_min: float
    temp_discharge_max: float

    # Reference resistance at 25°C, mid SOC (mOhm)
    resistance_mohm_25c: float

    # Cycles to 80% SOH at 80% DoD, 25°C
    cycle_life_80dod_25c: int

    # 1 = cheapest
    cost_tier: int = 1

    model: str = ""
    form_factor: FormFactor = FormFactor.PRISMATIC
    mass_g: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.form_factor, FormFactor):
            object.__setattr__(self, "form_factor", FormFactor(self.form_factor))
        errors = validate_cell(self)
        if errors:
            raise ValidationError(f"Invalid cell '{self.id}': " + "; ".join(errors))
        # Not a dataclass field: excluded from eq, hash and asdict
        object.__setattr__(self, "_chemistry_family", Chemistry.resolve(self.chemistry))

    @property
    def chemistry_family(self) -> BaseChemistry:
        """Curve family for this cell's chemistry."""
        return self._chemistry_family

    @property
    def energy_wh(self) -> float:
        """Nominal cell energy (Wh)."""
        return self.capacity_ah * self.nominal_voltage_v

    @property
    def resistance_ohm_25c(self) -> float:
        """Reference resistance in Ohm."""
        return self.resistance_mohm_25c / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert cell to dictionary."""
        data = asdict(self)
        data["form_factor"] = self.form_factor.value
        return data


@dataclass(frozen=True)
class ScenarioSpec:
    """
    Target pack and workload requirements.

    Enum-valued fields accept either the enum member or its string value.
    """

    nominal_voltage_v: float
    energy_wh: float
    peak_power_w: float
    continuous_power_w: float
    min_ambient_c: float
    max_ambient_c: float
    expected_cycles: int
    cooling: Cooling = Cooling.NORMAL
    priority: Priority = Priority.BALANCED
    application: Application = Application.EV

    def __post_init__(self):
        object.__setattr__(self, "cooling", Cooling(self.cooling))
        object.__setattr__(self, "priority", Priority(self.priority))
        object.__setattr__(self, "application", Application(self.application))
        errors = validate_scenario(self)
        if errors:
            raise ValidationError("Invalid scenario: " + "; ".join(errors))

    @property
    def ambient_midpoint_c(self) -> float:
        """Midpoint of the ambient temperature range (°C)."""
        return (self.min_ambient_c + self.max_ambient_c) / 2

    @classmethod
    def default(cls) -> "ScenarioSpec":
        """A 400 V / 60 kWh passenger EV pack."""
        return cls(
            nominal_voltage_v=400.0,
            energy_wh=60_000.0,
            peak_power_w=180_000.0,
            continuous_power_w=60_000.0,
            min_ambient_c=-10.0,
            max_ambient_c=40.0,
            expected_cycles=1500,
            cooling=Cooling.GOOD,
            priority=Priority.BALANCED,
            application=Application.EV,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert scenario to dictionary."""
        data = asdict(self)
        data["cooling"] = self.cooling.value
        data["priority"] = self.priority.value
        data["application"] = self.application.value
        return data


@dataclass(frozen=True)
class OperatingPoint:
    """A single (SOC, temperature, current) point; never persisted."""

    state_of_charge: float  # 0-1
    temperature_c: float
    current_a: Optional[float] = None  # positive = discharge
