"""
Pack candidate definition.

A pack candidate is one series/parallel arrangement of a catalog cell sized
for a scenario, together with the per-cell stress it implies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class PackWarning(str, Enum):
    """Advisory tags raised while evaluating a pack against a scenario."""
    PEAK_RATE_EXCEEDED = "peak rate exceeded"
    CONTINUOUS_RATE_EXCEEDED = "continuous rate exceeded"
    LOW_TEMP_DISCHARGE_RISK = "low-temperature discharge risk"
    HIGH_TEMP_DISCHARGE_RISK = "high-temperature discharge risk"
    LOW_TEMP_CHARGE_PROHIBITED = "low-temperature charge prohibited"
    CYCLE_LIFE_BELOW_TARGET = "cycle life below target"


@dataclass(frozen=True)
class PackCandidate:
    """
    Series/parallel pack built from one cell for one scenario.

    Margins are cell ceiling minus required C-rate; a negative margin means
    the cell is overstressed. Never mutated after construction.
    """

    # Topology
    series: int
    parallel: int

    # Pack level
    pack_nominal_v: float
    pack_energy_wh: float

    # Per-cell stress
    peak_cell_a: float
    cont_cell_a: float
    peak_c_rate: float
    cont_c_rate: float
    peak_margin: float
    cont_margin: float

    # Estimates
    estimated_delta_t_cont_c: float
    estimated_life_cycles: int

    warnings: Tuple[PackWarning, ...] = ()

    @property
    def total_cells(self) -> int:
        """Total number of cells in the pack."""
        return self.series * self.parallel

    @property
    def pack_capacity_ah(self) -> float:
        """Total pack capacity in Ah."""
        return self.pack_energy_wh / self.pack_nominal_v

    @property
    def is_overstressed(self) -> bool:
        """Whether either rate margin is negative."""
        return self.peak_margin < 0 or self.cont_margin < 0

    def has_warning(self, warning: PackWarning) -> bool:
        """Whether ``warning`` was raised for this pack."""
        return warning in self.warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert candidate to dictionary."""
        return {
            "topology": {
                "series": self.series,
                "parallel": self.parallel,
                "total_cells": self.total_cells,
            },
            "electrical": {
                "nominal_voltage": self.pack_nominal_v,
                "energy_wh": self.pack_energy_wh,
                "capacity_ah": self.pack_capacity_ah,
            },
            "cell_stress": {
                "peak_cell_a": self.peak_cell_a,
                "cont_cell_a": self.cont_cell_a,
                "peak_c_rate": self.peak_c_rate,
                "cont_c_rate": self.cont_c_rate,
                "peak_margin": self.peak_margin,
                "cont_margin": self.cont_margin,
            },
            "estimates": {
                "delta_t_cont_c": self.estimated_delta_t_cont_c,
                "life_cycles": self.estimated_life_cycles,
            },
            "warnings": [w.value for w in self.warnings],
        }
