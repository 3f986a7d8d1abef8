"""Base chemistry classes: OCV curve families and default SOC policy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from cell_selector.utils.math import clamp, smooth_step


@dataclass
class BaseChemistry(ABC):
    """
    Abstract base class for a chemistry family.

    A chemistry family owns:
    - The shape of the open-circuit voltage (OCV) vs SOC curve
    - The default recommended operating SOC window and its advisory notes

    Cell-specific values (capacity, voltage window, resistance) live on the
    ``CellSpec``; the chemistry only decides which curve family applies.
    """

    # Chemistry identification
    name: str = field(default="BaseChemistry", init=False)
    cathode: str = field(default="Unknown", init=False)
    anode: str = field(default="Unknown", init=False)
    description: str = field(default="", init=False)

    # Default SOA policy (advisory, not a computed safety boundary)
    recommended_soc_min_pct: float = field(default=15.0, init=False)
    recommended_soc_max_pct: float = field(default=85.0, init=False)
    policy_notes: list[str] = field(default_factory=list, init=False)

    def __post_init__(self):
        """Initialize chemistry-specific parameters."""
        self._init_parameters()

    @abstractmethod
    def _init_parameters(self) -> None:
        """Initialize chemistry-specific parameters. Must be implemented by subclasses."""
        pass

    @abstractmethod
    def open_circuit_voltage(self, soc: float) -> float:
        """
        Raw OCV curve for a clamped SOC, before the cell voltage window is applied.

        Args:
            soc: State of charge (0-1), already clamped

        Returns:
            Open circuit voltage (V)
        """
        pass

    def get_ocv(self, soc: float, voltage_min: float, voltage_max: float) -> float:
        """
        Get open circuit voltage bounded by a cell's voltage window.

        Args:
            soc: State of charge (any real; clamped to 0-1)
            voltage_min: Cell discharge cut-off voltage (V)
            voltage_max: Cell charge cut-off voltage (V)

        Returns:
            Open circuit voltage (V) inside [voltage_min, voltage_max]
        """
        soc = clamp(soc, 0.0, 1.0)
        return clamp(self.open_circuit_voltage(soc), voltage_min, voltage_max)

    def to_dict(self) -> dict:
        """Convert chemistry to dictionary."""
        return {
            "name": self.name,
            "cathode": self.cathode,
            "anode": self.anode,
            "description": self.description,
            "recommended_soc_min_pct": self.recommended_soc_min_pct,
            "recommended_soc_max_pct": self.recommended_soc_max_pct,
            "policy_notes": list(self.policy_notes),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"soc_window={self.recommended_soc_min_pct:g}-{self.recommended_soc_max_pct:g}%)"
        )


@dataclass
class PlateauChemistry(BaseChemistry):
    """
    Flat-plateau curve family (LFP, LTO).

    OCV sits on ``plateau_v`` across mid SOC. Below the low blend window the
    curve falls towards ``low_knee_v`` and above the high blend window it
    rises by ``high_knee_span_v``; every transition is a smoothstep.
    """

    plateau_v: float = field(default=3.3, init=False)
    low_knee_v: float = field(default=2.9, init=False)
    low_knee_span_v: float = field(default=0.35, init=False)
    low_knee_soc: tuple[float, float] = field(default=(0.0, 0.10), init=False)
    low_blend_soc: tuple[float, float] = field(default=(0.12, 0.20), init=False)
    high_knee_span_v: float = field(default=0.25, init=False)
    high_knee_soc: tuple[float, float] = field(default=(0.90, 1.00), init=False)
    high_blend_soc: tuple[float, float] = field(default=(0.85, 0.95), init=False)

    def open_circuit_voltage(self, soc: float) -> float:
        low = self.low_knee_v + self.low_knee_span_v * smooth_step(*self.low_knee_soc, soc)
        high = self.plateau_v + self.high_knee_span_v * smooth_step(*self.high_knee_soc, soc)
        return (
            self.plateau_v
            + (low - self.plateau_v) * (1.0 - smooth_step(*self.low_blend_soc, soc))
            + (high - self.plateau_v) * smooth_step(*self.high_blend_soc, soc)
        )


@dataclass
class SlopedChemistry(BaseChemistry):
    """
    Monotonic sloped curve family (NMC, NCA and unregistered chemistries).

    A smoothstep base rising from ``base_v`` by ``base_span_v`` across mid
    SOC, with an extra drop below the low knee and an extra rise above the
    high knee.
    """

    base_v: float = field(default=3.45, init=False)
    base_span_v: float = field(default=0.65, init=False)
    base_soc: tuple[float, float] = field(default=(0.05, 0.95), init=False)
    low_knee_drop_v: float = field(default=0.35, init=False)
    low_knee_soc: tuple[float, float] = field(default=(0.08, 0.18), init=False)
    high_knee_rise_v: float = field(default=0.25, init=False)
    high_knee_soc: tuple[float, float] = field(default=(0.88, 0.98), init=False)

    def _init_parameters(self) -> None:
        """Generic layered-oxide defaults."""
        self.name = "Generic"
        self.description = "Unregistered chemistry - sloped layered-oxide curve"
        self.recommended_soc_min_pct = 15.0
        self.recommended_soc_max_pct = 85.0
        self.policy_notes = [
            "Be more conservative when fast charging at high SOC",
            "Derate at high temperature to protect cycle life",
        ]

    def open_circuit_voltage(self, soc: float) -> float:
        base = self.base_v + self.base_span_v * smooth_step(*self.base_soc, soc)
        knee_low = self.low_knee_drop_v * (1.0 - smooth_step(*self.low_knee_soc, soc))
        knee_high = self.high_knee_rise_v * smooth_step(*self.high_knee_soc, soc)
        return base - knee_low + knee_high
