"""Battery chemistry families."""

from typing import List

from cell_selector.chemistry.base_chemistry import (
    BaseChemistry,
    PlateauChemistry,
    SlopedChemistry,
)
from cell_selector.chemistry.lfp import LFPChemistry
from cell_selector.chemistry.lto import LTOChemistry
from cell_selector.chemistry.nca import NCAChemistry
from cell_selector.chemistry.nmc import NMCChemistry


class Chemistry:
    """Factory for creating chemistry families."""

    LFP = "LFP"
    NMC = "NMC"
    NCA = "NCA"
    LTO = "LTO"

    _registry = {
        "LFP": LFPChemistry,
        "LFP-GRAPHITE": LFPChemistry,
        "LIFEPO4": LFPChemistry,
        "NMC": NMCChemistry,
        "NMC811": NMCChemistry,
        "NMC622": NMCChemistry,
        "NMC523": NMCChemistry,
        "NCM": NMCChemistry,
        "NCM811": NMCChemistry,
        "NCM622": NMCChemistry,
        "NCM523": NMCChemistry,
        "NCA": NCAChemistry,
        "LTO": LTOChemistry,
        "LTO-LMO": LTOChemistry,
    }

    @staticmethod
    def normalize(name: str) -> str:
        """Normalize a chemistry name to its registry key form."""
        return name.strip().upper().replace(" ", "-").replace("_", "-")

    @classmethod
    def from_name(cls, name: str) -> BaseChemistry:
        """
        Create chemistry family from name.

        Args:
            name: Chemistry name (e.g., 'LFP', 'NMC', 'NCA', 'LTO')

        Returns:
            Chemistry configuration object

        Raises:
            ValueError: If chemistry name is not recognized
        """
        key = cls.normalize(name)
        if key not in cls._registry:
            available = list(cls._registry.keys())
            raise ValueError(f"Unknown chemistry '{name}'. Available: {available}")
        return cls._registry[key]()

    @classmethod
    def resolve(cls, name: str) -> BaseChemistry:
        """
        Resolve a chemistry family, falling back to the sloped curve.

        Unlike ``from_name`` this never raises: chemistries outside the
        registry are treated as layered-oxide cells.
        """
        return cls._registry.get(cls.normalize(name), SlopedChemistry)()

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Whether ``name`` maps to a registered chemistry family."""
        return cls.normalize(name) in cls._registry

    @classmethod
    def list_available(cls) -> List[str]:
        """List canonical chemistry family names."""
        seen = []
        for chemistry_class in cls._registry.values():
            name = chemistry_class().name
            if name not in seen:
                seen.append(name)
        return seen

    @classmethod
    def register(cls, name: str, chemistry_class: type) -> None:
        """Register a custom chemistry."""
        cls._registry[cls.normalize(name)] = chemistry_class


__all__ = [
    "Chemistry",
    "BaseChemistry",
    "PlateauChemistry",
    "SlopedChemistry",
    "LFPChemistry",
    "LTOChemistry",
    "NMCChemistry",
    "NCAChemistry",
]
