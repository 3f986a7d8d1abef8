"""NMC (LiNiMnCoO2) / Graphite chemistry configuration."""

from dataclasses import dataclass

from cell_selector.chemistry.base_chemistry import SlopedChemistry


@dataclass
class NMCChemistry(SlopedChemistry):
    """
    NMC (Nickel Manganese Cobalt) / Graphite chemistry.

    Characteristics:
    - High energy density
    - Sloped OCV from ~3.1 V to ~4.3 V
    - More sensitive to high SOC and high temperature than LFP
    """

    def _init_parameters(self) -> None:
        """Initialize NMC-specific parameters."""
        super()._init_parameters()
        self.name = "NMC"
        self.cathode = "NMC"
        self.anode = "Graphite"
        self.description = "NMC/Graphite - high energy density"
