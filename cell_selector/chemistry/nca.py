"""NCA (LiNiCoAlO2) / Graphite chemistry configuration."""

from dataclasses import dataclass

from cell_selector.chemistry.base_chemistry import SlopedChemistry


@dataclass
class NCAChemistry(SlopedChemistry):
    """
    NCA / Graphite high-nickel chemistry.

    Shares the sloped layered-oxide curve and the conservative 15-85%
    window with NMC.
    """

    def _init_parameters(self) -> None:
        """Initialize NCA-specific parameters."""
        super()._init_parameters()
        self.name = "NCA"
        self.cathode = "NCA"
        self.anode = "Graphite"
        self.description = "NCA/Graphite - high-nickel, high power"
