"""LTO (Li4Ti5O12) anode chemistry configuration."""

from dataclasses import dataclass

from cell_selector.chemistry.base_chemistry import PlateauChemistry


@dataclass
class LTOChemistry(PlateauChemistry):
    """
    LTO (Lithium Titanate) anode chemistry.

    Characteristics:
    - Low 2.35 V plateau
    - Excellent rate capability and low-temperature behaviour
    - Lower energy density than graphite-anode cells
    """

    def _init_parameters(self) -> None:
        """Initialize LTO-specific parameters."""
        # Chemistry identification
        self.name = "LTO"
        self.cathode = "LMO/NMC"
        self.anode = "LTO"
        self.description = "LTO anode - ultra-long life, high power, low energy density"

        # Plateau curve
        self.plateau_v = 2.35
        self.low_knee_v = 1.9
        self.low_knee_span_v = 0.35
        self.low_knee_soc = (0.0, 0.10)
        self.low_blend_soc = (0.10, 0.20)
        self.high_knee_span_v = 0.35
        self.high_knee_soc = (0.85, 1.00)
        self.high_blend_soc = (0.80, 0.95)

        # Default policy
        self.recommended_soc_min_pct = 5.0
        self.recommended_soc_max_pct = 95.0
        self.policy_notes = [
            "Strong rate capability suits high-power and fast-charge duty",
            "Energy density is typically lower",
        ]
