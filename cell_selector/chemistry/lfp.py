"""LFP (LiFePO4) / Graphite chemistry configuration."""

from dataclasses import dataclass

from cell_selector.chemistry.base_chemistry import PlateauChemistry


@dataclass
class LFPChemistry(PlateauChemistry):
    """
    LFP (Lithium Iron Phosphate) / Graphite chemistry.

    Characteristics:
    - Very flat 3.28 V plateau across mid SOC
    - Sharp knees below ~15% and above ~90% SOC
    - High thermal stability, long cycle life
    - Wide 10-90% recommended window
    """

    def _init_parameters(self) -> None:
        """Initialize LFP-specific parameters."""
        # Chemistry identification
        self.name = "LFP"
        self.cathode = "LFP"
        self.anode = "Graphite"
        self.description = "LFP/Graphite - long cycle life, high safety, flat plateau"

        # Plateau curve
        self.plateau_v = 3.28
        self.low_knee_v = 2.9
        self.low_knee_span_v = 0.35
        self.low_knee_soc = (0.0, 0.10)
        self.low_blend_soc = (0.12, 0.20)
        self.high_knee_span_v = 0.25
        self.high_knee_soc = (0.90, 1.00)
        self.high_blend_soc = (0.85, 0.95)

        # Default policy
        self.recommended_soc_min_pct = 10.0
        self.recommended_soc_max_pct = 90.0
        self.policy_notes = [
            "Avoid prolonged rest at high SOC to preserve cycle life",
            "Limit current or pre-heat before charging at low temperature",
        ]
