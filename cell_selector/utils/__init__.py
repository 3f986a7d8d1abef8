"""Utility modules for the cell selector."""

from cell_selector.utils.math import clamp, inv_lerp, round_half_up, smooth_step
from cell_selector.utils.validators import ValidationError, validate_cell, validate_scenario

__all__ = [
    "clamp",
    "inv_lerp",
    "round_half_up",
    "smooth_step",
    "ValidationError",
    "validate_cell",
    "validate_scenario",
]
