import pytest

from cell_selector.core.cell import Application, CellSpec, Cooling, Priority, ScenarioSpec


@pytest.fixture
def lfp_cell():
    """Large-format 280Ah LFP storage cell."""
    return CellSpec(
        id="lfp-280",
        model="LFP-280Ah",
        chemistry="LFP",
        capacity_ah=280.0,
        nominal_voltage_v=3.2,
        voltage_min=2.8,
        voltage_max=3.65,
        max_discharge_c_cont=1.0,
        max_discharge_c_pulse=2.0,
        max_charge_c_cont=0.5,
        temp_charge_min=0.0,
        temp_charge_max=55.0,
        temp_discharge_min=-20.0,
        temp_discharge_max=60.0,
        resistance_mohm_25c=0.25,
        cycle_life_80dod_25c=6000,
        cost_tier=1,
    )


@pytest.fixture
def nmc_cell():
    """5Ah NMC 21700 cell."""
    return CellSpec(
        id="nmc-21700",
        model="NMC-21700-5Ah",
        chemistry="NMC",
        capacity_ah=5.0,
        nominal_voltage_v=3.6,
        voltage_min=2.5,
        voltage_max=4.2,
        max_discharge_c_cont=2.0,
        max_discharge_c_pulse=6.0,
        max_charge_c_cont=1.0,
        temp_charge_min=0.0,
        temp_charge_max=45.0,
        temp_discharge_min=-20.0,
        temp_discharge_max=60.0,
        resistance_mohm_25c=18.0,
        cycle_life_80dod_25c=1200,
        cost_tier=2,
        form_factor="cylindrical",
    )


@pytest.fixture
def lto_cell():
    """30Ah LTO high-power cell."""
    return CellSpec(
        id="lto-30",
        model="LTO-30Ah",
        chemistry="LTO",
        capacity_ah=30.0,
        nominal_voltage_v=2.3,
        voltage_min=1.5,
        voltage_max=2.8,
        max_discharge_c_cont=6.0,
        max_discharge_c_pulse=10.0,
        max_charge_c_cont=6.0,
        temp_charge_min=-30.0,
        temp_charge_max=55.0,
        temp_discharge_min=-30.0,
        temp_discharge_max=60.0,
        resistance_mohm_25c=1.2,
        cycle_life_80dod_25c=20000,
        cost_tier=5,
    )


def lfp_module_scenario(
    cont_c: float = 0.5,
    peak_c: float = 0.5,
    min_ambient_c: float = 10.0,
    max_ambient_c: float = 30.0,
    expected_cycles: int = 1000,
    priority: Priority = Priority.BALANCED,
) -> ScenarioSpec:
    """16S1P 280Ah LFP module (51.2 V) loaded at the given per-cell C-rates."""
    pack_v = 16 * 3.2
    return ScenarioSpec(
        nominal_voltage_v=pack_v,
        energy_wh=16 * 280 * 3.2,
        peak_power_w=peak_c * 280 * pack_v,
        continuous_power_w=cont_c * 280 * pack_v,
        min_ambient_c=min_ambient_c,
        max_ambient_c=max_ambient_c,
        expected_cycles=expected_cycles,
        cooling=Cooling.GOOD,
        priority=priority,
        application=Application.STORAGE,
    )


@pytest.fixture
def module_scenario():
    """Factory for 16S1P LFP module scenarios."""
    return lfp_module_scenario
