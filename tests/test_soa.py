"""Tests for the SOA grid builder and default policy."""

from dataclasses import replace

import numpy as np
import pandas as pd
import pytest

from cell_selector.core.estimator import estimate_ocv_v, estimate_resistance_ohm
from cell_selector.core.soa import (
    SOC_AXIS_PCT,
    TEMP_AXIS_C,
    build_soa_grid,
    charge_risk_factor,
    get_default_soa_policy,
    thermal_limit_factor,
)
from cell_selector.utils.math import round_half_up


class TestSoaGrid:
    """Test suite for build_soa_grid."""

    @pytest.fixture
    def cells(self, lfp_cell, nmc_cell, lto_cell):
        return [lfp_cell, nmc_cell, lto_cell]

    def test_axes(self, lfp_cell):
        """SOC 5..95% and temperature -20..60°C in steps of 5."""
        grid = build_soa_grid(lfp_cell)
        assert grid.soc_axis.tolist() == list(range(5, 96, 5))
        assert grid.temp_axis.tolist() == list(range(-20, 61, 5))
        assert len(SOC_AXIS_PCT) == 19
        assert len(TEMP_AXIS_C) == 17

    def test_shape_and_non_negative(self, cells):
        """Both tables are temp x soc and never negative."""
        for cell in cells:
            grid = build_soa_grid(cell)
            assert grid.shape == (17, 19)
            assert grid.discharge_a.shape == (17, 19)
            assert grid.charge_a.shape == (17, 19)
            assert np.all(grid.discharge_a >= 0)
            assert np.all(grid.charge_a >= 0)

    def test_bounded_by_spec_ceiling(self, cells):
        """No entry exceeds the datasheet continuous current."""
        for cell in cells:
            grid = build_soa_grid(cell)
            assert grid.discharge_a.max() <= round_half_up(cell.max_discharge_c_cont * cell.capacity_ah)
            assert grid.charge_a.max() <= round_half_up(cell.max_charge_c_cont * cell.capacity_ah)

    def test_bounded_by_voltage_limit(self, cells):
        """No entry exceeds the current that would pull the OCV to a cut-off."""
        for cell in cells:
            grid = build_soa_grid(cell)
            for t_idx, temp_c in enumerate(TEMP_AXIS_C):
                for s_idx, soc_pct in enumerate(SOC_AXIS_PCT):
                    ocv = estimate_ocv_v(cell, soc_pct / 100)
                    r_ohm = estimate_resistance_ohm(cell, soc_pct / 100, temp_c)
                    discharge_limit = max(0.0, (ocv - cell.voltage_min) / r_ohm)
                    charge_limit = max(0.0, (cell.voltage_max - ocv) / r_ohm)
                    assert grid.discharge_a[t_idx, s_idx] <= round_half_up(discharge_limit)
                    assert grid.charge_a[t_idx, s_idx] <= round_half_up(charge_limit)

    def test_reference_values(self, lfp_cell):
        """At 25°C / 50% the rated current binds; at -20°C the cold derating does."""
        grid = build_soa_grid(lfp_cell)
        assert grid.current_at(25, 50) == 280
        assert grid.current_at(-20, 50) == 182
        assert grid.current_at(25, 50, mode="charge") == 140

    def test_cold_derates_discharge(self, cells):
        """Discharge at 25°C / 50% is strictly above -20°C / 50%."""
        for cell in cells:
            grid = build_soa_grid(cell)
            assert grid.current_at(25, 50) > grid.current_at(-20, 50)

    def test_charge_gated_at_charge_floor(self, lfp_cell, nmc_cell):
        """No charge current at or below temp_charge_min."""
        warm_floor = replace(nmc_cell, id="nmc-warm", temp_charge_min=10.0)
        for cell in (lfp_cell, nmc_cell, warm_floor):
            grid = build_soa_grid(cell)
            for t_idx, temp in enumerate(grid.temp_axis):
                if temp <= cell.temp_charge_min:
                    assert np.all(grid.charge_a[t_idx] == 0), f"charge allowed at {temp}°C"

    def test_high_soc_charge_reduced(self, lfp_cell):
        """Charge current is cut near full SOC."""
        grid = build_soa_grid(lfp_cell)
        assert grid.current_at(25, 95, mode="charge") < grid.current_at(25, 50, mode="charge")

    def test_hot_derates_discharge(self, lfp_cell):
        """Discharge is derated at 60°C."""
        grid = build_soa_grid(lfp_cell)
        assert grid.current_at(60, 50) < grid.current_at(25, 50)

    def test_read_only(self, lfp_cell):
        """Returned tables cannot be mutated in place."""
        grid = build_soa_grid(lfp_cell)
        with pytest.raises(ValueError):
            grid.discharge_a[0, 0] = 1

    def test_deterministic(self, nmc_cell):
        """Repeated calls give identical grids."""
        a = build_soa_grid(nmc_cell)
        b = build_soa_grid(nmc_cell)
        assert np.array_equal(a.discharge_a, b.discharge_a)
        assert np.array_equal(a.charge_a, b.charge_a)

    def test_to_dataframe(self, lfp_cell):
        """DataFrame view is indexed by temperature with SOC columns."""
        grid = build_soa_grid(lfp_cell)
        df = grid.to_dataframe("charge")
        assert isinstance(df, pd.DataFrame)
        assert df.shape == (17, 19)
        assert df.index.name == "temp_c"
        assert df.loc[25, 50] == 140

    def test_invalid_mode(self, lfp_cell):
        """Unknown table names are rejected."""
        grid = build_soa_grid(lfp_cell)
        with pytest.raises(ValueError):
            grid.to_dataframe("regen")

    def test_off_axis_lookup(self, lfp_cell):
        """Lookups must hit an exact axis point."""
        grid = build_soa_grid(lfp_cell)
        with pytest.raises(KeyError):
            grid.current_at(22, 50)

    def test_to_dict(self, lfp_cell):
        """Dictionary form holds plain nested lists."""
        data = build_soa_grid(lfp_cell).to_dict()
        assert len(data["discharge_a"]) == 17
        assert len(data["discharge_a"][0]) == 19
        assert isinstance(data["charge_a"][0][0], int)


class TestDeratingFactors:
    """Test thermal and charge-risk factors."""

    def test_thermal_limit_factor(self):
        """0.65 when cold, 1.0 in the comfort band, 0.65 at 60°C."""
        assert thermal_limit_factor(-20.0) == pytest.approx(0.65)
        assert thermal_limit_factor(25.0) == pytest.approx(1.0)
        assert thermal_limit_factor(60.0) == pytest.approx(0.65)
        for temp in np.linspace(-40, 100, 57):
            assert 0.2 <= thermal_limit_factor(temp) <= 1.0

    def test_charge_risk_factor(self, lfp_cell):
        """Zero at the charge floor, full 15°C above it."""
        assert charge_risk_factor(lfp_cell, 0.5, -5.0) == 0.0
        assert charge_risk_factor(lfp_cell, 0.5, 0.0) == 0.0
        assert charge_risk_factor(lfp_cell, 0.5, 15.0) == pytest.approx(1.0)
        assert charge_risk_factor(lfp_cell, 0.98, 25.0) == pytest.approx(0.25)
        assert charge_risk_factor(lfp_cell, 0.5, 55.0) == pytest.approx(0.6)


class TestSoaPolicy:
    """Test default SOC window lookup."""

    def test_lfp(self, lfp_cell):
        policy = get_default_soa_policy(lfp_cell)
        assert (policy.recommended_soc_min_pct, policy.recommended_soc_max_pct) == (10, 90)
        assert len(policy.notes) == 2
        assert isinstance(policy.notes, tuple)

    def test_lto(self, lto_cell):
        policy = get_default_soa_policy(lto_cell)
        assert (policy.recommended_soc_min_pct, policy.recommended_soc_max_pct) == (5, 95)

    def test_layered_oxide_default(self, nmc_cell):
        """NMC, NCA and unknown chemistries share the conservative 15-85% window."""
        for chemistry in ("NMC", "NCA", "SIB"):
            cell = replace(nmc_cell, chemistry=chemistry)
            policy = get_default_soa_policy(cell)
            assert (policy.recommended_soc_min_pct, policy.recommended_soc_max_pct) == (15, 85)
            assert policy.notes

    def test_window_ordering(self, lfp_cell, nmc_cell, lto_cell):
        for cell in (lfp_cell, nmc_cell, lto_cell):
            policy = get_default_soa_policy(cell)
            assert 0 <= policy.recommended_soc_min_pct < policy.recommended_soc_max_pct <= 100
