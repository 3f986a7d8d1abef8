"""Tests for YAML catalog and scenario loading."""

import pytest
import yaml

from cell_selector.core.cell import Cooling, Priority, ScenarioSpec
from cell_selector.utils.config_loader import (
    load_catalog,
    load_scenario,
    parse_catalog,
    parse_scenario,
    save_scenario,
)


def _cell_entry(**overrides):
    entry = {
        "id": "lfp-280",
        "model": "LFP-280Ah",
        "chemistry": "LFP",
        "capacity_ah": 280,
        "nominal_voltage_v": 3.2,
        "voltage_min": 2.8,
        "voltage_max": 3.65,
        "max_discharge_c_cont": 1.0,
        "max_discharge_c_pulse": 2.0,
        "max_charge_c_cont": 0.5,
        "temp_charge_min": 0,
        "temp_charge_max": 55,
        "temp_discharge_min": -20,
        "temp_discharge_max": 60,
        "resistance_mohm_25c": 0.25,
        "cycle_life_80dod_25c": 6000,
        "cost_tier": 1,
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "cells.yaml"
    path.write_text(yaml.dump({"cells": [
        _cell_entry(),
        _cell_entry(id="nmc-21700", chemistry="NCM811", form_factor="Cylindrical",
                    capacity_ah=5.0, nominal_voltage_v=3.6, voltage_min=2.5,
                    voltage_max=4.2, temp_charge_max=45, resistance_mohm_25c=18),
    ]}))
    return path


class TestLoadCatalog:
    """Test suite for catalog loading."""

    def test_load(self, catalog_file, lfp_cell):
        cells = load_catalog(catalog_file)
        assert [c.id for c in cells] == ["lfp-280", "nmc-21700"]
        assert cells[0] == lfp_cell

    def test_alias_and_case_normalized(self, catalog_file):
        nmc = load_catalog(catalog_file)[1]
        assert nmc.chemistry == "NMC"
        assert nmc.form_factor.value == "cylindrical"

    def test_bare_list(self):
        assert len(parse_catalog([_cell_entry()])) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.yaml")

    def test_missing_cells_list(self):
        with pytest.raises(ValueError, match="cells"):
            parse_catalog({"catalog": []})

    def test_entry_not_a_mapping(self):
        with pytest.raises(ValueError, match="valid dictionary"):
            parse_catalog({"cells": ["foo"]})

    def test_duplicate_ids(self):
        with pytest.raises(ValueError, match="Duplicate cell id"):
            parse_catalog({"cells": [_cell_entry(), _cell_entry()]})

    def test_inconsistent_voltage_window(self):
        with pytest.raises(ValueError):
            parse_catalog({"cells": [_cell_entry(voltage_min=3.7)]})

    def test_negative_capacity(self):
        with pytest.raises(ValueError):
            parse_catalog({"cells": [_cell_entry(capacity_ah=-5)]})

    def test_invalid_form_factor(self):
        with pytest.raises(ValueError, match="form factor"):
            parse_catalog({"cells": [_cell_entry(form_factor="coin")]})

    def test_unregistered_chemistry_warns(self):
        with pytest.warns(UserWarning, match="not registered"):
            cells = parse_catalog({"cells": [_cell_entry(chemistry="sib")]})
        assert cells[0].chemistry == "SIB"

    def test_wide_charge_window_warns(self):
        with pytest.warns(UserWarning, match="charge temperature window"):
            parse_catalog({"cells": [_cell_entry(temp_charge_min=-30)]})


class TestLoadScenario:
    """Test suite for scenario loading."""

    def test_nested(self):
        scenario = parse_scenario({"scenario": {
            "nominal_voltage_v": 48,
            "energy_wh": 5000,
            "peak_power_w": 6000,
            "continuous_power_w": 3000,
            "min_ambient_c": 0,
            "max_ambient_c": 35,
            "expected_cycles": 4000,
            "cooling": "Poor",
            "priority": "COST",
            "application": "storage",
        }})
        assert scenario.cooling is Cooling.POOR
        assert scenario.priority is Priority.COST
        assert scenario.application.value == "Storage"

    def test_flat_defaults(self):
        scenario = parse_scenario({
            "nominal_voltage_v": 48,
            "energy_wh": 5000,
            "peak_power_w": 6000,
            "continuous_power_w": 3000,
            "min_ambient_c": 0,
            "max_ambient_c": 35,
            "expected_cycles": 4000,
        })
        assert scenario.cooling is Cooling.NORMAL
        assert scenario.priority is Priority.BALANCED

    def test_scenario_not_a_mapping(self):
        with pytest.raises(ValueError, match="valid dictionary"):
            parse_scenario({"scenario": "foo"})

    def test_empty_file(self, tmp_path):
        path = tmp_path / "scenario.yaml"
        path.write_text("")
        with pytest.raises(ValueError, match="mapping"):
            load_scenario(path)

    def test_invalid_cooling(self):
        data = ScenarioSpec.default().to_dict()
        data["cooling"] = "liquid"
        with pytest.raises(ValueError, match="cooling"):
            parse_scenario(data)

    def test_inverted_ambient(self):
        data = ScenarioSpec.default().to_dict()
        data["min_ambient_c"] = 45
        with pytest.raises(ValueError, match="min_ambient_c"):
            parse_scenario(data)

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "scenario.yaml"
        save_scenario(ScenarioSpec.default(), path)
        assert load_scenario(path) == ScenarioSpec.default()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scenario(tmp_path / "missing.yaml")
