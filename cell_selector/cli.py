"""Command-line interface for the cell selector."""

from __future__ import annotations

import json
from pathlib import Path

import click

from cell_selector.chemistry import Chemistry
from cell_selector.core.cell import ScenarioSpec
from cell_selector.core.matching import (
    DEFAULT_TOP_N,
    match_scenario_to_cells,
    matches_to_dataframe,
)
from cell_selector.core.soa import build_soa_grid, get_default_soa_policy
from cell_selector.utils.config_loader import load_catalog, load_scenario, save_scenario


def _load_catalog_or_fail(catalog: Path):
    try:
        return load_catalog(catalog)
    except ValueError as e:
        raise click.ClickException(f"Invalid catalog {catalog}: {e}")


@click.group()
@click.version_option(version="1.0.0", prog_name="cell-selector")
def main():
    """
    Battery Cell Selector

    Rank battery cells against an application workload and derive
    safe-operating-area current limits for a chosen cell.
    """
    pass


@main.command()
@click.option(
    "--catalog",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to YAML cell catalog",
)
@click.option(
    "--scenario",
    "-s",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML scenario (default: 400 V / 60 kWh EV pack)",
)
@click.option(
    "--top",
    type=click.IntRange(min=1, max=DEFAULT_TOP_N),
    default=DEFAULT_TOP_N,
    help=f"Number of ranked cells to show (at most {DEFAULT_TOP_N})",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Output JSON instead of a table",
)
def match(catalog: Path, scenario: Path | None, top: int, as_json: bool):
    """
    Rank catalog cells against a workload scenario.

    Examples:

    \b
    # Rank against the default EV scenario
    cell-selector match --catalog config/cells.yaml

    \b
    # Custom scenario, JSON output
    cell-selector match -c config/cells.yaml -s config/scenario.yaml --json
    """
    cells = _load_catalog_or_fail(catalog)
    if scenario:
        try:
            spec = load_scenario(scenario)
        except ValueError as e:
            raise click.ClickException(f"Invalid scenario {scenario}: {e}")
    else:
        spec = ScenarioSpec.default()

    results = match_scenario_to_cells(cells, spec, top_n=top)

    if as_json:
        click.echo(json.dumps({
            "scenario": spec.to_dict(),
            "results": [r.to_dict() for r in results],
        }, indent=2))
        return

    click.echo("=" * 60)
    click.echo("Scenario to Cell Matching")
    click.echo("=" * 60)
    click.echo(f"  Application: {spec.application.value}")
    click.echo(f"  Pack: {spec.nominal_voltage_v:g} V / {spec.energy_wh / 1000:g} kWh")
    click.echo(
        f"  Power: {spec.peak_power_w / 1000:g} kW peak / "
        f"{spec.continuous_power_w / 1000:g} kW continuous"
    )
    click.echo(f"  Ambient: {spec.min_ambient_c:g} to {spec.max_ambient_c:g} °C")
    click.echo(f"  Cooling: {spec.cooling.value}  Priority: {spec.priority.value}")
    click.echo("")

    if not results:
        click.echo("No applicable cells in catalog.")
        return

    df = matches_to_dataframe(results)
    click.echo(df[[
        "rank", "cell_id", "chemistry", "score", "bottleneck",
        "series", "parallel", "cont_c_rate", "life_cycles",
    ]].to_string(index=False, float_format=lambda x: f"{x:.2f}"))

    for r in results:
        if r.pack.warnings:
            click.echo(f"\n  {r.cell.id}: " + ", ".join(w.value for w in r.pack.warnings))


@main.command()
@click.option(
    "--catalog",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to YAML cell catalog",
)
@click.option(
    "--cell-id",
    required=True,
    help="Catalog id of the cell",
)
@click.option(
    "--mode",
    type=click.Choice(["discharge", "charge"]),
    default="discharge",
    help="Which current table to print",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Output JSON instead of a table",
)
def soa(catalog: Path, cell_id: str, mode: str, as_json: bool):
    """Print the safe-operating-area grid and default SOC policy of a cell."""
    cells = {cell.id: cell for cell in _load_catalog_or_fail(catalog)}
    if cell_id not in cells:
        raise click.BadParameter(
            f"Unknown cell id '{cell_id}'. Available: {list(cells)}",
            param_hint="--cell-id",
        )
    cell = cells[cell_id]
    grid = build_soa_grid(cell)
    policy = get_default_soa_policy(cell)

    if as_json:
        click.echo(json.dumps({
            "cell": cell.to_dict(),
            "grid": grid.to_dict(),
            "policy": policy.to_dict(),
        }, indent=2))
        return

    click.echo(f"\nSOA {mode} current limits (A) for {cell.id} ({cell.chemistry})")
    click.echo("Rows: temperature (°C), columns: SOC (%)")
    click.echo("-" * 60)
    click.echo(grid.to_dataframe(mode).to_string())
    click.echo("")
    click.echo(
        f"Recommended SOC window (advisory): "
        f"{policy.recommended_soc_min_pct:g}-{policy.recommended_soc_max_pct:g}%"
    )
    for note in policy.notes:
        click.echo(f"  - {note}")


@main.command()
def list_chemistries():
    """List available chemistry families."""
    click.echo("\nAvailable Chemistry Families:")
    click.echo("-" * 40)

    for name in Chemistry.list_available():
        chem = Chemistry.from_name(name)
        click.echo(f"\n  {chem.name}")
        click.echo(f"    {chem.description}")
        click.echo(
            f"    Default SOC window: "
            f"{chem.recommended_soc_min_pct:g}-{chem.recommended_soc_max_pct:g}%"
        )


EXAMPLE_CATALOG = """# Cell catalog
# ============
# Temperatures in °C, rates in C, resistance in mOhm at 25°C / 50% SOC.

cells:
  - id: "lfp-280"
    model: "LFP-280Ah"
    chemistry: "LFP"
    form_factor: "prismatic"
    capacity_ah: 280
    nominal_voltage_v: 3.2
    voltage_min: 2.5
    voltage_max: 3.65
    max_discharge_c_cont: 1.0
    max_discharge_c_pulse: 2.0
    max_charge_c_cont: 0.5
    temp_charge_min: 0
    temp_charge_max: 55
    temp_discharge_min: -20
    temp_discharge_max: 60
    resistance_mohm_25c: 0.25
    cycle_life_80dod_25c: 6000
    cost_tier: 1

  - id: "nmc-21700"
    model: "NMC-21700-5Ah"
    chemistry: "NMC"
    form_factor: "cylindrical"
    capacity_ah: 5.0
    nominal_voltage_v: 3.6
    voltage_min: 2.5
    voltage_max: 4.2
    max_discharge_c_cont: 2.0
    max_discharge_c_pulse: 6.0
    max_charge_c_cont: 1.0
    temp_charge_min: 0
    temp_charge_max: 45
    temp_discharge_min: -20
    temp_discharge_max: 60
    resistance_mohm_25c: 18
    cycle_life_80dod_25c: 1200
    cost_tier: 2

  - id: "lto-30"
    model: "LTO-30Ah"
    chemistry: "LTO"
    form_factor: "prismatic"
    capacity_ah: 30
    nominal_voltage_v: 2.3
    voltage_min: 1.5
    voltage_max: 2.8
    max_discharge_c_cont: 6.0
    max_discharge_c_pulse: 10.0
    max_charge_c_cont: 6.0
    temp_charge_min: -30
    temp_charge_max: 55
    temp_discharge_min: -30
    temp_discharge_max: 60
    resistance_mohm_25c: 1.2
    cycle_life_80dod_25c: 20000
    cost_tier: 5
"""


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default="./config",
    help="Directory for the example catalog and scenario",
)
def init_config(output: Path):
    """Generate example catalog and scenario files."""
    output.mkdir(parents=True, exist_ok=True)
    catalog_path = output / "cells.yaml"
    scenario_path = output / "scenario.yaml"

    with open(catalog_path, "w") as f:
        f.write(EXAMPLE_CATALOG)
    save_scenario(ScenarioSpec.default(), scenario_path)

    click.echo(f"Example catalog written to: {catalog_path}")
    click.echo(f"Example scenario written to: {scenario_path}")
    click.echo("\nEdit these files and run:")
    click.echo(f"  cell-selector match --catalog {catalog_path} --scenario {scenario_path}")


if __name__ == "__main__":
    main()
