# © 2026 Aparajita Parihar. All rights reserved.
# Portfolio Decarbonisation Engine — Emission Primitives & Site Baseline Tests

import logging
import sys
import os
import pytest

# Path setup: ensure the 'core' folder is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.emissions import (
    calculate_portfolio_emissions,
    calculate_site_emissions,
    commuting_emissions,
    electricity_emissions,
    embodied_carbon,
    fuel_emissions,
    refrigerant_emissions,
)
from core.models import Site, default_assumptions

ASSUMPTIONS = default_assumptions()


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────
def site(**overrides):
    data = {"id": "s1", "name": "Test Site", "area_sq_ft": 10_000, "state": "Delhi"}
    data.update(overrides)
    return Site(**data)


# ─────────────────────────────────────────────────────────────────────────────
# 1. Primitives
# ─────────────────────────────────────────────────────────────────────────────
def test_electricity_emissions():
    assert electricity_emissions(10_000, 0.82) == pytest.approx(8200)


def test_fuel_emissions():
    assert fuel_emissions(1000, 0.832, 2.68) == pytest.approx(2229.76)


def test_refrigerant_emissions():
    """10 kg × 10 % leak × GWP 2088 = 2088 kgCO2e."""
    assert refrigerant_emissions(10, 2088, 10) == pytest.approx(2088)


def test_refrigerant_default_leakage_is_ten_percent():
    assert refrigerant_emissions(10, 2088) == pytest.approx(2088)


def test_embodied_carbon_allows_sequestration():
    """Timber's negative factor can pull the total below zero."""
    assert embodied_carbon([(1000, 0.15), (1000, -0.5)]) == pytest.approx(-350)


def test_embodied_carbon_accepts_mappings():
    materials = [{"mass": 100, "carbon_factor": 2.5}, {"mass": 10, "carbon_factor": 8.0}]
    assert embodied_carbon(materials) == pytest.approx(330)


def test_commuting_emissions_in_tonnes():
    factors = {"car": 0.171, "metro": 0.041}
    trips = [("car", 10_000), ("metro", 10_000)]
    assert commuting_emissions(trips, factors) == pytest.approx(2.12)


def test_commuting_unknown_mode_contributes_nothing():
    assert commuting_emissions([("teleport", 5_000)], {"car": 0.171}) == 0.0


def test_primitives_treat_none_as_zero():
    assert electricity_emissions(None, 0.82) == 0.0
    assert fuel_emissions(None, 0.832, 2.68) == 0.0


# ─────────────────────────────────────────────────────────────────────────────
# 2. Site baseline
# ─────────────────────────────────────────────────────────────────────────────
def test_site_scope2_uses_state_grid_factor():
    emissions, breakdown = calculate_site_emissions(site(measured_kwh=100_000), ASSUMPTIONS)
    assert emissions.scope2_location_based == pytest.approx(82.0)
    assert emissions.scope2_market_based == emissions.scope2_location_based
    assert breakdown.electricity == pytest.approx(82.0)


def test_site_unknown_state_falls_back_to_default_factor():
    emissions, _ = calculate_site_emissions(site(state="Atlantis", measured_kwh=100_000), ASSUMPTIONS)
    assert emissions.scope2_location_based == pytest.approx(100_000 * 0.82 / 1000)


def test_measured_kwh_takes_precedence_over_benchmark():
    emissions, _ = calculate_site_emissions(
        site(state="Karnataka", measured_kwh=50_000, benchmark_eui=15), ASSUMPTIONS,
    )
    assert emissions.eui == pytest.approx(5.0)
    assert emissions.scope2_location_based == pytest.approx(50_000 * 0.75 / 1000)


def test_benchmark_eui_used_when_measured_missing():
    emissions, _ = calculate_site_emissions(site(benchmark_eui=12), ASSUMPTIONS)
    assert emissions.eui == pytest.approx(12.0)
    assert emissions.scope2_location_based == pytest.approx(120_000 * 0.82 / 1000)


def test_no_energy_data_means_zero_energy():
    emissions, _ = calculate_site_emissions(site(), ASSUMPTIONS)
    assert emissions.scope2_location_based == 0.0
    assert emissions.eui == 0.0
    assert emissions.renewable_percent == 0.0


def test_scope1_sums_diesel_lpg_and_refrigerant():
    s = site(diesel_liters_per_year=1000, lpg_kg_per_year=500, refrigerant_kg=10, refrigerant_gwp=2088)
    emissions, breakdown = calculate_site_emissions(s, ASSUMPTIONS)
    assert breakdown.diesel == pytest.approx(2.22976)
    assert breakdown.lpg == pytest.approx(1.5)
    assert breakdown.refrigerants == pytest.approx(2.088)
    assert emissions.scope1 == pytest.approx(2.22976 + 1.5 + 2.088)


def test_refrigerant_gwp_from_type_table():
    emissions, _ = calculate_site_emissions(site(refrigerant_kg=20, refrigerant_type="R-32"), ASSUMPTIONS)
    assert emissions.scope1 == pytest.approx(20 * 0.10 * 675 / 1000)


def test_refrigerant_without_gwp_or_known_type_is_excluded():
    emissions, _ = calculate_site_emissions(site(refrigerant_kg=20, refrigerant_type="R-999"), ASSUMPTIONS)
    assert emissions.scope1 == 0.0


def test_refrigerant_none_leakage_uses_default_rate():
    assert refrigerant_emissions(10, 2088, None) == pytest.approx(2088)


def test_site_with_null_leakage_keeps_fugitive_emissions():
    """A nullable leakage column must not zero the site's fugitive Scope 1."""
    s = Site.from_dict({
        "id": "s1", "name": "Test Site", "area_sq_ft": 10_000, "state": "Delhi",
        "refrigerant_kg": 10, "refrigerant_gwp": 2088, "refrigerant_leakage_percent": None,
    })
    assert s.refrigerant_leakage_percent == 10
    emissions, breakdown = calculate_site_emissions(s, ASSUMPTIONS)
    assert breakdown.refrigerants == pytest.approx(2.088)
    assert emissions.scope1 == pytest.approx(2.088)


def test_negative_inputs_are_used_but_logged(caplog):
    s = site(measured_kwh=-5_000, diesel_liters_per_year=-100)
    with caplog.at_level(logging.WARNING, logger="core.emissions"):
        emissions, _ = calculate_site_emissions(s, ASSUMPTIONS)
    assert emissions.scope2_location_based == pytest.approx(-5_000 * 0.82 / 1000)
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "negative measured_kwh" in messages
    assert "negative diesel_liters_per_year" in messages


def test_clean_site_logs_no_warnings(caplog):
    with caplog.at_level(logging.WARNING, logger="core.emissions"):
        calculate_site_emissions(site(measured_kwh=80_000, diesel_liters_per_year=500), ASSUMPTIONS)
    assert caplog.records == []


def test_scope3_is_zero_at_site_level():
    emissions, breakdown = calculate_site_emissions(site(measured_kwh=80_000), ASSUMPTIONS)
    assert emissions.scope3 == 0.0
    assert breakdown.commuting == 0.0
    assert breakdown.embodied_carbon == 0.0


def test_zero_area_does_not_divide_by_zero():
    emissions, _ = calculate_site_emissions(site(area_sq_ft=0, measured_kwh=10_000), ASSUMPTIONS)
    assert emissions.eui == 0.0


def test_renewable_percent_is_not_clamped():
    """100 kW × 1200 kWh/kW = 120,000 kWh against 60,000 kWh demand → 200 %."""
    emissions, _ = calculate_site_emissions(site(measured_kwh=60_000, solar_installed_kw=100), ASSUMPTIONS)
    assert emissions.renewable_percent == pytest.approx(200.0)


@pytest.mark.parametrize("overrides", [
    {"measured_kwh": 250_000},
    {"benchmark_eui": 14, "diesel_liters_per_year": 3000},
    {"measured_kwh": 90_000, "refrigerant_kg": 40, "refrigerant_gwp": 1430, "lpg_kg_per_year": 200},
    {},
])
def test_total_equals_sum_of_scopes(overrides):
    emissions, _ = calculate_site_emissions(site(**overrides), ASSUMPTIONS)
    assert emissions.total == emissions.scope1 + emissions.scope2_location_based + emissions.scope3


def test_site_calculation_does_not_mutate_site():
    s = site(measured_kwh=100_000, solar_installed_kw=10)
    before = s
    calculate_site_emissions(s, ASSUMPTIONS)
    assert s == before
    assert s.measured_kwh == 100_000


# ─────────────────────────────────────────────────────────────────────────────
# 3. Portfolio roll-up
# ─────────────────────────────────────────────────────────────────────────────
def test_portfolio_eui_is_ratio_of_sums_not_mean():
    """
    Small site: 1,000 sqft, 20,000 kWh  → EUI 20
    Large site: 9,000 sqft, 90,000 kWh → EUI 10
    Mean of EUIs = 15; ratio of sums = 110,000 / 10,000 = 11.
    """
    sites = [
        site(id="small", area_sq_ft=1_000, measured_kwh=20_000),
        site(id="large", area_sq_ft=9_000, measured_kwh=90_000),
    ]
    portfolio, per_site = calculate_portfolio_emissions(sites, ASSUMPTIONS)
    mean_eui = (per_site["small"].eui + per_site["large"].eui) / 2
    assert mean_eui == pytest.approx(15.0)
    assert portfolio.eui == pytest.approx(11.0)


def test_portfolio_renewable_percent_is_energy_weighted():
    """
    Site A: 12,000 kWh, 10 kW solar → 100 %
    Site B: 108,000 kWh, no solar   → 0 %
    Mean = 50 %; energy-weighted = 12,000 / 120,000 = 10 %.
    """
    sites = [
        site(id="a", measured_kwh=12_000, solar_installed_kw=10),
        site(id="b", measured_kwh=108_000),
    ]
    portfolio, per_site = calculate_portfolio_emissions(sites, ASSUMPTIONS)
    assert per_site["a"].renewable_percent == pytest.approx(100.0)
    assert portfolio.renewable_percent == pytest.approx(10.0)


def test_portfolio_counts_benchmark_sites_in_eui():
    sites = [
        site(id="metered", area_sq_ft=5_000, measured_kwh=50_000),
        site(id="benchmarked", area_sq_ft=5_000, benchmark_eui=20),
    ]
    portfolio, _ = calculate_portfolio_emissions(sites, ASSUMPTIONS)
    assert portfolio.eui == pytest.approx(15.0)


def test_portfolio_scopes_are_sums_of_sites():
    sites = [
        site(id="a", measured_kwh=100_000, diesel_liters_per_year=500),
        site(id="b", state="Kerala", measured_kwh=40_000, refrigerant_kg=10, refrigerant_gwp=2088),
    ]
    portfolio, per_site = calculate_portfolio_emissions(sites, ASSUMPTIONS)
    assert portfolio.scope1 == pytest.approx(sum(e.scope1 for e in per_site.values()))
    assert portfolio.scope2_location_based == pytest.approx(
        sum(e.scope2_location_based for e in per_site.values())
    )
    assert portfolio.total == pytest.approx(sum(e.total for e in per_site.values()))


def test_empty_portfolio_is_all_zero():
    portfolio, per_site = calculate_portfolio_emissions([], ASSUMPTIONS)
    assert per_site == {}
    assert portfolio.total == 0.0
    assert portfolio.eui == 0.0
    assert portfolio.renewable_percent == 0.0
