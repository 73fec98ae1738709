import pytest

from plantsim.runtime.production import ProductionPhase
from plantsim.world.building_types import AGRICULTURAL_COMPLEX, BuildingKind
from plantsim.world.buildings import Building, BuildingLedger, ensure_building_ledger


def test_agricultural_complex_defaults() -> None:
    building = Building(BuildingKind.AGRICULTURAL_COMPLEX)

    assert building.max_material_storage == 2000
    assert building.max_product_storage == 1000
    assert building.max_workers == 15
    assert building.workers_count == 0
    assert len(building.workshops) == 6
    assert building.phase is ProductionPhase.IDLE


def test_starting_stock_is_trimmed_to_remaining_space() -> None:
    building = Building(AGRICULTURAL_COMPLEX)

    materials = building.get_material_storage()

    assert materials["AnimalFeed"] == 200
    assert building.total_material_storage() == building.max_material_storage


def test_fishery_starting_stock_fits_untouched() -> None:
    building = Building("fishery_complex")

    assert building.get_material_storage() == {"Fuel": 500, "FishingGear": 300, "Ice": 400, "Salt": 200}
    assert building.total_material_storage() == 1400


@pytest.mark.parametrize("requested, expected", [(8, 8), (20, 15), (0, 0), (-3, 0)])
def test_set_workers_count_clamps(requested: int, expected: int) -> None:
    building = Building(BuildingKind.AGRICULTURAL_COMPLEX)
    building.set_workers_count(requested)

    assert building.workers_count == expected


def test_add_material_respects_capacity() -> None:
    building = Building(BuildingKind.FISHERY_COMPLEX)

    assert building.add_material("Fuel", 100)
    assert building.get_material_storage()["Fuel"] == 600
    assert building.total_material_storage() == 1500

    assert not building.add_material("FishingGear", 1)
    assert building.total_material_storage() == 1500


def test_add_material_exceeding_capacity_changes_nothing() -> None:
    building = Building(BuildingKind.AGRICULTURAL_COMPLEX)
    before = building.materials.signature()

    assert not building.add_material("Seeds", 1500)
    assert building.get_material_storage()["Seeds"] == 600
    assert building.materials.signature() == before


def test_add_material_rejects_unknown_and_product_keys() -> None:
    building = Building(BuildingKind.FISHERY_COMPLEX)

    assert not building.add_material("Gold", 10)
    assert not building.add_material("FreshFish", 10)
    assert not building.add_material("Fuel", 0)


def test_consume_product_contract() -> None:
    building = Building(BuildingKind.AGRICULTURAL_COMPLEX)
    assert not building.consume_product("Wheat", 1)

    building.set_workers_count(15)
    building.process_workshops()
    before = building.products.signature()

    assert not building.consume_product("Wheat", 0)
    assert not building.consume_product("Wheat", -1)
    assert not building.consume_product("Wheat", 16)
    assert not building.consume_product("Seeds", 1)
    assert not building.consume_product("ProcessedFood", 1)
    assert building.products.signature() == before

    assert building.consume_product("Wheat", 1)
    assert building.get_production_output()["Wheat"] == 14
    assert building.consume_product("Wheat", 14)
    assert "Wheat" not in building.get_production_output()


def test_full_production_cycle_and_placement_hook_run_a_tick() -> None:
    building = Building(BuildingKind.AGRICULTURAL_COMPLEX)
    building.set_workers_count(15)

    building.full_production_cycle()
    after_cycle = building.total_product_storage()
    building.on_building_placed()

    assert after_cycle == 56
    assert building.total_product_storage() > after_cycle
    assert building.last_report is not None


def test_production_info_reports_status() -> None:
    building = Building(BuildingKind.AGRICULTURAL_COMPLEX)
    building.set_workers_count(10)

    info = building.production_info(month=6)

    assert info["display_name"] == "Agricultural Complex"
    assert info["workers_count"] == 10
    assert info["max_workers"] == 15
    assert info["production_efficiency"] == pytest.approx(0.3 + (10 / 15) * 0.7)
    assert info["phase"] == "PRODUCING"
    assert info["total_material_storage"] == 2000
    assert info["max_material_storage"] == 2000
    assert info["total_product_storage"] == 0
    assert info["max_product_storage"] == 1000
    assert info["active_workshops"] == 6
    assert info["seasonal_bonus"] == 1.2
    assert building.production_info(month=12)["seasonal_bonus"] == 0.8


def test_cosmetic_bonus_is_not_applied_to_output() -> None:
    summer = Building(BuildingKind.AGRICULTURAL_COMPLEX)
    summer.set_workers_count(15)
    summer.production_info(month=7)
    summer.process_workshops()

    assert summer.get_production_output()["Wheat"] == 15


def test_fishery_info_uses_fleet_efficiency() -> None:
    building = Building(BuildingKind.FISHERY_COMPLEX)
    building.set_workers_count(8)

    info = building.production_info(month=1)

    assert info["display_name"] == "Fishery Complex"
    assert info["max_workers"] == 12
    assert info["active_workshops"] == 5
    assert info["fleet_efficiency"] == 0.7
    assert "seasonal_bonus" not in info


def test_production_info_defaults_to_current_month() -> None:
    info = Building(BuildingKind.AGRICULTURAL_COMPLEX).production_info()

    assert info["seasonal_bonus"] in (0.8, 1.2)


def test_building_ledger_signature_tracks_state() -> None:
    world = type("World", (), {})()
    ledger = ensure_building_ledger(world)
    assert isinstance(ledger, BuildingLedger)
    assert ensure_building_ledger(world) is ledger

    ledger.add(Building(BuildingKind.AGRICULTURAL_COMPLEX, building_id="agri-1"))
    ledger.add(Building(BuildingKind.FISHERY_COMPLEX, building_id="fish-1"))
    before = ledger.signature()

    assert [b.building_id for b in ledger.list_by_kind(BuildingKind.FISHERY_COMPLEX)] == ["fish-1"]
    assert ledger.signature() == before

    ledger.get("fish-1").set_workers_count(12)
    ledger.get("fish-1").process_workshops()

    assert ledger.signature() != before


def test_fractional_amounts_are_rejected_at_the_facade() -> None:
    building = Building(BuildingKind.FISHERY_COMPLEX)
    building.set_workers_count(12)
    building.process_workshops()
    materials_before = building.materials.signature()

    assert not building.add_material("Fuel", 0.5)
    assert not building.consume_product("FreshFish", 0.5)
    assert building.materials.signature() == materials_before
    assert building.get_production_output()["FreshFish"] == 20


def test_building_ledger_rejects_duplicate_ids() -> None:
    ledger = BuildingLedger()
    first = Building(BuildingKind.AGRICULTURAL_COMPLEX)
    ledger.add(first)
    ledger.add(first)

    with pytest.raises(ValueError):
        ledger.add(Building(BuildingKind.AGRICULTURAL_COMPLEX))

    assert ledger.get("agricultural_complex") is first
    assert len(ledger.buildings) == 1
