import copy

import pytest

from brewcalc.core.config import refresh_config_cache
from brewcalc.services.equipment import Equipment
from brewcalc.services.process import Process
from brewcalc.services.recipe import Recipe

EQUIPMENT = {
    "name": "Stovetop BIAB",
    "water_profile": "papaioea",
    "salts_available": ["gypsum", "calcium_chloride", "baking_soda"],
    "acids_available": ["lactic_acid"],
    "mash_tun_volume_l": 11.0,
    "max_kettle_volume_l": 9.5,
    "kettle_losses_l": 0.03,
    "boil_evaporation_per_hour_l": 2.27,
    "grain_absorption_per_kg_l": 0.66,
    "hops_absorption_per_kg_l": 5.0,
    "mash_efficiency": 0.83,
    "infusion_temp_c": 98.5,
    "room_temp_c": 20.0,
    "fermenters_l": [6.0, 23.0],
    "packaging": {"kind": "keg", "size_l": 9.5},
}

MARZEN = {
    "name": "Marzen",
    "style": "marzen",
    "malts": [
        {"malt": "weyermann_munich_2", "proportion": 60},
        {"malt": "gladfield_german_pilsner", "proportion": 27},
        {"malt": "weyermann_melanoidin", "proportion": 4},
    ],
    "mash_rests": [
        {"target_temp_c": 61, "duration_min": 30},
        {"target_temp_c": 69, "duration_min": 30},
    ],
    "mash_thickness_l_per_kg": 3.0,
    "original_gravity": 1.056,
    "ibu": 21,
    "hops": [{"hops": "hallertau_mittelfruh", "proportion": 11, "timing_min": 60}],
    "boil_length_min": 80,
    "yeast": "wlp835",
    "ferment_temp_c": 11,
    "chloride_sulfate_ratio_range": [0.5, 1.5],
    "fining_desired": True,
}


@pytest.fixture(autouse=True)
def fresh_config():
    refresh_config_cache()
    yield
    refresh_config_cache()


@pytest.fixture
def equipment_data():
    return copy.deepcopy(EQUIPMENT)


@pytest.fixture
def recipe_data():
    return copy.deepcopy(MARZEN)


@pytest.fixture
def equipment(equipment_data):
    return Equipment.from_dict(equipment_data)


@pytest.fixture
def recipe(recipe_data):
    return Recipe.from_dict(recipe_data)


@pytest.fixture
def process(equipment, recipe):
    return Process(equipment, recipe, 4.25)


@pytest.fixture
def make_process(equipment_data, recipe_data):
    """Builds a Process after applying overrides to the equipment/recipe dicts."""
    def _make(batch_size=4.25, equipment=None, recipe=None):
        e = dict(equipment_data, **(equipment or {}))
        r = dict(recipe_data, **(recipe or {}))
        return Process(Equipment.from_dict(e), Recipe.from_dict(r), batch_size)
    return _make
