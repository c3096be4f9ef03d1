import os
import json
import logging
from logging.handlers import RotatingFileHandler

# --- CONFIGURATION & LOGGING ---
DATA_DIR = os.getenv("BREWCALC_DATA_DIR", "data")
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

logger = logging.getLogger("BrewCalc")


def setup_logging(level=None, log_file=None):
    """
    Configures root logging for applications embedding the engine.
    A rotating file handler is attached when a log file is given
    (or BREWCALC_LOG_FILE is set).
    """
    level = level or os.getenv("BREWCALC_LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("BREWCALC_LOG_FILE")

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)
    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    return logger


# Tunable constants. Every key can be overridden with BREWCALC_<KEY>.
DEFAULTS = {
    "fermenter_headspace_fraction": 0.20,
    "mash_ph_min": 5.2,
    "mash_ph_max": 5.6,
    "boiling_point_c": 100.0,
    "min_base_malt_fraction": 0.7,
    "room_temp_min_c": 10.0,
    "room_temp_max_c": 30.0,
    "ferment_temp_min_c": 6.0,
    "ferment_temp_max_c": 35.0,
    "min_strike_temp_c": 20.0,
    "min_infusion_temp_c": 75.0,
    "grain_displacement_l_per_kg": 0.67,
    # FAN (mg/L) gained per g/L of yeast nutrient
    "nutrient_fan_ppm_per_g_per_l": 100.0,
    # mg/L of zinc recommended when no nutrient is dosed
    "zinc_target_ppm": 0.2,
}

# Config Cache
_config_cache = {}


def refresh_config_cache():
    global _config_cache
    cache = dict(DEFAULTS)
    for key, default in DEFAULTS.items():
        raw = os.getenv(f"BREWCALC_{key.upper()}")
        if raw is None:
            continue
        try:
            cache[key] = type(default)(raw)
        except ValueError:
            logger.warning(f"Ignoring invalid BREWCALC_{key.upper()}={raw!r}")
    _config_cache = cache


def get_config(key):
    if not _config_cache:
        refresh_config_cache()
    return _config_cache.get(key)


def get_all_config():
    if not _config_cache:
        refresh_config_cache()
    return dict(_config_cache)


def set_config(key, value):
    if key not in DEFAULTS:
        raise KeyError(f"Unknown config key: {key}")
    if not _config_cache:
        refresh_config_cache()
    _config_cache[key] = type(DEFAULTS[key])(value)


# --- INPUT FILES ---

def _resolve(name_or_path):
    if os.path.exists(name_or_path):
        return name_or_path
    filename = name_or_path if name_or_path.endswith(".json") else f"{name_or_path}.json"
    return os.path.join(DATA_DIR, filename)


def _read_json(name_or_path):
    from brewcalc.core.decorators import BrewCalcError

    path = _resolve(name_or_path)
    if not os.path.exists(path):
        raise BrewCalcError(f"Input file not found: {path}", code=404)
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise BrewCalcError(f"Malformed JSON in {path}: {e}", code=400) from e


def load_equipment(name_or_path="equipment"):
    """Loads an Equipment description from DATA_DIR (or an explicit path)."""
    from brewcalc.services.equipment import Equipment

    data = _read_json(name_or_path)
    equipment = Equipment.from_dict(data)
    logger.info(f"Loaded equipment '{equipment.name}'")
    return equipment


def load_recipe(name_or_path):
    """Loads a Recipe description from DATA_DIR (or an explicit path)."""
    from brewcalc.services.recipe import Recipe

    data = _read_json(name_or_path)
    recipe = Recipe.from_dict(data)
    logger.info(f"Loaded recipe '{recipe.name}'")
    return recipe
