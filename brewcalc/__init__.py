"""
BrewCalc - Process Calculation Engine

Turns brewery equipment, a recipe and a batch size into a complete
brew-day process: ingredient weights, water treatment, mash schedule,
volume chain, predicted beer numbers and feasibility warnings.
"""

from brewcalc.core.config import load_equipment, load_recipe, setup_logging
from brewcalc.core.decorators import BrewCalcError, InvalidRecipe
from brewcalc.services.equipment import Equipment, Packaging
from brewcalc.services.instructions import Steps, print_process
from brewcalc.services.process import Process
from brewcalc.services.recipe import Recipe

__version__ = "0.1.0"

__all__ = [
    "BrewCalcError",
    "Equipment",
    "InvalidRecipe",
    "Packaging",
    "Process",
    "Recipe",
    "Steps",
    "load_equipment",
    "load_recipe",
    "print_process",
    "setup_logging",
]
