from functools import wraps
import logging

logger = logging.getLogger(__name__)


class BrewCalcError(Exception):
    """Custom Base Exception for engine errors"""
    def __init__(self, message, code=400, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload


class InvalidRecipe(BrewCalcError):
    """
    The inputs cannot enter the derivation chain at all (no malts,
    no mash rests, bitterness without hops, ...).

    Physically infeasible but well-formed processes are not errors;
    they are reported as warnings by Process.get_warnings().
    """
    def __init__(self, message, payload=None):
        super().__init__(message, code=422, payload=payload)


def recipe_guard(f):
    """
    Decorator for Process methods that divide by recipe-derived totals.
    Runs the structural recipe check first so that degenerate inputs fail
    with InvalidRecipe instead of ZeroDivisionError or NaN.
    """
    @wraps(f)
    def decorated_function(self, *args, **kwargs):
        problems = self.recipe_problems()
        if problems:
            logger.warning(f"InvalidRecipe in {f.__name__}: {'; '.join(problems)}")
            raise InvalidRecipe("; ".join(problems), payload={"problems": problems})
        return f(self, *args, **kwargs)
    return decorated_function
