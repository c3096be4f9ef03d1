"""
BrewCalc - Unit Conversions

Quantities are plain floats; the unit lives in the name (`_l`, `_kg`, `_c`...).
Every conversion here has an inverse so values round-trip without drift.
"""

LITERS_PER_GALLON = 3.785411784
QUARTS_PER_GALLON = 4.0
MILLILITERS_PER_LITER = 1000.0
POUNDS_PER_KILOGRAM = 2.20462262185
GRAMS_PER_OUNCE = 28.349523125

# Hardness: 1 German degree (dH) is 17.8 ppm as CaCO3
PPM_PER_DH = 17.8
# Bicarbonate ppm per ppm of alkalinity expressed as CaCO3
HCO3_PER_CACO3 = 1.22


# --- VOLUME ---

def liters_to_gallons(liters):
    return liters / LITERS_PER_GALLON


def gallons_to_liters(gallons):
    return gallons * LITERS_PER_GALLON


def liters_to_quarts(liters):
    return liters / LITERS_PER_GALLON * QUARTS_PER_GALLON


def quarts_to_liters(quarts):
    return quarts / QUARTS_PER_GALLON * LITERS_PER_GALLON


def liters_to_milliliters(liters):
    return liters * MILLILITERS_PER_LITER


def milliliters_to_liters(milliliters):
    return milliliters / MILLILITERS_PER_LITER


# --- WEIGHT ---

def kg_to_lb(kg):
    return kg * POUNDS_PER_KILOGRAM


def lb_to_kg(lb):
    return lb / POUNDS_PER_KILOGRAM


def grams_to_ounces(grams):
    return grams / GRAMS_PER_OUNCE


def ounces_to_grams(ounces):
    return ounces * GRAMS_PER_OUNCE


# --- TEMPERATURE ---

def c_to_f(temp_c):
    return (temp_c * 9 / 5) + 32


def f_to_c(temp_f):
    return (temp_f - 32) * 5 / 9


# --- COLOR ---

def ebc_to_srm(ebc):
    return ebc / 1.97


def srm_to_ebc(srm):
    return srm * 1.97


def lovibond_to_srm(lovibond):
    return lovibond * 1.3546 - 0.76


def srm_to_lovibond(srm):
    return (srm + 0.76) / 1.3546


def ebc_to_lovibond(ebc):
    return srm_to_lovibond(ebc_to_srm(ebc))


def lovibond_to_ebc(lovibond):
    return srm_to_ebc(lovibond_to_srm(lovibond))


# --- GRAVITY ---

def sg_to_plato(sg):
    """Specific gravity to degrees Plato (cubic fit)."""
    return -616.868 + 1111.14 * sg - 630.272 * sg ** 2 + 135.997 * sg ** 3


def plato_to_sg(plato):
    """
    Degrees Plato to specific gravity, the exact inverse of sg_to_plato.
    Starts from the usual rational approximation and polishes it with
    Newton steps on the cubic.
    """
    sg = 1 + (plato / (258.6 - ((plato / 258.2) * 227.1)))
    for _ in range(4):
        slope = 1111.14 - 2 * 630.272 * sg + 3 * 135.997 * sg ** 2
        sg -= (sg_to_plato(sg) - plato) / slope
    return sg


def gravity_points(sg):
    return (sg - 1) * 1000


# --- CONCENTRATION ---

def ppm_to_dh(ppm):
    return ppm / PPM_PER_DH


def dh_to_ppm(dh):
    return dh * PPM_PER_DH


def bicarbonate_to_alkalinity(hco3_ppm):
    """HCO3 ppm to alkalinity as CaCO3 ppm."""
    return hco3_ppm / HCO3_PER_CACO3


def alkalinity_to_bicarbonate(alkalinity_ppm):
    return alkalinity_ppm * HCO3_PER_CACO3
