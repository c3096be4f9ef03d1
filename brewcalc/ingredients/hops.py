from dataclasses import dataclass

from brewcalc.core.decorators import InvalidRecipe


@dataclass(frozen=True)
class Hops:
    key: str
    name: str
    alpha_acid: float  # fraction, not percent

    def __str__(self):
        return f"[{self.name}]"


HOPS = {h.key: h for h in [
    Hops("cascade", "Cascade", (0.04 + 0.07) / 2),
    Hops("citra", "Citra", 0.133),
    Hops("east_kent_goldings", "East Kent Goldings", 0.055),
    Hops("fuggle", "Fuggle", (0.035 + 0.065) / 2),
    Hops("hallertau_mittelfruh", "Hallertau Mittelfruh", 0.0375),
    Hops("saaz", "Saaz", (0.02 + 0.045) / 2),
    Hops("tettnang", "Tettnang", (0.03 + 0.05) / 2),
]}


def get_hops(key: str) -> Hops:
    hops = HOPS.get(key.lower())
    if hops is None:
        raise InvalidRecipe(f"Unknown hops: {key}")
    return hops
