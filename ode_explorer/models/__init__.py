# ode_explorer/models/__init__.py
from .base import ODEBase, PlanarSystem
from .planar import (
    NoParams, SpiralParams, FocusParams, VanDerPolParams, DuffingParams, PendulumParams,
    Spiral, Focus, Saddle, Center, Node, VanDerPol, Duffing, Pendulum,
)
from .interacting import (
    LotkaVolterraParams, SelfLimitParams, CompetitionParams, RichardsonParams,
    LotkaVolterra, LotkaVolterraSelfLimit, LotkaVolterraCompetition, Richardson,
)
from .population import (
    ExponentialParams, LogisticParams, HarvestingParams, ExponentialHarvestingParams, AlleeParams,
    Exponential, Logistic, Harvesting, ExponentialHarvesting, Allee,
    logistic_solution, exponential_harvesting_solution,
)
from .epidemic import SIParams, SISParams, SIRParams, SI, SIS, SIR, Mixing

__all__ = [
    "ODEBase", "PlanarSystem",
    # planar
    "NoParams", "SpiralParams", "FocusParams", "VanDerPolParams", "DuffingParams",
    "PendulumParams", "Spiral", "Focus", "Saddle", "Center", "Node", "VanDerPol",
    "Duffing", "Pendulum",
    # interacting
    "LotkaVolterraParams", "SelfLimitParams", "CompetitionParams", "RichardsonParams",
    "LotkaVolterra", "LotkaVolterraSelfLimit", "LotkaVolterraCompetition", "Richardson",
    # population
    "ExponentialParams", "LogisticParams", "HarvestingParams",
    "ExponentialHarvestingParams", "AlleeParams", "Exponential", "Logistic",
    "Harvesting", "ExponentialHarvesting", "Allee",
    "logistic_solution", "exponential_harvesting_solution",
    # epidemic
    "SIParams", "SISParams", "SIRParams", "SI", "SIS", "SIR", "Mixing",
]
