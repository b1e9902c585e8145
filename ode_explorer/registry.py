# ode_explorer/registry.py
"""
System identifiers and their model classes.

Every identifier maps to one model class, and every model class to one
parameter record. ``make_params`` is the single place where user overrides
are merged with the documented defaults; everything downstream receives a
complete record.
"""
from __future__ import annotations
from dataclasses import fields
from typing import Any, Dict, Literal, Mapping, Optional, Type
import warnings

from ode_explorer.models.base import ODEBase
from ode_explorer.models.planar import (
    Spiral, Focus, Saddle, Center, Node, VanDerPol, Duffing, Pendulum,
)
from ode_explorer.models.interacting import (
    LotkaVolterra, LotkaVolterraSelfLimit, LotkaVolterraCompetition, Richardson,
)
from ode_explorer.models.population import (
    Exponential, Logistic, Harvesting, ExponentialHarvesting, Allee,
)
from ode_explorer.models.epidemic import SI, SIS, SIR

SystemId = Literal[
    "spiral", "saddle", "center", "node", "focus",
    "van_der_pol", "duffing", "pendulum",
    "lotka_volterra", "lotka_volterra_self_limit", "lotka_volterra_competition",
    "richardson",
    "exponential", "logistic", "harvesting", "exponential_harvesting", "allee",
    "si", "sis", "sir",
]

SYSTEMS: Dict[str, Type[ODEBase]] = {
    "spiral": Spiral,
    "saddle": Saddle,
    "center": Center,
    "node": Node,
    "focus": Focus,
    "van_der_pol": VanDerPol,
    "duffing": Duffing,
    "pendulum": Pendulum,
    "lotka_volterra": LotkaVolterra,
    "lotka_volterra_self_limit": LotkaVolterraSelfLimit,
    "lotka_volterra_competition": LotkaVolterraCompetition,
    "richardson": Richardson,
    "exponential": Exponential,
    "logistic": Logistic,
    "harvesting": Harvesting,
    "exponential_harvesting": ExponentialHarvesting,
    "allee": Allee,
    "si": SI,
    "sis": SIS,
    "sir": SIR,
}


def get_system(name: SystemId) -> Type[ODEBase]:
    """Model class for a system identifier."""
    try:
        return SYSTEMS[name]
    except KeyError:
        raise ValueError(f"Unknown system: {name!r}") from None


def make_params(name: SystemId, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any):
    """
    Build the complete parameter record for ``name``.

    Values come from ``overrides`` and keyword arguments (keywords win),
    falling back to the record's defaults. Keys the record does not define
    are ignored with a warning.

    Example: make_params("lotka_volterra", alpha=1.2)
    """
    params_cls = get_system(name).params_cls
    given = {**(overrides or {}), **kwargs}
    known = {f.name for f in fields(params_cls)}
    unknown = sorted(set(given) - known)
    if unknown:
        warnings.warn(f"ignoring parameters not used by {name!r}: {', '.join(unknown)}")
    return params_cls(**{k: v for k, v in given.items() if k in known})


def build_model(name: SystemId, params) -> ODEBase:
    """Model instance for ``name``; ``params`` must be the system's own record."""
    return get_system(name).from_params(params)
