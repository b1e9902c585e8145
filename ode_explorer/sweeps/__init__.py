# ode_explorer/sweeps/__init__.py
from .parameter_sweep import run_parameter_sweep

__all__ = ["run_parameter_sweep"]
