from .rk4 import rk4_step, rk4_integrate, Trajectory

__all__ = ["rk4_step", "rk4_integrate", "Trajectory"]
