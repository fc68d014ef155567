"""Bootstrap goodness-of-fit engine."""

from discrete_powerlaw.simulation.gof import GofResult, GoodnessOfFitEngine, calculate_gof

__all__ = ["GofResult", "GoodnessOfFitEngine", "calculate_gof"]
