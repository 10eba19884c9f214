"""
Exceptions raised by the simulation core
"""


class SimulationError(Exception):
    """Base class for simulation errors"""


class UpgradeSelectionError(SimulationError, ValueError):
    """Raised for a selection with no open upgrade menu or an invalid index"""
