"""Exception types for the FIFO calculator."""


class FifoCalcError(Exception):
    """Base class for all fifocalc errors."""


class FifoCalculationError(FifoCalcError, ValueError):
    """Raised when a FIFO calculation cannot be performed."""


class InvalidTradeError(FifoCalculationError):
    """Raised when a trade violates the non-negative quantity/price/fee rule."""


class ReportWriteError(FifoCalcError):
    """Raised when the results report cannot be written."""


class ConfigError(FifoCalcError):
    """Raised when the configuration file cannot be written."""
