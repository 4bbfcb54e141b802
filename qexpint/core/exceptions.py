"""Exception hierarchy."""


class QexpintError(Exception):
    """Base class for all errors raised by qexpint."""


class IntegratorConfigurationError(QexpintError, ValueError):
    """Integrator cannot be built from the given system and trajectory layout."""


class ExponentialComputationError(QexpintError, ArithmeticError):
    """Matrix exponential (or its derivative) could not be computed."""
