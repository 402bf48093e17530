"""Color engine errors."""


class ColorError(Exception):
    """Base class for color engine errors."""
    pass


class UnknownModelError(ColorError, KeyError):
    """Reference to a model that is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class UnknownComponentError(ColorError):
    """Reference to a component the model does not define."""
    pass


class InvalidFitMethodError(ColorError, ValueError):
    """Fitting method outside the supported set."""
    pass


class RegistrationError(ColorError):
    """Model descriptor rejected by the registry."""
    pass
