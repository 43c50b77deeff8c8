class HalftoneError(Exception):
    """Base class for errors raised by halftone."""


class ConfigurationError(HalftoneError, ValueError):
    pass


class InputError(HalftoneError, ValueError):
    pass
