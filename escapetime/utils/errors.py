class RenderError(ValueError):
    """Base class for requests the engine refuses to render."""


class InvalidDimension(RenderError):
    pass


class InvalidCutoff(RenderError):
    pass


class InvalidViewport(RenderError):
    pass
