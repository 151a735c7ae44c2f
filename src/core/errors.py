# core/errors.py

class MalformedSceneError(ValueError):
    """
    Raised when a scene description or mesh source cannot produce valid
    geometry (no vertices, bad face indices, unparsable numbers, ...).
    """


class RenderInProgressError(RuntimeError):
    """Raised when a render is requested while another one is still running."""
