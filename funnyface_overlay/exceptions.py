"""Exception types raised inside the overlay engine."""


class FunnyFaceError(Exception):
    """Base exception for the overlay engine."""
    pass


class ImageUnreadableError(FunnyFaceError):
    """Source image has no usable pixel representation."""
    pass


class SurfaceUnavailableError(FunnyFaceError):
    """Drawing surface could not be acquired, or was used after release."""
    pass
