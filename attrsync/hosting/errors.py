class ServiceUnavailable(Exception):
    """Raised when the hosting service cannot complete a listing call."""

    pass
