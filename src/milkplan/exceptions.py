"""Error types raised by milkplan."""


class InvalidConfiguration(ValueError):
    """A configuration value was rejected before any simulation started.

    ``field`` names the offending setting so callers can point the operator at
    it instead of showing a stale schedule.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")
