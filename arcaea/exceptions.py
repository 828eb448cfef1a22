class ArcaeaError(Exception):
    """Base class for all toolbox exceptions."""


class UnknownClearType(ArcaeaError, ValueError):
    """Raised when a save file carries a clear type outside the known codes."""

    def __init__(self, clear_type: int) -> None:
        super().__init__(f"Unknown clear type: {clear_type}")
        self.clear_type = clear_type


class UnknownChart(ArcaeaError, KeyError):
    def __init__(self, chart_id: str) -> None:
        super().__init__(f"Chart {chart_id!r} is not in the catalog.")
        self.chart_id = chart_id


class InvalidProfile(ArcaeaError):
    """Raised when a profile document does not match the version 1 layout."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid profile: {reason}")
        self.reason = reason
