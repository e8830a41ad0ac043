class LabyrinthError(Exception):
    """Base error for labyrinth domain exceptions."""


class MazeConfigError(LabyrinthError, ValueError):
    """Raised when maze dimensions, carve style or probabilities are unusable."""


class SettingsError(LabyrinthError):
    """Raised when a settings file cannot be read or has the wrong shape."""
