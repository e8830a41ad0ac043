from .visibility import FogSettings, RevealState, VisibilityTracker

__all__ = ["FogSettings", "RevealState", "VisibilityTracker"]
