from .loop import GameConfig, GameEngine, Wanderer

__all__ = ["GameConfig", "GameEngine", "Wanderer"]
