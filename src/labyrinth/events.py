from enum import Enum, auto


class LevelEvent(Enum):
    """Events emitted by LevelSession to notify the presentation layer."""

    PLAYER_MOVED = auto()
    CELL_CHANGED = auto()
    ITEM_COLLECTED = auto()
    ALL_ITEMS_COLLECTED = auto()
