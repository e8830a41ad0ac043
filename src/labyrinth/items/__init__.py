from .collection import Item, ItemCollector
from .placement import PlacementRules, grid_distance, place_items

__all__ = ["Item", "ItemCollector", "PlacementRules", "grid_distance", "place_items"]
