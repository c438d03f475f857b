"""crop-planner: rotation-aware planting recommendations for farm fields."""

__version__ = "0.1.0"
