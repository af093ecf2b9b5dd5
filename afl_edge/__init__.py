"""AFL Edge - weighted multi-factor match and player prop prediction engine."""

__version__ = "1.0.0"
