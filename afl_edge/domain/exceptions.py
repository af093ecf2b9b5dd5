"""
Domain exceptions for the prediction system.
"""

class PredictionException(Exception):
    """Base exception for prediction-related errors."""
    pass

class InsufficientDataException(PredictionException):
    """Exception raised when a team has no completed games to aggregate a prediction from."""
    pass
