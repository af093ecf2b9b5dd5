"""
Domain Constants

This module contains constant definitions valid across the domain layer.
"""

# Canonical factor names, in the order they appear in a prediction breakdown
FACTOR_RECENT_FORM = "Recent Form"
FACTOR_H2H = "Head to Head"
FACTOR_SCORING_MARGIN = "Avg Score Diff"
FACTOR_VENUE = "Venue Record"
FACTOR_CLEARANCE = "Clearance Diff"
FACTOR_TRAVEL = "Interstate Travel"

FACTOR_ORDER = (
    FACTOR_RECENT_FORM,
    FACTOR_H2H,
    FACTOR_SCORING_MARGIN,
    FACTOR_VENUE,
    FACTOR_CLEARANCE,
    FACTOR_TRAVEL,
)
