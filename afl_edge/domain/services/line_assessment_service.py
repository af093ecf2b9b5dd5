"""
Line Assessment Service

Turns a predicted margin into a qualitative lean on the line (handicap) market.
Line values come from bookmakers and are not part of this system; the
assessment only says how strongly the model leans.
"""

from afl_edge.domain.entities.entities import LineAssessment, MatchPrediction


class LineAssessmentService:
    """
    Grades the predicted margin of a match prediction.
    """

    # Margin (points) above which the lean is strong
    STRONG_LEAN_MARGIN = 25

    # Margin (points) above which the lean is moderate
    MODERATE_LEAN_MARGIN = 12

    def assess(self, prediction: MatchPrediction) -> LineAssessment:
        margin = prediction.predicted_margin
        winner = prediction.predicted_winner

        if margin > self.STRONG_LEAN_MARGIN:
            recommendation = f"Strong lean to {winner} - consider handicap"
        elif margin > self.MODERATE_LEAN_MARGIN:
            recommendation = f"Moderate lean to {winner} - check the line"
        else:
            recommendation = "Close game - line bet is risky"

        return LineAssessment(
            predicted_winner=winner,
            predicted_margin=margin,
            recommendation=recommendation,
        )
