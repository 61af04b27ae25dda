"""Portfolio module - local account state and health scores."""

from gitbrand.portfolio.scoring import ScoreCard, calculate_profile_score, calculate_repo_score
from gitbrand.portfolio.state import Portfolio

__all__ = [
    "Portfolio",
    "ScoreCard",
    "calculate_profile_score",
    "calculate_repo_score",
]
