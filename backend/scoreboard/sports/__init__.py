"""Bundled sport configurations, in the order they are offered."""

from scoreboard.sports.badminton import BADMINTON
from scoreboard.sports.basketball import BASKETBALL
from scoreboard.sports.kabaddi import KABADDI

BUNDLED_SPORTS = (BASKETBALL, BADMINTON, KABADDI)

__all__ = ["BADMINTON", "BASKETBALL", "BUNDLED_SPORTS", "KABADDI"]
