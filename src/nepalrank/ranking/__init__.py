"""Ranking of harvested accounts."""

from .service import badge_color, rank_accounts, top_accounts

__all__ = ["badge_color", "rank_accounts", "top_accounts"]
