"""
Team System

Scores each member's recent performance and rolls the scores up into a
team level (1-10) and title.

Score (capped at 100):
- 10 per property sold, 1 per 100 gold earned, 5 per quest,
  20 per satisfaction point, 15 per new client
"""

from typing import Any, Dict, Optional, Sequence

from landlord.models.team import TeamMember, TeamPerformance

MAX_SCORE = 100.0
MAX_TEAM_LEVEL = 10

# (minimum score, rank), descending
PERFORMANCE_RANKS = [
    (90, "Legendary"),
    (75, "Master"),
    (60, "Expert"),
    (40, "Adept"),
    (20, "Apprentice"),
]

TEAM_TITLES = {
    10: "Royal Order",
    9: "Noble House",
    8: "Sovereign Guild",
    7: "Esteemed Fellowship",
    6: "Honored Company",
    5: "Respected Brigade",
    4: "Trusted Alliance",
    3: "Rising Covenant",
    2: "Aspiring League",
}


def overall_score(performance: TeamPerformance) -> float:
    total = (
        performance.properties_sold * 10.0
        + performance.gold_earned / 100.0
        + performance.quests_completed * 5.0
        + performance.satisfaction_rating * 20.0
        + performance.new_clients * 15.0
    )
    return min(MAX_SCORE, total)


def performance_rank(score: float) -> str:
    for minimum, rank in PERFORMANCE_RANKS:
        if score >= minimum:
            return rank
    return "Novice"


def average_performance(members: Sequence[TeamMember]) -> float:
    if not members:
        return 0.0
    return sum(overall_score(m.performance) for m in members) / len(members)


def top_performer(members: Sequence[TeamMember]) -> Optional[TeamMember]:
    """Highest scoring member; the earliest wins a tie"""
    if not members:
        return None
    return max(members, key=lambda m: overall_score(m.performance))


def team_level(members: Sequence[TeamMember]) -> int:
    if not members:
        return 1
    return min(MAX_TEAM_LEVEL, max(1, int(average_performance(members) / 10.0)))


def team_title(level: int) -> str:
    return TEAM_TITLES.get(level, "Fledgling Band")


def team_standing(members: Sequence[TeamMember]) -> Dict[str, Any]:
    """
    Team-wide performance summary

    Returns:
        {
            'member_count': int,
            'average_performance': float,
            'team_level': int,
            'team_title': str,
            'top_performer': str | None,
            'members': [{'user_id', 'name', 'score', 'performance_rank'}]
        }
    """
    level = team_level(members)
    top = top_performer(members)
    return {
        "member_count": len(members),
        "average_performance": average_performance(members),
        "team_level": level,
        "team_title": team_title(level),
        "top_performer": top.user_id if top else None,
        "members": [
            {
                "user_id": m.user_id,
                "name": m.name,
                "score": overall_score(m.performance),
                "performance_rank": performance_rank(overall_score(m.performance)),
            }
            for m in members
        ],
    }
