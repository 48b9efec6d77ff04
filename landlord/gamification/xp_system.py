"""
XP and Leveling System

Converts cumulative XP into level, rank, title and progress.

Leveling Curve:
- Flat 100 XP per level, level 1 at 0 XP
- Level saturates at 50; XP itself keeps growing

Ranks (minimum XP):
- Squire 0, Knight 300, Baron 1000, Duke 3000, Royalty 10000

Titles:
- "{prefix} {rank}", prefix cycles every 5 levels through 10 entries
  regardless of rank, so "Divine Squire" is reachable
"""

from typing import Any, Dict, Optional
import logging

from landlord.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from landlord.models.user import UserRank

logger = logging.getLogger(__name__)


def calculate_level(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Level for a cumulative XP total, in [1, max_level]"""
    level = max(xp, 0) // config.xp_per_level + 1
    return min(level, config.max_level)


def is_max_level(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> bool:
    return calculate_level(xp, config) >= config.max_level


def xp_for_next_level(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """XP still needed to reach the next level, 0 at max level"""
    level = calculate_level(xp, config)
    if level >= config.max_level:
        return 0
    return level * config.xp_per_level - xp


def level_progress(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    """Percentage (0-100) toward the next level, 100 at max level"""
    level = calculate_level(xp, config)
    if level >= config.max_level:
        return 100.0

    level_start_xp = (level - 1) * config.xp_per_level
    next_level_xp = level * config.xp_per_level
    xp_in_level = max(xp, 0) - level_start_xp

    return xp_in_level / (next_level_xp - level_start_xp) * 100.0


def rank_for_xp(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> UserRank:
    """Highest rank whose threshold the XP total has reached"""
    for name, required_xp in reversed(config.rank_thresholds):
        if xp >= required_xp:
            return UserRank(name)
    return UserRank.SQUIRE


def next_rank_for_xp(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Optional[UserRank]:
    """Rank after the current one, None at the highest rank"""
    current = rank_for_xp(xp, config)
    names = [name for name, _ in config.rank_thresholds]
    if current.value not in names:
        return None

    next_index = names.index(current.value) + 1
    if next_index >= len(names):
        return None
    return UserRank(names[next_index])


def xp_for_next_rank(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Optional[int]:
    next_rank = next_rank_for_xp(xp, config)
    if next_rank is None:
        return None
    return dict(config.rank_thresholds)[next_rank.value] - xp


def rank_threshold(rank: UserRank, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    return dict(config.rank_thresholds)[rank.value]


def title_for_xp(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> str:
    """Full title such as "Skilled Knight" """
    level = calculate_level(xp, config)
    rank = rank_for_xp(xp, config)
    prefixes = config.title_prefixes

    prefix_index = min((level // 5) % len(prefixes), len(prefixes) - 1)
    return f"{prefixes[prefix_index]} {rank.value}"


def level_info(xp: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Dict[str, Any]:
    """
    All derived progression values for an XP total

    Returns:
        {
            'experience_points': int,
            'level': int,
            'rank': str,
            'next_rank': str | None,
            'title': str,
            'xp_for_next_level': int,
            'xp_for_next_rank': int | None,
            'level_progress': float,
            'is_max_level': bool
        }
    """
    next_rank = next_rank_for_xp(xp, config)
    return {
        "experience_points": xp,
        "level": calculate_level(xp, config),
        "rank": rank_for_xp(xp, config).value,
        "next_rank": next_rank.value if next_rank else None,
        "title": title_for_xp(xp, config),
        "xp_for_next_level": xp_for_next_level(xp, config),
        "xp_for_next_rank": xp_for_next_rank(xp, config),
        "level_progress": level_progress(xp, config),
        "is_max_level": is_max_level(xp, config),
    }
