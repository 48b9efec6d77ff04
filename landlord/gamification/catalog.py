"""
Default achievement catalog

Read-only configuration, loaded once per process. Rank achievements compare
cumulative XP against the rank's threshold.
"""

from typing import List, Optional

from landlord.config import DEFAULT_ENGINE_CONFIG
from landlord.models.achievement import (
    AchievementCategory,
    AchievementRule,
    Badge,
    BadgeRarity,
    MetricType,
)

_RANK_XP = dict(DEFAULT_ENGINE_CONFIG.rank_thresholds)


def _rule(
    rule_id: str,
    metric: MetricType,
    required_value: float,
    category: AchievementCategory,
    name: str,
    description: str,
    image_name: str,
    rarity: BadgeRarity,
    gold_reward: int,
) -> AchievementRule:
    return AchievementRule(
        id=rule_id,
        required_value=required_value,
        metric=metric,
        category=category,
        badge=Badge(
            id=rule_id,
            name=name,
            description=description,
            image_name=image_name,
            rarity=rarity,
            gold_reward=gold_reward,
        ),
    )


C = AchievementCategory
R = BadgeRarity
M = MetricType

DEFAULT_CATALOG: List[AchievementRule] = [
    # Onboarding
    _rule("first_login", M.LOGINS, 1, C.ONBOARDING, "Royal Welcome",
          "Welcome to the kingdom! You've taken your first step into the realm of real estate.",
          "badge_first_login", R.COMMON, 50),
    _rule("profile_complete", M.PROFILE_COMPLETED, 1, C.ONBOARDING, "Identity Established",
          "You've established your royal identity by completing your profile.",
          "badge_profile_complete", R.COMMON, 100),

    # Quests
    _rule("first_quest", M.QUESTS_COMPLETED, 1, C.QUESTS, "Squire's First Quest",
          "You've completed your first quest. Many more adventures await!",
          "badge_first_quest", R.COMMON, 50),
    _rule("quest_master", M.QUESTS_COMPLETED, 50, C.QUESTS, "Royal Taskmaster",
          "A true hero of the realm! You've completed 50 quests.",
          "badge_quest_master", R.EPIC, 500),
    _rule("daily_quest_streak", M.STREAK_DAYS, 10, C.QUESTS, "Loyal Subject",
          "Your dedication is unmatched. You've completed quests for 10 days in a row.",
          "badge_daily_streak", R.RARE, 200),

    # Listings
    _rule("first_listing", M.PROPERTIES_LISTED, 1, C.LISTINGS, "Property Herald",
          "You've staked your first claim by listing a property.",
          "badge_first_listing", R.COMMON, 100),
    _rule("listing_mogul", M.PROPERTIES_LISTED, 10, C.LISTINGS, "Territory Expander",
          "Your influence grows! You've listed 10 properties.",
          "badge_listing_mogul", R.RARE, 300),
    _rule("premium_lister", M.HIGHEST_LISTING_PRICE, 1_000_000, C.LISTINGS, "Royal Estate Manager",
          "Only the finest estates! You've listed a property worth over $1M.",
          "badge_premium_lister", R.EPIC, 500),

    # Transactions
    _rule("first_sale", M.PROPERTIES_SOLD, 1, C.TRANSACTIONS, "First Transaction",
          "You've closed your first deal. The first of many conquests!",
          "badge_first_sale", R.COMMON, 100),
    _rule("closing_master", M.PROPERTIES_SOLD, 10, C.TRANSACTIONS, "Master Negotiator",
          "A skilled diplomat! You've closed 10 deals.",
          "badge_closing_master", R.RARE, 300),
    _rule("million_dollar_agent", M.SALES_VOLUME, 1_000_000, C.TRANSACTIONS, "Million Gold Agent",
          "Your wealth is legendary! You've reached $1M in sales volume.",
          "badge_million_dollar", R.LEGENDARY, 1000),

    # Gold
    _rule("gold_collector", M.TOTAL_GOLD_EARNED, 1_000, C.GOLD, "Gold Collector",
          "Your coffers begin to fill. You've earned 1,000 gold.",
          "badge_gold_collector", R.UNCOMMON, 100),
    _rule("gold_hoarder", M.TOTAL_GOLD_EARNED, 10_000, C.GOLD, "Dragon's Hoard",
          "Your wealth rivals that of dragons! You've earned 10,000 gold.",
          "badge_gold_hoarder", R.RARE, 500),
    _rule("royal_treasury", M.TOTAL_GOLD_EARNED, 100_000, C.GOLD, "Royal Treasury",
          "Your wealth is the envy of kingdoms! You've earned 100,000 gold.",
          "badge_royal_treasury", R.LEGENDARY, 1000),

    # Streaks
    _rule("week_streak", M.STREAK_DAYS, 7, C.STREAKS, "Week of Dedication",
          "A week of loyal service! You've maintained a 7-day streak.",
          "badge_week_streak", R.UNCOMMON, 100),
    _rule("month_streak", M.STREAK_DAYS, 30, C.STREAKS, "Month of Loyalty",
          "A month of dedication! You've maintained a 30-day streak.",
          "badge_month_streak", R.RARE, 300),
    _rule("season_streak", M.STREAK_DAYS, 90, C.STREAKS, "Season of Devotion",
          "A season of unwavering commitment! You've maintained a 90-day streak.",
          "badge_season_streak", R.EPIC, 500),

    # Ranks and levels
    _rule("knighthood", M.EXPERIENCE_POINTS, _RANK_XP["Knight"], C.LEVELS, "Knighthood Achieved",
          "You've been knighted for your service to the realm.",
          "badge_knighthood", R.UNCOMMON, 200),
    _rule("barony", M.EXPERIENCE_POINTS, _RANK_XP["Baron"], C.LEVELS, "Barony Claimed",
          "Your influence grows! You've been granted the title of Baron.",
          "badge_barony", R.RARE, 300),
    _rule("dukedom", M.EXPERIENCE_POINTS, _RANK_XP["Duke"], C.LEVELS, "Dukedom Established",
          "Your power is recognized throughout the land! You've been granted the title of Duke.",
          "badge_dukedom", R.EPIC, 500),
    _rule("royalty", M.EXPERIENCE_POINTS, _RANK_XP["Royalty"], C.LEVELS, "Royalty Ascended",
          "The highest honor! You've ascended to Royalty status.",
          "badge_royalty", R.LEGENDARY, 1000),
    _rule("reach_level_10", M.LEVEL, 10, C.LEVELS, "Rising Knight",
          "You've reached level 10!",
          "badge_reach_level_10", R.UNCOMMON, 200),
    _rule("reach_level_25", M.LEVEL, 25, C.LEVELS, "Established Noble",
          "You've reached level 25!",
          "badge_reach_level_25", R.RARE, 300),
    _rule("reach_level_50", M.LEVEL, 50, C.LEVELS, "Legendary Royalty",
          "You've reached level 50!",
          "badge_reach_level_50", R.EPIC, 500),
]


def get_rule(rule_id: str, catalog: Optional[List[AchievementRule]] = None) -> Optional[AchievementRule]:
    """Look up a rule by id"""
    for rule in catalog if catalog is not None else DEFAULT_CATALOG:
        if rule.id == rule_id:
            return rule
    return None
