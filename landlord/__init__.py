"""LandLord progression engine: quests, gold, XP, ranks, streaks and achievements"""

__version__ = "1.0.0"
