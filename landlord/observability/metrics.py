"""
Prometheus metrics definitions for the LandLord progression service.

Metrics are organized by category:
- Progression metrics: quests, gold, XP, level-ups, achievements, streaks
- Storage metrics: persistence failures
- HTTP/API metrics: request counts

Metrics are exposed at the /metrics endpoint for Prometheus scraping.
"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

# =============================================================================
# Progression Metrics
# =============================================================================

quests_completed_total = Counter(
    "landlord_quests_completed_total",
    "Total quests completed",
    ["activity_type", "special"],
)

gold_awarded_total = Counter(
    "landlord_gold_awarded_total",
    "Total gold awarded",
    ["source"],  # source: quest/streak/achievement
)

xp_awarded_total = Counter(
    "landlord_xp_awarded_total",
    "Total experience points awarded",
    ["source"],
)

level_ups_total = Counter(
    "landlord_level_ups_total",
    "Total level-up events",
)

achievements_unlocked_total = Counter(
    "landlord_achievements_unlocked_total",
    "Total achievements unlocked",
    ["achievement"],
)

streak_resets_total = Counter(
    "landlord_streak_resets_total",
    "Total streaks broken and restarted",
)

resources_regenerated_total = Counter(
    "landlord_resources_regenerated_total",
    "Total shields and hearts regenerated",
    ["resource"],
)

# =============================================================================
# Storage Metrics
# =============================================================================

storage_errors_total = Counter(
    "landlord_storage_errors_total",
    "Total persistence failures",
    ["operation", "reason"],
)

# =============================================================================
# HTTP/API Metrics
# =============================================================================

http_requests_total = Counter(
    "landlord_http_requests_total",
    "Total HTTP requests received",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "landlord_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)


def record_engine_events(events) -> None:
    """Update progression counters from a list of engine events"""
    for event in events:
        if event.kind == "reward_granted":
            source = event.source.split(":", 1)[0]
            gold_awarded_total.labels(source=source).inc(event.gold)
            xp_awarded_total.labels(source=source).inc(event.xp)
        elif event.kind == "level_up":
            level_ups_total.inc()
        elif event.kind == "achievement_unlocked":
            achievements_unlocked_total.labels(achievement=event.achievement.type).inc()
        elif event.kind == "streak_updated":
            if not event.streak_continued and event.previous_streak_days > 0:
                streak_resets_total.inc()
        elif event.kind == "resource_regenerated":
            resources_regenerated_total.labels(resource=event.resource).inc()
