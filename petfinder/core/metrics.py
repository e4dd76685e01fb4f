"""Prometheus counters for the announcement workflow (scraped at /metrics)."""

from prometheus_client import Counter

ANNOUNCEMENTS_CREATED = Counter(
    "petfinder_announcements_created_total",
    "Announcements created",
    ["type", "with_image"],
)

STATUS_TRANSITIONS = Counter(
    "petfinder_status_transitions_total",
    "Status updates by outcome",
    ["status", "outcome"],
)

COMMENTS_POSTED = Counter(
    "petfinder_comments_posted_total",
    "Comments posted",
)
