"""Prometheus metrics for monitoring health scores, notifications and records fetches"""

from typing import Sequence
from prometheus_client import Counter, Histogram

from medfin_dashboard.domain.models import Notification

# Dashboard metrics
dashboard_request_counter = Counter(
    "medfin_dashboard_requests_total",
    "Dashboard widget computations served",
    ["widget"],  # dashboard | health_score | goals | insights | spending | notifications
)

health_score_histogram = Histogram(
    "medfin_health_score",
    "Distribution of overall financial health scores",
    buckets=[20, 40, 60, 80, 100],
)

health_status_counter = Counter(
    "medfin_health_status_total",
    "Health scores issued by status band",
    ["status"],  # Excellent | Good | Fair | Needs Improvement
)

notification_counter = Counter(
    "medfin_notifications_generated_total",
    "Notifications shown to members after dismissal filtering",
    ["type"],  # alert | reminder | achievement | warning
)

# Records service metrics
records_fetch_failures_counter = Counter(
    "records_fetch_failures_total",
    "Failed records service calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_health_score(score: int, status_label: str) -> None:
    """Record score distribution and status band for monitoring member health"""
    health_score_histogram.observe(score)
    health_status_counter.labels(status=status_label).inc()


def record_notifications(notifications: Sequence[Notification]) -> None:
    for notification in notifications:
        notification_counter.labels(type=notification.type).inc()
