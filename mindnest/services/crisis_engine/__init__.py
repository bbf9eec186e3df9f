"""Crisis Engine: crisis phrase escalation and notification forwarding.

The detector counts distinct crisis phrases in user text and maps the
count to a severity (1 medium, 2 high, 3+ critical, which escalates).
The publisher forwards resulting signals to the alerting stream; it is
used by the calling shell, never by the analysis core itself.
"""

from .detector import CrisisDetector, build_excerpt, severity_for_count
from .notifications import CrisisNotification, CrisisNotificationPublisher

__all__ = [
    "CrisisDetector",
    "build_excerpt",
    "severity_for_count",
    "CrisisNotification",
    "CrisisNotificationPublisher",
]
