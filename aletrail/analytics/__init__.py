"""
Trail analytics.

Responsibilities:
- Append best-effort events for stamps, scans and ratings.
- Aggregate events and stamps into admin and trail statistics.
"""
