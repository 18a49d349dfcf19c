"""
Stamp collection.

Responsibilities:
- Check a submitted brewery code against the brewery's secret code.
- Collect at most one stamp per user and brewery, recording one
  ``stamp_collected`` event when a stamp is created.
"""
