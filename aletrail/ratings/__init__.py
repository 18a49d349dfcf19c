"""
Beer and brewery ratings.

Responsibilities:
- Validate 1-5 ratings and upsert one per user, brewery and beer.
- Summarise a brewery's ratings into an average and a distribution.
"""
