"""
AleTrail API.

Responsibilities:
- Serve trail, brewery, stamp, rating and recommendation data over HTTP.
- Validate brewery secret codes and collect one stamp per user and brewery.
- Recommend unvisited breweries by flavor overlap with user preferences.
"""
