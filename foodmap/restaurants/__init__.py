"""
Restaurant persistence and API schemas.

Responsibilities:
- Store parsed restaurants in a single-file SQLite database keyed by link id.
- Filter, search and summarise stored restaurants.
- Track visit status and resolved coordinates per restaurant.
"""
