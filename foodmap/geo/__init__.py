"""
Map coordinates for wishlist restaurants.

Responsibilities:
- Resolve Google Maps short links to latitude/longitude pairs.
- Shift resolved coordinates eastward by a configurable distance.
- Fill in coordinates for stored restaurants that do not have any yet.
"""
