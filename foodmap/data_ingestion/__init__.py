"""
Data ingestion package for the restaurant wishlist map.

Responsibilities:
- Read the wishlist markdown file.
- Parse it into the canonical Restaurant schema.
- Upsert the records into the restaurant store and keep a CSV snapshot.
"""
