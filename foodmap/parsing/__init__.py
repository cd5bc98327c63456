"""
Wishlist markdown parsing.

Responsibilities:
- Classify each line of the wishlist as a category header, an item or noise.
- Extract restaurant fields (links, name, description, status) from item lines.
- Produce an ordered list of Restaurant records in a single pass.
"""
