"""Repository layer for the subscriber manager.

Provides row-level SQL functions for the subscriber table:
- subscribers: insert, update, delete, delete_all, get_all
"""
