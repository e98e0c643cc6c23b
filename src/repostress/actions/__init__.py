"""Randomized actions executed against the repository by stress workers."""
