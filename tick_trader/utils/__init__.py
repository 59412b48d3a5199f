"""
Utility functions module.

Time handling shared across the engine. Tick timestamps from the feed
are preferred; wall-clock time is only the fallback.
"""
