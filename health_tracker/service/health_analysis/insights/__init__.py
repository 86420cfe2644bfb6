"""
Insight modules for health analysis.

This package contains the engine that turns trailing windows of logged entries into
prioritized, human-readable observations.
"""
