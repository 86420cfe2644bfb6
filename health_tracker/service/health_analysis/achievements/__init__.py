"""
Achievement modules for health analysis.

This package contains the achievement rule set and the engine that evaluates it against
logged entries, unlocking achievements one way and queueing them for celebration.
"""
