"""
Memory Keeper - turns spoken memories into short first-person stories.
"""

__version__ = "1.0.0"
