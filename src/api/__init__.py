"""
Memory Keeper HTTP API.
"""
