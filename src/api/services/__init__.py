"""
API Services package.
"""
