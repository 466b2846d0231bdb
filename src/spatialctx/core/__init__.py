"""
Core spatial functionality.
"""
