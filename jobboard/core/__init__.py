"""
Core module - settings, authentication and error types.
"""
