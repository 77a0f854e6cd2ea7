"""
utils/ - Shared Helpers
========================
Logging setup, error types and display formatting.
"""
