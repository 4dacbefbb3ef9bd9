"""
Shared utilities: logging, error taxonomy, HTTP middleware.
"""
