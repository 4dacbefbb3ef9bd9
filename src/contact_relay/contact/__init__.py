"""
Contact-form submission handling.
"""
