"""
Optional key-value persistence of submissions.

Do not import factory/backends here.
"""
