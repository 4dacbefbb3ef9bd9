"""
Email delivery package.

Keep package import side-effects to a minimum: do not import factory/adapters here.
"""

__all__ = [
    "interface",
    "config",
    "factory",
]
