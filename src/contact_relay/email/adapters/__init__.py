"""Concrete email provider bindings."""
