# errors.py
"""
Exception types shared across the flow field renderer.
"""


class ConfigurationError(ValueError):
    """
    Raised when the render configuration cannot produce a valid image.

    Always raised before any field or particle allocation, so the target
    surface is left untouched.
    """
