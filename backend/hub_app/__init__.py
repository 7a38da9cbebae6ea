"""
Dashboard core: device-control service client, form validation and
submission state.
"""

__version__ = "0.1.0"
