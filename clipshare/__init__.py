# clipshare/__init__.py

"""Text clip sharing service."""

__version__ = "1.0.0"
