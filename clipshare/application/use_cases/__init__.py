# clipshare/application/use_cases/__init__.py

"""
Application service module.

This package contains the use cases exposed to the transport layer.
"""

from clipshare.application.use_cases.clip_use_cases import AsyncClipService

__all__ = [
    "AsyncClipService",
]
