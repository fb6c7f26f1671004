"""
HTTP and Socket.IO service.
"""

from .app import create_app, get_component

__all__ = ['create_app', 'get_component']
