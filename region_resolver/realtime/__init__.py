"""
Realtime fan-out over per-user channels.
"""

from .registry import ConnectionRegistry
from .publisher import RealtimePublisher, RealtimeEvent

__all__ = ['ConnectionRegistry', 'RealtimePublisher', 'RealtimeEvent']
