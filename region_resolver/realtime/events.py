"""
Socket.IO event handlers for per-user channel registration.
"""

import logging
from typing import Optional

from flask import request
from flask_socketio import SocketIO, emit, join_room, leave_room

from ..exceptions import ValidationError
from .publisher import RealtimePublisher
from .registry import ConnectionRegistry


def register_socket_handlers(socketio: SocketIO, registry: ConnectionRegistry,
                             publisher: RealtimePublisher,
                             logger: Optional[logging.Logger] = None):
    """
    Attach registration handlers to a Socket.IO server.

    Clients send ``register`` with ``{"userId": <int>}`` to join their
    channel and receive ``registered`` back; ``unregister`` leaves it again.
    """
    logger = logger or logging.getLogger(__name__)

    @socketio.on('register')
    def on_register(data=None):
        user_id = data.get('userId') if isinstance(data, dict) else None
        previous = registry.user_for(request.sid)
        try:
            changed = registry.register(request.sid, user_id)
        except ValidationError as e:
            logger.info(f"Rejected channel registration from {request.sid}: {e.message}")
            emit('error', {'error': e.message})
            return

        channel = publisher.channel_for(user_id)
        if changed:
            if previous is not None:
                leave_room(publisher.channel_for(previous))
            join_room(channel)
            logger.info(f"Socket {request.sid} joined {channel}")
        emit('registered', {'channel': channel})

    @socketio.on('unregister')
    def on_unregister(data=None):
        user_id = registry.unregister(request.sid)
        if user_id is not None:
            leave_room(publisher.channel_for(user_id))
            logger.info(f"Socket {request.sid} left {publisher.channel_for(user_id)}")

    @socketio.on('disconnect')
    def on_disconnect(reason=None):
        user_id = registry.unregister(request.sid)
        if user_id is not None:
            logger.info(f"User {user_id} disconnected socket {request.sid}")
