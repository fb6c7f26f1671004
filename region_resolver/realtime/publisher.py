"""
Per-user channel publishing.

Every user has one channel (``user:<id>`` by default). Events are published
to that channel through a Socket.IO server; a failed publish is logged and
reported to the caller as False, never raised.
"""

import logging
import threading
from typing import Any, Dict, Optional

from ..exceptions import RealtimeError
from ..models import ChatMessagePayload, ChatPartner, NotificationPayload
from ..utils.error_handler import create_error_context, log_error_details
from .registry import is_valid_user_id

DEFAULT_CHANNEL_PREFIX = 'user:'


class RealtimeEvent:
    """Event names published to user channels."""

    NOTIFICATION_NEW = 'notification:new'
    NOTIFICATION_UPDATED = 'notification:updated'
    NOTIFICATION_UNREAD_COUNT = 'notification:unread-count'
    NOTIFICATION_ALL_READ = 'notification:all-read'
    CHAT_NEW_MESSAGE = 'chat:new-message'
    CHAT_CONVERSATION_READ = 'chat:conversation-read'


class RealtimePublisher:
    """
    Publishes events to per-user channels.

    Attributes:
        transport: Object exposing ``emit(event, data, to=room)``, normally a
            ``flask_socketio.SocketIO`` instance
        channel_prefix: Prefix of every user channel name
    """

    def __init__(self, transport: Any, channel_prefix: str = DEFAULT_CHANNEL_PREFIX,
                 logger: Optional[logging.Logger] = None):
        self.transport = transport
        self.channel_prefix = channel_prefix
        self.logger = logger or logging.getLogger(__name__)
        self._stats_lock = threading.Lock()
        self._publish_stats = {'published': 0, 'skipped': 0, 'failed': 0}

    def channel_for(self, user_id: int) -> str:
        return f"{self.channel_prefix}{user_id}"

    def publish_to_user(self, user_id: Any, event: str, payload: Dict[str, Any]) -> bool:
        """
        Publish an event to a user's channel.

        Args:
            user_id: Recipient user id; anything but a positive integer is skipped
            event: Event name
            payload: JSON-serialisable event payload

        Returns:
            True if the event was handed to the transport, False otherwise
        """
        if not is_valid_user_id(user_id):
            self._count('skipped')
            self.logger.debug(f"Skipping '{event}' for invalid user id {user_id!r}")
            return False

        channel = self.channel_for(user_id)
        try:
            self.transport.emit(event, payload, to=channel)
        except Exception as e:
            self._count('failed')
            error = RealtimeError(
                f"Failed to publish realtime message '{event}'",
                channel=channel, event=event, original_error=e
            )
            log_error_details(
                self.logger, error, create_error_context('publish_to_user', user_id=user_id)
            )
            return False

        self._count('published')
        return True

    def _count(self, outcome: str):
        with self._stats_lock:
            self._publish_stats[outcome] += 1

    def notify_new(self, recipient_id: int, notification: NotificationPayload,
                   unread_count: int) -> bool:
        """Announce a newly created notification with the recipient's unread count."""
        return self.publish_to_user(recipient_id, RealtimeEvent.NOTIFICATION_NEW, {
            'notification': notification.to_dict(),
            'unreadCount': unread_count
        })

    def notify_read(self, user_id: int, notification_id: int, unread_count: int) -> bool:
        """Announce that one notification was read, followed by the new unread count."""
        updated = self.publish_to_user(user_id, RealtimeEvent.NOTIFICATION_UPDATED, {
            'notificationId': notification_id,
            'isRead': True
        })
        counted = self.publish_to_user(user_id, RealtimeEvent.NOTIFICATION_UNREAD_COUNT, {
            'unreadCount': unread_count
        })
        return updated and counted

    def notify_all_read(self, user_id: int) -> bool:
        return self.publish_to_user(user_id, RealtimeEvent.NOTIFICATION_ALL_READ, {
            'unreadCount': 0
        })

    def chat_message(self, message: ChatMessagePayload, sender: ChatPartner,
                     receiver: ChatPartner, receiver_unread_from_sender: int,
                     receiver_total_unread: int) -> bool:
        """
        Fan a chat message out to both participants.

        The receiver sees the sender as partner along with its unread
        counters; the sender sees the receiver as partner with nothing unread.

        Returns:
            True if both deliveries were handed to the transport
        """
        base = message.to_dict()

        to_receiver = dict(base)
        to_receiver.update({
            'partner': sender.to_dict(),
            'unreadFromPartner': receiver_unread_from_sender,
            'totalUnread': receiver_total_unread
        })

        to_sender = dict(base)
        to_sender.update({
            'partner': receiver.to_dict(),
            'unreadFromPartner': 0
        })

        delivered = self.publish_to_user(
            message.receiver_id, RealtimeEvent.CHAT_NEW_MESSAGE, to_receiver
        )
        echoed = self.publish_to_user(
            message.sender_id, RealtimeEvent.CHAT_NEW_MESSAGE, to_sender
        )
        return delivered and echoed

    def conversation_read(self, user_id: int, partner_id: int, total_unread: int) -> bool:
        return self.publish_to_user(user_id, RealtimeEvent.CHAT_CONVERSATION_READ, {
            'partnerId': partner_id,
            'totalUnread': total_unread
        })

    def get_statistics(self) -> Dict[str, int]:
        with self._stats_lock:
            return dict(self._publish_stats)
