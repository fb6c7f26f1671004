"""
Tests for the connection registry.
"""

import threading

import pytest

from region_resolver.exceptions import ValidationError
from region_resolver.realtime.registry import ConnectionRegistry, is_valid_user_id


@pytest.mark.parametrize("user_id,expected", [
    (1, True),
    (42, True),
    (0, False),
    (-3, False),
    (True, False),
    ("7", False),
    (7.0, False),
    (None, False),
])
def test_is_valid_user_id(user_id, expected):
    assert is_valid_user_id(user_id) is expected


def test_register_and_lookup():
    registry = ConnectionRegistry()

    assert registry.register('sid-a', 7) is True
    assert registry.register('sid-b', 7) is True

    assert registry.user_for('sid-a') == 7
    assert registry.sockets_for(7) == ['sid-a', 'sid-b']
    assert registry.is_online(7)
    assert len(registry) == 2


def test_register_is_idempotent():
    registry = ConnectionRegistry()
    registry.register('sid-a', 7)

    assert registry.register('sid-a', 7) is False
    assert registry.sockets_for(7) == ['sid-a']


def test_register_moves_socket_between_users():
    registry = ConnectionRegistry()
    registry.register('sid-a', 7)

    assert registry.register('sid-a', 8) is True
    assert registry.user_for('sid-a') == 8
    assert not registry.is_online(7)
    assert registry.online_users() == [8]


@pytest.mark.parametrize("user_id", [0, -1, "5", None, True])
def test_register_rejects_invalid_user_ids(user_id):
    registry = ConnectionRegistry()

    with pytest.raises(ValidationError, match="Invalid user id"):
        registry.register('sid-a', user_id)

    assert len(registry) == 0


def test_register_rejects_blank_sid():
    with pytest.raises(ValidationError, match="Invalid socket id"):
        ConnectionRegistry().register('', 5)


def test_unregister():
    registry = ConnectionRegistry()
    registry.register('sid-a', 7)
    registry.register('sid-b', 7)

    assert registry.unregister('sid-a') == 7
    assert registry.is_online(7)
    assert registry.unregister('sid-b') == 7
    assert not registry.is_online(7)
    assert registry.unregister('sid-b') is None


def test_clear():
    registry = ConnectionRegistry()
    registry.register('sid-a', 1)
    registry.register('sid-b', 2)

    registry.clear()

    assert len(registry) == 0
    assert registry.online_users() == []


def test_concurrent_registration():
    registry = ConnectionRegistry()

    def worker(offset):
        for i in range(200):
            registry.register(f"sid-{offset}-{i}", (i % 5) + 1)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == 800
    assert registry.online_users() == [1, 2, 3, 4, 5]
    assert sum(len(registry.sockets_for(u)) for u in range(1, 6)) == 800
