"""
Tests for fixihub/registry.py — SubscriberRegistry membership.
"""

import threading

from fixihub.registry import SubscriberRegistry


def test_register_unregister(make_sink):
    registry = SubscriberRegistry()
    subscription = registry.register(make_sink())
    assert len(registry) == 1
    assert subscription in registry
    assert registry.unregister(subscription) is True
    assert len(registry) == 0
    assert subscription not in registry


def test_unregister_twice_is_noop(make_sink):
    registry = SubscriberRegistry()
    first = registry.register(make_sink())
    second = registry.register(make_sink())

    assert registry.unregister(first) is True
    assert registry.unregister(first) is False
    assert registry.snapshot() == (second,)


def test_same_sink_registered_once(make_sink):
    registry = SubscriberRegistry()
    sink = make_sink()
    assert registry.register(sink) is registry.register(sink)
    assert len(registry) == 1


def test_stale_handle_does_not_remove_new_registration(make_sink):
    registry = SubscriberRegistry()
    sink = make_sink()
    old = registry.register(sink)
    registry.unregister(old)
    new = registry.register(sink)

    assert new is not old
    assert registry.unregister(old) is False
    assert new in registry


def test_snapshot_is_detached(make_sink):
    registry = SubscriberRegistry()
    subscription = registry.register(make_sink())
    snapshot = registry.snapshot()
    registry.unregister(subscription)
    registry.register(make_sink())
    assert snapshot == (subscription,)


def test_concurrent_register_unregister(make_sink):
    registry = SubscriberRegistry()
    keep = [registry.register(make_sink()) for _ in range(10)]

    def churn():
        for _ in range(200):
            subscription = registry.register(make_sink())
            registry.snapshot()
            registry.unregister(subscription)

    threads = [threading.Thread(target=churn) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert set(registry.snapshot()) == set(keep)
