"""Tests for ChangeNotifier."""

from pocketledger.domain.notifier import ChangeNotifier


def test_notify_calls_each_subscriber():
    """Every subscriber is called on each notification."""
    notifier = ChangeNotifier()
    calls = []
    notifier.subscribe(lambda: calls.append("a"))
    notifier.subscribe(lambda: calls.append("b"))

    notifier.notify()
    notifier.notify()

    assert calls == ["a", "b", "a", "b"]


def test_unsubscribe():
    """Unsubscribed callbacks are not called; unsubscribing twice is harmless."""
    notifier = ChangeNotifier()
    calls = []

    def callback():
        calls.append(1)

    notifier.subscribe(callback)
    notifier.unsubscribe(callback)
    notifier.unsubscribe(callback)
    notifier.notify()

    assert calls == []


def test_subscriber_may_unsubscribe_while_notified():
    """A subscriber can unsubscribe from inside its callback."""
    notifier = ChangeNotifier()
    calls = []

    def once():
        calls.append(1)
        notifier.unsubscribe(once)

    notifier.subscribe(once)
    notifier.notify()
    notifier.notify()

    assert calls == [1]
