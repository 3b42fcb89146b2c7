"""Tests for the Notifier observer list."""

from __future__ import annotations

import logging

import pytest

from vendorctl.engine.notifier import Notifier


class TestNotifier:
    def test_delivers_in_subscription_order(self) -> None:
        notifier = Notifier()
        seen: list[str] = []
        notifier.subscribe(lambda e, p: seen.append(f"first:{e}"))
        notifier.subscribe(lambda e, p: seen.append(f"second:{e}"))
        notifier.notify("added", {"id": 1})
        assert seen == ["first:added", "second:added"]

    def test_payload_passed_through(self) -> None:
        notifier = Notifier()
        received = []
        notifier.subscribe(lambda e, p: received.append(p))
        notifier.notify("x", {"count": 3})
        assert received == [{"count": 3}]

    def test_unsubscribe(self) -> None:
        notifier = Notifier()
        calls = []
        unsubscribe = notifier.subscribe(lambda e, p: calls.append(e))
        unsubscribe()
        notifier.notify("x")
        assert calls == []
        assert len(notifier) == 0

    def test_unsubscribe_twice_is_harmless(self) -> None:
        notifier = Notifier()
        unsubscribe = notifier.subscribe(lambda e, p: None)
        unsubscribe()
        unsubscribe()
        assert len(notifier) == 0

    def test_duplicate_subscription_ignored(self) -> None:
        notifier = Notifier()
        calls = []

        def observer(event, payload):
            calls.append(event)

        notifier.subscribe(observer)
        notifier.subscribe(observer)
        notifier.notify("x")
        assert calls == ["x"]

    def test_failing_observer_does_not_block_others(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        notifier = Notifier("store")
        calls = []

        def broken(event, payload):
            raise RuntimeError("boom")

        notifier.subscribe(broken)
        notifier.subscribe(lambda e, p: calls.append(e))
        with caplog.at_level(logging.WARNING, logger="vendorctl.engine.notifier"):
            notifier.notify("deleted")
        assert calls == ["deleted"]
        assert "store" in caplog.text

    def test_observer_may_unsubscribe_during_notify(self) -> None:
        notifier = Notifier()
        calls = []
        holder = {}

        def once(event, payload):
            calls.append("once")
            holder["unsub"]()

        holder["unsub"] = notifier.subscribe(once)
        notifier.subscribe(lambda e, p: calls.append("other"))
        notifier.notify("x")
        notifier.notify("x")
        assert calls == ["once", "other", "other"]

    def test_clear(self) -> None:
        notifier = Notifier()
        notifier.subscribe(lambda e, p: None)
        notifier.clear()
        assert len(notifier) == 0
