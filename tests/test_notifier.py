"""Tests for the readiness notifier."""

import logging

import pytest

from core.errors import ObserverFailure, UnknownCapability
from core.notifier import ReadinessNotifier


class TestReadinessNotifier:

    def test_fires_in_subscription_order(self):
        notifier = ReadinessNotifier(["echo"])
        seen = []
        notifier.subscribe("echo", lambda inst: seen.append(("first", inst)))
        notifier.subscribe("echo", lambda inst: seen.append(("second", inst)))

        failures = notifier.fire_and_clear("echo", "E")

        assert failures == []
        assert seen == [("first", "E"), ("second", "E")]

    def test_observers_fire_only_once(self):
        notifier = ReadinessNotifier(["echo"])
        seen = []
        notifier.subscribe("echo", seen.append)
        notifier.fire_and_clear("echo", "E")
        notifier.fire_and_clear("echo", "E2")
        assert seen == ["E"]
        assert notifier.pending("echo") == 0

    def test_names_are_independent(self):
        notifier = ReadinessNotifier(["a", "b"])
        seen = []
        notifier.subscribe("a", seen.append)
        notifier.subscribe("b", seen.append)
        notifier.fire_and_clear("a", "A")
        assert seen == ["A"]
        assert notifier.pending("b") == 1

    def test_failing_observer_does_not_stop_the_rest(self, caplog):
        notifier = ReadinessNotifier(["echo"])
        seen = []

        def broken(instance):
            raise RuntimeError("listener exploded")

        notifier.subscribe("echo", broken)
        notifier.subscribe("echo", seen.append)

        with caplog.at_level(logging.ERROR):
            failures = notifier.fire_and_clear("echo", "E")

        assert seen == ["E"]
        assert len(failures) == 1
        assert isinstance(failures[0], ObserverFailure)
        assert failures[0].observer is broken
        assert "listener exploded" in caplog.text

    def test_resubscribe_during_firing_waits_for_next_round(self):
        notifier = ReadinessNotifier(["echo"])
        seen = []

        def again(instance):
            seen.append(instance)
            notifier.subscribe("echo", seen.append)

        notifier.subscribe("echo", again)
        notifier.fire_and_clear("echo", "E")

        assert seen == ["E"]
        assert notifier.pending("echo") == 1

    def test_invoke_reports_a_single_failure(self, caplog):
        def broken(instance):
            raise RuntimeError("single call exploded")

        with caplog.at_level(logging.ERROR):
            failure = ReadinessNotifier.invoke("echo", broken, "E")

        assert isinstance(failure, ObserverFailure)
        assert failure.observer is broken
        assert "single call exploded" in caplog.text
        assert ReadinessNotifier.invoke("echo", lambda inst: None, "E") is None

    def test_unknown_name(self):
        notifier = ReadinessNotifier(["echo"])
        with pytest.raises(UnknownCapability):
            notifier.subscribe("nope", print)
        with pytest.raises(UnknownCapability):
            notifier.pending("nope")
