"""Tests for the dispatch lifecycle hooks."""

import pytest

from dispatchlite import Event
from dispatchlite import EventDispatcher
from dispatchlite.plugins import hook_impl


class Capture:
    """Plugin recording every hook call."""

    def __init__(self):
        self.calls = []

    @hook_impl
    def before_dispatch(self, event_name, event, listener_count):
        self.calls.append(("before", event_name, event, listener_count))

    @hook_impl
    def after_dispatch(self, event_name, event, called, stopped, duration):
        self.calls.append(("after", event_name, called, stopped, duration))

    @hook_impl
    def on_listener_error(self, event_name, event, listener, error):
        self.calls.append(("error", event_name, listener, error))


class TestDispatchHooks:
    """Test hook calls made by EventDispatcher.dispatch."""

    def test_before_and_after(self) -> None:
        """Successful dispatches call before_dispatch and after_dispatch."""
        capture = Capture()
        dispatcher = EventDispatcher(plugins=[capture])
        dispatcher.add_listener("foo", lambda event: None)
        dispatcher.add_listener("foo", lambda event: None)
        event = Event()

        dispatcher.dispatch(event, "foo")

        assert capture.calls[0] == ("before", "foo", event, 2)
        kind, name, called, stopped, duration = capture.calls[1]
        assert (kind, name, called, stopped) == ("after", "foo", 2, False)
        assert duration >= 0
        assert len(capture.calls) == 2

    def test_no_hooks_without_listeners(self) -> None:
        """Dispatching an event without listeners stays a no-op."""
        capture = Capture()
        dispatcher = EventDispatcher(plugins=[capture])
        dispatcher.dispatch(Event(), "foo")
        assert capture.calls == []

    def test_after_dispatch_reports_stop(self) -> None:
        """Stopped dispatches report how many listeners ran."""
        capture = Capture()
        dispatcher = EventDispatcher(plugins=[capture])
        dispatcher.add_listener("foo", lambda event: event.stop_propagation(), 1)
        dispatcher.add_listener("foo", lambda event: None)

        dispatcher.dispatch(Event(), "foo")

        _, _, called, stopped, _ = capture.calls[-1]
        assert called == 1
        assert stopped is True

    def test_listener_error_hook(self) -> None:
        """on_listener_error sees the failure; after_dispatch is skipped."""
        capture = Capture()
        dispatcher = EventDispatcher(plugins=[capture])
        error = KeyError("missing")

        def failing(event: Event) -> None:
            raise error

        dispatcher.add_listener("foo", failing)

        with pytest.raises(KeyError) as exc_info:
            dispatcher.dispatch(Event(), "foo")

        assert exc_info.value is error
        assert [call[0] for call in capture.calls] == ["before", "error"]
        assert capture.calls[1] == ("error", "foo", failing, error)

    def test_failing_error_hook_keeps_listener_error(self, caplog) -> None:
        """A hook raising in on_listener_error is logged; the listener's error propagates."""

        class BrokenHook:
            @hook_impl
            def on_listener_error(self, event_name, event, listener, error):
                raise RuntimeError("hook broke")

        dispatcher = EventDispatcher(plugins=[BrokenHook()])

        def failing(event: Event) -> None:
            raise ValueError("listener failed")

        dispatcher.add_listener("foo", failing)

        with pytest.raises(ValueError, match="listener failed"):
            dispatcher.dispatch(Event(), "foo")

        assert "on_listener_error hook failed while handling 'foo'" in caplog.text
        assert "hook broke" in caplog.text

    def test_partial_hook_implementation(self) -> None:
        """Plugins may implement a subset of hooks and hook arguments."""

        class NamesOnly:
            def __init__(self):
                self.names = []

            @hook_impl
            def before_dispatch(self, event_name):
                self.names.append(event_name)

        plugin = NamesOnly()
        dispatcher = EventDispatcher(plugins=[plugin])
        dispatcher.add_listener("foo", lambda event: None)
        dispatcher.dispatch(Event(), "foo")

        assert plugin.names == ["foo"]
