"""Tests for ReactiveCommand and ParameterizedCommand."""

import pytest

from notifykit import MissingRequiredArgument, ParameterizedCommand, ReactiveCommand


class TestReactiveCommand:
    @pytest.mark.parametrize("can_execute", [True, False])
    def test_initial_state(self, can_execute):
        executed = []
        command = ReactiveCommand(lambda: executed.append(True), lambda: can_execute)
        assert executed == []
        assert command.can_execute() is can_execute

    @pytest.mark.parametrize("can_execute", [True, False])
    def test_execute_respects_can_execute(self, can_execute):
        executed = []
        command = ReactiveCommand(lambda: executed.append(True), lambda: can_execute)
        command.execute()
        assert bool(executed) is can_execute

    def test_no_predicate_is_always_executable(self):
        executed = []
        command = ReactiveCommand(lambda: executed.append(True))
        assert command.can_execute() is True
        command.execute()
        assert executed == [True]

    def test_fires_on_every_transition(self):
        state = {"can": True}

        def toggle():
            state["can"] = not state["can"]
            return state["can"]

        command = ReactiveCommand(lambda: None, toggle)
        log = []

        def handler(sender, args):
            log.append(sender)

        command.can_execute_changed.subscribe(handler)
        command.reevaluate()
        command.reevaluate()
        command.reevaluate()
        command.can_execute_changed.unsubscribe(handler)
        command.reevaluate()
        assert log == [command, command, command]

    def test_fires_only_on_actual_change(self):
        command = ReactiveCommand(lambda: None, lambda: True)
        log = []
        command.can_execute_changed.subscribe(lambda s, a: log.append(a))
        for _ in range(5):
            command.reevaluate()
        assert log == []

    def test_no_predicate_never_fires(self):
        command = ReactiveCommand(lambda: None)
        log = []

        def handler(sender, args):
            log.append(sender)

        command.can_execute_changed.subscribe(handler)
        command.reevaluate()
        command.can_execute_changed.unsubscribe(handler)
        command.reevaluate()
        assert log == []

    def test_requery_hook(self):
        hooked = {"handler": None}
        state = {"can": True}

        def toggle():
            state["can"] = not state["can"]
            return state["can"]

        def hook(attach, handler):
            hooked["handler"] = handler if attach else None

        command = ReactiveCommand(lambda: None, toggle, hook)
        log = []

        def listener(sender, args):
            log.append(sender)

        command.can_execute_changed.subscribe(listener)
        hooked["handler"](None, None)
        command.can_execute_changed.unsubscribe(listener)
        assert hooked["handler"] is None
        assert log == [command]

    def test_requery_hook_called_once_per_transition(self):
        calls = []
        command = ReactiveCommand(lambda: None, lambda: True, lambda attach, h: calls.append(attach))
        d1 = command.can_execute_changed.subscribe(lambda s, a: None)
        d2 = command.can_execute_changed.subscribe(lambda s, a: None)
        d1()
        d2()
        assert calls == [True, False]

    def test_requery_hook_not_used_without_predicate(self):
        calls = []
        command = ReactiveCommand(lambda: None, None, lambda attach, h: calls.append(attach))
        command.can_execute_changed.subscribe(lambda s, a: None)
        assert calls == []

    def test_arguments_are_checked(self):
        with pytest.raises(MissingRequiredArgument):
            ReactiveCommand(None, None, None)
        with pytest.raises(MissingRequiredArgument):
            ReactiveCommand(None, lambda: True, None)
        with pytest.raises(MissingRequiredArgument):
            ReactiveCommand(None, None, lambda a, h: None)
        ReactiveCommand(lambda: None, None, None)


class TestParameterizedCommand:
    @pytest.mark.parametrize("param", ["one", "two"])
    @pytest.mark.parametrize("can_execute", [True, False])
    def test_initial_state(self, param, can_execute):
        executed = []
        command = ParameterizedCommand(
            lambda p: executed.append(p), lambda p: p == param and can_execute
        )
        assert executed == []
        assert command.can_execute(param) is can_execute

    @pytest.mark.parametrize("param", ["one", "two"])
    @pytest.mark.parametrize("can_execute", [True, False])
    def test_execute_respects_can_execute(self, param, can_execute):
        executed = []
        command = ParameterizedCommand(
            lambda p: executed.append(p), lambda p: p == param and can_execute
        )
        command.execute(param)
        assert executed == ([param] if can_execute else [])

    def test_no_predicate(self):
        executed = []
        command = ParameterizedCommand(executed.append)
        assert command.can_execute(0) is True
        command.execute(7)
        assert executed == [7]

    def test_fires_on_every_reevaluate(self):
        command = ParameterizedCommand(lambda p: None, lambda p: True)
        log = []

        def handler(sender, args):
            log.append(sender)

        command.can_execute_changed.subscribe(handler)
        command.reevaluate()
        command.reevaluate()
        command.reevaluate()
        command.can_execute_changed.unsubscribe(handler)
        command.reevaluate()
        assert len(log) == 3

    def test_no_predicate_never_fires(self):
        command = ParameterizedCommand(lambda p: None)
        log = []
        command.can_execute_changed.subscribe(lambda s, a: log.append(s))
        command.reevaluate()
        assert log == []

    def test_requery_hook(self):
        hooked = {"handler": None}

        def hook(attach, handler):
            hooked["handler"] = handler if attach else None

        command = ParameterizedCommand(lambda p: None, lambda p: True, hook)
        log = []

        def listener(sender, args):
            log.append(sender)

        command.can_execute_changed.subscribe(listener)
        hooked["handler"](None, None)
        command.can_execute_changed.unsubscribe(listener)
        assert hooked["handler"] is None
        assert log == [command]

    def test_arguments_are_checked(self):
        with pytest.raises(MissingRequiredArgument):
            ParameterizedCommand(None, None, None)
        with pytest.raises(MissingRequiredArgument):
            ParameterizedCommand(None, lambda p: True, None)
        ParameterizedCommand(lambda p: None, None, None)
