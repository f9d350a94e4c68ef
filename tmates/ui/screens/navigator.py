"""
Screen navigator - stack-based state machine over screens.

    Push(s)    current goes on the stack, s becomes current
    Replace(s) s becomes current, stack untouched
    Stay(s?)   current re-runs (replaced by s when given)
    Back       pop the stack, or Home when it is empty
    Home       clear the stack, current = home screen
    Quit       stop the loop

The stack never contains the current screen.
"""
from __future__ import annotations

from typing import Callable, assert_never

from ...auth import Session
from ...core.logging import debug_log
from .state import (
    Action,
    Back,
    Home,
    HomeState,
    Push,
    Quit,
    Replace,
    Screen,
    Stay,
    screen_name,
)


class Navigator:
    """Owns the screen stack; performs no I/O of its own."""

    def __init__(self, session: Session):
        self.session = session
        self.stack: list[Screen] = []
        self.current: Screen = HomeState(session)
        self.running = True

    def _home(self) -> HomeState:
        return HomeState(self.session)

    @property
    def depth(self) -> int:
        return len(self.stack)

    def apply(self, action: Action):
        """Apply one navigation action."""
        if isinstance(action, Push):
            self.stack.append(self.current)
            self.current = action.screen
        elif isinstance(action, Replace):
            self.current = action.screen
        elif isinstance(action, Stay):
            if action.screen is not None:
                self.current = action.screen
        elif isinstance(action, Back):
            self.current = self.stack.pop() if self.stack else self._home()
        elif isinstance(action, Home):
            self.stack.clear()
            self.current = self._home()
        elif isinstance(action, Quit):
            self.running = False
        else:
            assert_never(action)

        debug_log(
            f"{type(action).__name__} -> {screen_name(self.current)} (depth {len(self.stack)})"
        )

    def run(self, handle: Callable[[Screen], Action]):
        """Run screens until a handler returns Quit."""
        while self.running:
            self.apply(handle(self.current))
