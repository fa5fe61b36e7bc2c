"""
Continuation-passing chain of middleware units.

Every unit receives its own continuation object. The continuations share one
position counter, so the chain runs strictly left to right along one path,
and each continuation refuses a second call.
"""

from typing import Any, Callable, List, Optional, Sequence, TYPE_CHECKING

from ..core.exceptions import ContinuationError
from .base import Unit

if TYPE_CHECKING:
    from ..core.context import Context


class _ChainState:
    __slots__ = ("ctx", "units", "index")

    def __init__(self, ctx: "Context", units: Sequence[Optional[Unit]]):
        self.ctx = ctx
        self.units: List[Optional[Unit]] = list(units)
        self.index = -1

    def run(self, position: int) -> Any:
        self.index = position

        # За концом списка или пустой слот = терминальный no-op
        if position >= len(self.units):
            return None
        unit = self.units[position]
        if unit is None:
            return None

        return unit(self.ctx, _Continuation(self, position))


class _Continuation:
    """``next_`` of the unit at ``position``."""

    __slots__ = ("_state", "_position", "_called")

    def __init__(self, state: _ChainState, position: int):
        self._state = state
        self._position = position
        self._called = False

    def __call__(self) -> Any:
        if self._called:
            unit = self._state.units[self._position]
            raise ContinuationError(
                f"next() called more than once by {getattr(unit, 'name', '') or unit!r} "
                f"(position {self._position})"
            )
        self._called = True
        return self._state.run(self._position + 1)


def compose(ctx: "Context", middlewares: Sequence[Optional[Unit]]) -> Callable[[], Any]:
    """
    Build the start function of a chain.

    Invoking the start function runs ``middlewares[0](ctx, next_)``; each
    ``next_()`` runs the following unit with the same context. An empty list
    gives a start function that does nothing. The start function runs once.

    The at-most-once rule is enforced per unit: every unit gets its own
    ``next_`` and a second call to it raises ContinuationError. All of them
    advance the same position, so the chain behaves as one shared
    continuation walking the list.

    Example:
        >>> start = compose(ctx, [timing, basic_auth, dispatch])
        >>> start()
        >>> ctx.response.status_code
        200
    """
    state = _ChainState(ctx, middlewares)
    started = False

    def start() -> Any:
        nonlocal started
        if started:
            raise ContinuationError("chain already started")
        started = True
        return state.run(0)

    return start
