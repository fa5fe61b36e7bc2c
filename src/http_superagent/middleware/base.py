"""Middleware unit contract."""

from abc import ABC, abstractmethod
from typing import Any, Callable, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..core.context import Context

#: Continuation handed to a unit; calling it runs the rest of the chain.
Next = Callable[[], Any]

#: Anything callable as ``unit(ctx, next_)``
MiddlewareFunc = Callable[["Context", Next], Any]


class Middleware(ABC):
    """
    Base class for middleware units.

    A unit may work on ``ctx.request`` before calling ``next_()`` and on
    ``ctx.response`` after it returns. Not calling ``next_()`` short-circuits
    the chain; calling it twice raises ContinuationError.

    Plain functions with the same signature are accepted as units too.

    Example:
        class HeaderMiddleware(Middleware):
            name = "header"

            def __call__(self, ctx, next_):
                ctx.request.set_header("X-Trace", ctx.request_id)
                result = next_()
                if ctx.response is not None:
                    print(ctx.response.status_code)
                return result
    """

    #: Registry name of the unit
    name: str = ""

    @abstractmethod
    def __call__(self, ctx: "Context", next_: Next) -> Any:
        """Run the unit."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


Unit = Union[Middleware, MiddlewareFunc]
