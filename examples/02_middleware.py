"""
Middleware: built-in units by name, custom units, retry and cancellation.
"""

import threading

from http_superagent import (
    Agent,
    AgentConfig,
    CancelToken,
    CancelledError,
    Middleware,
    new_request,
    register_factory,
)
from http_superagent.middleware import DURATION_HEADER


class TraceMiddleware(Middleware):
    """Adds a trace header going down and prints the status coming back up."""

    name = "trace"

    def __init__(self, prefix: str = "trace"):
        self.prefix = prefix

    def __call__(self, ctx, next_):
        ctx.request.set_header("X-Trace-Id", f"{self.prefix}-{ctx.request_id}")
        result = next_()
        if ctx.response is not None:
            print(f"[{self.name}] {ctx.request.method} {ctx.request.url} -> {ctx.response.status_code}")
        return result


def builtin_middleware():
    print("\n=== Built-in middleware ===")

    response = (
        new_request()
        .get("https://httpbin.org/headers")
        .use("timing")
        .use("basic_auth", "user", "pass")
        .use("logging", "INFO")
        .do()
    )
    print(f"Took {response.get_header(DURATION_HEADER)}")


def custom_middleware():
    print("\n=== Custom middleware ===")

    register_factory("trace", TraceMiddleware)
    new_request().get("https://httpbin.org/get").use("trace", "demo").do()


def agent_with_retry():
    print("\n=== Agent with retry ===")

    config = AgentConfig.create(base_url="https://httpbin.org", timeout=5, retry=3)
    with Agent(config).use("timing") as agent:
        response = agent.get("/get", queries={"page": "1"}).do()
        print(f"Status: {response.status_text}")


def cancellation():
    print("\n=== Cancellation ===")

    token = CancelToken()
    threading.Timer(0.5, token.cancel, args=("user pressed ctrl-c",)).start()

    try:
        new_request().get("https://httpbin.org/delay/3").set_context(token).do()
    except CancelledError as e:
        print(f"Cancelled: {e}")


def main():
    builtin_middleware()
    custom_middleware()
    agent_with_retry()
    cancellation()


if __name__ == "__main__":
    main()
