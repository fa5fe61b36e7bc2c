"""
Basic http-superagent usage.

Demonstrates GET with queries, POST with JSON and text bodies, and
decoding responses into dicts, dataclasses and Ref holders.
"""

from dataclasses import dataclass

from http_superagent import Ref, new_request, get


@dataclass
class Post:
    id: int = 0
    title: str = ""
    body: str = ""
    userId: int = 0


def get_with_queries():
    """GET with query parameters, JSON body decoded into a dict."""
    print("\n=== GET with queries ===")

    response = get("https://jsonplaceholder.typicode.com/posts", queries={"userId": "1"}).do()

    posts = response.body.decode()
    print(f"Status: {response.status_text}")
    print(f"Found {len(posts)} posts for user 1")


def post_json():
    """POST a dataclass as JSON and read the created resource back."""
    print("\n=== POST JSON ===")

    response = (
        new_request()
        .post("https://jsonplaceholder.typicode.com/posts", Post(title="My Post", body="content", userId=1))
        .set_content_type("application/json")
        .set_timeout(10)
        .do()
    )

    created = Post()
    response.parse_body(created)
    print(f"Status: {response.status_code}")
    print(f"Created: {created}")


def post_text():
    """POST plain text; the default content type is text/plain."""
    print("\n=== POST text ===")

    response = new_request().post("https://httpbin.org/post", "Hello World").do()

    text = Ref()
    response.body.unmarshal(text)
    print(f"Echoed {len(text.value)} characters")


def main():
    get_with_queries()
    post_json()
    post_text()


if __name__ == "__main__":
    main()
