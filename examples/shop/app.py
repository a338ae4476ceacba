"""Shop — deep links for a storefront app.

Demonstrates decorator registration, several templates per screen,
literal-over-parameter precedence, query parameters, and a fallback
for URIs nothing handles.

Run:
    python app.py myapp://shop/items/42?ref=mail
"""

import sys

from deeplink import DeepLinks

links = DeepLinks()


@links.link("myapp://shop", "https://shop.example.com")
def home(**query: str) -> str:
    return "home"


@links.link("myapp://shop/items/{item_id}", "https://shop.example.com/items/{item_id}")
def item_detail(item_id: str, **query: str) -> str:
    source = query.get("ref", "direct")
    return f"item {item_id} (via {source})"


@links.link("myapp://shop/items/new")
def item_create(**query: str) -> str:
    return "new item"


@links.link("myapp://shop/users/{user_id}/orders/{order_id}")
def order_detail(user_id: str, order_id: str, **query: str) -> str:
    return f"order {order_id} for {user_id}"


@links.link("myapp://shop/search?{q}&{page}")
def search(**query: str) -> str:
    return f"search {query.get('q', '')!r} page {query.get('page', '1')}"


@links.link("*://*/help")
def help_center(**query: str) -> str:
    return "help"


def open_uri(uri: str) -> str:
    """Resolve *uri* and call its handler, or report why nothing handles it."""
    result = links.match(uri)
    if not result:
        return f"fallback: {result}"
    return result.handler_ref(**result.parameters)


if __name__ == "__main__":
    for arg in sys.argv[1:]:
        print(open_uri(arg))
