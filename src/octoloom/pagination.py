"""Link-header pagination helpers.

GitHub paginates list endpoints with an RFC 8288 ``Link`` header::

    <https://api.github.com/user/repos?page=2>; rel="next",
    <https://api.github.com/user/repos?page=5>; rel="last"

httpx parses the header into ``Response.links``; these helpers reduce that to
the ``rel`` -> URL mapping the client walks.
"""

import httpx


def page_links(response: httpx.Response) -> dict[str, str]:
    """Map each ``rel`` of the response's Link header to its URL.

    Entries without a ``rel`` parameter are skipped. A ``rel`` holding several
    space-separated relation types maps each of them to the same URL.
    """
    links: dict[str, str] = {}
    for link in response.links.values():
        for rel in link.get("rel", "").split():
            links[rel] = link["url"]
    return links


def next_page_url(response: httpx.Response) -> str | None:
    """Return the ``rel="next"`` URL of a response, or None on the last page."""
    return page_links(response).get("next")
