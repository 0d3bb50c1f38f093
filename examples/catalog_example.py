"""
Example showing how to wire CommonSenseClient with the httpx adapter.

This is a small, non-running example (placeholder credentials). With
``debug=True`` nothing is sent and every call resolves to ``{"success": 1}``;
drop it to hit the real service.
"""

from commonsense.api.core.config import ClientConfig
from commonsense.api.core.results import Failure
from commonsense.client import CommonSenseClient


def print_result(err, payload) -> None:
    if err is not None:
        print("Request failed:", err.kind.value, err.message)
    else:
        print("Payload:", payload)


if __name__ == "__main__":
    config = ClientConfig.create(
        "YOUR_CLIENT_ID",
        "YOUR_APP_ID",
        platform="education",
        debug=True,
    )

    with CommonSenseClient(config) as client:
        result = client.get_list("products", {"limit": 5, "fields": ["id", "title"]}, callback=print_result)
        print("Sent:", result.request.url)

        products = client.content_type("products")
        products.item(123)

        terms = client.get_terms_list("subjects", {"tree": ["terms"]})
        if isinstance(terms, Failure):
            print("Terms failed:", terms.message)

        client.wrapper("getUserReviewsList")({"page": 2}, callback=print_result)
