"""Search-token derivation for the org search fallback."""

import re

STOPWORDS = frozenset({"the", "and", "or", "but", "for", "with", "from", "into", "over"})

MIN_TOKEN_LENGTH = 3

_DELIMITERS = re.compile(r"[\s\-_.]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def extract_search_tokens(event_name: str) -> list[str]:
    """
    Split an event name into lowercase keywords for a broader code search.

    "checkoutCompleted - Order_Placed" -> ["checkoutcompleted", "order",
    "placed", "checkout", "completed"]. Feeding the joined output back in
    returns the same list.
    """
    words = _DELIMITERS.split(event_name)
    camel_words = _DELIMITERS.split(_CAMEL_BOUNDARY.sub(r"\1 \2", event_name))

    tokens = dict.fromkeys(
        word.lower() for word in words + camel_words if len(word) >= MIN_TOKEN_LENGTH
    )
    return [token for token in tokens if token not in STOPWORDS]
