"""URL slugs for news articles."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Turn a title into a lowercase, hyphen-separated ASCII slug.

    Accents are folded to their base letters and every other run of
    non-alphanumeric characters becomes a single hyphen.

    Example:
        >>> slugify("Server Update: Élan & Co!")
        'server-update-elan-co'
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")
