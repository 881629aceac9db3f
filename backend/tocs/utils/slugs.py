import re

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """'My API v2!' -> 'my-api-v2'."""
    return _NON_SLUG.sub("-", name.lower()).strip("-")
