"""
Static tag tables used by the record builder.
"""
from types import MappingProxyType

# Programme tags whose text is appended to a list attribute
PROGRAMME_MULTI_FIELDS = MappingProxyType({
    "title": "title",
    "sub-title": "secondary_title",
    "desc": "desc",
    "descgen": "descgen",
    "category": "category",
    "country": "country",
})

CREDIT_FIELDS = frozenset({"actor", "director", "producer", "presenter"})

IMAGE_FIELDS = MappingProxyType({
    "large-image-url": "large",
    "medium-image-url": "medium",
    "small-image-url": "small",
})

# Seconds per <length units="...">
LENGTH_UNITS = MappingProxyType({
    "seconds": 1,
    "minutes": 60,
    "hours": 60 * 60,
})


__all__ = ["PROGRAMME_MULTI_FIELDS", "CREDIT_FIELDS", "IMAGE_FIELDS", "LENGTH_UNITS"]
