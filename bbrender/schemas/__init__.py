from bbrender.schemas.schemas import (
    AttributeSchema,
    TagSchema,
    CatalogSchema,
)

__all__ = [
    "AttributeSchema",
    "TagSchema",
    "CatalogSchema",
]
