from bbrender.models.models import (
    AttributeRule,
    OpenTagFrame,
    TagDefinition,
    TagKind,
    TrimPolicy,
    Validator,
)

__all__ = [
    "AttributeRule",
    "OpenTagFrame",
    "TagDefinition",
    "TagKind",
    "TrimPolicy",
    "Validator",
]
