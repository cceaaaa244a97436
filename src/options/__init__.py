"""Operation form declarations package."""

from .conditions import AllOf, Condition, Equals, OneOf, operation_is
from .declarations import (
    FIELDS_BY_NAME,
    OPERATION_LABELS,
    OPTION_FIELDS,
    host_options,
    overview,
    visible_fields,
    with_defaults,
)
from .fields import Choice, FieldType, OptionField, Widget

__all__ = [
    "AllOf",
    "Choice",
    "Condition",
    "Equals",
    "FIELDS_BY_NAME",
    "FieldType",
    "OPERATION_LABELS",
    "OPTION_FIELDS",
    "OneOf",
    "OptionField",
    "Widget",
    "host_options",
    "operation_is",
    "overview",
    "visible_fields",
    "with_defaults",
]
