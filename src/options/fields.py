"""Option field declarations."""
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from .conditions import Condition


class FieldType(str, Enum):
    """Storage type the host form enforces."""

    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    JSON = "json"
    CSV = "csv"
    UUID = "uuid"


class Widget(str, Enum):
    """Form widget the host renders."""

    INPUT = "input"
    INPUT_MULTILINE = "input-multiline"
    INPUT_CODE = "input-code"
    SELECT = "select-dropdown"
    BOOLEAN = "boolean"
    SLIDER = "slider"
    TAGS = "tags"
    FILE = "file"


class Choice(BaseModel):
    """Dropdown choice."""

    text: str
    value: str


class OptionField(BaseModel):
    """One field of the operation form."""

    field: str = Field(..., description="Option name")
    name: str = Field(..., description="Label shown in the form")
    type: FieldType = FieldType.STRING
    interface: Widget = Widget.INPUT
    width: Literal["full", "half"] = "full"
    default: Any = None
    choices: Optional[List[Choice]] = None
    note: Optional[str] = None
    placeholder: Optional[str] = None
    masked: bool = False
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    enabled_when: Optional[Condition] = Field(
        None,
        description="Visibility condition, always visible when unset",
    )

    def is_visible(self, values: Mapping[str, Any]) -> bool:
        return self.enabled_when is None or self.enabled_when.evaluate(values)

    def widget_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.choices:
            options["choices"] = [choice.model_dump() for choice in self.choices]
        if self.placeholder:
            options["placeholder"] = self.placeholder
        if self.masked:
            options["masked"] = True
        for bound in ("min", "max", "step"):
            value = getattr(self, bound)
            if value is not None:
                options[bound] = value
        return options

    def to_host_option(self) -> Dict[str, Any]:
        """Render the field in the host's option declaration shape.

        Conditional fields are hidden by default and revealed by their rule.
        """
        meta: Dict[str, Any] = {"width": self.width, "interface": self.interface.value}
        options = self.widget_options()
        if options:
            meta["options"] = options
        if self.note:
            meta["note"] = self.note
        if self.enabled_when is not None:
            meta["hidden"] = True
            meta["conditions"] = [
                {
                    "name": f"show_{self.field}",
                    "rule": self.enabled_when.to_rule(),
                    "hidden": False,
                }
            ]

        option: Dict[str, Any] = {
            "field": self.field,
            "name": self.name,
            "type": self.type.value,
            "meta": meta,
        }
        if self.default is not None:
            option["schema"] = {"default_value": self.default}
        return option
