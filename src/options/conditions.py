"""Visibility conditions for option fields.

A condition is a small predicate tree over option values. It evaluates
locally and exports to the host's rule shape (``_eq``, ``_in``, ``_and``).
"""
from typing import Any, Dict, List, Literal, Mapping, Union

from pydantic import BaseModel, Field


class Equals(BaseModel):
    """Option equals a value."""

    kind: Literal["eq"] = "eq"
    field: str = Field(..., description="Option name")
    value: Any = Field(..., description="Expected value")

    def evaluate(self, values: Mapping[str, Any]) -> bool:
        return values.get(self.field) == self.value

    def to_rule(self) -> Dict[str, Any]:
        return {self.field: {"_eq": self.value}}


class OneOf(BaseModel):
    """Option is one of several values."""

    kind: Literal["in"] = "in"
    field: str = Field(..., description="Option name")
    values: List[Any] = Field(..., description="Accepted values")

    def evaluate(self, values: Mapping[str, Any]) -> bool:
        return values.get(self.field) in self.values

    def to_rule(self) -> Dict[str, Any]:
        return {self.field: {"_in": list(self.values)}}


class AllOf(BaseModel):
    """Every nested condition holds."""

    kind: Literal["and"] = "and"
    conditions: List["Condition"] = Field(default_factory=list)

    def evaluate(self, values: Mapping[str, Any]) -> bool:
        return all(condition.evaluate(values) for condition in self.conditions)

    def to_rule(self) -> Dict[str, Any]:
        return {"_and": [condition.to_rule() for condition in self.conditions]}


Condition = Union[Equals, OneOf, AllOf]

AllOf.model_rebuild()


def operation_is(*operation_types: str) -> Condition:
    """Condition on the selected operation type."""
    if len(operation_types) == 1:
        return Equals(field="operation_type", value=operation_types[0])
    return OneOf(field="operation_type", values=list(operation_types))
