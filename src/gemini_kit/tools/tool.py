from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


class ToolDescriptor(BaseModel):
    """A tool as announced by a provider (MCP server, pydantic model, ...).

    Accepts the MCP ``inputSchema`` key, the LangChain-style ``schema`` key
    or the attribute name ``input_schema``.
    """

    name: str
    description: str | None = None
    input_schema: Any = Field(
        default_factory=dict,
        validation_alias=AliasChoices("inputSchema", "input_schema", "schema"),
        serialization_alias="inputSchema",
    )

    class Config:
        frozen = True
        extra = "ignore"

    @field_validator("input_schema", mode="before")
    @classmethod
    def _none_means_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_model(
        cls,
        name: str,
        model: type[BaseModel],
        description: str | None = None,
    ) -> "ToolDescriptor":
        """Describe a tool whose arguments are a pydantic model."""
        return cls(
            name=name,
            description=description if description is not None else model.__doc__,
            input_schema=model.model_json_schema(),
        )


@dataclass(frozen=True)
class FunctionDeclaration:
    """One entry of Gemini's ``functionDeclarations``.

    ``parameters`` is always in the compatible dialect.
    """

    name: str
    description: str
    parameters: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }
