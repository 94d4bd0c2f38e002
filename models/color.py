from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class NamedColor(BaseModel):
    """Free-text color, e.g. "Tortoiseshell"."""
    kind: Literal["name"] = "name"
    value: str


class VariantColor(BaseModel):
    """Frame color variant managed in the admin (name + swatch + variant id)."""
    kind: Literal["variant"] = "variant"
    name: str
    hex: str = ""
    id: str = ""


Color = Annotated[Union[NamedColor, VariantColor], Field(discriminator="kind")]
