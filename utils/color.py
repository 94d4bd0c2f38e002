"""
Color normalization helpers.

Cart lines, order items and checkout descriptions all need a color as
either a display string or a stable lookup key. Every call site goes
through these functions instead of inspecting raw payloads.
"""

from models.color import Color, NamedColor, VariantColor


def parse_color(raw: str | dict | Color | None) -> Color | None:
    """
    Turn a loose color payload into a Color variant.

    Accepts a plain string ("Matte Black"), a variant dict
    ({"name": ..., "hex": ..., "_id": ...}) or an already parsed Color.

    Raises:
        ValueError: If the payload has neither a usable string nor a name
    """
    if raw is None:
        return None
    if isinstance(raw, (NamedColor, VariantColor)):
        return raw
    if isinstance(raw, str):
        value = raw.strip()
        if not value:
            return None
        return NamedColor(value=value)
    if isinstance(raw, dict):
        if raw.get("kind") == "name":
            return NamedColor(value=raw["value"])
        name = (raw.get("name") or "").strip()
        if not name:
            raise ValueError(f"Color variant without a name: {raw}")
        return VariantColor(
            name=name,
            hex=raw.get("hex") or "",
            id=str(raw.get("id") or raw.get("_id") or ""),
        )
    raise ValueError(f"Unsupported color payload: {raw!r}")


def color_display_name(color: Color | None) -> str:
    if color is None:
        return ""
    if isinstance(color, NamedColor):
        return color.value
    return color.name


def color_key(color: Color | None) -> str:
    """
    Stable key for grouping cart lines by product color.

    Variants with an id key on the id, everything else on the lowercased name,
    so "Black" and {"name": "black"} land on the same line.
    """
    if color is None:
        return ""
    if isinstance(color, VariantColor) and color.id:
        return f"id:{color.id}"
    return f"name:{color_display_name(color).strip().lower()}"
