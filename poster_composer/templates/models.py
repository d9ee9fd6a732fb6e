"""Template data models for poster composition.

This module defines the immutable records a poster template is made of:
canvas size, background fill, photo slots and text fields. Templates come
from a catalog data source as plain dictionaries (camelCase keys) or JSON
files and are parsed here once; after that they are never mutated.

Polymorphic parts (fills, masks, positions) are modelled as one frozen
dataclass per variant. Code that consumes them dispatches with
``isinstance`` and raises ``InvalidInputError`` for anything else.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from poster_composer.utils.constants import (
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_TEXT_COLOR,
    NAMED_ANCHORS,
    OVERFLOW_MODES,
    OVERFLOW_VISIBLE,
    TEXT_ALIGNMENTS,
    TEXT_TRANSFORMS,
)
from poster_composer.utils.exceptions import InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Size:
    """Width and height in pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(
                f"Size must be positive, got {self.width}x{self.height}",
                field="size",
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Size":
        return cls(width=int(data["width"]), height=int(data["height"]))


@dataclass(frozen=True)
class PixelPosition:
    """An absolute pixel point on the canvas."""

    x: int
    y: int


@dataclass(frozen=True)
class AnchorPosition:
    """A named canvas anchor with an optional pixel offset.

    Attributes:
        anchor: One of the named anchors (e.g. "center", "top-center")
        offset_x: Horizontal offset added after resolving the anchor
        offset_y: Vertical offset added after resolving the anchor
    """

    anchor: str
    offset_x: int = 0
    offset_y: int = 0

    def __post_init__(self) -> None:
        if self.anchor not in NAMED_ANCHORS:
            raise InvalidInputError(
                f"Unknown anchor '{self.anchor}', must be one of {', '.join(NAMED_ANCHORS)}",
                field="position",
            )


Position = Union[PixelPosition, AnchorPosition]


def parse_position(data: Any) -> Position:
    """Parse a position record.

    Accepted forms:
        - "center" (a bare anchor name)
        - {"x": 540, "y": 200}
        - {"anchor": "center", "offsetX": 0, "offsetY": -300}

    Raises:
        InvalidInputError: If the record matches none of the forms
    """
    if isinstance(data, str):
        return AnchorPosition(anchor=data)

    if isinstance(data, dict):
        if "anchor" in data:
            return AnchorPosition(
                anchor=data["anchor"],
                offset_x=int(data.get("offsetX", 0)),
                offset_y=int(data.get("offsetY", 0)),
            )
        if "x" in data and "y" in data:
            return PixelPosition(x=int(data["x"]), y=int(data["y"]))

    raise InvalidInputError(f"Malformed position: {data!r}", field="position")


# Backgrounds


@dataclass(frozen=True)
class GradientStop:
    """A gradient color stop.

    Attributes:
        color: Hex color (e.g. "#FF5733")
        position: Percentage along the gradient axis (0-100)
    """

    color: str
    position: float


@dataclass(frozen=True)
class SolidFill:
    """Single color covering the whole canvas."""

    color: str


@dataclass(frozen=True)
class GradientFill:
    """Color stops interpolated along a direction.

    Attributes:
        direction: to-bottom, to-right, to-bottom-right or radial
        stops: Color stops; ordered by position when rendered
    """

    direction: str
    stops: tuple[GradientStop, ...]


Fill = Union[SolidFill, GradientFill]


def parse_fill(data: dict[str, Any]) -> Fill:
    """Parse a background record into a fill variant.

    Raises:
        InvalidInputError: For unknown or unsupported background types
    """
    fill_type = data.get("type") if isinstance(data, dict) else None

    if fill_type == "solid":
        return SolidFill(color=data["color"])

    if fill_type == "gradient":
        stops = tuple(
            GradientStop(color=stop["color"], position=float(stop["position"]))
            for stop in data.get("stops", [])
        )
        return GradientFill(direction=data.get("direction", "to-bottom"), stops=stops)

    if fill_type == "image":
        raise InvalidInputError("Image backgrounds are not yet supported", field="background")

    raise InvalidInputError(f"Unknown background type: {fill_type!r}", field="background")


# Masks


@dataclass(frozen=True)
class NoMask:
    """The layer keeps its rectangular shape."""


@dataclass(frozen=True)
class CircleMask:
    """Circle inscribed in the layer box."""


@dataclass(frozen=True)
class RoundedRectMask:
    """Rectangle with rounded corners.

    Attributes:
        radius: Corner radius in pixels
    """

    radius: int

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise InvalidInputError(
                f"Rounded-rect radius cannot be negative, got {self.radius}",
                field="mask",
            )


Mask = Union[NoMask, CircleMask, RoundedRectMask]


def parse_mask(data: Any) -> Mask:
    """Parse a mask record ("circle", {"type": "rounded-rect", "radius": 24}, ...)."""
    if data is None:
        return NoMask()

    if isinstance(data, str):
        mask_type = data
    elif isinstance(data, dict):
        mask_type = data.get("type")
    else:
        mask_type = data

    if mask_type == "none":
        return NoMask()
    if mask_type == "circle":
        return CircleMask()
    if mask_type in ("rounded-rect", "roundedRect", "rounded"):
        radius = data.get("radius", 0) if isinstance(data, dict) else 0
        return RoundedRectMask(radius=int(radius))

    raise InvalidInputError(f"Unknown mask type: {mask_type!r}", field="mask")


# Effects


@dataclass(frozen=True)
class Border:
    """Stroke drawn along the mask boundary."""

    width: int
    color: str

    def __post_init__(self) -> None:
        if self.width < 0:
            raise InvalidInputError(f"Border width cannot be negative, got {self.width}", field="border")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Border | None":
        if not data:
            return None
        return cls(width=int(data["width"]), color=data["color"])


@dataclass(frozen=True)
class Shadow:
    """Blurred, offset, colored drop shadow.

    Attributes:
        blur: Gaussian blur radius in pixels
        offset_x: Horizontal offset in pixels
        offset_y: Vertical offset in pixels
        color: Shadow color (alpha allowed, e.g. "#00000080")
    """

    blur: float = 0
    offset_x: int = 0
    offset_y: int = 0
    color: str = "#00000080"

    def __post_init__(self) -> None:
        if self.blur < 0:
            raise InvalidInputError(f"Shadow blur cannot be negative, got {self.blur}", field="shadow")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Shadow | None":
        if not data:
            return None
        return cls(
            blur=float(data.get("blur", 0)),
            offset_x=int(data.get("offsetX", 0)),
            offset_y=int(data.get("offsetY", 0)),
            color=data.get("color", "#00000080"),
        )


@dataclass(frozen=True)
class Stroke:
    """Outline drawn around text glyphs."""

    width: int
    color: str

    def __post_init__(self) -> None:
        if self.width < 0:
            raise InvalidInputError(f"Stroke width cannot be negative, got {self.width}", field="stroke")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Stroke | None":
        if not data:
            return None
        return cls(width=int(data["width"]), color=data["color"])


# Slots and fields


@dataclass(frozen=True)
class PhotoSlot:
    """Region of the poster where the user photo is composited.

    The slot's position is the center of the photo box.
    """

    id: str
    position: Position
    size: Size
    mask: Mask = field(default_factory=NoMask)
    border: Border | None = None
    shadow: Shadow | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PhotoSlot":
        return cls(
            id=data["id"],
            position=parse_position(data["position"]),
            size=Size.from_dict(data["size"]),
            mask=parse_mask(data.get("mask")),
            border=Border.from_dict(data.get("border")),
            shadow=Shadow.from_dict(data.get("shadow")),
        )


@dataclass(frozen=True)
class TextStyle:
    """How a text field is drawn.

    Attributes:
        font_family: Registered font family name
        font_size: Font size in pixels
        color: Text color
        align: left, center or right (which side of the text sits on the anchor)
        letter_spacing: Extra pixels between characters
        text_transform: Case transformation applied before drawing
        line_height: Line advance as a multiple of the font size
        stroke: Optional glyph outline
        shadow: Optional blurred text shadow
        max_width: Width limit used by the wrap and shrink overflow modes
        overflow: visible, wrap or shrink
    """

    font_family: str
    font_size: int = DEFAULT_FONT_SIZE
    color: str = DEFAULT_TEXT_COLOR
    align: str = "center"
    letter_spacing: int = 0
    text_transform: str = "none"
    line_height: float = DEFAULT_LINE_HEIGHT
    stroke: Stroke | None = None
    shadow: Shadow | None = None
    max_width: int | None = None
    overflow: str = OVERFLOW_VISIBLE

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise InvalidInputError(f"Font size must be positive, got {self.font_size}", field="fontSize")
        if self.align not in TEXT_ALIGNMENTS:
            raise InvalidInputError(
                f"Invalid align '{self.align}', must be one of {TEXT_ALIGNMENTS}",
                field="align",
            )
        if self.text_transform not in TEXT_TRANSFORMS:
            raise InvalidInputError(
                f"Invalid textTransform '{self.text_transform}', must be one of {TEXT_TRANSFORMS}",
                field="textTransform",
            )
        if self.overflow not in OVERFLOW_MODES:
            raise InvalidInputError(
                f"Invalid overflow '{self.overflow}', must be one of {OVERFLOW_MODES}",
                field="overflow",
            )
        if self.max_width is not None and self.max_width <= 0:
            raise InvalidInputError(f"maxWidth must be positive, got {self.max_width}", field="maxWidth")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextStyle":
        max_width = data.get("maxWidth")
        return cls(
            font_family=data["fontFamily"],
            font_size=int(data.get("fontSize", DEFAULT_FONT_SIZE)),
            color=data.get("color", DEFAULT_TEXT_COLOR),
            align=data.get("align", "center"),
            letter_spacing=int(data.get("letterSpacing", 0)),
            text_transform=data.get("textTransform", "none"),
            line_height=float(data.get("lineHeight", DEFAULT_LINE_HEIGHT)),
            stroke=Stroke.from_dict(data.get("stroke")),
            shadow=Shadow.from_dict(data.get("shadow")),
            max_width=int(max_width) if max_width is not None else None,
            overflow=data.get("overflow", OVERFLOW_VISIBLE),
        )


@dataclass(frozen=True)
class TextField:
    """A named position and style where a data value is drawn."""

    id: str
    position: Position
    style: TextStyle

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextField":
        return cls(
            id=data["id"],
            position=parse_position(data["position"]),
            style=TextStyle.from_dict(data["style"]),
        )


@dataclass(frozen=True)
class PosterTemplate:
    """Declarative description of a poster layout.

    Attributes:
        id: Catalog id (e.g. "classic")
        name: Human-readable name
        canvas: Fixed canvas size
        background: Solid or gradient fill
        photo_slots: Regions the user photo is composited into
        text_fields: Named text positions and styles
    """

    id: str
    canvas: Size
    background: Fill
    photo_slots: tuple[PhotoSlot, ...] = ()
    text_fields: tuple[TextField, ...] = ()
    name: str = ""

    @property
    def field_ids(self) -> list[str]:
        """Ids of every text field, in template order."""
        return [text_field.id for text_field in self.text_fields]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PosterTemplate":
        """Create a template from a catalog record.

        Args:
            data: Record with id, canvas, background, photos and text keys

        Returns:
            PosterTemplate instance

        Raises:
            InvalidInputError: If the record is malformed

        Example:
            >>> template = PosterTemplate.from_dict({
            ...     "id": "plain",
            ...     "canvas": {"width": 800, "height": 600},
            ...     "background": {"type": "solid", "color": "#101010"},
            ... })
        """
        try:
            return cls(
                id=data["id"],
                name=data.get("name", data["id"]),
                canvas=Size.from_dict(data["canvas"]),
                background=parse_fill(data["background"]),
                photo_slots=tuple(PhotoSlot.from_dict(slot) for slot in data.get("photos", [])),
                text_fields=tuple(TextField.from_dict(text) for text in data.get("text", [])),
            )
        except KeyError as e:
            raise InvalidInputError(f"Template record is missing key {e}", field="template") from e
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Malformed template record: {e}", field="template") from e

    @classmethod
    def from_json(cls, filepath: str | Path) -> "PosterTemplate":
        """Load a template from a JSON file.

        Example:
            >>> template = PosterTemplate.from_json("templates/classic.json")
        """
        path = Path(filepath)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Invalid JSON in {path}: {e}", field="template") from e

        template = cls.from_dict(data)
        logger.debug(f"Loaded template '{template.id}' from {path}")
        return template
