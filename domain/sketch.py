"""
Room sketch surface.

Strokes are stored in surface-independent, normalized coordinates (0..1 on
both axes) and replayed in commit order whenever the surface is drawn, so a
sketch keeps its proportions at any surface size.

Dimension strokes mark the room's walls. They are numbered 1..n in drawing
order ("Ściana 1", "Ściana 2", ...) and renumbered after every change, and
each one carries a free-text measurement plus a list of installation
details (windows, radiators, sockets, ...) with their own measurements.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
from xml.sax.saxutils import escape
import math
import uuid

from domain.enums import DetailType, OperationType

DEFAULT_THICKNESS = 4
REFERENCE_WIDTH = 800  # px; thickness and text size are defined at this width
PRIMARY_STROKE_COLOR = "#0f172a"
BACKGROUND_COLOR = "#ffffff"

DIMENSION_STROKE_COLOR = "#ef4444"
DIMENSION_LINE_WIDTH = 2
DIMENSION_LABEL_FONT_SIZE = 16
DIMENSION_LABEL_PADDING = 4
TEXT_HIT_PADDING = 6
HIT_TEST_THRESHOLD_PX = 12

# Defaults for stored strokes that lack a usable thickness or size
STORED_THICKNESS = 2
STORED_TEXT_SIZE = 16

DETAIL_FIELD_LABELS = {
    "width": "Szerokość",
    "height": "Wysokość",
    "floorLevel": "Poziom od podłogi z płytką",
    "depth": "Głębokość",
    "wallOffset": "Wymiar od lewej/prawej ściany",
}

_SIZED_FIELDS = ("width", "height", "floorLevel", "depth", "wallOffset")
_MOUNT_FIELDS = ("floorLevel", "wallOffset")


@dataclass(frozen=True)
class DetailDefinition:
    type: DetailType
    label: str
    fields: Tuple[str, ...]


DETAIL_DEFINITIONS = (
    DetailDefinition(DetailType.WINDOW, "Okno", _SIZED_FIELDS),
    DetailDefinition(DetailType.RADIATOR, "Grzejnik", _SIZED_FIELDS),
    DetailDefinition(DetailType.WATER, "Woda", _SIZED_FIELDS),
    DetailDefinition(DetailType.POWER_CABLE, "Prąd (kabel)", _MOUNT_FIELDS),
    DetailDefinition(DetailType.SOCKET, "Gniazdko", _MOUNT_FIELDS),
    DetailDefinition(DetailType.VENTILATION, "Wentylacja", _SIZED_FIELDS),
)

_DEFINITIONS_BY_TYPE = {definition.type: definition for definition in DETAIL_DEFINITIONS}


def detail_definition(detail_type: Union[DetailType, str]) -> DetailDefinition:
    """Definition for ``detail_type``; raises ValueError for an unknown type."""
    return _DEFINITIONS_BY_TYPE[DetailType(detail_type)]


def sanitize_normalized(value: float) -> float:
    """Finite value clamped to 0..1; NaN and infinities become 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def thickness_to_font_size(thickness: float) -> int:
    return round(thickness * 6)


def wall_label(number: int) -> str:
    return f"Ściana {number}"


def distance_point_to_segment(
    px: float, py: float, x1: float, y1: float, x2: float, y2: float
) -> float:
    dx = x2 - x1
    dy = y2 - y1
    if dx == 0 and dy == 0:
        return math.hypot(px - x1, py - y1)
    t = ((px - x1) * dx + (py - y1) * dy) / (dx * dx + dy * dy)
    t = min(max(t, 0.0), 1.0)
    return math.hypot(px - (x1 + t * dx), py - (y1 + t * dy))


def _approximate_text_width(text: str, font_size: float) -> float:
    return max(len(text) * font_size * 0.6, font_size)


@dataclass(frozen=True)
class NormalizedPoint:
    x: float
    y: float

    @classmethod
    def of(cls, x: float, y: float) -> "NormalizedPoint":
        return cls(sanitize_normalized(x), sanitize_normalized(y))

    def denormalize(self, width: float, height: float) -> Tuple[float, float]:
        return self.x * width, self.y * height

    def moved(self, dx: float, dy: float) -> "NormalizedPoint":
        return NormalizedPoint.of(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class FreehandOperation:
    thickness: float
    points: Tuple[NormalizedPoint, ...]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    type: OperationType = OperationType.FREEHAND


@dataclass(frozen=True)
class LineOperation:
    thickness: float
    start: NormalizedPoint
    end: NormalizedPoint
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    type: OperationType = OperationType.LINE


@dataclass(frozen=True)
class TextOperation:
    position: NormalizedPoint
    text: str
    size: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    type: OperationType = OperationType.TEXT


@dataclass(frozen=True)
class DimensionDetail:
    """An installation point on a wall; ``values`` maps field name -> text."""

    type: DetailType
    values: Dict[str, str]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class DimensionOperation:
    start: NormalizedPoint
    end: NormalizedPoint
    label: int = 0
    measurement: str = ""
    details: Tuple[DimensionDetail, ...] = ()
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    type: OperationType = OperationType.DIMENSION


Operation = Union[FreehandOperation, LineOperation, TextOperation, DimensionOperation]
ChangeCallback = Callable[[List[Operation]], None]


def renumber_dimensions(operations: Iterable[Operation]) -> List[Operation]:
    """Number dimension strokes 1..n in list order."""
    result = []
    number = 1
    for operation in operations:
        if isinstance(operation, DimensionOperation):
            if operation.label != number:
                operation = replace(operation, label=number)
            number += 1
        result.append(operation)
    return result


def translate_operation(operation: Operation, dx: float, dy: float) -> Operation:
    """Shift every point of ``operation``; points stay within 0..1."""
    if isinstance(operation, FreehandOperation):
        return replace(operation, points=tuple(p.moved(dx, dy) for p in operation.points))
    if isinstance(operation, (LineOperation, DimensionOperation)):
        return replace(operation, start=operation.start.moved(dx, dy), end=operation.end.moved(dx, dy))
    return replace(operation, position=operation.position.moved(dx, dy))


def _point_dict(point: NormalizedPoint) -> dict:
    return {"x": point.x, "y": point.y}


def operation_to_dict(operation: Operation) -> dict:
    data = {"id": operation.id, "type": operation.type.value}
    if isinstance(operation, FreehandOperation):
        data["thickness"] = operation.thickness
        data["points"] = [_point_dict(p) for p in operation.points]
    elif isinstance(operation, LineOperation):
        data["thickness"] = operation.thickness
        data["start"] = _point_dict(operation.start)
        data["end"] = _point_dict(operation.end)
    elif isinstance(operation, DimensionOperation):
        data["start"] = _point_dict(operation.start)
        data["end"] = _point_dict(operation.end)
        data["label"] = operation.label
        data["measurement"] = operation.measurement
        data["details"] = [
            {"id": d.id, "type": d.type.value, "values": dict(d.values)}
            for d in operation.details
        ]
    else:
        data["position"] = _point_dict(operation.position)
        data["text"] = operation.text
        data["size"] = operation.size
    return data


# -- stored sketches ----------------------------------------------------


def _finite_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _positive_or(value: Any, default: float) -> float:
    number = _finite_number(value)
    return number if number is not None and number > 0 else default


def _stored_point(value: Any) -> Optional[NormalizedPoint]:
    if not isinstance(value, dict):
        return None
    x = _finite_number(value.get("x"))
    y = _finite_number(value.get("y"))
    if x is None or y is None:
        return None
    return NormalizedPoint.of(x, y)


def _stored_detail(value: Any) -> Optional[DimensionDetail]:
    if not isinstance(value, dict) or not isinstance(value.get("id"), str):
        return None
    try:
        definition = detail_definition(value.get("type"))
    except ValueError:
        return None
    raw_values = value.get("values") if isinstance(value.get("values"), dict) else {}
    values = {}
    for name in definition.fields:
        raw = raw_values.get(name, "")
        values[name] = raw if isinstance(raw, str) else ""
    return DimensionDetail(type=definition.type, values=values, id=value["id"])


def operation_from_dict(value: Any) -> Optional[Operation]:
    """Rebuild an operation from its stored form, or None if it is unusable.

    Missing or invalid thickness falls back to 2 and text size to 16;
    dimension labels are left for ``renumber_dimensions``.
    """
    if not isinstance(value, dict) or not isinstance(value.get("id"), str):
        return None
    op_id = value["id"]
    kind = value.get("type")

    if kind == OperationType.FREEHAND.value:
        raw_points = value.get("points") if isinstance(value.get("points"), list) else []
        points = tuple(p for p in (_stored_point(raw) for raw in raw_points) if p is not None)
        if not points:
            return None
        return FreehandOperation(
            thickness=_positive_or(value.get("thickness"), STORED_THICKNESS),
            points=points,
            id=op_id,
        )

    if kind in (OperationType.LINE.value, OperationType.DIMENSION.value):
        start = _stored_point(value.get("start"))
        end = _stored_point(value.get("end"))
        if start is None or end is None:
            return None
        if kind == OperationType.LINE.value:
            return LineOperation(
                thickness=_positive_or(value.get("thickness"), STORED_THICKNESS),
                start=start,
                end=end,
                id=op_id,
            )
        measurement = value.get("measurement")
        raw_details = value.get("details") if isinstance(value.get("details"), list) else []
        return DimensionOperation(
            start=start,
            end=end,
            measurement=measurement if isinstance(measurement, str) else "",
            details=tuple(d for d in (_stored_detail(raw) for raw in raw_details) if d is not None),
            id=op_id,
        )

    if kind == OperationType.TEXT.value:
        position = _stored_point(value.get("position"))
        if position is None or not isinstance(value.get("text"), str):
            return None
        return TextOperation(
            position=position,
            text=value["text"],
            size=_positive_or(value.get("size"), STORED_TEXT_SIZE),
            id=op_id,
        )

    return None


def sanitize_sketch_value(value: Any) -> List[Operation]:
    """Usable operations of a stored ``{"operations": [...]}`` sketch, renumbered."""
    if not isinstance(value, dict) or not isinstance(value.get("operations"), list):
        return []
    operations = (operation_from_dict(raw) for raw in value["operations"])
    return renumber_dimensions(op for op in operations if op is not None)


# -- hit testing --------------------------------------------------------


def _label_box_contains(
    px: float, py: float, center_x: float, center_y: float, text: str
) -> bool:
    half_width = (
        _approximate_text_width(text, DIMENSION_LABEL_FONT_SIZE) + DIMENSION_LABEL_PADDING * 2
    ) / 2
    half_height = (DIMENSION_LABEL_FONT_SIZE + DIMENSION_LABEL_PADDING * 2) / 2
    return abs(px - center_x) <= half_width and abs(py - center_y) <= half_height


def is_point_near(operation: Operation, px: float, py: float, width: float, height: float) -> bool:
    """Whether surface pixel (px, py) touches ``operation`` drawn at width x height."""
    if isinstance(operation, FreehandOperation):
        points = [p.denormalize(width, height) for p in operation.points]
        if len(points) == 1:
            (x, y), = points
            return math.hypot(px - x, py - y) <= HIT_TEST_THRESHOLD_PX
        return any(
            distance_point_to_segment(px, py, x1, y1, x2, y2) <= HIT_TEST_THRESHOLD_PX
            for (x1, y1), (x2, y2) in zip(points, points[1:])
        )

    if isinstance(operation, (LineOperation, DimensionOperation)):
        x1, y1 = operation.start.denormalize(width, height)
        x2, y2 = operation.end.denormalize(width, height)
        if distance_point_to_segment(px, py, x1, y1, x2, y2) <= HIT_TEST_THRESHOLD_PX:
            return True
        if isinstance(operation, DimensionOperation):
            return _label_box_contains(
                px, py, (x1 + x2) / 2, (y1 + y2) / 2, wall_label(operation.label)
            )
        return False

    x, y = operation.position.denormalize(width, height)
    text_width = _approximate_text_width(operation.text, operation.size)
    return (
        x - TEXT_HIT_PADDING <= px <= x + text_width + TEXT_HIT_PADDING
        and y - TEXT_HIT_PADDING <= py <= y + operation.size + TEXT_HIT_PADDING
    )


class SketchPad:
    """Ordered list of committed strokes with undo/redo.

    ``on_change`` is called with a copy of the operation list after every
    change (commit, undo, redo, edit, move, delete, clear).
    """

    def __init__(
        self,
        on_change: Optional[ChangeCallback] = None,
        operations: Optional[Iterable[Operation]] = None,
    ):
        self._operations: List[Operation] = renumber_dimensions(operations or [])
        self._redo: List[Operation] = []
        self._on_change = on_change

    @property
    def operations(self) -> List[Operation]:
        return list(self._operations)

    @property
    def can_undo(self) -> bool:
        return bool(self._operations)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def _apply(self, operations: List[Operation], preserve_redo: bool = False) -> None:
        self._operations = renumber_dimensions(operations)
        if not preserve_redo:
            self._redo = []
        if self._on_change is not None:
            self._on_change(self.operations)

    def get(self, operation_id: str) -> Operation:
        for operation in self._operations:
            if operation.id == operation_id:
                return operation
        raise KeyError(operation_id)

    def _replace(self, operation: Operation) -> Operation:
        self._apply([operation if op.id == operation.id else op for op in self._operations])
        return self.get(operation.id)

    def _dimension(self, operation_id: str) -> DimensionOperation:
        operation = self.get(operation_id)
        if not isinstance(operation, DimensionOperation):
            raise ValueError(f"Operation {operation_id} is not a wall dimension")
        return operation

    # -- commits --------------------------------------------------------

    def commit_freehand(
        self, points: Sequence[Tuple[float, float]], thickness: float = DEFAULT_THICKNESS
    ) -> Optional[FreehandOperation]:
        """Commit a freehand path; fewer than two points is not a stroke."""
        if len(points) < 2:
            return None
        operation = FreehandOperation(
            thickness=thickness,
            points=tuple(NormalizedPoint.of(x, y) for x, y in points),
        )
        self._apply(self._operations + [operation])
        return operation

    def commit_line(
        self,
        start: Tuple[float, float],
        end: Tuple[float, float],
        thickness: float = DEFAULT_THICKNESS,
    ) -> Optional[LineOperation]:
        """Commit a straight line; a zero-length line is discarded."""
        start_point = NormalizedPoint.of(*start)
        end_point = NormalizedPoint.of(*end)
        if start_point == end_point:
            return None
        operation = LineOperation(thickness=thickness, start=start_point, end=end_point)
        self._apply(self._operations + [operation])
        return operation

    def commit_text(
        self,
        position: Tuple[float, float],
        text: str,
        size: Optional[float] = None,
    ) -> Optional[TextOperation]:
        text = (text or "").strip()
        if not text:
            return None
        operation = TextOperation(
            position=NormalizedPoint.of(*position),
            text=text,
            size=size if size is not None else thickness_to_font_size(DEFAULT_THICKNESS),
        )
        self._apply(self._operations + [operation])
        return operation

    def commit_dimension(
        self, start: Tuple[float, float], end: Tuple[float, float]
    ) -> Optional[DimensionOperation]:
        """Commit a wall dimension numbered after the existing ones; zero length is discarded."""
        start_point = NormalizedPoint.of(*start)
        end_point = NormalizedPoint.of(*end)
        if start_point == end_point:
            return None
        operation = DimensionOperation(start=start_point, end=end_point)
        self._apply(self._operations + [operation])
        return self.get(operation.id)

    # -- editing --------------------------------------------------------

    def translate(self, operation_id: str, dx: float, dy: float) -> Operation:
        """Move an operation by a normalized offset."""
        operation = self.get(operation_id)
        if dx == 0 and dy == 0:
            return operation
        return self._replace(translate_operation(operation, dx, dy))

    def set_measurement(self, operation_id: str, measurement: str) -> DimensionOperation:
        dimension = self._dimension(operation_id)
        if dimension.measurement == measurement:
            return dimension
        return self._replace(replace(dimension, measurement=measurement))

    def add_detail(self, operation_id: str, detail_type: Union[DetailType, str]) -> DimensionDetail:
        """Attach a detail with every field of its type set to an empty value."""
        dimension = self._dimension(operation_id)
        definition = detail_definition(detail_type)
        detail = DimensionDetail(
            type=definition.type, values={name: "" for name in definition.fields}
        )
        self._replace(replace(dimension, details=dimension.details + (detail,)))
        return detail

    def remove_detail(self, operation_id: str, detail_id: str) -> None:
        dimension = self._dimension(operation_id)
        remaining = tuple(d for d in dimension.details if d.id != detail_id)
        if len(remaining) == len(dimension.details):
            raise KeyError(detail_id)
        self._replace(replace(dimension, details=remaining))

    def set_detail_value(
        self, operation_id: str, detail_id: str, field_name: str, value: str
    ) -> DimensionDetail:
        """Set one measurement of a detail; the field must belong to its type."""
        dimension = self._dimension(operation_id)
        for index, detail in enumerate(dimension.details):
            if detail.id == detail_id:
                break
        else:
            raise KeyError(detail_id)

        definition = detail_definition(detail.type)
        if field_name not in definition.fields:
            raise ValueError(f"{definition.label} has no field {field_name}")
        if detail.values.get(field_name, "") == value:
            return detail

        updated = replace(detail, values={**detail.values, field_name: value})
        details = dimension.details[:index] + (updated,) + dimension.details[index + 1:]
        self._replace(replace(dimension, details=details))
        return updated

    def hit_test(self, x: float, y: float, width: float, height: float) -> Optional[Operation]:
        """Topmost operation under normalized point (x, y) on a width x height surface."""
        if width <= 0 or height <= 0:
            raise ValueError("Surface dimensions must be positive")
        px, py = NormalizedPoint.of(x, y).denormalize(width, height)
        for operation in reversed(self._operations):
            if is_point_near(operation, px, py, width, height):
                return operation
        return None

    # -- history --------------------------------------------------------

    def undo(self) -> Optional[Operation]:
        """Remove the most recently committed operation."""
        if not self._operations:
            return None
        last = self._operations[-1]
        self._redo.append(last)
        self._apply(self._operations[:-1], preserve_redo=True)
        return last

    def redo(self) -> Optional[Operation]:
        if not self._redo:
            return None
        operation = self._redo.pop()
        self._apply(self._operations + [operation], preserve_redo=True)
        return self._operations[-1]

    def delete(self, operation_id: str) -> bool:
        remaining = [op for op in self._operations if op.id != operation_id]
        if len(remaining) == len(self._operations):
            return False
        self._apply(remaining)
        return True

    def clear(self) -> None:
        if not self._operations:
            return
        self._apply([])

    # -- replay ---------------------------------------------------------

    def render(self, width: float, height: float) -> List[dict]:
        """Replay every operation, in order, onto a ``width`` x ``height`` surface.

        Coordinates are denormalized per axis; stroke thickness and text size
        scale with ``width / REFERENCE_WIDTH``.
        """
        if width <= 0 or height <= 0:
            raise ValueError("Surface dimensions must be positive")
        factor = width / REFERENCE_WIDTH
        commands = []
        for operation in self._operations:
            if isinstance(operation, FreehandOperation):
                commands.append(
                    {
                        "kind": "path",
                        "points": [p.denormalize(width, height) for p in operation.points],
                        "stroke_width": operation.thickness * factor,
                    }
                )
            elif isinstance(operation, LineOperation):
                commands.append(
                    {
                        "kind": "line",
                        "start": operation.start.denormalize(width, height),
                        "end": operation.end.denormalize(width, height),
                        "stroke_width": operation.thickness * factor,
                    }
                )
            elif isinstance(operation, DimensionOperation):
                commands.append(
                    {
                        "kind": "dimension",
                        "start": operation.start.denormalize(width, height),
                        "end": operation.end.denormalize(width, height),
                        "stroke_width": DIMENSION_LINE_WIDTH * factor,
                        "label": wall_label(operation.label),
                        "font_size": DIMENSION_LABEL_FONT_SIZE * factor,
                    }
                )
            else:
                commands.append(
                    {
                        "kind": "text",
                        "position": operation.position.denormalize(width, height),
                        "text": operation.text,
                        "font_size": operation.size * factor,
                    }
                )
        return commands

    def render_svg(self, width: int, height: int) -> str:
        svg = [
            f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'<rect x="0" y="0" width="{width}" height="{height}" fill="{BACKGROUND_COLOR}"/>',
        ]

        for command in self.render(width, height):
            if command["kind"] == "path":
                points = " ".join(f"{x:.2f},{y:.2f}" for x, y in command["points"])
                svg.append(
                    f'<polyline points="{points}" fill="none" stroke="{PRIMARY_STROKE_COLOR}" '
                    f'stroke-width="{command["stroke_width"]:.2f}" '
                    f'stroke-linecap="round" stroke-linejoin="round"/>'
                )
            elif command["kind"] == "line":
                (x1, y1), (x2, y2) = command["start"], command["end"]
                svg.append(
                    f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}" '
                    f'stroke="{PRIMARY_STROKE_COLOR}" '
                    f'stroke-width="{command["stroke_width"]:.2f}" stroke-linecap="round"/>'
                )
            elif command["kind"] == "dimension":
                (x1, y1), (x2, y2) = command["start"], command["end"]
                cx, cy = (x1 + x2) / 2, (y1 + y2) / 2
                font_size = command["font_size"]
                padding = DIMENSION_LABEL_PADDING * width / REFERENCE_WIDTH
                box_width = _approximate_text_width(command["label"], font_size) + padding * 2
                box_height = font_size + padding * 2
                svg.append(
                    f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}" '
                    f'stroke="{DIMENSION_STROKE_COLOR}" '
                    f'stroke-width="{command["stroke_width"]:.2f}" stroke-linecap="round"/>'
                )
                svg.append(
                    f'<rect x="{cx - box_width / 2:.2f}" y="{cy - box_height / 2:.2f}" '
                    f'width="{box_width:.2f}" height="{box_height:.2f}" '
                    f'fill="{BACKGROUND_COLOR}" fill-opacity="0.9"/>'
                )
                svg.append(
                    f'<text x="{cx:.2f}" y="{cy:.2f}" text-anchor="middle" '
                    f'dominant-baseline="middle" font-family="Arial" '
                    f'font-size="{font_size:.2f}" fill="{DIMENSION_STROKE_COLOR}">'
                    f'{escape(command["label"])}</text>'
                )
            else:
                x, y = command["position"]
                svg.append(
                    f'<text x="{x:.2f}" y="{y:.2f}" dominant-baseline="hanging" '
                    f'font-family="Arial" font-size="{command["font_size"]:.2f}" '
                    f'fill="{PRIMARY_STROKE_COLOR}">{escape(command["text"])}</text>'
                )

        svg.append("</svg>")
        return "\n".join(svg)

    def to_dict(self) -> dict:
        return {
            "operations": [operation_to_dict(op) for op in self._operations],
            "can_undo": self.can_undo,
            "can_redo": self.can_redo,
        }
