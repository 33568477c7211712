"""
2D kitchen layout board.

Cabinets are placed on a bounded board measured in pixels, with sizes given
in centimetres and converted with ``SCALE``. Positions snap to a 5 cm grid
while dragging and are always clamped so the cabinet stays on the board.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional
import math
import uuid

SCALE = 2  # px per cm
GRID_SIZE_CM = 5
GRID_SIZE = GRID_SIZE_CM * SCALE
BOARD_WIDTH = 900  # px
BOARD_HEIGHT = 520  # px

PLACEMENT_START = 24
PLACEMENT_STEP = 18
PLACEMENT_CYCLE = 6


@dataclass(frozen=True)
class CabinetDefinition:
    id: str
    name: str
    width: int  # cm
    depth: int  # cm
    description: Optional[str] = None


@dataclass(frozen=True)
class CabinetGroup:
    title: str
    items: List[CabinetDefinition]


CABINET_GROUPS = [
    CabinetGroup(
        "Szafki dolne",
        [
            CabinetDefinition("base30", "Dolna 30 × 60 cm", 30, 60, "Wąska szafka cargo"),
            CabinetDefinition("base40", "Dolna 40 × 60 cm", 40, 60),
            CabinetDefinition("base45", "Dolna 45 × 60 cm", 45, 60),
            CabinetDefinition("base50", "Dolna 50 × 60 cm", 50, 60),
            CabinetDefinition("base60", "Dolna 60 × 60 cm", 60, 60),
            CabinetDefinition("base80", "Dolna 80 × 60 cm", 80, 60),
            CabinetDefinition("sink80", "Szafka zlewozmywakowa 80 × 60 cm", 80, 60),
            CabinetDefinition("corner", "Narożna 90 × 90 cm", 90, 90, "Szafka typu L"),
            CabinetDefinition("drawer90", "Szuflady 90 × 60 cm", 90, 60),
        ],
    ),
    CabinetGroup(
        "Szafki górne",
        [
            CabinetDefinition("wall40", "Górna 40 × 35 cm", 40, 35),
            CabinetDefinition("wall60", "Górna 60 × 35 cm", 60, 35),
            CabinetDefinition("wall80", "Górna 80 × 35 cm", 80, 35),
            CabinetDefinition("wall100", "Górna 100 × 35 cm", 100, 35),
        ],
    ),
    CabinetGroup(
        "Słupki i AGD",
        [
            CabinetDefinition("tall60", "Słupek 60 × 60 cm", 60, 60, "Wysoka zabudowa"),
            CabinetDefinition("fridge", "Lodówka 60 × 70 cm", 60, 70, "Standardowa lodówka"),
            CabinetDefinition("fridgeSide", "Lodówka side-by-side 90 × 70 cm", 90, 70),
            CabinetDefinition("island120", "Wyspa 120 × 90 cm", 120, 90),
            CabinetDefinition("table140", "Stół 140 × 90 cm", 140, 90),
        ],
    ),
]

CABINET_CATALOG: Dict[str, CabinetDefinition] = {
    item.id: item for group in CABINET_GROUPS for item in group.items
}


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def snap(value: float, grid: int = GRID_SIZE) -> float:
    return math.floor(value / grid + 0.5) * grid


@dataclass
class CabinetInstance:
    id: str
    name: str
    width: int  # cm
    depth: int  # cm
    x: float  # px on board
    y: float  # px on board

    @property
    def pixel_width(self) -> float:
        return self.width * SCALE

    @property
    def pixel_height(self) -> float:
        return self.depth * SCALE


@dataclass
class LayoutBoard:
    """In-memory planning state of one 2D session."""

    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT
    elements: List[CabinetInstance] = field(default_factory=list)
    selected_id: Optional[str] = None
    dragging_id: Optional[str] = None
    pointer_offset_x: float = 0.0
    pointer_offset_y: float = 0.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Board dimensions must be positive")

    @property
    def dimensions_cm(self) -> Dict[str, int]:
        return {
            "width": round(self.width / SCALE),
            "height": round(self.height / SCALE),
        }

    @property
    def selected(self) -> Optional[CabinetInstance]:
        return self._find(self.selected_id) if self.selected_id else None

    def _find(self, element_id: str) -> Optional[CabinetInstance]:
        return next((e for e in self.elements if e.id == element_id), None)

    def _get(self, element_id: str) -> CabinetInstance:
        element = self._find(element_id)
        if element is None:
            raise KeyError(element_id)
        return element

    def _max_x(self, element: CabinetInstance) -> float:
        return max(0, self.width - element.pixel_width)

    def _max_y(self, element: CabinetInstance) -> float:
        return max(0, self.height - element.pixel_height)

    def add(self, definition: CabinetDefinition) -> CabinetInstance:
        """Place a new cabinet near the top-left corner and select it."""
        offset = (len(self.elements) % PLACEMENT_CYCLE) * PLACEMENT_STEP
        element = CabinetInstance(
            id=str(uuid.uuid4()),
            name=definition.name,
            width=definition.width,
            depth=definition.depth,
            x=0,
            y=0,
        )
        element.x = clamp(PLACEMENT_START + offset, 0, self._max_x(element))
        element.y = clamp(PLACEMENT_START + offset, 0, self._max_y(element))
        self.elements.append(element)
        self.selected_id = element.id
        return element

    def start_drag(self, element_id: str, pointer_x: float, pointer_y: float) -> CabinetInstance:
        """Grab a cabinet; the pointer's offset inside it is kept for the whole drag."""
        element = self._get(element_id)
        self.pointer_offset_x = pointer_x - element.x
        self.pointer_offset_y = pointer_y - element.y
        self.selected_id = element.id
        self.dragging_id = element.id
        return element

    def drag_to(self, pointer_x: float, pointer_y: float) -> Optional[CabinetInstance]:
        """Move the dragged cabinet under the pointer, snapped and clamped."""
        if not self.dragging_id:
            return None
        element = self._find(self.dragging_id)
        if element is None:
            self.dragging_id = None
            return None

        raw_x = pointer_x - self.pointer_offset_x
        raw_y = pointer_y - self.pointer_offset_y
        element.x = clamp(snap(raw_x), 0, self._max_x(element))
        element.y = clamp(snap(raw_y), 0, self._max_y(element))
        return element

    def end_drag(self) -> None:
        self.dragging_id = None

    def rotate_selected(self) -> Optional[CabinetInstance]:
        """Swap width and depth of the selected cabinet."""
        element = self.selected
        if element is None:
            return None
        element.width, element.depth = element.depth, element.width
        element.x = clamp(element.x, 0, self._max_x(element))
        element.y = clamp(element.y, 0, self._max_y(element))
        return element

    def remove_selected(self) -> Optional[CabinetInstance]:
        element = self.selected
        if element is None:
            return None
        self.elements = [e for e in self.elements if e.id != element.id]
        if self.dragging_id == element.id:
            self.dragging_id = None
        self.selected_id = None
        return element

    def clear(self) -> None:
        self.elements = []
        self.selected_id = None
        self.dragging_id = None

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "dimensions_cm": self.dimensions_cm,
            "grid_size": GRID_SIZE,
            "scale": SCALE,
            "elements": [asdict(e) for e in self.elements],
            "selected_id": self.selected_id,
            "dragging_id": self.dragging_id,
        }
