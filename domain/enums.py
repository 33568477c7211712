"""
Domain enums for kuchnie.ai.
Contains the enumeration types shared by schemas and domain objects.
"""

import enum


class AspectRatio(str, enum.Enum):
    """Aspect ratios accepted by the image generation API"""

    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    TALL = "9:16"
    WIDE = "16:9"


class OperationType(str, enum.Enum):
    """Sketch surface operation kinds"""

    FREEHAND = "freehand"
    LINE = "line"
    TEXT = "text"
    DIMENSION = "dimension"


class DetailType(str, enum.Enum):
    """Installation points that can be attached to a wall dimension"""

    WINDOW = "window"
    RADIATOR = "radiator"
    WATER = "water"
    POWER_CABLE = "powerCable"
    SOCKET = "socket"
    VENTILATION = "ventilation"


class DragPhase(str, enum.Enum):
    """Pointer phases of a drag gesture on the 2D planner"""

    START = "start"
    MOVE = "move"
    END = "end"
