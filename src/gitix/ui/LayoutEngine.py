# gitix/ui/LayoutEngine.py
"""LayoutEngine.py
========================
Pure screen-geometry computation for gitix.

The screen is split into four named regions:

    +-----------+-----------+
    |   menu    |  submenu  |   top half (rows // 2)
    +-----------+-----------+
    |        action         |   remainder minus the status bar
    +-----------------------+
    |        status         |   exactly one row
    +-----------------------+

`compute_layout` is recalculated from scratch on every render and every
resize. Nothing is cached, so a stale layout can never be drawn.
"""

from dataclasses import dataclass, field


MIN_WIDTH = 40
MIN_HEIGHT = 10

REGION_NAMES = ("menu", "submenu", "action", "status")


@dataclass(frozen=True)
class Region:
    row: int
    col: int
    width: int
    height: int

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class LayoutGeometry:
    width: int
    height: int
    regions: dict[str, Region] = field(default_factory=dict)
    min_width: int = MIN_WIDTH
    min_height: int = MIN_HEIGHT

    @property
    def too_small(self) -> bool:
        return self.width < self.min_width or self.height < self.min_height

    def region(self, name: str) -> Region:
        return self.regions[name]


def compute_layout(
    width: int, height: int, min_width: int = MIN_WIDTH, min_height: int = MIN_HEIGHT
) -> LayoutGeometry:
    """Splits a `width` x `height` terminal into the four named regions.

    Degenerate sizes never produce negative geometry: every dimension is
    clamped to zero, and the status bar shrinks to zero rows on a zero-row
    terminal.
    """
    width = max(0, int(width))
    height = max(0, int(height))

    top_height = height // 2
    status_height = min(1, height)
    action_height = max(0, height - top_height - status_height)

    menu_width = width // 2
    submenu_width = width - menu_width

    regions = {
        "menu": Region(0, 0, menu_width, top_height),
        "submenu": Region(0, menu_width, submenu_width, top_height),
        "action": Region(top_height, 0, width, action_height),
        "status": Region(max(0, height - status_height), 0, width, status_height),
    }
    return LayoutGeometry(width, height, regions, min_width, min_height)
