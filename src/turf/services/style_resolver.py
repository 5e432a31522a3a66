from src.turf.domain.style import ShapeStyle
from src.turf.domain.territory import Territory, TerritoryStatus

SELECTED_WEIGHT = 4
DEFAULT_WEIGHT = 2
STROKE_OPACITY = 0.8
COMPLETED_FILL_OPACITY = 0.6
DEFAULT_FILL_OPACITY = 0.3
INACTIVE_DASH = "5, 5"


def resolve_style(status: TerritoryStatus, is_selected: bool, color: str) -> ShapeStyle:
    return ShapeStyle(
        color=color,
        weight=SELECTED_WEIGHT if is_selected else DEFAULT_WEIGHT,
        opacity=STROKE_OPACITY,
        fill_opacity=COMPLETED_FILL_OPACITY if status == TerritoryStatus.COMPLETED else DEFAULT_FILL_OPACITY,
        dash_array=INACTIVE_DASH if status == TerritoryStatus.INACTIVE else None,
    )


class TerritoryStyleResolver:
    """
    Paint for a territory shape. Pure: depends only on status, selection and color.
    """

    def style_for(self, territory: Territory, is_selected: bool) -> ShapeStyle:
        return resolve_style(territory.status, is_selected, territory.color)
