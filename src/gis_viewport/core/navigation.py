"""Center changes that keep a viewport and its history in step."""

from ..models import GeoCoord, LatLonBBox
from .bbox import DEFAULT_FIT_SCALE, zoom_to_show_bbox
from .history import CenterHistory
from .projection import ViewportProjection


def set_center(
    projection: ViewportProjection,
    history: CenterHistory,
    coord: GeoCoord,
    save_position: bool = True,
) -> None:
    """Move the view to ``coord``.

    Only explicit jumps should be saved; pans and zoom repositioning pass
    save_position=False.
    """
    projection.set_center(coord)
    if save_position:
        history.save_current(projection.center)


def go_back(projection: ViewportProjection, history: CenterHistory) -> bool:
    if not history.go_back(projection.center):
        return False
    projection.set_center(history.current())
    return True


def go_forward(projection: ViewportProjection, history: CenterHistory) -> bool:
    if not history.go_forward():
        return False
    projection.set_center(history.current())
    return True


def fit_bbox(
    projection: ViewportProjection,
    history: CenterHistory,
    target: LatLonBBox,
    initial_mpp: float = DEFAULT_FIT_SCALE,
    save_position: bool = True,
) -> bool:
    """Zoom to show ``target`` and record the new center. Returns False if it could not be fully framed."""
    fitted = zoom_to_show_bbox(projection, target, initial_mpp)
    if save_position:
        history.save_current(projection.center)
    return fitted
