"""Session state for the gis-viewport MCP server.

Holds the live viewport (center, scale, draw mode, canvas size), its
back/forward history and the configuration both were built from.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gis_viewport.core.history import CenterHistory
from gis_viewport.core.projection import ViewportProjection
from gis_viewport.core.scale import MPP_MAX, MPP_MIN, Scale
from gis_viewport.models import DrawMode, GeoCoord, GeocodeCandidate


class ViewportConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    default_lat: float = Field(default=0.0, ge=-90, le=90)
    default_lon: float = Field(default=0.0, ge=-180, le=180)
    default_x_mpp: float = Field(default=4.0, ge=MPP_MIN, le=MPP_MAX)
    default_y_mpp: float = Field(default=4.0, ge=MPP_MIN, le=MPP_MAX)
    draw_mode: DrawMode = DrawMode.MERCATOR
    canvas_width: int = Field(default=800, gt=0)
    canvas_height: int = Field(default=600, gt=0)
    history_size: int = Field(default=20, ge=1)
    history_radius_m: float = Field(default=500.0, ge=0)
    fit_initial_mpp: float = Field(default=1.0, ge=MPP_MIN, le=MPP_MAX)

    @field_validator("draw_mode", mode="before")
    @classmethod
    def parse_draw_mode(cls, v):
        if isinstance(v, str) and not isinstance(v, DrawMode):
            return DrawMode.from_id(v)
        return v

    def build_projection(self) -> ViewportProjection:
        return ViewportProjection(
            center=GeoCoord.from_lat_lon(self.default_lat, self.default_lon),
            scale=Scale(x_mpp=self.default_x_mpp, y_mpp=self.default_y_mpp),
            draw_mode=self.draw_mode,
            width=self.canvas_width,
            height=self.canvas_height,
        )

    def build_history(self) -> CenterHistory:
        return CenterHistory(max_items=self.history_size, coalesce_radius_m=self.history_radius_m)


class SessionState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: ViewportConfig = Field(default_factory=ViewportConfig)
    projection: Optional[ViewportProjection] = None
    history: Optional[CenterHistory] = None
    pending_geocode_candidates: list[GeocodeCandidate] = []

    def model_post_init(self, __context) -> None:
        if self.projection is None:
            self.projection = self.config.build_projection()
        if self.history is None:
            self.history = self.config.build_history()

    def reset(self, config: Optional[ViewportConfig] = None) -> None:
        """Rebuild the viewport and an empty history from ``config`` (or the current one)."""
        if config is not None:
            self.config = config
        self.projection = self.config.build_projection()
        self.history = self.config.build_history()
        self.pending_geocode_candidates = []

    def summary(self) -> dict:
        p = self.projection
        ll = p.center.as_lat_lon()
        view = {
            "center": {"lat": ll.lat, "lon": ll.lon},
            "draw_mode": p.draw_mode.value,
            "coord_mode": p.mode.value,
            "scale": {"x_mpp": p.scale.x_mpp, "y_mpp": p.scale.y_mpp, "label": p.scale_label()},
            "canvas": {"width": p.width, "height": p.height},
        }
        if p.center.utm is not None:
            view["utm"] = {
                "center": str(p.center.utm),
                "zone_width_m": round(p.zone_width_m, 1),
                "single_zone": p.is_single_zone,
            }
        return {
            "view": view,
            "history": {
                "size": self.history.size(),
                "max_items": self.history.max_items,
                "radius_m": self.history.coalesce_radius_m,
                "back_available": self.history.back_available(),
                "forward_available": self.history.forward_available(),
                "positions": [
                    {"lat": c.as_lat_lon().lat, "lon": c.as_lat_lon().lon}
                    for c in self.history.items()
                ],
            },
        }


# Global session state, one per MCP server process
state = SessionState()
