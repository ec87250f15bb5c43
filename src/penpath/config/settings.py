"""Configuration settings for penpath."""

from pathlib import Path

from pydantic import BaseModel, Field


class ThresholdConfig(BaseModel):
    """Interaction thresholds in screen pixels (or milliseconds).

    Pixel values are divided by the current zoom level before they are
    compared against shape-local distances, so hit targets keep a constant
    on-screen size.
    """

    anchor_point: float = Field(
        default=8.0,
        gt=0.0,
        description="Anchor point hit radius",
    )
    control_point: float = Field(
        default=8.0,
        gt=0.0,
        description="Control point hit radius",
    )
    segment_hover: float = Field(
        default=8.0,
        gt=0.0,
        description="Distance from a segment that shows the insertion preview",
    )
    path_segment: float = Field(
        default=10.0,
        gt=0.0,
        description="Distance from a segment that counts as a segment click",
    )
    segment_anchor_exclusion: float = Field(
        default=12.0,
        ge=0.0,
        description="No segment hover this close to an anchor",
    )
    snap_to_start: float = Field(
        default=12.0,
        gt=0.0,
        description="Distance to the first point that enters the snap zone",
    )
    snap_release: float = Field(
        default=15.0,
        gt=0.0,
        description="Distance from the snap origin that releases the snap",
    )
    close_curve: float = Field(
        default=10.0,
        gt=0.0,
        description="Direct-click radius around the first point that closes the curve",
    )
    corner_point_drag: float = Field(
        default=3.0,
        ge=0.0,
        description="Drag distance before a new point grows handles",
    )
    double_click_ms: float = Field(
        default=300.0,
        gt=0.0,
        description="Maximum delay between clicks of a double click",
    )
    double_click_distance: float = Field(
        default=5.0,
        gt=0.0,
        description="Maximum per-axis movement between clicks of a double click",
    )
    exit_grace_ms: float = Field(
        default=100.0,
        ge=0.0,
        description="Delay before an off-shape click leaves edit mode",
    )

    def scaled(self, pixels: float, zoom: float) -> float:
        """Convert a screen-pixel threshold to shape-local units.

        Args:
            pixels: Threshold in screen pixels
            zoom: Current zoom level (non-positive values are treated as 1)

        Returns:
            Threshold in local units
        """
        if zoom <= 0:
            zoom = 1.0
        return pixels / zoom


class HandleConfig(BaseModel):
    """Configuration for generated control points."""

    default_control_offset: float = Field(
        default=100.0,
        gt=0.0,
        description="Base distance for synthesized control points",
    )
    control_point_scale: float = Field(
        default=0.3,
        gt=0.0,
        le=1.0,
        description="Scale applied to the base distance when converting to a smooth point",
    )
    split_handle_fraction: float = Field(
        default=1.0 / 3.0,
        gt=0.0,
        le=1.0,
        description="Handle length of a split point as a fraction of the original segment length",
    )

    @property
    def control_offset(self) -> float:
        """Distance of synthesized control points from their anchor."""
        return self.default_control_offset * self.control_point_scale


class BoundsConfig(BaseModel):
    """Configuration for bounding boxes and renormalization."""

    creation_padding: float = Field(
        default=10.0,
        ge=0.0,
        description="Padding around the stable-origin box while drawing",
    )
    single_point_padding: float = Field(
        default=50.0,
        ge=0.0,
        description="Padding around a lone point",
    )
    change_threshold: float = Field(
        default=0.01,
        gt=0.0,
        description="Minimum change in size or origin that triggers renormalization",
    )
    min_extent: float = Field(
        default=1.0,
        gt=0.0,
        description="Minimum width and height of a shape",
    )


class SamplingConfig(BaseModel):
    """Configuration for curve sampling and numerical methods."""

    max_segment_length: float = Field(
        default=8.0,
        gt=0.0,
        description="Maximum distance between samples when flattening",
    )
    min_samples: int = Field(
        default=2,
        ge=1,
        description="Minimum number of sample intervals per segment",
    )
    projection_lut_steps: int = Field(
        default=100,
        ge=10,
        le=1000,
        description="Lookup table size for closest-point projection",
    )
    quadrature_order: int = Field(
        default=24,
        ge=4,
        le=64,
        description="Gauss-Legendre order for arc length",
    )


class EditorConfig(BaseModel):
    """Behaviour switches of the editing state machine."""

    enable_segment_drag: bool = Field(
        default=True,
        description="Dragging a segment pulls its curve instead of clearing the selection",
    )
    complete_reselect_ms: float = Field(
        default=10.0,
        ge=0.0,
        description="Re-selection delay after completing a curve",
    )
    close_reselect_ms: float = Field(
        default=50.0,
        ge=0.0,
        description="Re-selection delay after closing a curve",
    )
    path_precision: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Decimal places in generated path data",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PenPathSettings(BaseModel):
    """Main application settings."""

    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    handles: HandleConfig = Field(default_factory=HandleConfig)
    bounds: BoundsConfig = Field(default_factory=BoundsConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PenPathSettings:
    """Get default application settings."""
    return PenPathSettings()
