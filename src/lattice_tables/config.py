"""Configuration management."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import json
import os

HEADER_SOURCES = ("first_row_of_first_page", "first_row_of_each_page", "explicit")
OVERLAY_LAYERS = ("cells", "texts", "ruling_lines", "selected_lines", "fills")


@dataclass(frozen=True)
class PageLayout:
    """Output page space: ``width`` x ``height`` units at ``resolution`` dots per unit.

    The default is an 8x12 inch page at 96 dpi (768x1152 pixels).
    """
    width: float = 8
    height: float = 12
    resolution: float = 96

    @property
    def pixel_width(self) -> float:
        return self.width * self.resolution

    @property
    def pixel_height(self) -> float:
        return self.height * self.resolution


@dataclass
class Config:
    """Application configuration."""
    layout: PageLayout
    # Absolute difference (output units) under which a group's span counts
    # as equal to the median span. 0 means exact equality.
    span_tolerance: float
    # Header policy: one of HEADER_SOURCES
    header_source: str
    headers: list[str] | None  # Only used with header_source="explicit"
    # Overlay rendering
    overlay_layers: tuple[str, ...]
    overlay_color: tuple[float, float, float]
    # Batch driver
    input_suffixes: tuple[str, ...] = field(default=(".pdf", ".json"))

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        """Load config from file and/or environment."""
        if path is not None:
            config_path = Path(path).expanduser()
        else:
            env_path = os.environ.get("LATTICE_TABLES_CONFIG")
            config_path = Path(env_path or "~/.config/lattice-tables/config.json").expanduser()

        data = {}
        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        layout = data.get("layout", {})
        return cls(
            layout=PageLayout(
                width=layout.get("width", 8),
                height=layout.get("height", 12),
                resolution=layout.get("resolution", 96),
            ),
            span_tolerance=data.get("span_tolerance", 1e-6),
            header_source=data.get("header_source", "first_row_of_first_page"),
            headers=data.get("headers"),
            overlay_layers=tuple(data.get("overlay_layers", ("cells", "texts"))),
            overlay_color=tuple(data.get("overlay_color", (0.0, 0.0, 1.0))),
            input_suffixes=tuple(data.get("input_suffixes", (".pdf", ".json"))),
        )

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors = []
        for name in ("width", "height", "resolution"):
            value = getattr(self.layout, name)
            if not isinstance(value, (int, float)) or value <= 0:
                errors.append(f"layout.{name} must be a positive number, got {value!r}")

        if self.span_tolerance < 0:
            errors.append(f"span_tolerance must be >= 0, got {self.span_tolerance}")

        if self.header_source not in HEADER_SOURCES:
            errors.append(
                f"Invalid header_source: {self.header_source}. "
                f"Must be one of {', '.join(HEADER_SOURCES)}"
            )
        elif self.header_source == "explicit" and not self.headers:
            errors.append("header_source='explicit' requires a non-empty 'headers' list")

        unknown = [layer for layer in self.overlay_layers if layer not in OVERLAY_LAYERS]
        if unknown:
            errors.append(f"Unknown overlay layers: {', '.join(unknown)}")

        if len(self.overlay_color) != 3 or not all(0.0 <= c <= 1.0 for c in self.overlay_color):
            errors.append(f"overlay_color must be three floats in [0, 1], got {self.overlay_color}")

        return errors
