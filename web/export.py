"""PNG snapshot of a turtle canvas — pure functions with no FastAPI dependency.

Usable from both the CLI (draw) and the web export route.
"""

from __future__ import annotations

from datetime import date
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw

from devjournal.turtle import TurtleCanvas

BACKGROUND = (15, 23, 42)


def render_image(canvas: TurtleCanvas, background: tuple[int, int, int] = BACKGROUND) -> Image.Image:
    """Rasterize every segment drawn so far. Off-surface segments are clipped."""
    img = Image.new("RGB", (canvas.width, canvas.height), background)
    draw = ImageDraw.Draw(img)
    for seg in canvas.segments:
        draw.line(
            (seg.start.x, seg.start.y, seg.end.x, seg.end.y),
            fill=ImageColor.getrgb(seg.color),
            width=seg.width,
        )
    return img


def export_png(canvas: TurtleCanvas, on: date | None = None) -> tuple[BytesIO, str]:
    """Encode the canvas as PNG.

    Returns (BytesIO with PNG data, suggested filename).
    """
    buf = BytesIO()
    render_image(canvas).save(buf, format="PNG")
    buf.seek(0)
    filename = f"learning-journey-{(on or date.today()).isoformat()}.png"
    return buf, filename


def save_png(canvas: TurtleCanvas, output_path: str | Path) -> Path:
    """Write the canvas to ``output_path``, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    render_image(canvas).save(output_path, format="PNG")
    return output_path
