"""
Drawing surfaces that consume a ``Scene``.

- ``PlotlySurface`` builds a ``plotly.graph_objects.Figure`` (used by the
  Streamlit app).
- ``ImageSurface`` paints a ``PIL.Image`` (used by ``--render`` on the CLI).

Both keep the scene's pixel convention: origin top-left, y growing down.
"""

from __future__ import annotations

import math
from typing import List, Optional

import plotly.graph_objects as go
from PIL import Image, ImageDraw

from decode_sim.renderer import (
    CircleShape,
    LineShape,
    PolygonShape,
    RectShape,
    Scene,
    TextShape,
)


class PlotlySurface:
    """Renders scenes as plotly figures with layout shapes."""

    def __init__(self, template: str = "plotly_white") -> None:
        self.template = template

    def draw(self, scene: Scene) -> go.Figure:
        fig = go.Figure()
        shapes: List[dict] = []
        annotations: List[dict] = []
        for prim in scene.primitives:
            if isinstance(prim, RectShape):
                r = prim.rect
                shapes.append(dict(
                    type="rect", x0=r.x, y0=r.y, x1=r.right, y1=r.bottom,
                    fillcolor=prim.fill or "rgba(0,0,0,0)",
                    line=dict(color=prim.stroke or "rgba(0,0,0,0)", width=2 if prim.stroke else 0),
                    layer="above",
                ))
            elif isinstance(prim, PolygonShape):
                path = "M " + " L ".join(f"{x},{y}" for x, y in prim.points) + " Z"
                shapes.append(dict(
                    type="path", path=path,
                    fillcolor=prim.fill or "rgba(0,0,0,0)",
                    line=dict(color=prim.stroke or "rgba(0,0,0,0)", width=1 if prim.stroke else 0),
                    layer="above",
                ))
            elif isinstance(prim, LineShape):
                shapes.append(dict(
                    type="line", x0=prim.start[0], y0=prim.start[1], x1=prim.end[0], y1=prim.end[1],
                    line=dict(color=prim.color, width=prim.width), layer="above",
                ))
            elif isinstance(prim, CircleShape):
                cx, cy = prim.center
                shapes.append(dict(
                    type="circle",
                    x0=cx - prim.radius, y0=cy - prim.radius,
                    x1=cx + prim.radius, y1=cy + prim.radius,
                    fillcolor=prim.fill or "rgba(0,0,0,0)",
                    line=dict(color=prim.stroke or prim.fill or "#000000", width=1),
                    layer="above",
                ))
            elif isinstance(prim, TextShape):
                annotations.append(dict(
                    x=prim.position[0], y=prim.position[1], text=prim.text,
                    showarrow=False, font=dict(color=prim.color, size=prim.size),
                ))
        fig.update_layout(
            shapes=shapes,
            annotations=annotations,
            template=self.template,
            width=scene.width,
            height=scene.height,
            margin=dict(l=0, r=0, t=0, b=0),
            showlegend=False,
            paper_bgcolor="rgba(0,0,0,0)",
            plot_bgcolor="rgba(0,0,0,0)",
        )
        fig.update_xaxes(range=[0, scene.width], visible=False, fixedrange=True)
        # Scene y grows downward.
        fig.update_yaxes(
            range=[scene.height, 0], visible=False, fixedrange=True,
            scaleanchor="x", scaleratio=1,
        )
        return fig


class ImageSurface:
    """Renders scenes onto a PIL image."""

    def __init__(self, background: str = "#ffffff") -> None:
        self.background = background
        self.image: Optional[Image.Image] = None

    def draw(self, scene: Scene) -> Image.Image:
        size = (int(math.ceil(scene.width)), int(math.ceil(scene.height)))
        image = Image.new("RGB", size, self.background)
        canvas = ImageDraw.Draw(image)
        for prim in scene.primitives:
            if isinstance(prim, RectShape):
                r = prim.rect
                canvas.rectangle([r.x, r.y, r.right, r.bottom], fill=prim.fill, outline=prim.stroke)
            elif isinstance(prim, PolygonShape):
                canvas.polygon(list(prim.points), fill=prim.fill, outline=prim.stroke)
            elif isinstance(prim, LineShape):
                canvas.line([prim.start, prim.end], fill=prim.color, width=max(1, int(prim.width)))
            elif isinstance(prim, CircleShape):
                cx, cy = prim.center
                canvas.ellipse(
                    [cx - prim.radius, cy - prim.radius, cx + prim.radius, cy + prim.radius],
                    fill=prim.fill, outline=prim.stroke,
                )
            elif isinstance(prim, TextShape):
                left, top, right, bottom = canvas.textbbox((0, 0), prim.text)
                x = prim.position[0] - (right - left) / 2.0
                y = prim.position[1] - (bottom - top) / 2.0
                canvas.text((x, y), prim.text, fill=prim.color)
        self.image = image
        return image

    def save(self, path) -> None:
        if self.image is None:
            raise RuntimeError("Nothing has been drawn yet")
        self.image.save(path)
