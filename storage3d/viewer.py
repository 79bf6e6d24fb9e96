"""
HTML page embedding a model-viewer element for a GLB/GLTF URL.
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from typing import Union

MODEL_VIEWER_SCRIPT = "https://ajax.googleapis.com/ajax/libs/model-viewer/3.3.0/model-viewer.min.js"

Number = Union[int, float]


@dataclass(frozen=True)
class ViewerParams:
    model_url: str
    title: str = "3D Model Viewer"
    background_color: str = "#111"
    camera_orbit: str = "45deg 75deg auto"
    exposure: Number = 1
    shadow_intensity: Number = 0.6


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_viewer_page(params: ViewerParams) -> str:
    """Render the viewer document. Pure: equal params give identical output."""
    title = html.escape(params.title)
    background = html.escape(params.background_color, quote=True)
    model_url = html.escape(params.model_url, quote=True)
    camera_orbit = html.escape(params.camera_orbit, quote=True)
    camera_orbit_js = json.dumps(params.camera_orbit).replace("</", "<\\/")
    exposure = _format_number(params.exposure)
    shadow_intensity = _format_number(params.shadow_intensity)

    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{title}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <script type="module" src="{MODEL_VIEWER_SCRIPT}"></script>
    <style>
      html, body {{
        margin: 0;
        padding: 0;
        height: 100%;
        background: {background};
        color: #fff;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
      }}
      .container {{
        box-sizing: border-box;
        height: 100%;
        display: flex;
        flex-direction: column;
      }}
      header {{
        padding: 10px 16px;
        font-size: 14px;
        background: #181818;
        border-bottom: 1px solid #333;
        display: flex;
        justify-content: space-between;
        align-items: center;
      }}
      .controls {{
        display: flex;
        gap: 10px;
      }}
      .controls button {{
        padding: 6px 12px;
        font-size: 12px;
        background: #2a2a2a;
        color: #fff;
        border: 1px solid #444;
        border-radius: 4px;
        cursor: pointer;
        transition: background 0.2s;
      }}
      .controls button:hover {{
        background: #3a3a3a;
      }}
      model-viewer {{
        flex: 1;
        width: 100%;
        height: 100%;
      }}
    </style>
  </head>
  <body>
    <div class="container">
      <header>
        <span>{title}</span>
        <div class="controls">
          <button onclick="resetCamera()">Reset</button>
          <button onclick="viewFromTop()">Top View</button>
          <button onclick="viewFromFront()">Front View</button>
          <button onclick="viewFromSide()">Side View</button>
        </div>
      </header>
      <model-viewer
        id="model-viewer"
        src="{model_url}"
        camera-controls
        touch-action="pan-y"
        camera-orbit="{camera_orbit}"
        camera-target="auto auto auto"
        min-camera-orbit="auto auto 0.5m"
        max-camera-orbit="auto auto 10m"
        interpolation-decay="200"
        interaction-prompt="auto"
        exposure="{exposure}"
        shadow-intensity="{shadow_intensity}"
        style="background: radial-gradient(circle at top, #333 0, #000 60%);"
      ></model-viewer>
    </div>
    <script>
      const modelViewer = document.getElementById('model-viewer');
      function resetCamera() {{
        modelViewer.cameraOrbit = {camera_orbit_js};
        modelViewer.cameraTarget = 'auto auto auto';
      }}
      function viewFromTop() {{
        modelViewer.cameraOrbit = '0deg 0deg auto';
      }}
      function viewFromFront() {{
        modelViewer.cameraOrbit = '0deg 90deg auto';
      }}
      function viewFromSide() {{
        modelViewer.cameraOrbit = '90deg 90deg auto';
      }}
    </script>
  </body>
</html>
"""
