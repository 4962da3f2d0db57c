"""Painter's-algorithm rasterizer producing PNG snapshots of the scene."""

import io
import logging
import math
from typing import List, Optional, Tuple

import numpy as np
import trimesh
from PIL import Image, ImageDraw

from core.environment.state import CameraPose, Fog, SunLight

from .geometry import face_colors, hex_to_rgba

logger = logging.getLogger(__name__)

NEAR_CLIP = 0.1


def look_at_matrix(camera: CameraPose) -> np.ndarray:
    """World-to-camera matrix; the camera looks down its -Z axis."""
    eye = np.asarray(camera.position, dtype=float)
    target = np.asarray(camera.look_at, dtype=float)
    forward = target - eye
    forward /= np.linalg.norm(forward)

    up = np.array([0.0, 1.0, 0.0])
    if np.linalg.norm(np.cross(forward, up)) < 1e-6:
        up = np.array([0.0, 0.0, -1.0])

    right = np.cross(forward, up)
    right /= np.linalg.norm(right)
    true_up = np.cross(right, forward)

    view = np.eye(4)
    view[0, :3] = right
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[:3, 3] = -view[:3, :3] @ eye
    return view


def pointer_ray(
    camera: CameraPose,
    ndc_x: float,
    ndc_y: float,
    aspect: float,
    fov_degrees: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Origin and direction of the ray through normalized device coordinates."""
    view = look_at_matrix(camera)
    tan_half = math.tan(math.radians(fov_degrees) / 2)
    local = np.array([ndc_x * tan_half * aspect, ndc_y * tan_half, -1.0])
    direction = view[:3, :3].T @ local
    return np.asarray(camera.position, dtype=float), direction / np.linalg.norm(direction)


def _shade(
    colors: np.ndarray,
    normals: np.ndarray,
    sun: SunLight,
    ambient: float,
) -> np.ndarray:
    light = np.asarray(sun.position, dtype=float)
    light /= np.linalg.norm(light)
    sun_rgb = np.array(hex_to_rgba(sun.color_hex)[:3], dtype=float) / 255.0
    lambert = np.clip(normals @ light, 0.0, None)[:, None]
    factor = ambient + lambert * sun.intensity * sun_rgb
    return np.clip(colors[:, :3] * factor, 0, 255)


def rasterize(
    meshes: List[trimesh.Trimesh],
    camera: CameraPose,
    sun: SunLight,
    background_hex: str,
    size: Tuple[int, int],
    ambient: float = 0.5,
    fog: Optional[Fog] = None,
    fov_degrees: float = 75.0,
) -> bytes:
    """
    Render meshes to a PNG.

    Args:
        meshes: World-space meshes with face colors
        camera: Camera pose
        sun: Directional light used for flat shading
        background_hex: Clear color
        size: Output (width, height) in pixels
        ambient: Ambient light contribution
        fog: Optional linear fog
        fov_degrees: Vertical field of view

    Returns:
        PNG-encoded image bytes
    """
    width, height = size
    image = Image.new("RGB", (width, height), hex_to_rgba(background_hex)[:3])
    draw = ImageDraw.Draw(image)

    meshes = [m for m in meshes if len(m.faces)]
    if meshes:
        triangles = np.vstack([m.triangles for m in meshes])
        normals = np.vstack([m.face_normals for m in meshes])
        colors = face_colors(meshes).astype(float)

        view = look_at_matrix(camera)
        flat = triangles.reshape(-1, 3)
        cam = (np.c_[flat, np.ones(len(flat))] @ view.T)[:, :3].reshape(-1, 3, 3)

        # Drop triangles crossing the near plane
        visible = np.all(cam[:, :, 2] < -NEAR_CLIP, axis=1)
        cam, normals, colors = cam[visible], normals[visible], colors[visible]

        f = 1.0 / math.tan(math.radians(fov_degrees) / 2)
        aspect = width / height
        depth = -cam[:, :, 2]
        sx = (f / aspect * cam[:, :, 0] / depth + 1) / 2 * width
        sy = (1 - f * cam[:, :, 1] / depth) / 2 * height

        shaded = _shade(colors, normals, sun, ambient)
        mean_depth = depth.mean(axis=1)
        if fog is not None:
            fog_rgb = np.array(hex_to_rgba(fog.color_hex)[:3], dtype=float)
            t = np.clip((mean_depth - fog.near) / (fog.far - fog.near), 0.0, 1.0)[:, None]
            shaded = shaded * (1 - t) + fog_rgb * t

        for i in np.argsort(-mean_depth):
            polygon = list(zip(sx[i].tolist(), sy[i].tolist()))
            draw.polygon(polygon, fill=tuple(int(c) for c in shaded[i]))

        logger.debug(f"Rasterized {int(visible.sum())} triangles at {width}x{height}")

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
