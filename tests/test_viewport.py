"""Tests for the headless viewport."""

import io

import numpy as np
import pytest
from PIL import Image

from core.environment import EnvironmentState
from core.scene import AssetSubtype, ElementKind, SceneObjectRegistry, Transform
from core.viewport import Ray, SceneView, element_mesh, ground_plane, transform_matrix


@pytest.fixture
def env():
    return EnvironmentState()


@pytest.fixture
def registry():
    return SceneObjectRegistry()


@pytest.fixture
def view(env):
    """Create a small viewport."""
    return SceneView(env, width=64, height=48)


class TestRay:
    """Test ray construction and ground intersection."""

    def test_direction_is_normalized(self):
        ray = Ray(origin=(0, 0, 0), direction=(0, 0, 5))
        assert ray.direction == (0.0, 0.0, 1.0)

    def test_zero_direction_rejected(self):
        with pytest.raises(ValueError):
            Ray(origin=(0, 0, 0), direction=(0, 0, 0))

    def test_intersect_ground(self):
        ray = Ray(origin=(1, 4, 2), direction=(0, -2, 0))
        assert ray.intersect_ground() == pytest.approx((1.0, 0.0, 2.0))

    def test_intersect_ground_behind_or_parallel(self):
        assert Ray(origin=(0, 4, 0), direction=(0, 1, 0)).intersect_ground() is None
        assert Ray(origin=(0, 4, 0), direction=(1, 0, 0)).intersect_ground() is None


class TestGeometry:
    """Test mesh construction."""

    def test_ground_plane_faces_up(self):
        ground = ground_plane()
        assert len(ground.faces) == 2
        assert np.allclose(ground.face_normals, [[0, 1, 0], [0, 1, 0]])

    def test_wall_mesh_bounds(self, registry):
        """The wall box is centred on its position."""
        wall = registry.create(ElementKind.WALL, Transform(position=(1, 1.5, 0)))
        mesh = element_mesh(wall)
        assert len(mesh.faces) == 12
        assert np.allclose(mesh.bounds, [[-0.5, 0.0, -0.15], [2.5, 3.0, 0.15]])
        assert mesh.metadata["element_id"] == wall.id

    def test_tree_stands_on_ground(self, registry):
        """The tree trunk starts at y=-1.5 relative to its origin and leaves top out at y=6."""
        tree = registry.create(ElementKind.ASSET, asset_subtype=AssetSubtype.TREE)
        mesh = element_mesh(tree)
        assert mesh.bounds[1][1] == pytest.approx(6.0)
        assert mesh.bounds[0][1] == pytest.approx(-1.5)

    def test_transform_matrix_scale_then_translate(self):
        matrix = transform_matrix(Transform(position=(1, 2, 3), scale=(2, 2, 2)))
        point = matrix @ np.array([1.0, 0.0, 0.0, 1.0])
        assert np.allclose(point[:3], [3.0, 2.0, 3.0])


class TestHandles:
    """Test the element id to render handle mapping."""

    def test_empty_view_counts_ground(self, view):
        assert view.handles == {}
        assert view.triangle_count() == 2

    def test_add_and_remove(self, view, registry):
        wall = registry.create(ElementKind.WALL)
        view.add(wall)
        assert view.triangle_count() == 14
        assert view.remove(wall.id) is True
        assert view.remove(wall.id) is False
        assert view.triangle_count() == 2

    def test_sync_matches_registry(self, view, registry):
        """Sync rebuilds the mapping from the registry alone."""
        walls = [registry.create(ElementKind.WALL) for _ in range(3)]
        view.sync(registry.all())
        assert set(view.handles) == {w.id for w in walls}

        registry.remove_all()
        door = registry.create(ElementKind.DOOR)
        view.sync(registry.all())
        assert set(view.handles) == {door.id}

    def test_sync_rebuilds_moved_elements(self, view, registry):
        wall = registry.create(ElementKind.WALL)
        view.sync(registry.all())
        old_mesh = view.handles[wall.id].mesh

        registry.update_transform(wall.id, Transform(position=(5, 1.5, 5)))
        view.sync(registry.all())
        assert view.handles[wall.id].mesh is not old_mesh
        assert view.handles[wall.id].transform.position == (5.0, 1.5, 5.0)

    def test_sync_keeps_unchanged_handles(self, view, registry):
        wall = registry.create(ElementKind.WALL)
        view.sync(registry.all())
        handle = view.handles[wall.id]
        view.sync(registry.all())
        assert view.handles[wall.id] is handle


class TestHitTest:
    """Test ray picking against the ground and elements."""

    def test_ground_hit(self, view):
        hit = view.hit_test(Ray(origin=(7.3, 10, -4.6), direction=(0, -1, 0)))
        assert hit is not None
        assert hit.element_id is None
        assert hit.point == pytest.approx((7.3, 0.0, -4.6))
        assert hit.distance == pytest.approx(10.0)
        assert hit.normal == pytest.approx((0.0, 1.0, 0.0))

    def test_element_hit_is_nearest(self, view, registry):
        wall = registry.create(ElementKind.WALL)
        view.add(wall)
        hit = view.hit_test(Ray(origin=(0.4, 10, 0.1), direction=(0, -1, 0)))
        assert hit.element_id == wall.id
        assert hit.point[1] == pytest.approx(3.0)

    def test_miss(self, view):
        assert view.hit_test(Ray(origin=(0, 10, 0), direction=(0, 1, 0))) is None

    def test_pointer_ray_through_centre(self, view):
        """The centre of the screen looks at the camera target."""
        ray = view.ray_from_pointer(0.0, 0.0)
        expected = -np.ones(3) / np.sqrt(3)
        assert ray.origin == (10.0, 10.0, 10.0)
        assert np.allclose(ray.direction, expected)


class TestRasterize:
    """Test PNG snapshots."""

    def test_png_dimensions(self, view, registry):
        view.add(registry.create(ElementKind.WALL))
        data = view.rasterize()
        assert data[:8] == b"\x89PNG\r\n\x1a\n"
        assert Image.open(io.BytesIO(data)).size == (64, 48)

    def test_multiplier(self, view):
        data = view.rasterize(multiplier=2)
        assert Image.open(io.BytesIO(data)).size == (128, 96)

    def test_background_color(self, env, view):
        """A view looking away from the scene shows the weather background."""
        env.set_weather("overcast")
        view.clear()
        view.ground = ground_plane(size=0.001)
        image = Image.open(io.BytesIO(view.rasterize())).convert("RGB")
        assert image.getpixel((0, 0)) == (0x77, 0x88, 0x99)

    def test_foggy_render(self, env, view, registry):
        env.set_weather("foggy")
        view.add(registry.create(ElementKind.WALL))
        assert view.rasterize()[:4] == b"\x89PNG"

    def test_overlay_toggles(self, view):
        assert view.toggle_grid() is False
        assert view.toggle_axes() is False
        assert view.toggle_grid() is True
        assert view.triangle_count() == 2
