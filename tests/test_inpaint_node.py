"""
Tests for Inpaint and Export Nodes.

Tests cover:
- Node configuration
- Executor functions
- Node registration
- Error handling
"""

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from WR_Libs.InpaintingLib.inpaint_models import SelectionRegion
from WR_Libs.NodesLib.export_node import (
    ExportNodeConfig,
    create_export_node,
    execute_export_node,
)
from WR_Libs.NodesLib.inpaint_node import (
    InpaintNodeConfig,
    create_inpaint_node,
    execute_inpaint_node,
)
from WR_Libs.NodesLib.node_executors import (
    NodeExecutorRegistry,
    get_default_registry,
)


class TestInpaintNodeConfig(unittest.TestCase):
    """Test inpaint node configuration."""

    def test_defaults(self):
        config = InpaintNodeConfig()

        self.assertEqual(config.regions, [])
        self.assertEqual(config.padding, 25)
        self.assertEqual(config.radius, 8)
        self.assertFalse(config.reconstruct_alpha)

    def test_from_dict_ignores_unknown_keys(self):
        config = InpaintNodeConfig.from_dict({
            "id": "inpaint-1",
            "type": "Inpaint",
            "radius": 5,
        })

        self.assertEqual(config.radius, 5)

    def test_round_trip(self):
        config = InpaintNodeConfig(
            regions=[{"id": "sel-1", "x": 1, "y": 2, "width": 3, "height": 4}],
            padding=10,
        )

        self.assertEqual(InpaintNodeConfig.from_dict(config.to_dict()), config)


class TestExecuteInpaintNode(unittest.TestCase):
    """Test inpaint node executor."""

    def setUp(self):
        self.image = Image.new("RGBA", (100, 100), (255, 255, 255, 255))
        self.image.paste((0, 0, 0, 255), (40, 40, 60, 60))
        self.node = create_inpaint_node(
            "inpaint-1",
            regions=[SelectionRegion("sel-1", 40, 40, 20, 20)],
        )

    def test_removes_selected_area(self):
        result = execute_inpaint_node(self.node, [self.image])

        self.assertEqual(result.getpixel((50, 50)), (255, 255, 255, 255))
        self.assertEqual(self.image.getpixel((50, 50)), (0, 0, 0, 255))

    def test_requires_input(self):
        with self.assertRaises(ValueError):
            execute_inpaint_node(self.node, [])

    def test_requires_image(self):
        with self.assertRaises(TypeError):
            execute_inpaint_node(self.node, ["not an image"])

    def test_requires_selection(self):
        node = create_inpaint_node("inpaint-2")

        with self.assertRaises(ValueError):
            execute_inpaint_node(node, [self.image])

    def test_invalid_radius_is_prefixed(self):
        self.node["radius"] = 0

        with self.assertRaises(ValueError) as ctx:
            execute_inpaint_node(self.node, [self.image])

        self.assertIn("Inpaint node error", str(ctx.exception))

    def test_all_selections_rejected(self):
        node = create_inpaint_node(
            "inpaint-4",
            regions=[SelectionRegion("off-1", 500, 500, 10, 10), SelectionRegion("off-2", 0, 0, 0, 0)],
        )

        with self.assertRaises(ValueError) as ctx:
            execute_inpaint_node(node, [self.image])

        message = str(ctx.exception)
        self.assertIn("Inpaint node error", message)
        self.assertIn("off-1", message)
        self.assertIn("off-2", message)

    def test_partial_rejection_still_returns_image(self):
        self.node["regions"].append({"id": "off", "x": 500, "y": 500, "width": 5, "height": 5})

        result = execute_inpaint_node(self.node, [self.image])

        self.assertEqual(result.getpixel((50, 50)), (255, 255, 255, 255))

    def test_create_node_accepts_dicts(self):
        node = create_inpaint_node(
            "inpaint-3",
            regions=[{"id": "a", "x": 0, "y": 0, "width": 5, "height": 5}],
            radius=4,
        )

        self.assertEqual(node["type"], "Inpaint")
        self.assertEqual(node["regions"][0]["id"], "a")
        self.assertEqual(node["radius"], 4)


class TestExportNode(unittest.TestCase):
    """Test export node executor."""

    def setUp(self):
        self.image = Image.new("RGBA", (8, 8), (1, 2, 3, 255))
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_saves_to_directory(self):
        node = create_export_node("export-1", self.tmp.name, "png")

        saved = execute_export_node(node, [self.image])

        self.assertEqual(saved, Path(self.tmp.name) / "watermark-removed.png")
        self.assertTrue(saved.exists())

    def test_invalid_format_is_prefixed(self):
        node = create_export_node("export-1", self.tmp.name, "tiff")

        with self.assertRaises(ValueError) as ctx:
            execute_export_node(node, [self.image])

        self.assertIn("Export node error", str(ctx.exception))

    def test_requires_input(self):
        with self.assertRaises(ValueError):
            execute_export_node(create_export_node("export-1"), [])

    def test_config_round_trip(self):
        config = ExportNodeConfig(output_path="out.webp", output_format="webp", quality=70)

        self.assertEqual(ExportNodeConfig.from_dict(config.to_dict()), config)


class TestNodeRegistry(unittest.TestCase):
    """Test node executor registry."""

    def test_default_registry_has_nodes(self):
        registry = get_default_registry()

        self.assertEqual(registry.list_node_types(), ["Export", "Inpaint"])
        self.assertIs(registry, get_default_registry())

    def test_execute_through_registry(self):
        image = Image.new("RGBA", (40, 40), (90, 90, 90, 255))
        node = create_inpaint_node("n", regions=[{"id": "s", "x": 10, "y": 10, "width": 10, "height": 10}])

        result = get_default_registry().execute("Inpaint", node, [image])

        self.assertEqual(result.getpixel((15, 15)), (90, 90, 90, 255))

    def test_register_validation(self):
        registry = NodeExecutorRegistry()
        registry.register("Custom", lambda node, inputs: None)

        with self.assertRaises(RuntimeError):
            registry.register("Custom", lambda node, inputs: None)
        with self.assertRaises(ValueError):
            registry.register("  ", lambda node, inputs: None)
        with self.assertRaises(ValueError):
            registry.register("Other", "not callable")

    def test_execute_custom_and_unknown(self):
        registry = NodeExecutorRegistry()
        registry.register("Custom", lambda node, inputs: len(inputs))

        self.assertEqual(registry.execute(" Custom ", {}, [1, 2]), 2)
        with self.assertRaises(KeyError) as ctx:
            registry.execute("Missing", {}, [])
        self.assertIn("Custom", str(ctx.exception))

    def test_export_through_registry(self):
        image = Image.new("RGB", (8, 8), (1, 2, 3))
        with tempfile.TemporaryDirectory() as tmp:
            node = create_export_node("export-1", Path(tmp) / "out.webp", "webp")

            saved = get_default_registry().execute("Export", node, [image])

            self.assertTrue(saved.exists())


if __name__ == "__main__":
    unittest.main()
