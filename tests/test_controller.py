import pytest

from halftone.config import HalftoneConfig
from halftone.controller import HalftoneController
from halftone.errors import ConfigurationError, InputError


def test_recompute_without_image():
    with pytest.raises(InputError, match="No image loaded"):
        HalftoneController().recompute()


def test_invalid_initial_config():
    with pytest.raises(ConfigurationError):
        HalftoneController(HalftoneConfig(cell_size=0))


def test_load_produces_all_outputs(solid_buffer):
    controller = HalftoneController(HalftoneConfig(cell_size=2, brightness_threshold=200))
    result = controller.load(solid_buffer(4, 3, (0, 0, 0, 255)))
    assert result.grid.to_rows() == [[1.0, 1.0], [1.0, 1.0]]
    assert controller.grid is result.grid
    assert result.block_image.size == (4, 4)
    assert result.dot_image.size == (4, 4)
    assert result.ascii_image.size == (4, 4)
    assert result.ascii_text == "@@\n@@"
    assert result.source_size == (4, 3)
    assert result.surface("dot") is result.dot_image


def test_update_rebuilds_grid(solid_buffer):
    controller = HalftoneController(HalftoneConfig(cell_size=2))
    controller.load(solid_buffer(6, 6, (0, 0, 0, 255)))
    result = controller.update(cell_size=3)
    assert result.grid.values.shape == (2, 2)
    assert controller.config.cell_size == 3


def test_update_threshold_and_contrast(solid_buffer):
    controller = HalftoneController(HalftoneConfig(cell_size=1, brightness_threshold=140))
    controller.load(solid_buffer(1, 1, (150, 150, 150, 255)))
    assert controller.grid.to_rows() == [[0.0]]
    assert controller.update(brightness_threshold=150).grid.values[0, 0] > 0
    assert controller.update(brightness_threshold=140, contrast_factor=0.5).grid.values[0, 0] > 0


def test_invalid_update_keeps_previous_state(solid_buffer):
    controller = HalftoneController(HalftoneConfig(cell_size=2))
    previous = controller.load(solid_buffer(4, 4, (0, 0, 0, 255)))
    config = controller.config
    with pytest.raises(ConfigurationError, match="Brightness threshold"):
        controller.update(brightness_threshold=999)
    assert controller.config is config
    assert controller.result is previous


def test_unknown_setting_rejected(solid_buffer):
    controller = HalftoneController()
    with pytest.raises(ConfigurationError):
        controller.update(dot_colour="red")


def test_loading_new_image_replaces_grid(solid_buffer):
    controller = HalftoneController(HalftoneConfig(cell_size=1, brightness_threshold=200))
    first = controller.load(solid_buffer(2, 2, (0, 0, 0, 255)))
    second = controller.load(solid_buffer(3, 1, (255, 255, 255, 255)))
    assert first.grid.values.shape == (2, 2)
    assert second.grid.to_rows() == [[0.0, 0.0, 0.0]]


def test_bad_font_update_keeps_previous_state(solid_buffer):
    controller = HalftoneController(HalftoneConfig(cell_size=2))
    previous = controller.load(solid_buffer(4, 4, (0, 0, 0, 255)))
    config = controller.config
    with pytest.raises(ConfigurationError, match="Cannot load font"):
        controller.update(font_path="/no/such/font.ttf")
    assert controller.config is config
    assert controller.result is previous


def test_update_before_load_stores_settings():
    controller = HalftoneController()
    assert controller.update(cell_size=4) is None
    assert controller.config.cell_size == 4
    assert controller.result is None


def test_settings_stored_before_load_apply_on_load(solid_buffer):
    controller = HalftoneController()
    controller.update(cell_size=3)
    result = controller.load(solid_buffer(6, 6, (0, 0, 0, 255)))
    assert result.grid.values.shape == (2, 2)
