import pytest

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import Color
from pixel_forge.components.layer import Layer, LayeredCanvas, create_layered_canvas
from pixel_forge.errors import InvalidArgumentError, NotFoundError, OutOfBoundsError
from pixel_forge.types import BlendMode
from tests.test_utils import solid_buffer


def names(canvas: LayeredCanvas) -> list:
    return [layer.name for layer in canvas.layers]


def test_create_layered_canvas_has_one_blank_layer() -> None:
    canvas = create_layered_canvas(4, 2)
    assert names(canvas) == ["Layer 0"]
    layer = canvas.layers[0]
    assert layer.buffer == PixelBuffer(4, 2)
    assert layer.opacity == 255 and layer.visible and layer.blend == BlendMode.NORMAL


def test_add_layer_copies_buffer() -> None:
    canvas = LayeredCanvas(2, 2)
    src = solid_buffer(2, 2, Color(1, 2, 3))
    layer = canvas.add_layer("a", src)
    src.set(0, 0, Color(9, 9, 9))
    assert layer.buffer.get(0, 0) == Color(1, 2, 3)
    assert layer.buffer is not src


def test_add_layer_rejects_wrong_size() -> None:
    canvas = LayeredCanvas(2, 2)
    with pytest.raises(InvalidArgumentError):
        canvas.add_layer("bad", PixelBuffer(3, 2))


def test_add_at_index_remove_and_move() -> None:
    canvas = create_layered_canvas(1, 1)
    canvas.add_layer("top")
    canvas.add_layer("middle", index=1)
    assert names(canvas) == ["Layer 0", "middle", "top"]

    canvas.move_layer(2, 0)
    assert names(canvas) == ["top", "Layer 0", "middle"]

    removed = canvas.remove_layer(1)
    assert removed.name == "Layer 0"
    assert names(canvas) == ["top", "middle"]


def test_index_errors() -> None:
    canvas = create_layered_canvas(1, 1)
    with pytest.raises(OutOfBoundsError):
        canvas.remove_layer(1)
    with pytest.raises(OutOfBoundsError):
        canvas.move_layer(0, 5)
    with pytest.raises(OutOfBoundsError):
        canvas.add_layer("x", index=3)


def test_find_layer() -> None:
    canvas = create_layered_canvas(1, 1)
    canvas.add_layer("ink")
    assert canvas.find_layer("ink") == 1
    with pytest.raises(NotFoundError):
        canvas.find_layer("missing")


def test_layer_validation() -> None:
    with pytest.raises(InvalidArgumentError):
        Layer("bad", PixelBuffer(1, 1), opacity=256)
    with pytest.raises(InvalidArgumentError):
        Layer("bad", PixelBuffer(1, 1), blend="dodge")  # type: ignore[arg-type]
    layer = Layer("ok", PixelBuffer(1, 1), blend="screen")  # type: ignore[arg-type]
    assert layer.blend is BlendMode.SCREEN
