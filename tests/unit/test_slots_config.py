import logging
from dataclasses import replace
from pathlib import Path

import pytest
from pyrsistent import pmap

from pixel_forge.components.color import Color
from pixel_forge.config import DEFAULT_CONFIG, SKIN_PRESETS, SchemeDefaults
from pixel_forge.errors import (
    InvalidArgumentError,
    NotFoundError,
    PixelForgeError,
    SlotMismatchError,
    ValidationError,
    configure_logging,
    log_error,
)
from pixel_forge.slots import (
    DEFAULT_Z_ORDER,
    REQUIRED_SLOTS,
    SLOT_TRAITS,
    color_category_for,
    z_order_for,
)
from pixel_forge.types import ColorCategory, Slot


def test_slot_traits_cover_every_slot() -> None:
    assert set(SLOT_TRAITS.keys()) == set(Slot)
    assert set(REQUIRED_SLOTS) <= set(Slot)
    assert len(REQUIRED_SLOTS) == 12


@pytest.mark.parametrize(
    "slot, z_order",
    [
        (Slot.HAIR_BACK, 0),
        (Slot.BACK_ACCESSORY, 5),
        (Slot.EARS, 15),
        (Slot.TORSO, 20),
        (Slot.ARMS_LEFT, 25),
        (Slot.LEGS, 30),
        (Slot.FEET_RIGHT, 35),
        (Slot.EYES, 40),
        (Slot.NOSE, 45),
        (Slot.MOUTH, 50),
        (Slot.HAIR_FRONT, 55),
        (Slot.HEAD_ACCESSORY, 60),
        (Slot.WEAPON_MAIN, 65),
    ],
)
def test_z_orders(slot: Slot, z_order: int) -> None:
    assert z_order_for(slot) == z_order


def test_unknown_slot_gets_default_z_order() -> None:
    assert z_order_for("tail") == DEFAULT_Z_ORDER == 50
    # plain strings resolve like the enum
    assert z_order_for("torso") == 20


@pytest.mark.parametrize(
    "slot, category",
    [
        (Slot.HAIR_FRONT, ColorCategory.HAIR),
        (Slot.HAIR_BACK, ColorCategory.HAIR),
        (Slot.EYES, ColorCategory.EYES),
        (Slot.TORSO, ColorCategory.OUTFIT_PRIMARY),
        (Slot.LEGS, ColorCategory.OUTFIT_PRIMARY),
        (Slot.ARMS_RIGHT, ColorCategory.OUTFIT_SECONDARY),
        (Slot.FEET_LEFT, ColorCategory.OUTFIT_SECONDARY),
        (Slot.NOSE, ColorCategory.SKIN),
        (Slot.WEAPON_OFF, ColorCategory.SKIN),
    ],
)
def test_color_categories(slot: Slot, category: ColorCategory) -> None:
    assert color_category_for(slot) == category


def test_error_hierarchy() -> None:
    assert issubclass(SlotMismatchError, NotFoundError)
    assert issubclass(NotFoundError, LookupError)
    assert issubclass(ValidationError, ValueError)
    assert issubclass(InvalidArgumentError, PixelForgeError)
    err = ValidationError("internal detail", user_message="Please fix the file")
    assert err.user_message == "Please fix the file"
    assert InvalidArgumentError("plain").user_message == "plain"


def test_presets_and_lookup_misses() -> None:
    assert DEFAULT_CONFIG.preset("skin", "light") == SKIN_PRESETS["light"]
    with pytest.raises(NotFoundError):
        DEFAULT_CONFIG.preset("skin", "green")
    with pytest.raises(NotFoundError):
        DEFAULT_CONFIG.preset("fur", "light")
    with pytest.raises(NotFoundError):
        DEFAULT_CONFIG.palette("nes")


def test_config_is_replaced_not_mutated() -> None:
    config = replace(
        DEFAULT_CONFIG,
        color_presets=DEFAULT_CONFIG.color_presets.set("skin", pmap({"blue": Color(0, 0, 255)})),
        scheme_defaults=SchemeDefaults(skin="blue"),
    )
    assert config.preset("skin", "blue") == Color(0, 0, 255)
    with pytest.raises(NotFoundError):
        DEFAULT_CONFIG.preset("skin", "blue")


def test_configure_logging_does_not_stack_handlers(tmp_path: Path) -> None:
    logger = logging.getLogger("pixel_forge")
    before = list(logger.handlers)
    try:
        configure_logging(logging.DEBUG, tmp_path / "logs" / "forge.log")
        configure_logging(logging.DEBUG, tmp_path / "logs" / "forge.log")
        added = [h for h in logger.handlers if h not in before]
        assert len(added) == 2
        assert (tmp_path / "logs" / "forge.log").exists()
    finally:
        for handler in logger.handlers[:]:
            if handler not in before:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(logging.NOTSET)


def test_log_error_includes_context(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="pixel_forge"):
        log_error(ValidationError("bad data"), "loading hero")
    assert "loading hero: bad data" in caplog.text
