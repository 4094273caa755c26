import pytest

from delve.input import InputMapper, Intent


def test_default_mapping_movement_arrows_wasd_and_vi_keys():
    mapper = InputMapper.default()

    # Up
    assert mapper.translate_key("UP") == Intent.MOVE_UP
    assert mapper.translate_key("W") == Intent.MOVE_UP
    assert mapper.translate_key("k") == Intent.MOVE_UP
    # Case-insensitive
    assert mapper.translate_key("w") == Intent.MOVE_UP

    # Down
    assert mapper.translate_key("DOWN") == Intent.MOVE_DOWN
    assert mapper.translate_key("s") == Intent.MOVE_DOWN
    assert mapper.translate_key("j") == Intent.MOVE_DOWN

    # Left
    assert mapper.translate_key("LEFT") == Intent.MOVE_LEFT
    assert mapper.translate_key("a") == Intent.MOVE_LEFT
    assert mapper.translate_key("h") == Intent.MOVE_LEFT

    # Right
    assert mapper.translate_key("RIGHT") == Intent.MOVE_RIGHT
    assert mapper.translate_key("d") == Intent.MOVE_RIGHT
    assert mapper.translate_key("l") == Intent.MOVE_RIGHT


def test_alt_enter_toggles_fullscreen_but_bare_enter_does_nothing():
    mapper = InputMapper.default()
    assert mapper.translate_key("ENTER", alt=True) == Intent.TOGGLE_FULLSCREEN
    assert mapper.translate_key("return", alt=True) == Intent.TOGGLE_FULLSCREEN
    assert mapper.translate_key("ENTER") == Intent.NONE


def test_escape_exits():
    mapper = InputMapper.default()
    assert mapper.translate_key("ESCAPE") == Intent.EXIT
    assert mapper.translate_key("eSc") == Intent.EXIT
    assert mapper.translate_key("q") == Intent.EXIT


@pytest.mark.parametrize("key", [None, "", "   ", "F13", 3.5])
def test_unbound_or_invalid_keys_are_none(key):
    assert InputMapper.default().translate_key(key) == Intent.NONE


def test_rebinding_changes_behavior():
    mapper = InputMapper.default()

    mapper.bind("A", Intent.EXIT)
    assert mapper.translate_key("a") == Intent.EXIT

    mapper.unbind("A")
    assert mapper.translate_key("a") == Intent.NONE


def test_aliases_map_backend_codes():
    mapper = InputMapper.default()
    mapper.set_alias(65362, "UP")
    assert mapper.translate_key(65362) == Intent.MOVE_UP


def test_direction_of_intents():
    assert Intent.MOVE_UP.direction == (0, -1)
    assert Intent.MOVE_DOWN.direction == (0, 1)
    assert Intent.MOVE_LEFT.direction == (-1, 0)
    assert Intent.MOVE_RIGHT.direction == (1, 0)
    assert Intent.EXIT.direction is None
    assert Intent.NONE.direction is None
