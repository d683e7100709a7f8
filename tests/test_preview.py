from blsave.entities import COLORSET_SIZE, DEFAULT_COLOR, Brick, BrickFlags, Color
from blsave.preview import render_colorset, render_plan

RED = Color(1.0, 0.0, 0.0, 1.0)


def _palette():
    return (RED,) + (DEFAULT_COLOR,) * (COLORSET_SIZE - 1)


def test_colorset_swatch_grid(tmp_path):
    destination = tmp_path / "out" / "colors.png"
    image = render_colorset(_palette(), destination, cell_px=16)
    assert image.size == (128, 128)
    assert image.getpixel((8, 8)) == (255, 0, 0, 255)
    assert destination.exists()


def test_plan_draws_visible_bricks_only(tmp_path):
    bricks = [
        Brick(ui_name="1x1", position=(0.0, 0.0, 0.2), color_index=0, flags=BrickFlags.RENDERING),
        Brick(ui_name="ghost", position=(10.0, 10.0, 0.2), color_index=0, flags=BrickFlags.NONE),
    ]
    image = render_plan(bricks, _palette(), tmp_path / "plan.png", size_px=64)
    assert image.size == (64, 64)
    assert image.getbbox() is not None
    assert (tmp_path / "plan.png").exists()


def test_plan_of_empty_save_is_blank():
    image = render_plan([], _palette(), size_px=32)
    assert image.getbbox() is None
