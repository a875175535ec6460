import pytest

from termvelocity.engine import GameEngine, GameObject
from termvelocity.screendata import ScreenData
from termvelocity.title import TitleScript


@pytest.fixture
def images(tmp_path):
    (tmp_path / "banner.ppm").write_text("P3\n3 1\n255\n255 0 0 0 0 0 0 0 255\n")
    return tmp_path


@pytest.fixture
def engine():
    return GameEngine(seed=0)


def _title(engine, images, on_top):
    script = TitleScript("banner", on_top, directory=images)
    holder = GameObject(name="Title", scripts=[script])
    holder.start(engine)
    return script, holder


def test_shadow_recolours_visible_pixels(images):
    script = TitleScript("banner", True, directory=images)
    assert script.image.pixels == [0xFF0000, 0, 0x0000FF]
    assert script.shadow.pixels == [0x666666, 0, 0x666666]


def test_missing_image_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        TitleScript("absent", True, directory=tmp_path)


def test_start_draws_image_with_shadow(engine, images):
    script, _ = _title(engine, images, True)
    screen = engine.screen.screen_data
    x, y = int(script.curr_x), int(script.curr_y)
    assert screen.get_pixel(x, y) == 0xFF0000
    assert screen.get_pixel(x + 1, y) == 0x666666
    assert screen.get_pixel(x + 2, y) == 0x0000FF
    assert screen.get_pixel(x + 4, y) == 0x666666


def test_titles_sit_either_side_of_centre(engine, images):
    top, _ = _title(engine, images, True)
    bottom, _ = _title(engine, images, False)
    assert top.curr_y + top.image.height <= ScreenData.HEIGHT // 2
    assert bottom.curr_y >= ScreenData.HEIGHT // 2
    for script in (top, bottom):
        assert abs(script.curr_x + script.image.width / 2 - ScreenData.WIDTH / 2) <= 1


def test_titles_slide_apart(engine, images):
    top, top_holder = _title(engine, images, True)
    bottom, bottom_holder = _title(engine, images, False)
    top_start, bottom_start = top.curr_x, bottom.curr_x
    top.update(100, engine, top_holder)
    bottom.update(100, engine, bottom_holder)
    assert top.curr_x < top_start
    assert bottom.curr_x > bottom_start
    assert top.vel_x == pytest.approx(TitleScript.ACCEL * 0.1)


def test_title_finishes_off_screen(engine, images):
    script, holder = _title(engine, images, True)
    for _ in range(100):
        script.update(1000, engine, holder)
        if holder.delete_self:
            break
    assert holder.delete_self is True
    assert script.curr_x + script.image.width < 0
    screen = engine.screen.screen_data
    assert all(color == 0 for row in screen.image_pixels for color in row)


def test_bottom_title_exits_right(engine, images):
    script, holder = _title(engine, images, False)
    for _ in range(100):
        script.update(1000, engine, holder)
        if holder.delete_self:
            break
    assert holder.delete_self is True
    assert script.curr_x > ScreenData.WIDTH