from escape_room.room.tiles import Cell
from escape_room.settings import ENV_SETTINGS_FILE, Settings


def write_yaml(tmp_path, text):
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults(tmp_path):
    s = Settings.from_sources(env={}, file_path=tmp_path / "missing.yaml")
    assert s.frontend == "terminal"
    assert s.room_size is None
    assert s.seed is None
    assert s.show_instructions is True
    assert s.glyph_table()[Cell.WALL] == "#"


def test_yaml_sections_are_flattened(tmp_path):
    path = write_yaml(
        tmp_path,
        """
room:
  width: 30
  height: 12
  seed: lucky
display:
  frontend: headless
  show_instructions: false
glyphs:
  player: "@"
""",
    )
    s = Settings.from_sources(env={}, file_path=path)
    assert s.room_size == (30, 12)
    assert s.seed == "lucky"
    assert s.frontend == "headless"
    assert s.show_instructions is False
    assert s.glyph_table()[Cell.PLAYER] == "@"


def test_env_overrides_file_and_overrides_win(tmp_path):
    path = write_yaml(tmp_path, "room:\n  width: 30\n  height: 12\n  seed: 5\n")
    env = {"ESCAPE_ROOM_WIDTH": "40", "ESCAPE_ROOM_SEED": "99", "ESCAPE_ROOM_INSTRUCTIONS": "no"}
    s = Settings.from_sources(env=env, file_path=path)
    assert s.room_size == (40, 12)
    assert s.seed == 99
    assert s.show_instructions is False

    s = Settings.from_sources(env=env, file_path=path, overrides={"width": 50, "seed": None})
    assert s.room_size == (50, 12)
    assert s.seed == 99


def test_invalid_values_are_dropped(tmp_path):
    path = write_yaml(tmp_path, "width: 5\nheight: 12\nfrontend: vr\nbogus: 1\n")
    env = {"ESCAPE_ROOM_TILE_PX": "abc"}
    s = Settings.from_sources(env=env, file_path=path)
    assert s.room_size is None
    assert s.frontend == "terminal"
    assert s.tile_px == 24


def test_broken_yaml_is_ignored(tmp_path):
    path = write_yaml(tmp_path, "room: [unclosed\n")
    s = Settings.from_sources(env={}, file_path=path)
    assert s.room_size is None


def test_settings_file_from_env(tmp_path, monkeypatch):
    path = write_yaml(tmp_path, "display:\n  frontend: gui\n  tile_px: 200\n")
    monkeypatch.setenv(ENV_SETTINGS_FILE, str(path))
    s = Settings.from_sources()
    assert s.frontend == "gui"
    assert s.tile_px == 96


def test_non_numeric_width_in_yaml_is_dropped(tmp_path):
    path = write_yaml(tmp_path, "room:\n  width: abc\n  height: 12\n")
    s = Settings.from_sources(env={}, file_path=path)
    assert s.width is None
    assert s.height == 12
    assert s.room_size is None


def test_fractional_width_in_yaml_is_dropped(tmp_path):
    path = write_yaml(tmp_path, "room:\n  width: 30.5\n  height: 12\n")
    s = Settings.from_sources(env={}, file_path=path)
    assert s.room_size is None

    path = write_yaml(tmp_path, "room:\n  width: 30.0\n  height: 12\n")
    s = Settings.from_sources(env={}, file_path=path)
    assert s.room_size == (30, 12)
    assert isinstance(s.width, int)


def test_non_numeric_tile_size_falls_back_to_default(tmp_path):
    path = write_yaml(tmp_path, "display:\n  tile_px: big\n")
    s = Settings.from_sources(env={}, file_path=path)
    assert s.tile_px == 24


def test_quoted_boolean_words_in_yaml(tmp_path):
    path = write_yaml(tmp_path, 'display:\n  show_instructions: "no"\n')
    assert Settings.from_sources(env={}, file_path=path).show_instructions is False

    path = write_yaml(tmp_path, 'display:\n  show_instructions: "maybe"\n')
    assert Settings.from_sources(env={}, file_path=path).show_instructions is True


def test_invalid_env_value_keeps_file_value(tmp_path):
    path = write_yaml(tmp_path, "room:\n  width: 30\n  height: 12\n")
    env = {"ESCAPE_ROOM_WIDTH": "wide", "ESCAPE_ROOM_INSTRUCTIONS": "sometimes"}
    s = Settings.from_sources(env=env, file_path=path)
    assert s.room_size == (30, 12)
    assert s.show_instructions is True


def test_bad_values_set_directly_are_normalized():
    s = Settings(width="40", height=True, tile_px="12", show_instructions="off")
    s.validate()
    assert s.width == 40
    assert s.height is None
    assert s.room_size is None
    assert s.tile_px == 12
    assert s.show_instructions is False
