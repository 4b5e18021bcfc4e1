import pytest

from stackfall.game import GameConfig, TetrominoType, Theme

from conftest import make_engine


def test_default_config():
    config = GameConfig()
    assert (config.field_width, config.field_height) == (10, 20)
    assert config.speed_curve().interval_ms(1) == pytest.approx(800.0)
    assert config.queue_length == 3


@pytest.mark.parametrize(
    "theme, compact, rows",
    [
        (Theme.ELECTRONIKA, False, 24),
        (Theme.TECHNICOLOR, False, 20),
        (Theme.ELECTRONIKA, True, 20),
        ("technicolor", True, 20),
    ],
)
def test_theme_presets(theme, compact, rows):
    assert GameConfig.for_theme(theme, compact=compact).field_height == rows


def test_theme_overrides_win():
    config = GameConfig.for_theme(Theme.ELECTRONIKA, field_height=30, speed_factor=0.8)
    assert config.field_height == 30
    assert config.speed_factor == 0.8


def test_from_dict_accepts_host_keys():
    config = GameConfig.from_dict({"fieldHeight": 24, "fieldWidth": 10, "speedBase": 1000, "speedFactor": 0.85})
    assert config == GameConfig(field_width=10, field_height=24, speed_base_ms=1000, speed_factor=0.85)
    assert GameConfig.from_dict({"field_height": 22}).field_height == 22


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        GameConfig.from_dict({"theme": "electronika"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"field_width": 3},
        {"field_height": 2},
        {"queue_length": 2},
        {"speed_base_ms": 0},
        {"speed_factor": 1.2},
    ],
)
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_unknown_theme_raises():
    with pytest.raises(ValueError):
        GameConfig.for_theme("sepia")


def test_snapshot_read_surface():
    engine = make_engine(TetrominoType.T)
    state = engine.start(engine.init())
    assert state.gravity_interval_ms == pytest.approx(800.0)
    assert state.piece_stats == {kind: 0 for kind in TetrominoType}
    assert state.total_pieces == 0

    view = state.board_view()
    assert view.shape == (20, 10)
    assert view[0, 5] == -int(TetrominoType.T)
    assert view[1].tolist() == [0, 0, 0, 0, -3, -3, -3, 0, 0, 0]
    # The field itself does not contain the falling piece
    assert not state.field.cells.any()


def test_snapshot_is_frozen():
    state = make_engine().init()
    with pytest.raises(AttributeError):
        state.score = 10
