from PyQt6.QtCore import QRectF

from boxbreath.core.controller import SessionState
from boxbreath.scenes.box import BoxScene


def test_square_is_centred_and_capped_at_configured_size() -> None:
    scene = BoxScene(square_size=300.0, seed=1)

    square = scene.square_rect(QRectF(0, 0, 700, 500))

    assert square.width() == square.height() == 300.0
    assert square.center().x() == 350.0
    assert square.center().y() == 250.0


def test_square_shrinks_to_fit_small_area() -> None:
    scene = BoxScene(square_size=300.0, seed=1)
    square = scene.square_rect(QRectF(0, 0, 200, 400))
    assert square.width() == 160.0


def test_particles_are_reproducible_with_seed() -> None:
    assert BoxScene(300.0, seed=7)._particles == BoxScene(300.0, seed=7)._particles  # noqa: SLF001


def test_scene_dims_when_finished() -> None:
    scene = BoxScene(300.0, seed=1)
    scene.on_session_state_changed(SessionState.FINISHED)
    assert scene._dimmed is True  # noqa: SLF001
    scene.on_session_state_changed(SessionState.IDLE)
    assert scene._dimmed is False  # noqa: SLF001
