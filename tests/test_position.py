from boxbreath.core.config import SessionConfig
from boxbreath.core.engine import CycleState, Phase
from boxbreath.core.position import Position, position_for, position_for_state


def test_inhale_runs_along_top_edge() -> None:
    assert position_for(Phase.INHALE, 0, 300) == Position(0, 0)
    assert position_for(Phase.INHALE, 0.5, 300) == Position(150, 0)
    assert position_for(Phase.INHALE, 1, 300) == Position(300, 0)


def test_edges_follow_clockwise_box() -> None:
    assert position_for(Phase.HOLD1, 0.25, 300) == Position(300, 75)
    assert position_for(Phase.EXHALE, 0.25, 300) == Position(225, 300)
    assert position_for(Phase.HOLD2, 0.25, 300) == Position(0, 225)


def test_phase_end_meets_next_phase_start() -> None:
    phases = list(Phase)
    for index, phase in enumerate(phases):
        following = phases[(index + 1) % len(phases)]
        assert position_for(phase, 1, 300) == position_for(following, 0, 300)


def test_progress_outside_range_is_clamped() -> None:
    assert position_for(Phase.HOLD1, 1.7, 300) == Position(300, 300)
    assert position_for(Phase.EXHALE, -0.3, 300) == Position(300, 300)


def test_position_stays_on_square() -> None:
    for phase in Phase:
        for step in range(11):
            point = position_for(phase, step / 10, 120)
            assert 0 <= point.x <= 120 and 0 <= point.y <= 120
            assert point.x in (0, 120) or point.y in (0, 120)


def test_position_for_state_uses_square_size() -> None:
    config = SessionConfig(square_size=200.0)
    state = CycleState(phase_index=2, progress=0.5)
    assert position_for_state(state, config) == Position(100.0, 200.0)
