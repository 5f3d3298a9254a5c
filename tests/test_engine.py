from boxbreath.core.config import SessionConfig
from boxbreath.core.engine import CycleState, Phase, advance, initial_state, phase_label


CONFIG = SessionConfig(total_breaths=6, phase_duration_ms=4000)


def run_samples(samples: list[float], config: SessionConfig = CONFIG) -> list[CycleState]:
    state = initial_state()
    states = []
    for sample in samples:
        state = advance(sample, state, config)
        states.append(state)
    return states


def test_phases_cycle_in_fixed_order() -> None:
    states = run_samples([float(ms) for ms in range(0, 32000, 250)])

    order = []
    for state in states:
        if not order or order[-1] != (state.breath_index, state.phase_index):
            order.append((state.breath_index, state.phase_index))

    assert order == [(1, 0), (1, 1), (1, 2), (1, 3), (2, 0), (2, 1), (2, 2), (2, 3)]
    breaths = [s.breath_index for s in states]
    assert breaths == sorted(breaths)


def test_progress_stays_in_unit_interval() -> None:
    states = run_samples([ms * 37.3 for ms in range(0, 3000)])
    assert all(0.0 <= s.progress <= 1.0 for s in states)
    assert all(s.finished or s.phase_elapsed_ms < CONFIG.phase_duration_ms for s in states)


def test_exact_boundary_reports_next_phase_at_zero() -> None:
    state = advance(3999.0, initial_state(), CONFIG)
    assert state.phase == Phase.INHALE
    assert state.progress == 3999.0 / 4000

    state = advance(4000.0, state, CONFIG)
    assert state.phase == Phase.HOLD1
    assert state.progress == 0.0
    assert state.phase_elapsed_ms == 0.0


def test_wrapping_past_second_hold_counts_a_breath() -> None:
    state = advance(15999.0, initial_state(), CONFIG)
    assert (state.phase, state.breath_index) == (Phase.HOLD2, 1)

    state = advance(16000.0, state, CONFIG)
    assert (state.phase, state.breath_index) == (Phase.INHALE, 2)


def test_finishes_only_after_all_breaths() -> None:
    state = advance(95999.0, initial_state(), CONFIG)
    assert state.finished is False
    assert (state.phase, state.breath_index) == (Phase.HOLD2, 6)

    state = advance(96000.0, state, CONFIG)
    assert state.finished is True
    assert state.breath_index == 7


def test_coarse_and_fine_sampling_agree() -> None:
    coarse = run_samples([float(ms) for ms in range(0, 96001, 1000)])
    fine = run_samples([i * 1000.0 / 60 for i in range(0, 5761)] + [96000.0])

    assert coarse[-1] == fine[-1]
    assert coarse[-1].finished is True


def test_same_final_state_for_dense_and_sparse_samples() -> None:
    dense = run_samples([float(ms) for ms in range(0, 50001, 10)])
    sparse = run_samples([50000.0])
    assert dense[-1] == sparse[-1]


def test_resampling_same_timestamp_is_stable() -> None:
    state = advance(12345.0, initial_state(), CONFIG)
    assert advance(12345.0, state, CONFIG) == state


def test_large_jump_folds_whole_phases() -> None:
    state = advance(1000.0, initial_state(), CONFIG)

    state = advance(51000.0, state, CONFIG)

    # 51000 ms = 12 whole phases (3 breaths) + 3000 ms
    assert state.finished is False
    assert state.breath_index == 4
    assert state.phase == Phase.INHALE
    assert state.phase_elapsed_ms == 3000.0
    assert state.progress == 0.75


def test_large_jump_does_not_skip_finish() -> None:
    state = advance(60000.0, initial_state(), CONFIG)
    state = advance(60000.0 + 10 * 60 * 1000, state, CONFIG)
    assert state.finished is True


def test_finished_state_is_terminal() -> None:
    finished = advance(100000.0, initial_state(), CONFIG)
    assert advance(200000.0, finished, CONFIG) is finished


def test_clock_going_back_holds_position() -> None:
    state = advance(6000.0, initial_state(), CONFIG)

    again = advance(5000.0, state, CONFIG)

    assert again == state
    assert advance(6500.0, again, CONFIG).phase_elapsed_ms == 2500.0


def test_single_breath_session() -> None:
    config = SessionConfig(total_breaths=1, phase_duration_ms=10)
    states = run_samples([0.0, 5.0, 15.0, 25.0, 35.0, 39.9, 40.0], config)
    assert [s.phase_index for s in states[:-1]] == [0, 0, 1, 2, 3, 3]
    assert states[-1].finished is True


def test_hold_phases_share_label() -> None:
    assert phase_label(Phase.INHALE) == "Inhale…"
    assert phase_label(Phase.EXHALE) == "Exhale…"
    assert phase_label(Phase.HOLD1) == phase_label(Phase.HOLD2) == "Hold…"
