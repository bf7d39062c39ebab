import numpy as np
import pytest

from lvlattice.config import InitConfig, RunConfig
from lvlattice.errors import PersistenceShapeError, SnapshotLoadError, SnapshotSaveError
from lvlattice.grid import GridIndexing, LatticeState
from lvlattice.warmstart import (cold_start, initialize, load_snapshot, save_final,
                                 save_snapshot, shake_up)


def _run_cfg(tmp_path, **kw):
    kw.setdefault('grid_size', 4)
    return RunConfig(prey_file=str(tmp_path / 'X.txt'), predator_file=str(tmp_path / 'Y.txt'), **kw)


def test_cold_start_ranges():
    ix = GridIndexing(10)
    prey, pred = cold_start(ix, InitConfig(x_min=0.2, x_max=0.6, y_min=0.3, y_max=0.4))
    assert prey.shape == pred.shape == (12, 12)
    assert prey.min() >= 0.2 and prey.max() <= 0.6
    assert pred.min() >= 0.3 and pred.max() <= 0.4


def test_snapshot_round_trip_is_exact(tmp_path):
    ix = GridIndexing(5)
    frame = np.random.rand(*ix.shape) * 3
    path = tmp_path / 'snap.txt'
    save_snapshot(path, frame, '|')
    assert path.read_text().splitlines()[0].count('|') == ix.padded - 1
    assert np.array_equal(load_snapshot(path, ix, '|'), frame)


def test_other_delimiters_round_trip(tmp_path):
    ix = GridIndexing(2)
    frame = np.random.rand(*ix.shape)
    for delim in (',', ';', ' '):
        save_snapshot(tmp_path / 's.txt', frame, delim)
        assert np.array_equal(load_snapshot(tmp_path / 's.txt', ix, delim), frame)


@pytest.mark.parametrize('shape', [(5, 6), (6, 5), (7, 7)])
def test_shape_mismatch(tmp_path, shape):
    path = tmp_path / 'bad.txt'
    np.savetxt(path, np.ones(shape), delimiter='|')
    with pytest.raises(PersistenceShapeError) as info:
        load_snapshot(path, GridIndexing(4), '|')
    assert info.value.expected == (6, 6) and info.value.found == shape


def test_missing_file(tmp_path):
    with pytest.raises(SnapshotLoadError):
        load_snapshot(tmp_path / 'nope.txt', GridIndexing(4))


def test_malformed_file(tmp_path):
    path = tmp_path / 'junk.txt'
    path.write_text('1|2|x\n3|4|5\n')
    with pytest.raises(SnapshotLoadError):
        load_snapshot(path, GridIndexing(1))


def test_failed_warm_start_leaves_state_untouched(tmp_path):
    cfg = _run_cfg(tmp_path, warm_start=True)
    ix = GridIndexing(4)
    np.savetxt(cfg.prey_file, np.ones(ix.shape), delimiter='|')
    np.savetxt(cfg.predator_file, np.ones((5, 6)), delimiter='|')
    state = LatticeState(ix, 3)
    with pytest.raises(PersistenceShapeError):
        initialize(state, InitConfig(), cfg)
    assert state.latest == -1
    assert not state.prey.any() and not state.predator.any()


def test_warm_start_installs_saved_values(tmp_path):
    cfg = _run_cfg(tmp_path, warm_start=True)
    ix = GridIndexing(4)
    x, y = np.random.rand(*ix.shape), np.random.rand(*ix.shape)
    save_snapshot(cfg.prey_file, x); save_snapshot(cfg.predator_file, y)
    state = initialize(LatticeState(ix, 3), InitConfig(), cfg)
    assert np.array_equal(state.prey[0], x) and np.array_equal(state.predator[0], y)


def test_shake_up_clamps_to_unit_interval():
    prey = np.random.rand(20, 20)
    noisy = shake_up(prey, 1.0)
    assert noisy.min() >= 0.0 and noisy.max() <= 1.0
    assert not np.array_equal(noisy, prey)
    assert np.array_equal(shake_up(prey, 0.0), prey)


def test_shake_up_only_touches_prey(tmp_path):
    cfg = _run_cfg(tmp_path, warm_start=True, shake_up=True)
    ix = GridIndexing(4)
    y = np.full(ix.shape, 2.5)
    save_snapshot(cfg.prey_file, np.full(ix.shape, 1.7)); save_snapshot(cfg.predator_file, y)
    state = initialize(LatticeState(ix, 3), InitConfig(noise_amplitude=0.1), cfg)
    assert state.prey[0].max() <= 1.0 and state.prey[0].min() >= 0.0
    assert np.array_equal(state.predator[0], y)


def test_save_final_overwrites(tmp_path):
    cfg = _run_cfg(tmp_path, horizon=2)
    ix = GridIndexing(4)
    (tmp_path / 'X.txt').write_text('old content\n')
    state = LatticeState(ix, 2)
    state.install(0, np.zeros(ix.shape), np.zeros(ix.shape))
    state.begin(1); state.slice('prey', 1)[:] = 0.25; state.slice('predator', 1)[:] = 0.75
    save_final(state, cfg)
    assert np.array_equal(load_snapshot(cfg.prey_file, ix), np.full(ix.shape, 0.25))
    assert np.array_equal(load_snapshot(cfg.predator_file, ix), np.full(ix.shape, 0.75))


def test_save_to_missing_directory(tmp_path):
    with pytest.raises(SnapshotSaveError):
        save_snapshot(tmp_path / 'missing' / 'X.txt', np.ones((3, 3)))


def test_failed_save_keeps_previous_pair(tmp_path):
    ix = GridIndexing(4)
    cfg = RunConfig(grid_size=4, horizon=1, prey_file=str(tmp_path / 'X.txt'),
                    predator_file=str(tmp_path / 'gone' / 'Y.txt'))
    (tmp_path / 'X.txt').write_text('OLD PREY\n')
    state = LatticeState(ix, 1)
    state.install(0, np.full(ix.shape, 0.5), np.full(ix.shape, 0.5))
    with pytest.raises(SnapshotSaveError):
        save_final(state, cfg)
    assert (tmp_path / 'X.txt').read_text() == 'OLD PREY\n'
    assert sorted(p.name for p in tmp_path.iterdir()) == ['X.txt']


def test_save_final_leaves_no_staging_files(tmp_path):
    ix = GridIndexing(2)
    cfg = _run_cfg(tmp_path, grid_size=2, horizon=1)
    state = LatticeState(ix, 1)
    state.install(0, np.ones(ix.shape), np.zeros(ix.shape))
    save_final(state, cfg)
    assert sorted(p.name for p in tmp_path.iterdir()) == ['X.txt', 'Y.txt']


def test_unparsable_delimiter_is_a_load_error(tmp_path, monkeypatch):
    path = tmp_path / 's.txt'
    save_snapshot(path, np.ones((3, 3)))
    monkeypatch.setattr('lvlattice.warmstart.check_delimiter', lambda d: None)
    with pytest.raises(SnapshotLoadError):
        load_snapshot(path, GridIndexing(1), '\n')
