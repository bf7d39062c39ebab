import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

from lvlattice.config import RunConfig, SimConfig, AnimConfig


@pytest.fixture
def small_cfg(tmp_path):
    run = RunConfig(grid_size=4, horizon=3, seed=7, update_interval=0,
                    prey_file=str(tmp_path / 'LastX.txt'), predator_file=str(tmp_path / 'LastY.txt'))
    return SimConfig(run=run, anim=AnimConfig(enabled=False))


@pytest.fixture(autouse=True)
def _seed():
    np.random.seed(1234)
