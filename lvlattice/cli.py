# -*- coding: utf-8 -*-
"""Command-line entry point.

    lvlattice --config configs/base.yaml
    lvlattice --config configs/base.yaml --warm-start --shake-up

Exit codes: 0 success, 1 bad configuration or warm-start file (nothing was
simulated), 2 trajectory computed but the final snapshot was not saved,
3 numeric divergence under the ``raise`` policy.
"""
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Optional
from .config import SimConfig, load_yaml
from .errors import ConfigurationError, NumericDivergence, SnapshotLoadError, SnapshotSaveError
from .simulate import run_lattice
from .viz import make_gif

logger = logging.getLogger('lvlattice')

EXIT_OK, EXIT_SETUP, EXIT_SAVE, EXIT_DIVERGED = 0, 1, 2, 3


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='lvlattice', description='Spatial predator-prey coupled map lattice')
    parser.add_argument('--config', type=Path, default=None, help='YAML config file')
    start = parser.add_mutually_exclusive_group()
    start.add_argument('--warm-start', dest='warm_start', action='store_true', default=None,
                       help='Start from the saved prey/predator snapshots')
    start.add_argument('--cold-start', dest='warm_start', action='store_false', default=None,
                       help='Start from uniform random fields')
    parser.add_argument('--shake-up', action='store_true', default=None, help='Add noise to the initial prey field')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--no-anim', action='store_true', help='Skip the GIF')
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimConfig:
    # Overrides go into the raw sections so they take part in validation.
    data = load_yaml(args.config) if args.config else {}
    run = {k: v for k, v in (('warm_start', args.warm_start), ('shake_up', args.shake_up),
                             ('seed', args.seed)) if v is not None}
    anim = {'enabled': False} if args.no_anim else {}
    for name, values in (('run', run), ('anim', anim)):
        if values: data[name] = {**(data.get(name) or {}), **values}
    return SimConfig.from_dict(data)


def _animate(cfg: SimConfig, res):
    a = cfg.anim
    make_gif(res['prey_hist'], res['pred_hist'], outfile=a.outfile, start=cfg.run.anim_start, fps=a.fps,
             update_interval=cfg.run.update_interval, figsize=a.figsize, dpi=a.dpi, cmap=a.cmap)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    try:
        cfg = build_config(args)
        res = run_lattice(cfg)
    except (ConfigurationError, SnapshotLoadError) as exc:
        logger.error('Aborted before simulating: %s', exc)
        return EXIT_SETUP
    except NumericDivergence as exc:
        logger.error('Simulation diverged: %s', exc)
        return EXIT_DIVERGED
    except SnapshotSaveError as exc:
        logger.error('Trajectory is complete but the warm-start snapshot was not saved: %s', exc)
        if cfg.anim.enabled: _animate(cfg, exc.result)
        return EXIT_SAVE
    if cfg.anim.enabled: _animate(cfg, res)
    return EXIT_OK


if __name__ == '__main__':
    raise SystemExit(main())
