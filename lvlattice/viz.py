# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
import numpy as np, matplotlib.pyplot as plt, imageio
from pathlib import Path
from .grid import GridIndexing
from .stepper import progress_checkpoints

logger = logging.getLogger(__name__)


def _rgb(fig):
    fig.canvas.draw()
    return np.asarray(fig.canvas.buffer_rgba())[..., :3].copy()


def render_frame(prey, predator, label, figsize=(12, 6), dpi=80, cmap='viridis'):
    """Side-by-side prey/predator heatmaps on a fixed [0, 1] colour scale."""
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize, dpi=dpi)
    for ax, data, name in ((ax1, prey, 'Prey'), (ax2, predator, 'Predators')):
        im = ax.imshow(data, vmin=0, vmax=1, cmap=cmap, origin='lower')
        ax.set_xlabel(name); fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    ax1.annotate(label, xy=(0, 0), xycoords='axes fraction', xytext=(4, 4),
                 textcoords='offset points', color='white', fontsize=14, fontweight='bold')
    fig.tight_layout()
    image = _rgb(fig); plt.close(fig)
    return image


def make_gif(prey_hist, pred_hist, outfile='Dynamics.gif', start=0, fps=7,
             update_interval=10, figsize=(12, 6), dpi=80, cmap='viridis'):
    """Render slices ``start .. T-1`` of both histories into a looping GIF."""
    horizon = prey_hist.shape[0]
    n = horizon - start
    if n <= 0: raise ValueError(f'nothing to animate: start={start}, horizon={horizon}')
    width = len(str(horizon)); marks = progress_checkpoints(update_interval, n)
    Path(outfile).parent.mkdir(parents=True, exist_ok=True)
    logger.info('Animating dynamics...')
    frames = []
    for k, t in enumerate(range(start, horizon)):
        frames.append(render_frame(prey_hist[t], pred_hist[t], str(k + 1).zfill(width),
                                   figsize=figsize, dpi=dpi, cmap=cmap))
        if k + 1 in marks:
            logger.info('Animation progress: %d%%', int(np.floor(100 * (k + 1) / n)))
    imageio.mimsave(outfile, frames, duration=1000.0 / fps, loop=0)
    logger.info('Done animation! Saved %s', outfile)
    return outfile


def population_trace(prey_hist, pred_hist, ix: GridIndexing, title='Mean density', outfile=None, show=False):
    prey_mean = prey_hist[(slice(None),) + ix.inner].mean(axis=(1, 2))
    pred_mean = pred_hist[(slice(None),) + ix.inner].mean(axis=(1, 2))
    fig = plt.figure(figsize=(8, 3.6))
    plt.plot(prey_mean, label='Prey'); plt.plot(pred_mean, label='Predators')
    plt.xlabel('Time step'); plt.ylabel('Mean density'); plt.title(title); plt.legend()
    plt.tight_layout()
    if outfile:
        Path(outfile).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(outfile, dpi=180)
    if show: plt.show()
    plt.close(fig)
    return prey_mean, pred_mean
