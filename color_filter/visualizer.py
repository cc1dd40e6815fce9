"""Debug visualization utilities for color filtering."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING

import cv2
import numpy as np

if TYPE_CHECKING:
    from .models import PolicyMode, ThresholdBounds

logger = logging.getLogger(__name__)


class DebugVisualizer:
    """Saves debug images at each step of color filtering."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        if self.output_dir.exists():
            # Backup existing debug dir before cleaning
            backup_dir = self.output_dir.with_suffix(".bak")
            if backup_dir.exists():
                import shutil

                shutil.rmtree(backup_dir)
            self.output_dir.rename(backup_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.step = 0

    def _next_path(self, name: str) -> Path:
        self.step += 1
        return self.output_dir / f"{self.step:02d}_{name}.png"

    def _save(self, name: str, img: np.ndarray):
        path = self._next_path(name)
        img = np.array(img, copy=True)
        if img.ndim == 3:
            img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
        cv2.imwrite(str(path), img)
        logger.debug("Saved %s", path)

    def save_region(self, region: np.ndarray):
        """Save the cropped region the policy is evaluated on."""
        self._save("region", region)

    def save_mask(self, region: np.ndarray, mask: np.ndarray):
        """Save the binary mask and the region with stopped pixels overlaid in red."""
        self._save("mask", mask.astype(np.uint8) * 255)

        vis = region.copy()
        overlay = vis.copy()
        overlay[mask] = (255, 0, 0)
        cv2.addWeighted(overlay, 0.5, vis, 0.5, 0, vis)
        self._save("mask_overlay", vis)

    def save_metric_histograms(
        self,
        metrics: dict[str, np.ndarray],
        bounds: ThresholdBounds,
        mode: PolicyMode,
    ):
        """Save one histogram per policy metric with the bounds marked.

        Args:
            metrics: Metric name to (H, W) array, in bound-pair order
            bounds: Bounds the metrics were compared against
            mode: Policy the metrics belong to
        """
        import matplotlib.pyplot as plt
        import pandas as pd

        fig, axes = plt.subplots(1, len(metrics), figsize=(5 * len(metrics), 3), squeeze=False)

        for ax, (name, values), (lower, upper) in zip(axes[0], metrics.items(), bounds.pairs):
            df = pd.DataFrame({name: values.ravel().astype(np.float64)})
            # Zero denominators in ratio mode produce inf/NaN
            finite = df[name][np.isfinite(df[name])]
            ax.hist(finite, bins=64, alpha=0.7)
            for value, color, label in ((lower, "blue", "lower"), (upper, "red", "upper")):
                if math.isfinite(value):
                    ax.axvline(x=value, color=color, linestyle="--", label=f"{label}={value:g}")
            ax.set_xlabel(name)
            ax.set_ylabel("Count")
            ax.legend()

        fig.suptitle(f"Mode {int(mode)} ({mode.name.lower()}) metrics")
        fig.tight_layout()
        fig.savefig(self._next_path("metrics"), dpi=100)
        plt.close(fig)

    def save_output(self, output: np.ndarray):
        """Save the filtered output image."""
        self._save("output", output)

    def save_comparison(self, region: np.ndarray, masks: dict[str, np.ndarray]):
        """Save the masks of several policies side by side."""
        import matplotlib.pyplot as plt

        fig, axes = plt.subplots(1, len(masks) + 1, figsize=(4 * (len(masks) + 1), 4))
        axes = np.atleast_1d(axes)

        axes[0].imshow(region)
        axes[0].set_title("Region")
        axes[0].axis("off")

        for ax, (name, mask) in zip(axes[1:], masks.items()):
            ax.imshow(mask, cmap="gray")
            ax.set_title(f"{name}: {mask.mean():.1%} stopped")
            ax.axis("off")

        fig.tight_layout()
        fig.savefig(self._next_path("comparison"), dpi=100)
        plt.close(fig)
