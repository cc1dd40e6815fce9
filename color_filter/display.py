"""Reading, saving and showing images outside the filtering core."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from .exceptions import ImageReadError, ImageWriteError


def read_image(path: str | Path) -> np.ndarray:
    """Read an image file as an RGB uint8 array.

    Raises:
        ImageReadError: If OpenCV cannot decode the file
    """
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise ImageReadError(str(path))
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def save_image(path: str | Path, image: np.ndarray) -> None:
    """Write an RGB uint8 array to an image file.

    Raises:
        ImageWriteError: If OpenCV fails to encode or write the file
    """
    bgr = cv2.cvtColor(np.array(image, copy=True), cv2.COLOR_RGB2BGR)
    try:
        ok = cv2.imwrite(str(path), bgr)
    except cv2.error as e:
        raise ImageWriteError(str(path)) from e
    if not ok:
        raise ImageWriteError(str(path))


def show_image(image: np.ndarray, title: str | None = None) -> None:
    """Display an RGB image in a matplotlib window."""
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    ax.imshow(image)
    if title:
        ax.set_title(title)
    ax.axis("off")
    fig.tight_layout()
    plt.show()


def show_comparison(images: dict[str, np.ndarray], title: str | None = None) -> None:
    """Display several named images side by side."""
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(1, len(images), figsize=(4 * len(images), 4))
    axes = np.atleast_1d(axes)
    for ax, (name, image) in zip(axes, images.items()):
        ax.imshow(image)
        ax.set_title(name)
        ax.axis("off")
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    plt.show()
