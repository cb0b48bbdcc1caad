from __future__ import annotations
import logging
from typing import Callable, Optional

import numpy as np

from errors import DimensionError
from energy import EnergyField
from grid import Image
from seams import check_seam, find_seam, remove_seam
from utils import Config

logger = logging.getLogger(__name__)

# Type alias: on_seam(image, seam_idx_int64) -> None
OnSeam = Optional[Callable[[Image, np.ndarray], None]]


def carve(image: Image, cfg: Config = Config(), on_seam: OnSeam = None) -> Image:
    """Remove the single lowest-energy vertical seam; optionally call `on_seam` before removal."""
    energy = EnergyField.compute(image)
    total, seam_idx = find_seam(energy, prune=cfg.prune_search)
    if cfg.check_seams:
        check_seam(image, seam_idx, connected=True)
    if on_seam is not None:
        on_seam(image, seam_idx)  # visualize current seam on current image
    output = remove_seam(image, seam_idx)
    logger.debug("removed seam with energy %.6f, width now %d", total, output.width)
    return output


def carve_n(image: Image, num_remove: int, cfg: Config = Config(), on_seam: OnSeam = None) -> Image:
    """
    Remove `num_remove` vertical seams one at a time, recomputing energy and
    seam after every removal. Nothing is carved if the count is invalid.
    """
    num_remove = int(num_remove)
    if num_remove < 0:
        raise DimensionError(f"cannot remove a negative number of columns ({num_remove})")
    if num_remove >= image.width:
        raise DimensionError(
            f"cannot remove {num_remove} columns from an image {image.width} wide"
        )

    output = image.copy()
    for _ in range(num_remove):
        output = carve(output, cfg, on_seam=on_seam)

    logger.info("carved %d seams: %dx%d -> %dx%d",
                num_remove, image.width, image.height, output.width, output.height)
    return output
