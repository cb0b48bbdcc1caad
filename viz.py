from __future__ import annotations

from typing import List, Optional

import cv2
import imageio.v2 as imageio
import numpy as np

from grid import Image
from utils import ensure_parent_dir, to_uint8

SEAM_RGB = (255, 0, 0)


def _pad_to_size_rgb(img_rgb: np.ndarray, target_h: int, target_w: int) -> np.ndarray:
    """Pad RGB image to (target_h, target_w) with solid white (255,255,255)."""
    h, w = img_rgb.shape[:2]
    dh = max(0, target_h - h)
    dw = max(0, target_w - w)
    if dh == 0 and dw == 0:
        return img_rgb
    return cv2.copyMakeBorder(img_rgb, 0, dh, 0, dw, borderType=cv2.BORDER_CONSTANT, value=(255, 255, 255))


class VizGifRecorder:
    """
    GIF recorder for seam carving.

    - on_seam(image, seam_idx): draws the seam (red) on a uint8 copy and stores an RGB frame.
    - Frames are padded on the right with white to the size of the first
      recorded frame, since every carved image is one column narrower.
    - close(): writes the animated GIF via imageio.
    """
    def __init__(self, gif_path: str, every: int = 1, max_frames: Optional[int] = None, fps: int = 12):
        self.gif_path = gif_path
        self.every = max(1, int(every))
        self.max_frames = max_frames if (max_frames is None or max_frames > 0) else None
        self.fps = max(1, int(fps))

        ensure_parent_dir(gif_path)

        self._frames: List[np.ndarray] = []
        self._step = 0
        self._target_h: Optional[int] = None
        self._target_w: Optional[int] = None

    @property
    def frames(self) -> List[np.ndarray]:
        return list(self._frames)

    def on_seam(self, image: Image, seam_idx: np.ndarray) -> None:
        """
        Record a frame with the current seam drawn in red.
        image: Image about to be carved
        seam_idx: (H,) int64 column for each row
        """
        step = self._step
        self._step += 1
        if step % self.every != 0:
            return
        if self.max_frames is not None and len(self._frames) >= self.max_frames:
            return

        frame = to_uint8(image.data).copy()
        h, w = frame.shape[:2]
        if self._target_h is None:
            self._target_h, self._target_w = h, w

        rows = np.arange(h)
        cols = np.asarray(seam_idx, dtype=np.int64)
        inside = (cols >= 0) & (cols < w)
        frame[rows[inside], cols[inside]] = SEAM_RGB

        self._frames.append(_pad_to_size_rgb(frame, self._target_h, self._target_w))

    def close(self) -> None:
        """Write the animated GIF to disk (if any frames were recorded)."""
        if not self._frames:
            return
        duration_sec = 1.0 / float(self.fps)
        imageio.mimsave(self.gif_path, self._frames, format="GIF", duration=duration_sec, loop=0)
