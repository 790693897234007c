import numpy as np


def to_rgba(framebuffer, scale, small=None):
    """Turn the 32x64 framebuffer into upscaled RGBA rows, bottom row first.

    pyglet's origin is bottom-left while the CHIP-8 screen is top-left, so
    the rows are flipped. `small` is an optional (32, 64, 4) uint8 scratch
    buffer reused between frames.
    """
    height, width = framebuffer.shape
    if small is None:
        small = np.zeros((height, width, 4), dtype=np.uint8)
    small[..., 3] = 255
    small[..., :3] = (np.flipud(framebuffer) * 255)[..., np.newaxis]

    if scale != 1:
        return np.repeat(np.repeat(small, scale, axis=0), scale, axis=1)
    return small
