"""
This module renders the spotted stellar disk.
"""

import numpy as np
import matplotlib.pyplot as plt

from ..simulate import *

__all__ = ['paint_quiet_disk', 'render_disk']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def paint_quiet_disk(image: np.ndarray, star: StellarDisk) -> np.ndarray:
    """Fill an RGBA buffer with the limb-darkened quiet disk, using the same color ramp as Simulator.draw_rgba

    Parameters
    ----------
    image
        Row-major RGBA buffer of image_size x image_size pixels
    star
        Star providing the limb law

    Returns
    -------
    np.ndarray
        The same buffer, viewed as (image_size, image_size, 4)
    """
    pixels = image.reshape(image_size, image_size, 4)
    # Row index runs down the projected rotation axis, column index along y
    coords = np.linspace(-1., 1., image_size)
    y_grid, z_grid = np.meshgrid(coords, -coords)
    r_sq = y_grid**2 + z_grid**2
    on_disk = r_sq <= 1.
    intensity = star.limb.limb_darkened_radial_position(np.sqrt(r_sq))
    pixels[..., 0] = np.where(on_disk, np.clip(intensity * 255., 0, 255), 0).astype(np.uint8)
    pixels[..., 1] = np.where(on_disk, np.clip(intensity * 131., 0, 255), 0).astype(np.uint8)
    pixels[..., 2] = 0
    pixels[..., 3] = np.where(on_disk, 255, 0).astype(np.uint8)
    return pixels


def render_disk(simulator: Simulator,
                time: float,
                save: str=None,
                plt_title: str=None) -> np.ndarray:
    """Draw the star with its active regions at a given time

    Parameters
    ----------
    simulator
        Simulator to draw
    time
        Days
    save
        If None, runs plt.show()
        If filepath str, saves to save location (must include file extension)
    plt_title
        Optional title, defaults to the time

    Returns
    -------
    np.ndarray
        The (image_size, image_size, 4) RGBA image
    """
    image = simulator.new_image()
    paint_quiet_disk(image, simulator.star)
    simulator.draw_rgba(time, image)
    rgba = image.reshape(image_size, image_size, 4)

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.imshow(rgba, extent=(-1, 1, -1, 1))
    ax.set_facecolor('k')
    ax.set_xlabel("y (stellar radii)")
    ax.set_ylabel("z (stellar radii)")
    if plt_title is None:
        plt_title = "t = {:.2f} d".format(time)
    ax.set_title(plt_title)
    plt.tight_layout()
    if save is not None:
        plt.savefig(save)
        plt.close(fig)
    else:
        plt.show()
    return rgba
