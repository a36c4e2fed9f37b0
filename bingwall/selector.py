"""
Selector

Pick a new "current" image from the catalog. Newer images are favoured through positional
weights: with the candidates ordered oldest first, the i-th candidate (counting from 1) has weight i.
The current image is left out of the draw unless it is the only image there is.
"""

import random
from typing import Optional

from bingwall.image_data import ImageData
from bingwall.image_data import file_name


class EmptyCatalogError(Exception):
    """Raise when an image is asked for but the catalog has no images."""

    pass


def select_image(
    image_data: ImageData, current: Optional[str], size: str, ext: str
) -> str:
    """
    Return the file name of a weighted random image from image_data, other than current if possible.
    Nothing is modified, saving the result as the current image is up to the caller.
    """

    if not len(image_data):
        raise EmptyCatalogError(
            "Looks like you don't have any images. Try running the 'update' command first."
        )

    images = image_data.sorted()
    candidates = [image for image in images if file_name(image, size, ext) != current]

    # a single image that is already current is still a valid choice
    if not candidates:
        candidates = images

    weights = range(1, len(candidates) + 1)
    (image,) = random.choices(candidates, weights=weights)

    return file_name(image, size, ext)
