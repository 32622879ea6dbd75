"""Sprite I/O layer for pixelcontour.

This module loads alpha masks from image files using Pillow. It is the
boundary between image data and the domain models; detection itself never
touches image libraries.

Key responsibilities:
- Load PNG (and other Pillow-readable) sprites
- Extract the alpha channel with a bottom-left origin
- Cut sprite sub-regions out of sprite sheets

Key classes:
- SpriteReader: Load sprites and extract alpha masks
"""

from pixelcontour.io.reader import SpriteReader, read_alpha_mask

__all__ = [
    "SpriteReader",
    "read_alpha_mask",
]
