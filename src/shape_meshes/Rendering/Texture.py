#!/usr/bin/env python3
# Texture.py
import numpy as np
from OpenGL.GL import *
from PIL import Image


def checker_image(size: int = 256, cells: int = 8) -> np.ndarray:
    """(size, size, 3) uint8 checkerboard, handy for eyeballing uv seams."""
    idx = (np.arange(size) * cells // size)
    mask = (idx[:, None] + idx[None, :]) % 2 == 0
    img = np.where(mask[..., None], np.array([230, 230, 230], np.uint8), np.array([40, 90, 160], np.uint8))
    return img.astype(np.uint8)


class Texture2D:
    def __init__(self, path: str):
        img = Image.open(path).convert("RGB").transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        w, h = img.size
        self._upload(np.frombuffer(img.tobytes(), dtype=np.uint8), w, h)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "Texture2D":
        tex = cls.__new__(cls)
        pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        h, w = pixels.shape[:2]
        tex._upload(pixels.reshape(-1), w, h)
        return tex

    def _upload(self, data: np.ndarray, w: int, h: int):
        self.id = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, self.id)
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGB, w, h, 0, GL_RGB, GL_UNSIGNED_BYTE, data)
        glGenerateMipmap(GL_TEXTURE_2D)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR_MIPMAP_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_REPEAT)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_REPEAT)

    def bind(self, unit: int):
        glActiveTexture(GL_TEXTURE0 + unit)
        glBindTexture(GL_TEXTURE_2D, self.id)
