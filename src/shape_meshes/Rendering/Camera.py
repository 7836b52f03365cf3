# Camera.py
import math
from typing import Optional

import numpy as np


class OrbitCamera:
    """Perspective camera circling a target; yaw/pitch in degrees."""

    def __init__(
        self,
        distance: float = 5.0,
        target: Optional[np.ndarray] = None,
        yaw: float = 30.0,
        pitch: float = 20.0,
        fov: float = 45.0,
        aspect: float = 1.0,
        near: float = 0.1,
        far: float = 100.0,
    ) -> None:
        self.distance = distance
        self.target = target if target is not None else np.array([0.0, 0.0, 0.0], dtype=np.float32)
        self.yaw = yaw
        self.pitch = pitch
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far

    # ------------------------------------------------ core helpers
    def eye(self) -> np.ndarray:
        yaw, pitch = math.radians(self.yaw), math.radians(self.pitch)
        offset = np.array([math.cos(pitch) * math.sin(yaw),
                           math.sin(pitch),
                           math.cos(pitch) * math.cos(yaw)], dtype=np.float32)
        return self.target + self.distance * offset

    def orbit(self, d_yaw: float, d_pitch: float) -> None:
        self.yaw = (self.yaw + d_yaw) % 360.0
        self.pitch = min(max(self.pitch + d_pitch, -89.0), 89.0)

    # ------------------------------------------------ matrix builders
    def view_matrix(self) -> np.ndarray:
        eye = self.eye()
        f = self.target - eye
        f /= np.linalg.norm(f)
        s = np.cross(f, np.array([0.0, 1.0, 0.0], dtype=np.float32))
        s /= np.linalg.norm(s)
        u = np.cross(s, f)

        m = np.eye(4, dtype=np.float32)
        m[0, :3] = s
        m[1, :3] = u
        m[2, :3] = -f
        m[:3, 3] = -m[:3, :3] @ eye
        return m

    def projection_matrix(self) -> np.ndarray:
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        n, fp = self.near, self.far
        m = np.zeros((4, 4), dtype=np.float32)
        m[0, 0] = f / self.aspect
        m[1, 1] = f
        m[2, 2] = (fp + n) / (n - fp)
        m[2, 3] = (2 * fp * n) / (n - fp)
        m[3, 2] = -1.0
        return m
