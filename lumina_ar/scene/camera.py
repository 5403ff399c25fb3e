"""
camera.py - 원근 카메라 모델

제스처 해석기가 화면 좌표를 3D 광선으로 변환할 때 사용하는 카메라 협력자.
OpenGL 관례(카메라는 -Z 방향을 바라봄, Y 위쪽, NDC ∈ [-1, 1])를 따릅니다.

제공 기능:
- 투영 행렬 / 역투영 행렬
- 월드 변환 행렬 (위치 + 오일러 XYZ 회전)
- NDC → 월드 광선 (origin, direction)
- 월드 점 → 화면 좌표

Version: 1.0
Author: Lumina AR Team
"""

import numpy as np
from scipy.spatial.transform import Rotation
from typing import Optional, Tuple
import logging

from .transform import EULER_ORDER
from ..config.system_config import CameraConfig

logger = logging.getLogger(__name__)


class PerspectiveCamera:
    """
    원근 투영 카메라

    Example:
        >>> camera = PerspectiveCamera(fov=75.0, aspect=16/9, position=(0, 0, 5))
        >>> origin, direction = camera.ray_from_ndc(0.0, 0.0)
    """

    def __init__(
        self,
        fov: float = 75.0,
        aspect: float = 1.0,
        near: float = 0.1,
        far: float = 1000.0,
        position=(0.0, 0.0, 5.0),
        rotation=(0.0, 0.0, 0.0)
    ):
        """
        Args:
            fov: 수직 시야각 (도)
            aspect: 종횡비 (width / height)
            near: 근평면 거리
            far: 원평면 거리
            position: 월드 좌표 카메라 위치
            rotation: 오일러 XYZ 회전 (도)
        """
        if not 0 < fov < 180:
            raise ValueError(f"fov must be in (0, 180), got {fov}")
        if aspect <= 0:
            raise ValueError(f"aspect must be positive, got {aspect}")
        if not 0 < near < far:
            raise ValueError(f"Expected 0 < near < far, got near={near}, far={far}")

        self.fov = float(fov)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.position = np.array(position, dtype=np.float64)
        self.rotation = np.array(rotation, dtype=np.float64)

    @property
    def projection_matrix(self) -> np.ndarray:
        """4x4 원근 투영 행렬"""
        f = 1.0 / np.tan(np.deg2rad(self.fov) / 2)
        n, fa = self.near, self.far

        P = np.zeros((4, 4))
        P[0, 0] = f / self.aspect
        P[1, 1] = f
        P[2, 2] = (fa + n) / (n - fa)
        P[2, 3] = 2 * fa * n / (n - fa)
        P[3, 2] = -1.0
        return P

    @property
    def inverse_projection_matrix(self) -> np.ndarray:
        """4x4 역투영 행렬"""
        return np.linalg.inv(self.projection_matrix)

    @property
    def world_matrix(self) -> np.ndarray:
        """카메라 → 월드 변환 행렬"""
        M = np.eye(4)
        M[:3, :3] = Rotation.from_euler(EULER_ORDER, self.rotation, degrees=True).as_matrix()
        M[:3, 3] = self.position
        return M

    @property
    def view_matrix(self) -> np.ndarray:
        """월드 → 카메라 변환 행렬"""
        return np.linalg.inv(self.world_matrix)

    def unproject(self, ndc: np.ndarray) -> np.ndarray:
        """NDC 점 (x, y, z)을 월드 좌표로 역투영"""
        v = np.append(np.asarray(ndc, dtype=np.float64), 1.0)
        v = self.inverse_projection_matrix @ v
        v = v / v[3]
        return (self.world_matrix @ v)[:3]

    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        NDC 좌표를 지나는 월드 광선

        Returns:
            (origin, direction): 카메라 위치와 단위 방향 벡터
        """
        origin = self.position.copy()
        target = self.unproject(np.array([ndc_x, ndc_y, 0.5]))
        direction = target - origin
        return origin, direction / np.linalg.norm(direction)

    def world_to_screen(
        self,
        point,
        viewport_width: float,
        viewport_height: float
    ) -> Optional[Tuple[float, float]]:
        """
        월드 점을 화면 좌표로 투영

        Returns:
            (screen_x, screen_y) 또는 카메라 뒤쪽이면 None
        """
        v = np.append(np.asarray(point, dtype=np.float64), 1.0)
        clip = self.projection_matrix @ (self.view_matrix @ v)
        if clip[3] <= 0:
            return None

        ndc = clip[:3] / clip[3]
        screen_x = (ndc[0] + 1) * viewport_width / 2
        screen_y = (1 - ndc[1]) * viewport_height / 2
        return float(screen_x), float(screen_y)

    @classmethod
    def from_config(cls, config: CameraConfig) -> 'PerspectiveCamera':
        """설정에서 카메라 생성"""
        return cls(
            fov=config.fov,
            aspect=config.aspect,
            near=config.near,
            far=config.far,
            position=config.position,
            rotation=config.rotation
        )
