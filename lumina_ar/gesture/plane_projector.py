"""
plane_projector.py - 화면 좌표 → 기준 평면 위 3D 점

화면 좌표를 NDC로 변환하고, 카메라 역투영으로 광선을 만든 뒤
기준 평면과의 교점을 구합니다.

    ndc = (2 * sx / w - 1, 1 - 2 * sy / h)
    ray(t) = origin + t * direction
    plane: normal · p + constant = 0
    t = -(normal · origin + constant) / (normal · direction)

광선이 평면과 평행하거나 교점이 카메라 뒤쪽이면 None을 반환합니다.
호출자는 이를 오류가 아닌 "이번 프레임 갱신 없음"으로 처리해야 합니다.

Version: 1.0
Author: Lumina AR Team
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Tuple
import logging

from ..scene.camera import PerspectiveCamera

logger = logging.getLogger(__name__)


@dataclass
class Plane:
    """
    무한 평면 (normal · p + constant = 0)

    Attributes:
        normal: 단위 법선 벡터
        constant: 원점으로부터의 부호 있는 거리 (법선 반대 방향)
    """
    normal: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    constant: float = 0.0

    def __post_init__(self):
        normal = np.asarray(self.normal, dtype=np.float64)
        norm = np.linalg.norm(normal)
        if norm < 1e-12:
            raise ValueError("Plane normal must be non-zero")
        self.normal = normal / norm
        self.constant = float(self.constant) / norm

    @classmethod
    def horizontal(cls, height: float = 0.0) -> 'Plane':
        """높이 height를 지나는 수평 평면 (Y 위쪽)"""
        return cls(normal=np.array([0.0, 1.0, 0.0]), constant=-float(height))

    def distance_to_point(self, point) -> float:
        """점까지의 부호 있는 거리"""
        return float(np.dot(self.normal, point) + self.constant)


class PlaneProjector:
    """
    화면 좌표를 기준 평면 위 3D 점으로 투영

    Example:
        >>> projector = PlaneProjector()
        >>> point = projector.project(640, 360, 1280, 720, camera, Plane.horizontal(0.0))
    """

    def __init__(self, parallel_epsilon: float = 1e-6):
        """
        Args:
            parallel_epsilon: 광선-평면 평행 판정 임계값
        """
        self.parallel_epsilon = parallel_epsilon

    @staticmethod
    def to_ndc(
        screen_x: float,
        screen_y: float,
        viewport_width: float,
        viewport_height: float
    ) -> Tuple[float, float]:
        """화면 좌표 → 정규화 장치 좌표"""
        return (
            2.0 * screen_x / viewport_width - 1.0,
            1.0 - 2.0 * screen_y / viewport_height
        )

    def intersect_ray(
        self,
        origin: np.ndarray,
        direction: np.ndarray,
        plane: Plane
    ) -> Optional[np.ndarray]:
        """광선-평면 교점 (평행이거나 뒤쪽이면 None)"""
        denominator = float(np.dot(plane.normal, direction))
        if abs(denominator) < self.parallel_epsilon:
            return None

        t = -(float(np.dot(plane.normal, origin)) + plane.constant) / denominator
        if t < 0:
            return None

        return origin + t * direction

    def project(
        self,
        screen_x: float,
        screen_y: float,
        viewport_width: float,
        viewport_height: float,
        camera: PerspectiveCamera,
        plane: Plane
    ) -> Optional[np.ndarray]:
        """
        화면 좌표를 평면 위 3D 점으로 투영

        Args:
            screen_x, screen_y: 화면 좌표 (픽셀)
            viewport_width, viewport_height: 뷰포트 크기
            camera: 역투영 및 카메라 변환 제공자
            plane: 기준 평면

        Returns:
            [x, y, z] 교점 또는 None
        """
        if viewport_width <= 0 or viewport_height <= 0:
            logger.debug(f"Degenerate viewport {viewport_width}x{viewport_height}")
            return None

        ndc_x, ndc_y = self.to_ndc(screen_x, screen_y, viewport_width, viewport_height)
        origin, direction = camera.ray_from_ndc(ndc_x, ndc_y)

        point = self.intersect_ray(origin, direction, plane)
        if point is None:
            logger.debug(f"No plane intersection at screen ({screen_x:.1f}, {screen_y:.1f})")

        return point
