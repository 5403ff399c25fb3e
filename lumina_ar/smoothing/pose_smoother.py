"""
pose_smoother.py - 축별 독립 Kalman Filter 기반 자세 평활화

추적 앵커의 원시 자세(위치 + 오일러 회전)를 6개의 독립 ScalarEstimator로
평활화합니다. 축 사이 결합은 없습니다.

축 매핑 (고정):
- 위치: pos_x, pos_y, pos_z
- 회전: rot_x, rot_y, rot_z (도)

이동과 회전은 시각적 민감도가 달라 서로 다른 노이즈를 사용합니다.

Version: 1.0
Author: Lumina AR Team
"""

import threading
import numpy as np
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
import logging

from .scalar_estimator import ScalarEstimator
from ..config.system_config import NoiseConfig, SmoothingConfig

logger = logging.getLogger(__name__)


POSITION_AXES = ('pos_x', 'pos_y', 'pos_z')
ROTATION_AXES = ('rot_x', 'rot_y', 'rot_z')


@dataclass
class SmoothedPose:
    """
    평활화된 자세 스냅샷

    Attributes:
        position: [x, y, z]
        rotation: [rx, ry, rz] 도
    """
    position: np.ndarray
    rotation: np.ndarray

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {
            'position': self.position.tolist(),
            'rotation': self.rotation.tolist()
        }


class PoseSmoother:
    """
    6축 자세 평활화기

    추적 앵커 하나당 하나씩 소유하며, 앵커 간 공유하지 않습니다.
    smooth()와 snapshot()은 같은 락으로 보호되므로 다른 스레드에서
    스냅샷을 읽어도 절반만 갱신된 자세를 보지 않습니다.

    Example:
        >>> smoother = PoseSmoother()
        >>> position, rotation = smoother.smooth([0.1, 0.0, -1.0], [0.0, 15.0, 0.0])
    """

    def __init__(
        self,
        translation_noise: Optional[NoiseConfig] = None,
        rotation_noise: Optional[NoiseConfig] = None,
        unwrap_rotation: bool = False
    ):
        """
        Args:
            translation_noise: 위치 축 노이즈 (기본 q=0.005, r=0.05)
            rotation_noise: 회전 축 노이즈 (기본 q=0.01, r=0.1)
            unwrap_rotation: 회전 측정값 각도 래핑 처리
        """
        self.translation_noise = translation_noise or NoiseConfig(q=0.005, r=0.05)
        self.rotation_noise = rotation_noise or NoiseConfig(q=0.01, r=0.1)
        self.unwrap_rotation = unwrap_rotation

        self._estimators: Dict[str, ScalarEstimator] = {}
        for axis in POSITION_AXES:
            self._estimators[axis] = ScalarEstimator(
                self.translation_noise.q, self.translation_noise.r
            )
        for axis in ROTATION_AXES:
            self._estimators[axis] = ScalarEstimator(
                self.rotation_noise.q, self.rotation_noise.r
            )

        self._lock = threading.Lock()
        self._sample_count = 0

        logger.info(
            f"PoseSmoother initialized: translation(q={self.translation_noise.q}, "
            f"r={self.translation_noise.r}), rotation(q={self.rotation_noise.q}, "
            f"r={self.rotation_noise.r})"
        )

    def smooth(
        self,
        raw_position,
        raw_rotation
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        원시 자세 하나를 평활화

        Args:
            raw_position: 측정 위치 [x, y, z]
            raw_rotation: 측정 회전 [rx, ry, rz] 도

        Returns:
            (position, rotation): 평활화된 위치와 회전
        """
        raw_position = np.asarray(raw_position, dtype=np.float64)
        raw_rotation = np.asarray(raw_rotation, dtype=np.float64)

        with self._lock:
            position = self._smooth_axes(POSITION_AXES, raw_position)
            if self.unwrap_rotation:
                raw_rotation = self._unwrap_angles(raw_rotation)
            rotation = self._smooth_axes(ROTATION_AXES, raw_rotation)
            self._sample_count += 1

        return position, rotation

    def smooth_position(self, raw_position) -> np.ndarray:
        """위치 3축만 평활화"""
        with self._lock:
            position = self._smooth_axes(
                POSITION_AXES, np.asarray(raw_position, dtype=np.float64)
            )
            self._sample_count += 1
        return position

    def smooth_rotation(self, raw_rotation) -> np.ndarray:
        """회전 3축만 평활화"""
        raw_rotation = np.asarray(raw_rotation, dtype=np.float64)
        with self._lock:
            if self.unwrap_rotation:
                raw_rotation = self._unwrap_angles(raw_rotation)
            rotation = self._smooth_axes(ROTATION_AXES, raw_rotation)
            self._sample_count += 1
        return rotation

    def _smooth_axes(self, axes: Tuple[str, ...], values: np.ndarray) -> np.ndarray:
        if values.shape != (3,):
            raise ValueError(f"Expected 3 values, got shape {values.shape}")

        return np.array([
            self._estimators[axis].update(value)
            for axis, value in zip(axes, values)
        ])

    def _unwrap_angles(self, rotation: np.ndarray) -> np.ndarray:
        """
        각도 래핑 처리 (연속성 유지)

        현재 추정치와 측정값의 차이가 180도를 넘지 않도록 조정
        """
        rotation = rotation.copy()
        for i, axis in enumerate(ROTATION_AXES):
            diff = rotation[i] - self._estimators[axis].x
            if diff > 180:
                rotation[i] -= 360
            elif diff < -180:
                rotation[i] += 360
        return rotation

    def snapshot(self) -> SmoothedPose:
        """현재 추정 자세의 일관된 복사본"""
        with self._lock:
            return SmoothedPose(
                position=np.array([self._estimators[a].x for a in POSITION_AXES]),
                rotation=np.array([self._estimators[a].x for a in ROTATION_AXES])
            )

    def reset(self):
        """모든 축 필터 리셋"""
        with self._lock:
            for estimator in self._estimators.values():
                estimator.reset()
            self._sample_count = 0
        logger.debug("PoseSmoother reset")

    def estimator(self, axis: str) -> ScalarEstimator:
        """축 이름으로 추정기 조회"""
        return self._estimators[axis]

    @property
    def sample_count(self) -> int:
        """갱신 호출 수 (smooth / smooth_position / smooth_rotation 각 1회)"""
        return self._sample_count

    @property
    def covariances(self) -> Dict[str, float]:
        """축별 오차 공분산"""
        return {axis: est.p for axis, est in self._estimators.items()}

    @classmethod
    def from_config(cls, config: SmoothingConfig) -> 'PoseSmoother':
        """설정에서 평활화기 생성"""
        return cls(
            translation_noise=config.translation_noise,
            rotation_noise=config.rotation_noise,
            unwrap_rotation=config.unwrap_rotation
        )
