"""
scalar_estimator.py - 1차원 Kalman Filter

자세 평활화의 최소 단위. 한 축의 측정값 하나를 받아 추정치를 갱신합니다.

상태:
- x: 현재 추정치 (초기값 0)
- p: 추정 오차 공분산 (초기값 1, 항상 ≥ 0)
- q: 프로세스 노이즈 (> 0)
- r: 측정 노이즈 (> 0)

갱신 순서 (매 호출):
1. 예측: p = p + q
2. 이득: k = p / (p + r)
3. 보정: x = x + k * (z - x)
4. 공분산: p = (1 - k) * p

Version: 1.0
Author: Lumina AR Team
"""

import numpy as np
from filterpy.kalman import KalmanFilter
import logging

logger = logging.getLogger(__name__)


class ScalarEstimator:
    """
    1차원 정상 상태(constant) 모델 Kalman Filter

    F = H = 1 인 filterpy KalmanFilter로 구현합니다.
    상수 입력에 대해 x는 입력값으로 단조 수렴하고,
    p는 유한 단계에서 0에 도달하지 않고 정상 상태로 단조 감소합니다.

    Example:
        >>> est = ScalarEstimator(process_noise=0.01, measurement_noise=0.1)
        >>> est.update(1.0)  # ≈ 0.909
    """

    INITIAL_COVARIANCE = 1.0

    def __init__(
        self,
        process_noise: float = 0.01,
        measurement_noise: float = 0.1
    ):
        """
        Args:
            process_noise: 프로세스 노이즈 q (> 0)
            measurement_noise: 측정 노이즈 r (> 0)
        """
        if process_noise <= 0 or measurement_noise <= 0:
            raise ValueError(
                f"Noise parameters must be positive, "
                f"got q={process_noise}, r={measurement_noise}"
            )

        self.kf = KalmanFilter(dim_x=1, dim_z=1)
        self.kf.F = np.array([[1.0]])
        self.kf.H = np.array([[1.0]])
        self.kf.Q = np.array([[float(process_noise)]])
        self.kf.R = np.array([[float(measurement_noise)]])

        self.reset()

    def update(self, measurement: float) -> float:
        """
        측정값 하나로 추정치 갱신

        Args:
            measurement: 측정값

        Returns:
            갱신된 추정치 x
        """
        self.kf.predict()
        self.kf.update(float(measurement))
        return self.x

    def reset(self):
        """필터 리셋 (x=0, p=1)"""
        self.kf.x = np.zeros((1, 1))
        self.kf.P = np.eye(1) * self.INITIAL_COVARIANCE
        self.kf.K = np.zeros((1, 1))

    @property
    def x(self) -> float:
        """현재 추정치"""
        return float(self.kf.x[0, 0])

    @property
    def p(self) -> float:
        """추정 오차 공분산"""
        return float(self.kf.P[0, 0])

    @property
    def k(self) -> float:
        """마지막 갱신의 Kalman 이득 [0, 1]"""
        return float(self.kf.K[0, 0])

    @property
    def q(self) -> float:
        return float(self.kf.Q[0, 0])

    @property
    def r(self) -> float:
        return float(self.kf.R[0, 0])

    def __repr__(self) -> str:
        return f"ScalarEstimator(x={self.x:.4f}, p={self.p:.4f}, q={self.q}, r={self.r})"
