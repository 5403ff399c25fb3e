"""
pinch_solver.py - 두 포인터 핀치/트위스트 해석

핀치 시작 시점의 두 포인터 거리/각도와 객체의 스케일/회전을 기록하고,
이후 포인터 위치로부터 스케일과 회전을 계산합니다.

    scale    = clamp(initial_scale * distance / initial_distance, min_scale, max_scale)
    rotation = initial_rotation - (angle - initial_angle)

화면 좌표는 Y가 아래 방향이므로, 화면에서 시계 방향 트위스트는 angle을 증가시키고
회전(월드 Y축, 위에서 볼 때 반시계 +)을 감소시킵니다.

Version: 1.0
Author: Lumina AR Team
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Union
import logging

from .pointer_registry import PointerSample
from ..config.system_config import GestureConfig

logger = logging.getLogger(__name__)


PointLike = Union[PointerSample, np.ndarray, tuple, list]


@dataclass(frozen=True)
class PinchState:
    """
    핀치 시작 스냅샷

    Attributes:
        initial_distance: 시작 시 두 포인터 거리 (픽셀)
        initial_angle: 시작 시 두 포인터 각도 (라디안)
        initial_scale: 시작 시 객체 스케일
        initial_rotation: 시작 시 객체 회전 (라디안)
    """
    initial_distance: float
    initial_angle: float
    initial_scale: float
    initial_rotation: float


@dataclass(frozen=True)
class PinchResult:
    """핀치 해석 결과 (scale, rotation 라디안)"""
    scale: float
    rotation: float


def _as_point(p: PointLike) -> np.ndarray:
    if isinstance(p, PointerSample):
        return p.to_array()
    return np.asarray(p, dtype=np.float64)


def wrap_angle(angle: float) -> float:
    """각도를 (-π, π] 범위로 정규화"""
    wrapped = math.atan2(math.sin(angle), math.cos(angle))
    return math.pi if wrapped == -math.pi else wrapped


class PinchSolver:
    """
    핀치(스케일) + 트위스트(회전) 해석기

    Example:
        >>> solver = PinchSolver(min_scale=0.1, max_scale=10.0)
        >>> state = solver.begin((0, 0), (100, 0), current_scale=1.0, current_rotation=0.0)
        >>> solver.solve((0, 0), (150, 0), state).scale
        1.5
    """

    def __init__(
        self,
        min_scale: float = 0.1,
        max_scale: float = 10.0,
        epsilon: float = 1e-6
    ):
        """
        Args:
            min_scale: 최소 스케일
            max_scale: 최대 스케일
            epsilon: 초기 거리 퇴화 판정 임계값
        """
        if min_scale <= 0:
            raise ValueError(f"min_scale must be positive, got {min_scale}")
        if min_scale > max_scale:
            raise ValueError(
                f"min_scale ({min_scale}) must not exceed max_scale ({max_scale})"
            )

        self.min_scale = float(min_scale)
        self.max_scale = float(max_scale)
        self.epsilon = float(epsilon)

    @staticmethod
    def _measure(p0: PointLike, p1: PointLike):
        d = _as_point(p1) - _as_point(p0)
        return float(np.hypot(d[0], d[1])), float(math.atan2(d[1], d[0]))

    def begin(
        self,
        p0: PointLike,
        p1: PointLike,
        current_scale: float,
        current_rotation: float
    ) -> PinchState:
        """
        핀치 시작 상태 기록

        Args:
            p0, p1: 두 포인터 위치
            current_scale: 현재 객체 스케일
            current_rotation: 현재 객체 회전 (라디안)
        """
        distance, angle = self._measure(p0, p1)

        if distance < self.epsilon:
            logger.debug("Pinch started with coincident pointers")

        return PinchState(
            initial_distance=distance,
            initial_angle=angle,
            initial_scale=float(current_scale),
            initial_rotation=float(current_rotation)
        )

    def solve(
        self,
        p0: PointLike,
        p1: PointLike,
        state: PinchState
    ) -> PinchResult:
        """
        현재 포인터 위치로 스케일/회전 계산

        초기 거리가 0에 가까우면 스케일 비율이 정의되지 않으므로
        초기 스케일과 회전을 그대로 반환합니다.
        """
        if state.initial_distance < self.epsilon:
            return PinchResult(scale=state.initial_scale, rotation=state.initial_rotation)

        distance, angle = self._measure(p0, p1)

        scale_factor = distance / state.initial_distance
        scale = self.clamp_scale(state.initial_scale * scale_factor)

        rotation = state.initial_rotation - wrap_angle(angle - state.initial_angle)

        return PinchResult(scale=scale, rotation=rotation)

    def clamp_scale(self, scale: float) -> float:
        return float(min(max(scale, self.min_scale), self.max_scale))

    @classmethod
    def from_config(cls, config: GestureConfig) -> 'PinchSolver':
        """설정에서 생성"""
        return cls(
            min_scale=config.min_scale,
            max_scale=config.max_scale,
            epsilon=config.pinch_epsilon
        )
