"""
simulated_tracker.py - 추적 협력자 시뮬레이션

실제 SLAM/마커 추적 대신 추적 상태와 노이즈가 섞인 원시 자세를 생성합니다.

동작:
- 시작 후 discovery_delay 초 동안 SEARCHING
- 이후 FOUND, 실제 자세 주변에 가우시안 노이즈를 더한 샘플 생성
- lost_intervals 구간에서는 LOST (자세 없음)

Version: 1.0
Author: Lumina AR Team
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)


class TrackingStatus(Enum):
    """추적 상태"""
    SEARCHING = "searching"  # 앵커 탐색 중
    FOUND = "found"          # 정상 추적 중
    LOST = "lost"            # 추적 손실


@dataclass
class TrackingSample:
    """
    추적 샘플

    Attributes:
        status: 추적 상태
        position: 원시 위치 [x, y, z] (FOUND가 아니면 None)
        rotation: 원시 회전 [rx, ry, rz] 도 (FOUND가 아니면 None)
        timestamp: 초
    """
    status: TrackingStatus
    position: Optional[np.ndarray]
    rotation: Optional[np.ndarray]
    timestamp: float

    @property
    def has_pose(self) -> bool:
        return self.position is not None and self.rotation is not None


class SimulatedTracker:
    """
    노이즈 자세 생성기

    Example:
        >>> tracker = SimulatedTracker(fps=30.0, seed=0)
        >>> for sample in tracker.frames(90):
        ...     print(sample.status)
    """

    def __init__(
        self,
        fps: float = 30.0,
        discovery_delay: float = 2.0,
        true_position=(0.0, 0.0, 0.0),
        true_rotation=(0.0, 0.0, 0.0),
        position_noise: float = 0.01,
        rotation_noise: float = 1.0,
        lost_intervals: Sequence[Tuple[float, float]] = (),
        seed: Optional[int] = None
    ):
        """
        Args:
            fps: 프레임레이트
            discovery_delay: 앵커 발견까지 걸리는 시간 (초)
            true_position: 실제 앵커 위치
            true_rotation: 실제 앵커 회전 (도)
            position_noise: 위치 노이즈 표준편차 (미터)
            rotation_noise: 회전 노이즈 표준편차 (도)
            lost_intervals: 추적 손실 구간 [(시작, 끝), ...] 초
            seed: 난수 시드
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        self.fps = fps
        self.discovery_delay = discovery_delay
        self.true_position = np.array(true_position, dtype=np.float64)
        self.true_rotation = np.array(true_rotation, dtype=np.float64)
        self.position_noise = position_noise
        self.rotation_noise = rotation_noise
        self.lost_intervals: List[Tuple[float, float]] = [tuple(i) for i in lost_intervals]

        self._rng = np.random.default_rng(seed)

    def status_at(self, timestamp: float) -> TrackingStatus:
        """시각별 추적 상태"""
        if timestamp < self.discovery_delay:
            return TrackingStatus.SEARCHING

        for start, end in self.lost_intervals:
            if start <= timestamp < end:
                return TrackingStatus.LOST

        return TrackingStatus.FOUND

    def sample(self, timestamp: float) -> TrackingSample:
        """시각 timestamp의 추적 샘플"""
        status = self.status_at(timestamp)

        if status != TrackingStatus.FOUND:
            return TrackingSample(status=status, position=None, rotation=None, timestamp=timestamp)

        position = self.true_position + self._rng.normal(0.0, self.position_noise, 3)
        rotation = self.true_rotation + self._rng.normal(0.0, self.rotation_noise, 3)

        return TrackingSample(
            status=status,
            position=position,
            rotation=rotation,
            timestamp=timestamp
        )

    def frames(self, num_frames: int) -> Iterator[TrackingSample]:
        """프레임 시퀀스 생성"""
        for frame_idx in range(num_frames):
            yield self.sample(frame_idx / self.fps)
