"""
smoothing 모듈 - 추적 자세 평활화

축별 독립 1차원 Kalman Filter 뱅크로 앵커 자세의 지터를 억제합니다.
"""

from .scalar_estimator import ScalarEstimator
from .pose_smoother import (
    PoseSmoother,
    SmoothedPose,
    POSITION_AXES,
    ROTATION_AXES
)

__all__ = [
    'ScalarEstimator',
    'PoseSmoother',
    'SmoothedPose',
    'POSITION_AXES',
    'ROTATION_AXES',
]
