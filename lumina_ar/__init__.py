"""
lumina_ar - AR 앵커 자세 평활화 및 멀티터치 제스처 조작

주요 특징:
- 축별 독립 1차원 Kalman Filter 뱅크로 추적 앵커 자세 평활화
- 2D 포인터 이벤트 → 3D 이동 / 회전 / 스케일 변환
- Idle / Dragging / PinchTwisting 제스처 상태 기계
- 제스처 완료 시 변환 커밋 (외부 영속화 협력자)

Version: 3.0
Author: Lumina AR Team
"""

__version__ = "3.0.0"
__author__ = "Lumina AR Team"

from .smoothing.scalar_estimator import ScalarEstimator
from .smoothing.pose_smoother import PoseSmoother, SmoothedPose

from .gesture.pointer_registry import PointerRegistry, PointerSample
from .gesture.plane_projector import PlaneProjector, Plane
from .gesture.pinch_solver import PinchSolver, PinchState, PinchResult
from .gesture.transform_commit import TransformCommitProtocol
from .gesture.gesture_interpreter import (
    GestureInterpreter,
    GesturePhase,
    GestureUpdate
)

from .scene.transform import Transform
from .scene.camera import PerspectiveCamera

__all__ = [
    # Smoothing
    'ScalarEstimator',
    'PoseSmoother',
    'SmoothedPose',
    # Gesture
    'PointerRegistry',
    'PointerSample',
    'PlaneProjector',
    'Plane',
    'PinchSolver',
    'PinchState',
    'PinchResult',
    'TransformCommitProtocol',
    'GestureInterpreter',
    'GesturePhase',
    'GestureUpdate',
    # Scene
    'Transform',
    'PerspectiveCamera',
]
