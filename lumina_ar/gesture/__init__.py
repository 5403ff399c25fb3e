"""
gesture 모듈 - 멀티터치 제스처 해석

2D 포인터 이벤트를 3D 이동/회전/스케일 변화로 변환합니다.

주요 기능:
- 활성 포인터 추적 (PointerRegistry)
- 화면 좌표 → 기준 평면 투영 (PlaneProjector)
- 두 포인터 핀치/트위스트 (PinchSolver)
- Idle / Dragging / PinchTwisting 상태 기계 (GestureInterpreter)
- 제스처 완료 시 변환 커밋 (TransformCommitProtocol)
"""

from .pointer_registry import PointerRegistry, PointerSample
from .plane_projector import PlaneProjector, Plane
from .pinch_solver import PinchSolver, PinchState, PinchResult
from .transform_commit import TransformCommitProtocol
from .event_queue import PointerEvent, PointerEventQueue, PointerEventType
from .gesture_interpreter import GestureInterpreter, GesturePhase, GestureUpdate

__all__ = [
    'PointerRegistry',
    'PointerSample',
    'PlaneProjector',
    'Plane',
    'PinchSolver',
    'PinchState',
    'PinchResult',
    'TransformCommitProtocol',
    'PointerEvent',
    'PointerEventQueue',
    'PointerEventType',
    'GestureInterpreter',
    'GesturePhase',
    'GestureUpdate',
]
