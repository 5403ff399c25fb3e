"""
gesture_interpreter.py - 멀티터치 제스처 상태 기계

포인터 이벤트를 받아 객체 변환(이동/회전/스케일)을 실시간 갱신하고,
제스처가 끝나면 최종 변환을 커밋합니다.

상태 전이:
┌──────┐ down(1) ┌──────────┐ down(2) ┌────────────────┐
│ Idle │───────→│ Dragging │───────→│ PinchTwisting  │
└──────┘         └──────────┘ ←───────└────────────────┘
    ↑               │  up(0)     up(1)        │ up(0)
    └───────────────┴─────── commit ──────────┘

- Dragging: move → PlaneProjector.project → 위치 갱신 (None이면 건너뜀)
- PinchTwisting: move → PinchSolver.solve → 스케일 / Y축 회전 갱신
- 제스처 비활성화 시 모든 이벤트 무시, 상태는 Idle 유지

세 번째 이후 포인터는 레지스트리에만 기록되고, 먼저 눌린 두 포인터가 핀치를 구동합니다.

Version: 1.0
Author: Lumina AR Team
"""

import numpy as np
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import logging

from .pointer_registry import PointerRegistry
from .plane_projector import PlaneProjector, Plane
from .pinch_solver import PinchSolver, PinchState
from .transform_commit import TransformCommitProtocol, CommitCallback
from .event_queue import PointerEvent, PointerEventQueue, PointerEventType
from ..scene.camera import PerspectiveCamera
from ..scene.transform import Transform
from ..config.system_config import GestureConfig

logger = logging.getLogger(__name__)


class GesturePhase(Enum):
    """제스처 상태"""
    IDLE = "idle"
    DRAGGING = "dragging"
    PINCH_TWISTING = "pinch_twisting"


@dataclass
class GestureUpdate:
    """
    프레임 단위 제스처 결과

    Attributes:
        phase: 현재 제스처 상태
        transform: 현재 실시간 변환 (복사본)
        delta_position: 직전 tick 대비 위치 변화
        delta_rotation: 직전 tick 대비 회전 변화 (도)
        scale_ratio: 직전 tick 대비 스케일 비율
        commits: 이번 tick 동안 커밋된 변환
    """
    phase: GesturePhase
    transform: Transform
    delta_position: np.ndarray
    delta_rotation: np.ndarray
    scale_ratio: np.ndarray
    commits: List[Transform] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return len(self.commits) > 0


class GestureInterpreter:
    """
    멀티터치 제스처 해석기

    Example:
        >>> interpreter = GestureInterpreter(
        ...     config=GestureConfig(),
        ...     camera=PerspectiveCamera(aspect=1280/720),
        ...     viewport=(1280, 720),
        ...     on_commit=store.save
        ... )
        >>> interpreter.on_pointer_down(1, 640, 400)
        >>> interpreter.on_pointer_move(1, 700, 420)
        >>> interpreter.on_pointer_up(1)   # store.save(transform) 호출
    """

    def __init__(
        self,
        config: Optional[GestureConfig] = None,
        camera: Optional[PerspectiveCamera] = None,
        viewport: Tuple[float, float] = (1280, 720),
        transform: Optional[Transform] = None,
        on_commit: Optional[CommitCallback] = None,
        plane: Optional[Plane] = None,
        projector: Optional[PlaneProjector] = None,
        pinch_solver: Optional[PinchSolver] = None,
        commit_protocol: Optional[TransformCommitProtocol] = None
    ):
        """
        Args:
            config: 제스처 설정
            camera: 카메라 협력자 (None이면 뷰포트 종횡비의 기본 카메라)
            viewport: (width, height) 픽셀
            transform: 조작 대상 실시간 변환 (None이면 항등 변환)
            on_commit: 커밋 콜백
            plane: 드래그 기준 평면 (None이면 객체 높이의 수평 평면)
            projector: 평면 투영기
            pinch_solver: 핀치 해석기
            commit_protocol: 커밋 경계 (주어지면 on_commit 무시)
        """
        self.config = config or GestureConfig()
        self.viewport_width, self.viewport_height = viewport
        self.camera = camera or PerspectiveCamera(
            aspect=self.viewport_width / self.viewport_height
        )
        self.transform = transform if transform is not None else Transform()
        self.plane = plane

        self.projector = projector or PlaneProjector(self.config.parallel_epsilon)
        self.pinch_solver = pinch_solver or PinchSolver.from_config(self.config)
        self.commit_protocol = commit_protocol or TransformCommitProtocol(on_commit)

        self.registry = PointerRegistry()
        self.events = PointerEventQueue()

        self._enabled = self.config.enabled
        self._phase = GesturePhase.IDLE
        self._pinch: Optional[PinchState] = None
        self._pinch_ids: Tuple[int, ...] = ()
        self._pinch_base_scale: Optional[np.ndarray] = None
        self._last_tick = self.transform.copy()

        logger.info(
            f"GestureInterpreter initialized: enabled={self._enabled}, "
            f"scale=[{self.pinch_solver.min_scale}, {self.pinch_solver.max_scale}]"
        )

    # ------------------------------------------------------------------
    # 포인터 이벤트
    # ------------------------------------------------------------------

    def on_pointer_down(self, pointer_id: int, x: float, y: float):
        """포인터 눌림"""
        if not self._enabled:
            return

        previous = len(self.registry)
        count = self.registry.add(pointer_id, x, y)
        if count == previous:
            return

        if count == 1:
            self._phase = GesturePhase.DRAGGING
            logger.debug(f"Pointer {pointer_id} down: idle -> dragging")
        elif count == 2:
            self._begin_pinch()
            logger.debug(f"Pointer {pointer_id} down: dragging -> pinch_twisting")

    def on_pointer_move(self, pointer_id: int, x: float, y: float):
        """포인터 이동"""
        if not self._enabled:
            return

        if not self.registry.update(pointer_id, x, y):
            return

        if self._phase == GesturePhase.DRAGGING:
            self._drag(x, y)
        elif self._phase == GesturePhase.PINCH_TWISTING and pointer_id in self._pinch_ids:
            self._twist()

    def on_pointer_up(self, pointer_id: int):
        """포인터 떼짐 / 화면 이탈 / 취소"""
        if not self._enabled:
            return

        if pointer_id not in self.registry:
            return

        count = self.registry.remove(pointer_id)

        if count == 0:
            self._phase = GesturePhase.IDLE
            self._clear_pinch()
            logger.debug(f"Pointer {pointer_id} up: gesture complete")
            self.commit_protocol.commit(self.transform)
        elif count == 1:
            self._phase = GesturePhase.DRAGGING
            self._clear_pinch()
            logger.debug(f"Pointer {pointer_id} up: pinch_twisting -> dragging")
        elif pointer_id in self._pinch_ids:
            # 핀치 쌍이 바뀌면 현재 변환 기준으로 다시 시작
            self._begin_pinch()

    on_pointer_cancel = on_pointer_up
    on_pointer_leave = on_pointer_up

    def submit(self, event: PointerEvent):
        """이벤트를 큐에 넣음 (다른 스레드에서 호출 가능)"""
        self.events.put(event)

    def dispatch(self, event: PointerEvent):
        """이벤트 하나 즉시 처리"""
        if event.kind == PointerEventType.DOWN:
            self.on_pointer_down(event.pointer_id, event.x, event.y)
        elif event.kind == PointerEventType.MOVE:
            self.on_pointer_move(event.pointer_id, event.x, event.y)
        elif event.kind in (PointerEventType.UP, PointerEventType.LEAVE, PointerEventType.CANCEL):
            self.on_pointer_up(event.pointer_id)
        else:
            raise RuntimeError(f"Unknown pointer event kind: {event.kind}")

    def tick(self) -> GestureUpdate:
        """
        프레임 처리

        큐에 쌓인 이벤트를 도착 순서대로 처리하고 직전 tick 대비 변화량을 반환합니다.
        """
        commits_before = self.commit_protocol.commit_count
        commits: List[Transform] = []

        for event in self.events.drain():
            self.dispatch(event)
            if self.commit_protocol.commit_count != commits_before:
                commits.append(self.commit_protocol.last_committed)
                commits_before = self.commit_protocol.commit_count

        current = self.transform.copy()
        previous = self._last_tick

        with np.errstate(divide='ignore', invalid='ignore'):
            scale_ratio = np.where(previous.scale != 0, current.scale / previous.scale, 1.0)

        update = GestureUpdate(
            phase=self._phase,
            transform=current,
            delta_position=current.position - previous.position,
            delta_rotation=current.rotation - previous.rotation,
            scale_ratio=scale_ratio,
            commits=commits
        )

        self._last_tick = current
        return update

    # ------------------------------------------------------------------
    # 내부 처리
    # ------------------------------------------------------------------

    def _drag(self, x: float, y: float):
        point = self.projector.project(
            x, y,
            self.viewport_width, self.viewport_height,
            self.camera,
            self.reference_plane()
        )
        if point is not None:
            self.transform.position = point

    def _begin_pinch(self):
        p0, p1 = self.registry.first_two()
        self._pinch = self.pinch_solver.begin(
            p0, p1,
            current_scale=self.transform.uniform_scale,
            current_rotation=float(np.deg2rad(self.transform.rotation[1]))
        )
        self._pinch_ids = (p0.id, p1.id)
        self._pinch_base_scale = self.transform.scale.copy()
        self._phase = GesturePhase.PINCH_TWISTING

    def _twist(self):
        p0, p1 = self.registry.first_two()
        result = self.pinch_solver.solve(p0, p1, self._pinch)

        # 비균일 스케일은 비율을 유지한 채 X축 기준으로 조정, 축마다 범위 제한
        if self._pinch.initial_scale > 0:
            ratio = result.scale / self._pinch.initial_scale
            self.transform.scale = np.clip(
                self._pinch_base_scale * ratio,
                self.pinch_solver.min_scale,
                self.pinch_solver.max_scale
            )
        else:
            self.transform.scale = np.full(3, result.scale)

        self.transform.rotation[1] = np.rad2deg(result.rotation)

    def _clear_pinch(self):
        self._pinch = None
        self._pinch_ids = ()
        self._pinch_base_scale = None

    def reference_plane(self) -> Plane:
        """드래그 기준 평면"""
        if self.plane is not None:
            return self.plane
        return Plane.horizontal(self.transform.position[1])

    # ------------------------------------------------------------------
    # 상태 / 설정
    # ------------------------------------------------------------------

    def set_enabled(self, enabled: bool):
        """
        제스처 활성화 설정

        진행 중인 제스처를 비활성화하면 커밋 없이 취소하고 Idle로 돌아갑니다.
        """
        if not enabled and self._phase != GesturePhase.IDLE:
            logger.warning(f"Gesture cancelled by disable (phase={self._phase.value})")

        if not enabled:
            self.registry.clear()
            self._clear_pinch()
            self._phase = GesturePhase.IDLE

        self._enabled = enabled

    def set_viewport(self, width: float, height: float):
        """뷰포트 크기 변경"""
        self.viewport_width = width
        self.viewport_height = height
        if height > 0:
            self.camera.aspect = width / height

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def pinch_state(self) -> Optional[PinchState]:
        return self._pinch

    @property
    def active_pointer_count(self) -> int:
        return len(self.registry)

    @classmethod
    def from_config(
        cls,
        config: GestureConfig,
        camera: PerspectiveCamera,
        viewport: Tuple[float, float],
        transform: Optional[Transform] = None,
        on_commit: Optional[CommitCallback] = None
    ) -> 'GestureInterpreter':
        """설정에서 해석기 생성"""
        return cls(
            config=config,
            camera=camera,
            viewport=viewport,
            transform=transform,
            on_commit=on_commit
        )
