"""
main.py - lumina_ar 통합 AR 세션

추적 상태 + Kalman 자세 평활화 + 멀티터치 제스처를 프레임 단위로 통합합니다.

프레임 처리 순서:
1. 추적 상태 변화 감지 (searching / found / lost)
2. 큐에 쌓인 포인터 이벤트 처리 → 실시간 객체 변환, 커밋
3. 추적 중이면 원시 앵커 자세를 PoseSmoother로 평활화
4. 자동 회전 / 고스트 모드 투명도 적용

Version: 1.0
Author: Lumina AR Team
"""

import argparse
import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Dict, Any, List, Optional
import time
import logging
from pathlib import Path

from .config.system_config import SystemConfig, load_config
from .smoothing.pose_smoother import PoseSmoother
from .gesture.gesture_interpreter import GestureInterpreter, GesturePhase
from .gesture.event_queue import PointerEvent, PointerEventType
from .scene.camera import PerspectiveCamera
from .scene.transform import Transform
from .scene.scene_object import Renderable, SceneObject, update_presence_opacity
from .tracking.simulated_tracker import SimulatedTracker, TrackingSample, TrackingStatus
from .output.transform_recorder import TransformRecorder

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """
    프레임 처리 결과

    렌더러는 anchor_* 로 앵커를 배치하고, 그 아래에 transform을 적용합니다.
    """
    frame_idx: int
    timestamp: float
    tracking_status: TrackingStatus

    # 평활화된 앵커 자세 (추적 중이 아니면 마지막 값 유지)
    anchor_position: np.ndarray
    anchor_rotation: np.ndarray   # 도, 자동 회전 포함

    # 사용자 조작 변환
    transform: Transform
    gesture_phase: GesturePhase
    commits: List[Transform] = field(default_factory=list)

    # 표시 상태
    visible: bool = True
    opacity: float = 1.0

    processing_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'anchor': {
                'position': self.anchor_position.tolist(),
                'rotation': self.anchor_rotation.tolist()
            },
            'transform': self.transform.to_dict(),
            'gesture': {
                'phase': self.gesture_phase.value,
                'commits': [c.to_dict() for c in self.commits]
            },
            'display': {
                'visible': self.visible,
                'opacity': self.opacity
            },
            'meta': {
                'frame_idx': self.frame_idx,
                'timestamp': self.timestamp,
                'tracking_status': self.tracking_status.value,
                'processing_time_ms': self.processing_time_ms
            }
        }

    def to_row(self) -> Dict[str, Any]:
        """CSV용 평탄화 딕셔너리"""
        p, r = self.anchor_position, self.anchor_rotation
        t = self.transform
        return {
            'frame_idx': self.frame_idx,
            'timestamp': self.timestamp,
            'tracking_status': self.tracking_status.value,
            'anchor_x': float(p[0]), 'anchor_y': float(p[1]), 'anchor_z': float(p[2]),
            'anchor_rx': float(r[0]), 'anchor_ry': float(r[1]), 'anchor_rz': float(r[2]),
            'pos_x': float(t.position[0]), 'pos_y': float(t.position[1]), 'pos_z': float(t.position[2]),
            'rot_x': float(t.rotation[0]), 'rot_y': float(t.rotation[1]), 'rot_z': float(t.rotation[2]),
            'scale': t.uniform_scale,
            'gesture_phase': self.gesture_phase.value,
            'num_commits': len(self.commits),
            'visible': self.visible,
            'opacity': self.opacity
        }


class ARSession:
    """
    lumina_ar 통합 세션

    추적 앵커 하나와 조작 대상 변환 하나를 관리합니다.

    Example:
        >>> config = load_config("config/lumina_ar.yaml")
        >>> session = ARSession.from_config(config, on_update=store.save)
        >>> session.gesture.submit(PointerEvent(PointerEventType.DOWN, 1, 640, 500))
        >>> result = session.process_frame(TrackingStatus.FOUND, raw_pos, raw_rot)
        >>> print(result.anchor_position, result.transform)
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        transform: Optional[Transform] = None,
        scene_objects: Optional[List[Renderable]] = None,
        on_update: Optional[Callable[[Transform], None]] = None,
        on_tracking_status_change: Optional[Callable[[TrackingStatus], None]] = None,
        smoother: Optional[PoseSmoother] = None,
        camera: Optional[PerspectiveCamera] = None
    ):
        """
        Args:
            config: 시스템 설정
            transform: 조작 대상 변환 (None이면 항등 변환)
            scene_objects: 투명도 보간 대상 렌더링 객체
            on_update: 제스처 커밋 콜백 (영속화 협력자)
            on_tracking_status_change: 추적 상태 변경 콜백
            smoother: 자세 평활화기 (None이면 설정으로 생성)
            camera: 카메라 (None이면 설정으로 생성)
        """
        self.config = config or SystemConfig()
        self.scene_objects: List[Renderable] = list(scene_objects or [])
        self.on_tracking_status_change = on_tracking_status_change

        self.smoother = smoother or PoseSmoother.from_config(self.config.smoothing)
        self.camera = camera or PerspectiveCamera.from_config(self.config.camera)

        self.gesture = GestureInterpreter.from_config(
            self.config.gesture,
            camera=self.camera,
            viewport=(self.config.camera.width, self.config.camera.height),
            transform=transform,
            on_commit=on_update
        )

        self._status = TrackingStatus.SEARCHING
        self._anchor_position = np.zeros(3)
        self._anchor_rotation = np.zeros(3)
        self._auto_rotation = 0.0  # 도
        self._opacity = 1.0
        self._frame_count = 0

        logger.info("ARSession initialized")

    def process_frame(
        self,
        status: TrackingStatus,
        raw_position=None,
        raw_rotation=None,
        timestamp: Optional[float] = None
    ) -> FrameResult:
        """
        단일 프레임 처리

        Args:
            status: 추적 상태
            raw_position: 원시 앵커 위치 (추적 중일 때)
            raw_rotation: 원시 앵커 회전, 도 (추적 중일 때)
            timestamp: 프레임 타임스탬프

        Returns:
            FrameResult
        """
        start_time = time.time()
        frame_idx = self._frame_count
        self._frame_count += 1

        if timestamp is None:
            timestamp = frame_idx / self.config.camera.fps

        self._handle_status(status)

        # 제스처 이벤트 처리 (커밋 콜백 예외는 그대로 전파)
        gesture_update = self.gesture.tick()

        is_tracking = status == TrackingStatus.FOUND
        if is_tracking and raw_position is not None and raw_rotation is not None:
            self._anchor_position, self._anchor_rotation = self.smoother.smooth(
                raw_position, raw_rotation
            )

        scene = self.config.scene
        if scene.auto_rotate:
            self._auto_rotation += float(np.rad2deg(scene.auto_rotate_speed))

        anchor_rotation = self._anchor_rotation.copy()
        anchor_rotation[1] += self._auto_rotation

        visible = is_tracking or scene.ghost_mode
        if visible:
            self._opacity = update_presence_opacity(
                self.scene_objects,
                is_tracking,
                ghost_opacity=scene.ghost_opacity,
                lerp_factor=scene.opacity_lerp
            )

        processing_time = (time.time() - start_time) * 1000

        return FrameResult(
            frame_idx=frame_idx,
            timestamp=timestamp,
            tracking_status=status,
            anchor_position=self._anchor_position.copy(),
            anchor_rotation=anchor_rotation,
            transform=gesture_update.transform,
            gesture_phase=gesture_update.phase,
            commits=gesture_update.commits,
            visible=visible,
            opacity=self._opacity,
            processing_time_ms=processing_time
        )

    def process_sample(self, sample: TrackingSample) -> FrameResult:
        """추적 샘플 처리 (편의 함수)"""
        return self.process_frame(
            sample.status,
            raw_position=sample.position,
            raw_rotation=sample.rotation,
            timestamp=sample.timestamp
        )

    def _handle_status(self, status: TrackingStatus):
        """추적 상태 변화 처리"""
        if status == self._status:
            return

        previous = self._status
        self._status = status

        if status == TrackingStatus.FOUND:
            logger.info(f"Anchor found (previous: {previous.value})")
            if previous == TrackingStatus.LOST and self.config.smoothing.reset_on_reacquire:
                self.smoother.reset()
                logger.info("Pose smoother reset on reacquire")
        elif status == TrackingStatus.LOST:
            logger.info("Anchor lost")

        if self.on_tracking_status_change is not None:
            self.on_tracking_status_change(status)

    def reset(self):
        """세션 리셋"""
        self.smoother.reset()
        self._status = TrackingStatus.SEARCHING
        self._anchor_position = np.zeros(3)
        self._anchor_rotation = np.zeros(3)
        self._auto_rotation = 0.0
        self._opacity = 1.0
        self._frame_count = 0

        logger.info("Session reset")

    @property
    def tracking_status(self) -> TrackingStatus:
        return self._status

    @property
    def is_tracking(self) -> bool:
        return self._status == TrackingStatus.FOUND

    @property
    def transform(self) -> Transform:
        """조작 대상 실시간 변환"""
        return self.gesture.transform

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @classmethod
    def from_config(cls, config: SystemConfig, **kwargs) -> 'ARSession':
        """
        설정에서 세션 생성

        Args:
            config: SystemConfig
            **kwargs: ARSession 생성자 추가 인자
        """
        return cls(config=config, **kwargs)


def build_demo_gesture(
    camera: PerspectiveCamera,
    viewport: tuple,
    anchor_point,
    start_frame: int
) -> Dict[int, List[PointerEvent]]:
    """
    데모용 스크립트 제스처 (드래그 → 핀치/트위스트 → 해제)

    Returns:
        {frame_idx: [PointerEvent, ...]}
    """
    width, height = viewport
    start = camera.world_to_screen(anchor_point, width, height)
    if start is None:
        raise ValueError("Anchor point is behind the camera")

    sx, sy = start
    script: Dict[int, List[PointerEvent]] = {}
    frame = start_frame

    # 드래그: 오른쪽 아래로 120 픽셀
    script[frame] = [PointerEvent(PointerEventType.DOWN, 1, sx, sy)]
    for i in range(1, 21):
        script[frame + i] = [PointerEvent(PointerEventType.MOVE, 1, sx + 6 * i, sy + 3 * i)]
    frame += 21
    sx, sy = sx + 120, sy + 60

    # 핀치: 두 번째 손가락, 벌리면서 시계 방향으로 비틀기
    script[frame] = [PointerEvent(PointerEventType.DOWN, 2, sx + 100, sy)]
    for i in range(1, 16):
        angle = np.deg2rad(3 * i)
        radius = 100 + 4 * i
        script[frame + i] = [PointerEvent(
            PointerEventType.MOVE, 2,
            sx + radius * np.cos(angle), sy + radius * np.sin(angle)
        )]
    frame += 16

    script[frame] = [
        PointerEvent(PointerEventType.UP, 2),
        PointerEvent(PointerEventType.UP, 1),
    ]

    return script


def main():
    """시뮬레이션 세션 실행"""
    parser = argparse.ArgumentParser(
        description='lumina_ar: AR 앵커 자세 평활화 + 제스처 조작 시뮬레이션'
    )
    parser.add_argument('--config', type=str, default=None,
                        help='설정 파일 경로 (YAML)')
    parser.add_argument('--frames', type=int, default=180,
                        help='처리 프레임 수')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='출력 디렉토리 (기본: 설정값)')
    parser.add_argument('--format', type=str, choices=['json', 'csv'], default=None,
                        help='출력 형식 (기본: 설정값)')
    parser.add_argument('--seed', type=int, default=0,
                        help='노이즈 난수 시드')
    parser.add_argument('--no-gesture', action='store_true',
                        help='스크립트 제스처 비활성화')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='상세 로그 출력')

    args = parser.parse_args()

    config = load_config(args.config) if args.config else SystemConfig()

    output_dir = Path(args.output_dir or config.output.output_dir)

    handlers = [logging.StreamHandler()]
    if config.output.log_to_file:
        output_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(output_dir / 'lumina_ar.log'))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.output.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    recorder = TransformRecorder(
        str(output_dir),
        output_format=args.format or config.output.output_format
    )

    # 바닥면 위 앵커 (카메라보다 1m 아래)
    anchor_point = np.array([0.0, -1.0, 0.0])
    session = ARSession.from_config(
        config,
        transform=Transform(position=anchor_point),
        scene_objects=[SceneObject(id='object-1', name='Demo Object')],
        on_update=recorder.add_commit
    )

    tracker = SimulatedTracker(
        fps=config.camera.fps,
        lost_intervals=[(4.0, 4.5)],
        seed=args.seed
    )

    script = {}
    if not args.no_gesture:
        script = build_demo_gesture(
            session.camera,
            (config.camera.width, config.camera.height),
            anchor_point,
            start_frame=int(2.5 * config.camera.fps)
        )

    logger.info(f"Processing {args.frames} frames...")

    for frame_idx, sample in enumerate(tracker.frames(args.frames)):
        for event in script.get(frame_idx, []):
            session.gesture.submit(event)

        result = session.process_sample(sample)
        recorder.add_result(result)

        if frame_idx % 30 == 0 or result.commits:
            p = result.anchor_position
            logger.info(
                f"Frame {frame_idx}: status={result.tracking_status.value}, "
                f"anchor=[{p[0]:.3f}, {p[1]:.3f}, {p[2]:.3f}], "
                f"gesture={result.gesture_phase.value}, transform={result.transform}"
            )

    if config.output.save_results:
        filepath = recorder.save()
        logger.info(f"Results saved to {filepath}")

    logger.info(f"Summary: {recorder.get_summary()}")


if __name__ == '__main__':
    main()
