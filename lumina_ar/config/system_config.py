"""
system_config.py - 시스템 설정 관리

lumina_ar 시스템의 모든 설정을 통합 관리합니다.
잘못된 설정(음수 노이즈, min_scale > max_scale 등)은 생성 시점에 ValueError로 거부합니다.

Version: 1.0
Author: Lumina AR Team
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass
class NoiseConfig:
    """
    스칼라 Kalman Filter 노이즈 설정

    Attributes:
        q: 프로세스 노이즈 (> 0)
        r: 측정 노이즈 (> 0)
    """
    q: float = 0.01
    r: float = 0.1

    def __post_init__(self):
        if self.q <= 0 or self.r <= 0:
            raise ValueError(
                f"Noise parameters must be positive, got q={self.q}, r={self.r}"
            )


@dataclass
class GestureConfig:
    """제스처 설정"""
    enabled: bool = True

    # 스케일 범위
    min_scale: float = 0.1
    max_scale: float = 10.0

    # 수치 허용 오차
    parallel_epsilon: float = 1e-6  # 광선-평면 평행 판정
    pinch_epsilon: float = 1e-6     # 핀치 초기 거리 퇴화 판정

    def __post_init__(self):
        if self.min_scale <= 0:
            raise ValueError(f"min_scale must be positive, got {self.min_scale}")
        if self.min_scale > self.max_scale:
            raise ValueError(
                f"min_scale ({self.min_scale}) must not exceed max_scale ({self.max_scale})"
            )


@dataclass
class SmoothingConfig:
    """자세 평활화 설정"""
    # 이동/회전 축별 노이즈 (원본 뷰어 기본값)
    translation_noise: NoiseConfig = field(
        default_factory=lambda: NoiseConfig(q=0.005, r=0.05)
    )
    rotation_noise: NoiseConfig = field(
        default_factory=lambda: NoiseConfig(q=0.01, r=0.1)
    )

    # 회전 측정값을 현재 추정치 기준 ±180도 이내로 래핑
    unwrap_rotation: bool = False

    # 추적 재획득 시 필터 리셋
    reset_on_reacquire: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'SmoothingConfig':
        """딕셔너리에서 설정 생성"""
        d = dict(d)
        if 'translation_noise' in d:
            d['translation_noise'] = NoiseConfig(**d['translation_noise'])
        if 'rotation_noise' in d:
            d['rotation_noise'] = NoiseConfig(**d['rotation_noise'])
        return cls(**d)


@dataclass
class CameraConfig:
    """카메라 설정"""
    # 원근 투영 파라미터
    fov: float = 75.0     # 수직 시야각 (도)
    near: float = 0.1
    far: float = 1000.0

    # 뷰포트 크기
    width: int = 1280
    height: int = 720

    # 카메라 자세 (월드 좌표)
    position: Tuple[float, float, float] = (0.0, 0.0, 5.0)
    rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0)  # 오일러 XYZ (도)

    # 프레임레이트
    fps: float = 30.0

    def __post_init__(self):
        self.position = tuple(float(v) for v in self.position)
        self.rotation = tuple(float(v) for v in self.rotation)

    @property
    def aspect(self) -> float:
        return self.width / self.height if self.height else 1.0


@dataclass
class SceneConfig:
    """장면 표시 설정"""
    ghost_mode: bool = False
    auto_rotate: bool = False
    auto_rotate_speed: float = 0.01  # 라디안/프레임
    ghost_opacity: float = 0.2
    opacity_lerp: float = 0.1


@dataclass
class OutputConfig:
    """출력 설정"""
    # 저장 옵션
    save_results: bool = True
    output_dir: str = "output"
    output_format: str = "json"  # "json" or "csv"

    # 로깅
    log_level: str = "INFO"
    log_to_file: bool = False


@dataclass
class SystemConfig:
    """lumina_ar 시스템 전체 설정"""
    gesture: GestureConfig = field(default_factory=GestureConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    scene: SceneConfig = field(default_factory=SceneConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        config_dict = asdict(self)
        # YAML 직렬화를 위해 튜플을 리스트로 변환
        config_dict['camera']['position'] = list(self.camera.position)
        config_dict['camera']['rotation'] = list(self.camera.rotation)
        return config_dict

    def save(self, filepath: str):
        """설정을 YAML 파일로 저장"""
        with open(filepath, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

        logger.info(f"Config saved to {filepath}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'SystemConfig':
        """딕셔너리에서 설정 생성"""
        return cls(
            gesture=GestureConfig(**d.get('gesture', {})),
            smoothing=SmoothingConfig.from_dict(d.get('smoothing', {})),
            camera=CameraConfig(**d.get('camera', {})),
            scene=SceneConfig(**d.get('scene', {})),
            output=OutputConfig(**d.get('output', {}))
        )


def load_config(filepath: str) -> SystemConfig:
    """
    YAML 파일에서 설정 로드

    Args:
        filepath: 설정 파일 경로

    Returns:
        SystemConfig: 로드된 설정
    """
    path = Path(filepath)

    if not path.exists():
        logger.warning(f"Config file not found: {filepath}, using defaults")
        return SystemConfig()

    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return SystemConfig()

    return SystemConfig.from_dict(config_dict)


def create_default_config(save_path: Optional[str] = None) -> SystemConfig:
    """
    기본 설정 생성

    Args:
        save_path: 저장 경로 (None이면 저장 안함)

    Returns:
        SystemConfig: 기본 설정
    """
    config = SystemConfig()

    if save_path:
        config.save(save_path)

    return config
