"""
config 모듈 - 설정 관리
"""

from .system_config import (
    SystemConfig,
    GestureConfig,
    SmoothingConfig,
    NoiseConfig,
    CameraConfig,
    SceneConfig,
    OutputConfig,
    load_config,
    create_default_config
)

__all__ = [
    'SystemConfig',
    'GestureConfig',
    'SmoothingConfig',
    'NoiseConfig',
    'CameraConfig',
    'SceneConfig',
    'OutputConfig',
    'load_config',
    'create_default_config',
]
