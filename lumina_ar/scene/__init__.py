"""
scene 모듈 - 장면 협력자 경계

변환, 원근 카메라, 렌더링 가능 객체 인터페이스를 제공합니다.
메시 로딩 및 실제 렌더링은 외부 협력자의 책임입니다.
"""

from .transform import Transform, EULER_ORDER
from .camera import PerspectiveCamera
from .scene_object import (
    Material,
    Renderable,
    SceneObject,
    update_presence_opacity
)

__all__ = [
    'Transform',
    'EULER_ORDER',
    'PerspectiveCamera',
    'Material',
    'Renderable',
    'SceneObject',
    'update_presence_opacity',
]
