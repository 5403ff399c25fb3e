"""
scene_object.py - 장면 객체와 렌더링 가능 인터페이스

렌더러 쪽 협력자를 명시적 능력 인터페이스(Renderable)로 모델링합니다.
Renderable은 재질(Material) 목록을 직접 제공하며, 런타임 타입 검사 없이
고스트 모드 투명도 보간을 적용할 수 있습니다.

Version: 1.0
Author: Lumina AR Team
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Protocol
import logging

from .transform import Transform

logger = logging.getLogger(__name__)


@dataclass
class Material:
    """재질 (투명도 관련 속성만 다룸)"""
    name: str = "default"
    opacity: float = 1.0
    transparent: bool = False


class Renderable(Protocol):
    """렌더링 가능 객체 능력 인터페이스"""

    def materials(self) -> Iterable[Material]:
        ...


@dataclass
class SceneObject:
    """
    장면 객체

    Attributes:
        id: 객체 ID
        name: 표시 이름
        url: 메시 에셋 경로 (로딩은 외부 협력자 담당)
        transform: 앵커 기준 로컬 변환
    """
    id: str
    name: str = ""
    url: str = ""
    transform: Transform = field(default_factory=Transform)
    material_list: List[Material] = field(default_factory=lambda: [Material()])

    def materials(self) -> Iterable[Material]:
        return iter(self.material_list)


def lerp(a: float, b: float, t: float) -> float:
    """선형 보간"""
    return a + (b - a) * t


def update_presence_opacity(
    renderables: Iterable[Renderable],
    is_tracking: bool,
    ghost_opacity: float = 0.2,
    lerp_factor: float = 0.1
) -> float:
    """
    추적 상태에 따른 투명도 보간 (고스트 모드)

    모든 재질을 투명 처리하고, 추적 중이면 1.0, 아니면 ghost_opacity를 향해
    프레임마다 lerp_factor만큼 보간합니다.

    Returns:
        마지막으로 갱신된 재질의 투명도 (재질이 없으면 목표값)
    """
    target = 1.0 if is_tracking else ghost_opacity
    opacity = target

    for renderable in renderables:
        for material in renderable.materials():
            material.transparent = True
            material.opacity = lerp(material.opacity, target, lerp_factor)
            opacity = material.opacity

    return opacity
