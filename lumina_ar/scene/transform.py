"""
transform.py - 장면 객체 변환

위치 / 회전(오일러, 도) / 스케일로 구성된 변환.
제스처 중에는 실시간으로 변경되고, 커밋 시점에만 영속화됩니다.

회전 순서는 렌더러 기본값인 내재적(intrinsic) XYZ 입니다.

Version: 1.0
Author: Lumina AR Team
"""

import numpy as np
from scipy.spatial.transform import Rotation
from dataclasses import dataclass, field
from typing import Dict, Any

EULER_ORDER = 'XYZ'


def _vec3(value) -> np.ndarray:
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3-vector, got shape {arr.shape}")
    return arr


@dataclass(eq=False)
class Transform:
    """
    장면 객체 변환

    Attributes:
        position: [x, y, z]
        rotation: [rx, ry, rz] 도 (오일러 XYZ)
        scale: [sx, sy, sz]
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self):
        self.position = _vec3(self.position)
        self.rotation = _vec3(self.rotation)
        self.scale = _vec3(self.scale)

    def copy(self) -> 'Transform':
        """깊은 복사"""
        return Transform(
            position=self.position.copy(),
            rotation=self.rotation.copy(),
            scale=self.scale.copy()
        )

    @property
    def uniform_scale(self) -> float:
        """균일 스케일 값 (X축 기준)"""
        return float(self.scale[0])

    @property
    def rotation_matrix(self) -> np.ndarray:
        """3x3 회전 행렬"""
        return Rotation.from_euler(EULER_ORDER, self.rotation, degrees=True).as_matrix()

    def to_matrix(self) -> np.ndarray:
        """4x4 변환 행렬 (T * R * S)"""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation_matrix * self.scale
        matrix[:3, 3] = self.position
        return matrix

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'position': {'x': float(self.position[0]), 'y': float(self.position[1]), 'z': float(self.position[2])},
            'rotation': {'x': float(self.rotation[0]), 'y': float(self.rotation[1]), 'z': float(self.rotation[2])},
            'scale': {'x': float(self.scale[0]), 'y': float(self.scale[1]), 'z': float(self.scale[2])}
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Transform':
        """딕셔너리에서 생성 ({'x', 'y', 'z'} 또는 리스트)"""
        def vec(value, default):
            if value is None:
                return default
            if isinstance(value, dict):
                return [value.get('x', 0.0), value.get('y', 0.0), value.get('z', 0.0)]
            return value

        return cls(
            position=vec(d.get('position'), np.zeros(3)),
            rotation=vec(d.get('rotation'), np.zeros(3)),
            scale=vec(d.get('scale'), np.ones(3))
        )

    @classmethod
    def identity(cls) -> 'Transform':
        return cls()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return (
            np.array_equal(self.position, other.position) and
            np.array_equal(self.rotation, other.rotation) and
            np.array_equal(self.scale, other.scale)
        )

    def __repr__(self) -> str:
        p, r, s = self.position, self.rotation, self.scale
        return (
            f"Transform(pos=[{p[0]:.3f}, {p[1]:.3f}, {p[2]:.3f}], "
            f"rot=[{r[0]:.1f}, {r[1]:.1f}, {r[2]:.1f}], "
            f"scale=[{s[0]:.3f}, {s[1]:.3f}, {s[2]:.3f}])"
        )
