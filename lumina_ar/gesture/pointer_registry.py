"""
pointer_registry.py - 활성 포인터 레지스트리

현재 눌린 포인터(손가락/스타일러스)의 ID와 마지막 2D 위치를 추적합니다.
"몇 개의 손가락이 눌려 있는가"에 대한 유일한 기준입니다.

알 수 없는 ID에 대한 연산은 모두 no-op 입니다.

Version: 1.0
Author: Lumina AR Team
"""

from dataclasses import dataclass
from itertools import islice
from typing import Dict, Iterator, List, Optional, ValuesView
import logging

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointerSample:
    """
    포인터 샘플

    Attributes:
        id: 포인터 ID (접촉 중 고유)
        x: 화면 X (픽셀)
        y: 화면 Y (픽셀, 아래 방향 +)
    """
    id: int
    x: float
    y: float

    def to_array(self) -> np.ndarray:
        """[x, y] 배열"""
        return np.array([self.x, self.y], dtype=np.float64)


class PointerRegistry:
    """
    활성 포인터 레지스트리

    Example:
        >>> registry = PointerRegistry()
        >>> registry.add(1, 100.0, 200.0)
        1
        >>> registry.remove(1)
        0
    """

    def __init__(self):
        # dict는 삽입 순서를 유지 (핀치 쌍 선택에 사용)
        self._pointers: Dict[int, PointerSample] = {}

    def add(self, pointer_id: int, x: float, y: float) -> int:
        """
        포인터 추가 (이미 있으면 덮어쓰기)

        Returns:
            현재 활성 포인터 수
        """
        self._pointers[pointer_id] = PointerSample(pointer_id, float(x), float(y))
        return len(self._pointers)

    def update(self, pointer_id: int, x: float, y: float) -> bool:
        """
        기존 포인터 위치 갱신

        Returns:
            갱신 여부 (알 수 없는 ID면 False)
        """
        if pointer_id not in self._pointers:
            logger.debug(f"Ignoring update for unknown pointer {pointer_id}")
            return False

        self._pointers[pointer_id] = PointerSample(pointer_id, float(x), float(y))
        return True

    def remove(self, pointer_id: int) -> int:
        """
        포인터 제거

        Returns:
            현재 활성 포인터 수
        """
        if self._pointers.pop(pointer_id, None) is None:
            logger.debug(f"Ignoring removal of unknown pointer {pointer_id}")
        return len(self._pointers)

    def values(self) -> ValuesView[PointerSample]:
        """현재 포인터 샘플의 지연 뷰 (반복 가능, 재반복 가능)"""
        return self._pointers.values()

    def get(self, pointer_id: int) -> Optional[PointerSample]:
        return self._pointers.get(pointer_id)

    def first_two(self) -> List[PointerSample]:
        """먼저 등록된 두 포인터 (핀치 쌍)"""
        return list(islice(self._pointers.values(), 2))

    def clear(self):
        self._pointers.clear()

    def __len__(self) -> int:
        return len(self._pointers)

    def __contains__(self, pointer_id) -> bool:
        return pointer_id in self._pointers

    def __iter__(self) -> Iterator[PointerSample]:
        return iter(self._pointers.values())
