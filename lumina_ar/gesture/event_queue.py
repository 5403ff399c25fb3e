"""
event_queue.py - 포인터 이벤트 큐

입력 스레드와 렌더 스레드가 분리된 경우, 포인터 이벤트를 단일 소비자 큐에
넣고 프레임마다 도착 순서대로 처리하여 상태 기계의 직렬 의미를 유지합니다.
"""

import queue
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class PointerEventType(Enum):
    """포인터 이벤트 종류"""
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    """포인터 이벤트"""
    kind: PointerEventType
    pointer_id: int
    x: float = 0.0
    y: float = 0.0


class PointerEventQueue:
    """스레드 안전 FIFO (생산자 다수, 소비자 하나)"""

    def __init__(self):
        self._queue: "queue.Queue[PointerEvent]" = queue.Queue()

    def put(self, event: PointerEvent):
        self._queue.put_nowait(event)

    def drain(self) -> Iterator[PointerEvent]:
        """현재 쌓인 이벤트를 하나씩 꺼냄"""
        while True:
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                return

    def __len__(self) -> int:
        return self._queue.qsize()
