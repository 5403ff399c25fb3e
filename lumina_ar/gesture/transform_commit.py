"""
transform_commit.py - 제스처 완료 시 변환 커밋

제스처가 끝나면(포인터 수가 0으로 돌아오면) 객체의 현재 변환을 복사해
외부 영속화 협력자의 콜백으로 동기 전달합니다.

재시도는 없습니다. 콜백에서 발생한 예외는 호출자에게 그대로 전파됩니다.

Version: 1.0
Author: Lumina AR Team
"""

from typing import Callable, Optional
import logging

from ..scene.transform import Transform

logger = logging.getLogger(__name__)


CommitCallback = Callable[[Transform], None]


class TransformCommitProtocol:
    """
    변환 커밋 경계

    Example:
        >>> saved = []
        >>> protocol = TransformCommitProtocol(saved.append)
        >>> protocol.commit(Transform())
    """

    def __init__(self, callback: Optional[CommitCallback] = None):
        """
        Args:
            callback: 커밋된 변환을 받는 콜백 (None이면 기록만)
        """
        self.callback = callback
        self._commit_count = 0
        self._last_committed: Optional[Transform] = None

    def commit(self, transform: Transform) -> Transform:
        """
        변환 커밋

        Args:
            transform: 객체의 현재 변환

        Returns:
            콜백에 전달된 변환 (복사본)
        """
        packaged = transform.copy()

        self._commit_count += 1
        self._last_committed = packaged
        logger.info(f"Committing transform #{self._commit_count}: {packaged}")

        if self.callback is not None:
            self.callback(packaged.copy())

        return packaged

    @property
    def commit_count(self) -> int:
        return self._commit_count

    @property
    def last_committed(self) -> Optional[Transform]:
        return self._last_committed
