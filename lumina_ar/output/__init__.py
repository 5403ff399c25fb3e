"""
output 모듈 - 결과 저장
"""

from .transform_recorder import TransformRecorder

__all__ = ['TransformRecorder']
