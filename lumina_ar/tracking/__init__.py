"""
tracking 모듈 - 추적 협력자 경계
"""

from .simulated_tracker import SimulatedTracker, TrackingSample, TrackingStatus

__all__ = ['SimulatedTracker', 'TrackingSample', 'TrackingStatus']
