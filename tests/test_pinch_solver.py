"""
PinchSolver 단위 테스트
"""

import math

import numpy as np
import pytest

from lumina_ar.config.system_config import GestureConfig
from lumina_ar.gesture.pinch_solver import PinchSolver, PinchState, wrap_angle
from lumina_ar.gesture.pointer_registry import PointerSample


@pytest.fixture
def solver():
    return PinchSolver(min_scale=0.1, max_scale=10.0)


class TestBegin:
    """핀치 시작 테스트"""

    def test_records_distance_and_angle(self, solver):
        state = solver.begin((0.0, 0.0), (0.0, 100.0), current_scale=2.0, current_rotation=0.5)

        assert isinstance(state, PinchState)
        assert state.initial_distance == pytest.approx(100.0)
        assert state.initial_angle == pytest.approx(math.pi / 2)
        assert state.initial_scale == 2.0
        assert state.initial_rotation == 0.5

    def test_accepts_pointer_samples(self, solver):
        state = solver.begin(PointerSample(1, 10.0, 10.0), PointerSample(2, 40.0, 50.0), 1.0, 0.0)
        assert state.initial_distance == pytest.approx(50.0)


class TestSolveScale:
    """스케일 계산 테스트"""

    def test_pinch_scenario(self, solver):
        """초기 거리 100 → 150, 초기 스케일 1.0 → 1.5"""
        state = solver.begin((0.0, 0.0), (100.0, 0.0), current_scale=1.0, current_rotation=0.0)
        result = solver.solve((0.0, 0.0), (150.0, 0.0), state)
        assert result.scale == pytest.approx(1.5)

    def test_clamped_to_max(self, solver):
        state = solver.begin((0.0, 0.0), (100.0, 0.0), 1.0, 0.0)
        assert solver.solve((0.0, 0.0), (2000.0, 0.0), state).scale == 10.0

    def test_clamped_to_min(self, solver):
        state = solver.begin((0.0, 0.0), (100.0, 0.0), 1.0, 0.0)
        assert solver.solve((0.0, 0.0), (1.0, 0.0), state).scale == 0.1

    def test_monotonic_in_distance(self, solver):
        """거리에 대해 단조 비감소, 항상 [min, max] 범위"""
        state = solver.begin((0.0, 0.0), (100.0, 0.0), 1.0, 0.0)
        scales = [
            solver.solve((0.0, 0.0), (d, 0.0), state).scale
            for d in np.linspace(0.0, 3000.0, 301)
        ]

        assert all(b >= a for a, b in zip(scales, scales[1:]))
        assert all(0.1 <= s <= 10.0 for s in scales)

    def test_degenerate_initial_distance(self, solver):
        """초기 두 포인터가 겹치면 초기 스케일 유지 (NaN/inf 없음)"""
        state = solver.begin((5.0, 5.0), (5.0, 5.0), current_scale=2.0, current_rotation=0.3)
        result = solver.solve((0.0, 0.0), (300.0, 0.0), state)

        assert result.scale == 2.0
        assert result.rotation == 0.3
        assert math.isfinite(result.scale)


class TestSolveRotation:
    """트위스트 회전 테스트"""

    def test_clockwise_screen_twist_decreases_rotation(self, solver):
        """화면 시계 방향 90도 (Y 아래) → 회전 -90도"""
        state = solver.begin((0.0, 0.0), (100.0, 0.0), 1.0, 0.0)
        result = solver.solve((0.0, 0.0), (0.0, 100.0), state)

        assert result.rotation == pytest.approx(-math.pi / 2)
        assert result.scale == pytest.approx(1.0)

    def test_counterclockwise_screen_twist_increases_rotation(self, solver):
        state = solver.begin((0.0, 0.0), (100.0, 0.0), 1.0, 0.2)
        result = solver.solve((0.0, 0.0), (0.0, -100.0), state)
        assert result.rotation == pytest.approx(0.2 + math.pi / 2)

    def test_twist_across_atan2_seam(self, solver):
        """179° → -179° 는 2° 시계 방향 트위스트"""
        a0, a1 = math.radians(179.0), math.radians(-179.0)
        state = solver.begin((0.0, 0.0), (100 * math.cos(a0), 100 * math.sin(a0)), 1.0, 0.0)
        result = solver.solve((0.0, 0.0), (100 * math.cos(a1), 100 * math.sin(a1)), state)

        assert result.rotation == pytest.approx(-math.radians(2.0))

    def test_wrap_angle(self):
        assert wrap_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
        assert wrap_angle(-3 * math.pi / 2) == pytest.approx(math.pi / 2)
        assert wrap_angle(0.25) == pytest.approx(0.25)


class TestConfig:
    """설정 테스트"""

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            PinchSolver(min_scale=5.0, max_scale=1.0)
        with pytest.raises(ValueError):
            PinchSolver(min_scale=0.0, max_scale=1.0)

    def test_from_config(self):
        solver = PinchSolver.from_config(GestureConfig(min_scale=0.5, max_scale=2.0))
        assert solver.min_scale == 0.5
        assert solver.max_scale == 2.0
