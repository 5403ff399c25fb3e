"""
ScalarEstimator 단위 테스트
"""

import numpy as np
import pytest

from lumina_ar.smoothing.scalar_estimator import ScalarEstimator


class TestScalarEstimatorInit:
    """초기화 테스트"""

    def test_initial_state(self):
        """초기 상태 x=0, p=1"""
        est = ScalarEstimator(process_noise=0.01, measurement_noise=0.1)
        assert est.x == 0.0
        assert est.p == 1.0
        assert est.q == pytest.approx(0.01)
        assert est.r == pytest.approx(0.1)

    @pytest.mark.parametrize("q, r", [(0.0, 0.1), (0.01, 0.0), (-0.01, 0.1), (0.01, -1.0)])
    def test_rejects_non_positive_noise(self, q, r):
        """0 이하 노이즈 거부"""
        with pytest.raises(ValueError):
            ScalarEstimator(process_noise=q, measurement_noise=r)


class TestScalarEstimatorUpdate:
    """갱신 테스트"""

    def test_first_output(self):
        """첫 출력: k = 1.01 / 1.11 ≈ 0.909"""
        est = ScalarEstimator(process_noise=0.01, measurement_noise=0.1)
        x = est.update(1.0)

        assert x == pytest.approx(1.01 / 1.11)
        assert x == pytest.approx(0.909, abs=1e-3)
        assert est.k == pytest.approx(1.01 / 1.11)
        assert est.p == pytest.approx((1 - 1.01 / 1.11) * 1.01)

    def test_constant_input_converges_monotonically(self):
        """상수 입력에 대해 단조 증가 후 수렴"""
        est = ScalarEstimator(process_noise=0.01, measurement_noise=0.1)
        outputs = [est.update(1.0) for _ in range(50)]

        assert all(b > a for a, b in zip(outputs, outputs[1:]))
        assert all(x < 1.0 for x in outputs)

        for _ in range(150):
            est.update(1.0)
        assert est.x == pytest.approx(1.0, abs=1e-9)

    def test_covariance_decreases_to_steady_state(self):
        """p는 단조 감소하며 0이 아닌 정상 상태로 수렴"""
        q, r = 0.01, 0.1
        est = ScalarEstimator(process_noise=q, measurement_noise=r)

        covariances = []
        for _ in range(100):
            est.update(1.0)
            covariances.append(est.p)
            assert 0.0 <= est.k <= 1.0

        head = covariances[:30]
        assert all(b < a for a, b in zip(head, head[1:]))
        assert covariances[-1] > 0

        # 정상 상태: a = p + q,  a^2 - q a - q r = 0
        a = (q + np.sqrt(q * q + 4 * q * r)) / 2
        assert covariances[-1] == pytest.approx(a - q, rel=1e-6)

    def test_deterministic(self):
        """같은 입력 → 같은 출력"""
        measurements = [0.3, -0.2, 1.5, 0.9, 0.0]
        a = ScalarEstimator(0.005, 0.05)
        b = ScalarEstimator(0.005, 0.05)

        assert [a.update(m) for m in measurements] == [b.update(m) for m in measurements]

    def test_reset(self):
        """리셋 후 초기 상태"""
        est = ScalarEstimator()
        for _ in range(10):
            est.update(5.0)

        est.reset()

        assert est.x == 0.0
        assert est.p == 1.0
        assert est.update(1.0) == pytest.approx(1.01 / 1.11)
