"""
PoseSmoother 단위 테스트
"""

import threading

import numpy as np
import pytest

from lumina_ar.config.system_config import NoiseConfig, SmoothingConfig
from lumina_ar.smoothing.pose_smoother import (
    PoseSmoother,
    SmoothedPose,
    POSITION_AXES,
    ROTATION_AXES
)


class TestPoseSmootherInit:
    """초기화 테스트"""

    def test_six_estimators(self):
        smoother = PoseSmoother()
        for axis in POSITION_AXES + ROTATION_AXES:
            assert smoother.estimator(axis).x == 0.0

    def test_default_noise(self):
        """이동 / 회전 기본 노이즈"""
        smoother = PoseSmoother()
        assert smoother.estimator('pos_x').q == pytest.approx(0.005)
        assert smoother.estimator('pos_x').r == pytest.approx(0.05)
        assert smoother.estimator('rot_y').q == pytest.approx(0.01)
        assert smoother.estimator('rot_y').r == pytest.approx(0.1)

    def test_from_config(self):
        config = SmoothingConfig(
            translation_noise=NoiseConfig(q=0.02, r=0.2),
            rotation_noise=NoiseConfig(q=0.03, r=0.3),
            unwrap_rotation=True
        )
        smoother = PoseSmoother.from_config(config)

        assert smoother.estimator('pos_z').q == pytest.approx(0.02)
        assert smoother.estimator('rot_z').r == pytest.approx(0.3)
        assert smoother.unwrap_rotation


class TestPoseSmootherSmooth:
    """평활화 테스트"""

    def test_first_sample(self):
        """첫 샘플: 축별 이득 적용"""
        smoother = PoseSmoother()
        position, rotation = smoother.smooth([1.0, 2.0, 3.0], [10.0, 20.0, 30.0])

        k_pos = 1.005 / 1.055
        k_rot = 1.01 / 1.11
        np.testing.assert_allclose(position, [k_pos * 1.0, k_pos * 2.0, k_pos * 3.0])
        np.testing.assert_allclose(rotation, [k_rot * 10.0, k_rot * 20.0, k_rot * 30.0])

    def test_axes_independent(self):
        """한 축의 입력이 다른 축에 영향 없음"""
        smoother = PoseSmoother()
        for _ in range(20):
            position, rotation = smoother.smooth([1.0, 0.0, 0.0], [0.0, 0.0, 45.0])

        assert position[0] > 0.9
        assert position[1] == 0.0
        assert position[2] == 0.0
        assert rotation[0] == 0.0
        assert rotation[1] == 0.0
        assert rotation[2] > 40.0

    def test_noise_suppressed(self):
        """노이즈가 섞인 정지 자세의 분산 감소"""
        rng = np.random.default_rng(42)
        smoother = PoseSmoother()
        truth = np.array([0.5, -1.0, 2.0])

        raw, smoothed = [], []
        for _ in range(300):
            sample = truth + rng.normal(0.0, 0.02, 3)
            position, _ = smoother.smooth(sample, [0.0, 0.0, 0.0])
            raw.append(sample)
            smoothed.append(position)

        raw = np.array(raw[100:])
        smoothed = np.array(smoothed[100:])
        assert np.all(smoothed.std(axis=0) < raw.std(axis=0))
        np.testing.assert_allclose(smoothed.mean(axis=0), truth, atol=0.01)

    def test_smooth_position_and_rotation_separately(self):
        smoother = PoseSmoother()
        position = smoother.smooth_position([1.0, 1.0, 1.0])
        rotation = smoother.smooth_rotation([90.0, 0.0, 0.0])

        assert position.shape == (3,)
        assert rotation[0] == pytest.approx(90.0 * 1.01 / 1.11)

    def test_sample_count_includes_partial_updates(self):
        """smooth / smooth_position / smooth_rotation 모두 갱신 수에 포함"""
        smoother = PoseSmoother()
        smoother.smooth([0.0, 0.0, 0.0], [0.0, 0.0, 0.0])
        smoother.smooth_position([1.0, 1.0, 1.0])
        smoother.smooth_rotation([1.0, 1.0, 1.0])

        assert smoother.sample_count == 3

    def test_wrong_shape_rejected(self):
        smoother = PoseSmoother()
        with pytest.raises(ValueError):
            smoother.smooth([1.0, 2.0], [0.0, 0.0, 0.0])


class TestRotationUnwrap:
    """회전 각도 래핑 테스트"""

    def _converge(self, smoother, yaw):
        for _ in range(100):
            smoother.smooth([0.0, 0.0, 0.0], [0.0, yaw, 0.0])

    def test_unwrap_across_seam(self):
        """170° → -170° 는 +20° 이동으로 처리"""
        smoother = PoseSmoother(unwrap_rotation=True)
        self._converge(smoother, 170.0)

        _, rotation = smoother.smooth([0.0, 0.0, 0.0], [0.0, -170.0, 0.0])
        assert rotation[1] > 170.0

    def test_without_unwrap(self):
        """래핑 없으면 반대 방향으로 크게 이동"""
        smoother = PoseSmoother(unwrap_rotation=False)
        self._converge(smoother, 170.0)

        _, rotation = smoother.smooth([0.0, 0.0, 0.0], [0.0, -170.0, 0.0])
        assert rotation[1] < 170.0


class TestSnapshotAndReset:
    """스냅샷 / 리셋 테스트"""

    def test_snapshot_matches_last_output(self):
        smoother = PoseSmoother()
        position, rotation = smoother.smooth([0.1, 0.2, 0.3], [1.0, 2.0, 3.0])

        snapshot = smoother.snapshot()
        assert isinstance(snapshot, SmoothedPose)
        np.testing.assert_array_equal(snapshot.position, position)
        np.testing.assert_array_equal(snapshot.rotation, rotation)
        assert 'position' in snapshot.to_dict()

    def test_reset(self):
        smoother = PoseSmoother()
        for _ in range(5):
            smoother.smooth([1.0, 1.0, 1.0], [1.0, 1.0, 1.0])

        smoother.reset()

        snapshot = smoother.snapshot()
        np.testing.assert_array_equal(snapshot.position, np.zeros(3))
        np.testing.assert_array_equal(snapshot.rotation, np.zeros(3))
        assert smoother.sample_count == 0
        assert all(p == 1.0 for p in smoother.covariances.values())

    def test_snapshot_never_half_updated(self):
        """다른 스레드의 스냅샷은 항상 완전히 갱신된 자세"""
        smoother = PoseSmoother()
        torn = []

        def writer():
            for i in range(500):
                value = float(i)
                smoother.smooth([value] * 3, [value] * 3)

        def reader():
            for _ in range(500):
                snapshot = smoother.snapshot()
                if not np.all(snapshot.position == snapshot.position[0]):
                    torn.append(snapshot)

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert torn == []
