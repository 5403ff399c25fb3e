"""
TransformCommitProtocol / Transform 단위 테스트
"""

import numpy as np
import pytest

from lumina_ar.gesture.transform_commit import TransformCommitProtocol
from lumina_ar.scene.transform import Transform


class TestTransformCommitProtocol:
    """커밋 경계 테스트"""

    def test_commit_delivers_copy(self):
        received = []
        protocol = TransformCommitProtocol(received.append)
        live = Transform(position=[1.0, 2.0, 3.0])

        protocol.commit(live)
        live.position[:] = 0.0

        assert len(received) == 1
        np.testing.assert_array_equal(received[0].position, [1.0, 2.0, 3.0])

    def test_commit_count_and_last(self):
        protocol = TransformCommitProtocol()
        assert protocol.commit_count == 0
        assert protocol.last_committed is None

        protocol.commit(Transform(scale=[2.0, 2.0, 2.0]))
        protocol.commit(Transform(scale=[3.0, 3.0, 3.0]))

        assert protocol.commit_count == 2
        assert protocol.last_committed.uniform_scale == 3.0

    def test_callback_cannot_mutate_record(self):
        """콜백이 받은 변환을 수정해도 기록은 유지"""
        protocol = TransformCommitProtocol(lambda t: t.position.fill(7.0))
        packaged = protocol.commit(Transform())

        np.testing.assert_array_equal(packaged.position, np.zeros(3))

    def test_repeated_commit_of_unchanged_transform(self):
        """변경 없는 변환을 두 번 커밋하면 같은 값 두 개"""
        received = []
        protocol = TransformCommitProtocol(received.append)
        t = Transform(position=[0.5, -1.0, 2.0], rotation=[0.0, 30.0, 0.0], scale=[1.5, 1.5, 1.5])

        protocol.commit(t)
        protocol.commit(t)

        assert len(received) == 2
        assert received[0] == received[1]
        assert received[0] == t
        assert received[0] is not received[1]

    def test_callback_error_propagates(self):
        def failing(transform):
            raise IOError("disk full")

        protocol = TransformCommitProtocol(failing)
        with pytest.raises(IOError):
            protocol.commit(Transform())


class TestTransform:
    """변환 테스트"""

    def test_defaults(self):
        t = Transform()
        np.testing.assert_array_equal(t.position, np.zeros(3))
        np.testing.assert_array_equal(t.rotation, np.zeros(3))
        np.testing.assert_array_equal(t.scale, np.ones(3))
        assert t == Transform.identity()

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            Transform(position=[1.0, 2.0])

    def test_dict_round_trip(self):
        t = Transform(position=[1.0, 2.0, 3.0], rotation=[0.0, 45.0, 0.0], scale=[2.0, 2.0, 2.0])
        d = t.to_dict()

        assert d['position'] == {'x': 1.0, 'y': 2.0, 'z': 3.0}
        assert Transform.from_dict(d) == t

    def test_from_dict_accepts_lists_and_defaults(self):
        t = Transform.from_dict({'position': [1.0, 0.0, 0.0]})
        np.testing.assert_array_equal(t.position, [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(t.scale, np.ones(3))

    def test_to_matrix(self):
        t = Transform(position=[1.0, 2.0, 3.0], rotation=[0.0, 90.0, 0.0], scale=[2.0, 2.0, 2.0])
        m = t.to_matrix()

        np.testing.assert_allclose(m[:3, 3], [1.0, 2.0, 3.0])
        # Y축 90도: +X → -Z
        np.testing.assert_allclose(m[:3, :3] @ [1.0, 0.0, 0.0], [0.0, 0.0, -2.0], atol=1e-12)

    def test_copy_independent(self):
        t = Transform()
        c = t.copy()
        c.scale[0] = 5.0
        assert t.scale[0] == 1.0
