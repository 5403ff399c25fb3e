"""
SystemConfig 단위 테스트
"""

import pytest

from lumina_ar.config.system_config import (
    SystemConfig,
    NoiseConfig,
    GestureConfig,
    SmoothingConfig,
    CameraConfig,
    load_config,
    create_default_config
)


class TestDefaults:
    """기본값 테스트"""

    def test_system_defaults(self):
        config = SystemConfig()

        assert config.gesture.enabled
        assert config.gesture.min_scale == 0.1
        assert config.gesture.max_scale == 10.0
        assert config.smoothing.translation_noise == NoiseConfig(q=0.005, r=0.05)
        assert config.smoothing.rotation_noise == NoiseConfig(q=0.01, r=0.1)
        assert not config.smoothing.reset_on_reacquire
        assert config.camera.fov == 75.0
        assert config.camera.position == (0.0, 0.0, 5.0)
        assert not config.scene.ghost_mode

    def test_camera_aspect(self):
        assert CameraConfig(width=1280, height=720).aspect == pytest.approx(16 / 9)
        assert CameraConfig(width=100, height=0).aspect == 1.0


class TestValidation:
    """유효성 검사 테스트"""

    @pytest.mark.parametrize("q, r", [(0.0, 0.1), (0.01, -0.1)])
    def test_noise_rejected(self, q, r):
        with pytest.raises(ValueError):
            NoiseConfig(q=q, r=r)

    def test_scale_range_rejected(self):
        with pytest.raises(ValueError):
            GestureConfig(min_scale=2.0, max_scale=1.0)
        with pytest.raises(ValueError):
            GestureConfig(min_scale=-1.0)

    def test_invalid_noise_in_dict_rejected(self):
        with pytest.raises(ValueError):
            SmoothingConfig.from_dict({'translation_noise': {'q': -1.0, 'r': 0.1}})


class TestPersistence:
    """YAML 저장 / 로드 테스트"""

    def test_round_trip(self, tmp_path):
        config = SystemConfig()
        config.gesture.max_scale = 4.0
        config.smoothing.unwrap_rotation = True
        config.camera.position = (1.0, 2.0, 3.0)
        config.scene.ghost_mode = True

        path = tmp_path / "config.yaml"
        config.save(str(path))
        loaded = load_config(str(path))

        assert loaded == config
        assert isinstance(loaded.smoothing.translation_noise, NoiseConfig)

    def test_partial_file(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("gesture:\n  max_scale: 3.0\n")

        config = load_config(str(path))
        assert config.gesture.max_scale == 3.0
        assert config.camera.width == 1280

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == SystemConfig()

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "missing.yaml")) == SystemConfig()

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "default.yaml"
        config = create_default_config(str(path))

        assert path.exists()
        assert load_config(str(path)) == config
