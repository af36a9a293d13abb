"""Tests for configuration validators."""
import pytest

from bucketfs.core.constants import DEFAULT_CONFIG, ErrorCode, Limits
from bucketfs.core.validators import (
    ValidationError,
    parse_permissions,
    validate_config,
    validate_path,
    validate_path_list,
    validate_permissions,
    validate_symlink_depth,
    validate_version,
)


class TestValidateConfig:
    """Tests for validate_config."""

    def test_defaults_are_valid(self):
        assert validate_config(DEFAULT_CONFIG)

    def test_sample_is_valid(self, sample_config):
        assert validate_config(sample_config["bucketfs"])

    def test_empty_is_valid(self):
        assert validate_config({})

    def test_not_a_dict(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_config(["mode"])
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    @pytest.mark.parametrize(
        "config",
        [
            {"mode": "loud"},
            {"node_level": "maximal"},
            {"error": ""},
            {"error": 42},
            {"fake_files": "/a"},
            {"fake_directories": ["/ok", "bad\0path"]},
            {"file_perm": "999"},
            {"dir_perm": 0o1777},
            {"max_symlink_depth": 0},
            {"diagnostics": {"sink": "printer"}},
            {"diagnostics": {"verbose": "yes"}},
            {"diagnostics": "console"},
            {"logging": {"level": "LOUD"}},
            {"logging": {"file": 3}},
            {"logging": []},
            {"version": "2.0"},
        ],
    )
    def test_invalid(self, config):
        with pytest.raises(ValidationError):
            validate_config(config)

    def test_fake_list_error_names_key(self):
        with pytest.raises(ValidationError, match="fake_files"):
            validate_config({"fake_files": [""]})

    def test_log_level_case_insensitive(self):
        assert validate_config({"logging": {"level": "debug"}})


class TestValidatePath:
    """Tests for path validation."""

    def test_valid(self):
        assert validate_path("/home/user/file.txt")
        assert validate_path("relative/path")
        assert validate_path("~/notes")

    @pytest.mark.parametrize("path", ["", "  ", "\t", "a\0b", "a\nb", "\x01"])
    def test_invalid(self, path):
        with pytest.raises(ValidationError):
            validate_path(path)

    def test_not_string(self):
        with pytest.raises(ValidationError):
            validate_path(None)

    def test_too_long(self):
        with pytest.raises(ValidationError):
            validate_path("/" + "a" * Limits.MAX_PATH_LENGTH)

    def test_list(self):
        assert validate_path_list(["/a", "/b"])
        assert validate_path_list([])
        with pytest.raises(ValidationError):
            validate_path_list(("/a",))


class TestValidatePermissions:
    """Tests for permission validation."""

    @pytest.mark.parametrize("mode", [0, 0o644, 0o777, "0644", "755", "0o600"])
    def test_valid(self, mode):
        assert validate_permissions(mode)

    @pytest.mark.parametrize("mode", [-1, 0o1000, "888", "rwx", True, None])
    def test_invalid(self, mode):
        with pytest.raises(ValidationError):
            validate_permissions(mode)

    def test_parse(self):
        assert parse_permissions("0644") == 0o644
        assert parse_permissions("0o750") == 0o750
        assert parse_permissions(0o600) == 0o600


class TestValidateSymlinkDepth:
    """Tests for symlink depth validation."""

    def test_bounds(self):
        assert validate_symlink_depth(1)
        assert validate_symlink_depth(Limits.MAX_SYMLINK_DEPTH_LIMIT)

    @pytest.mark.parametrize("depth", [0, -3, Limits.MAX_SYMLINK_DEPTH_LIMIT + 1, "40", 2.5, True])
    def test_invalid(self, depth):
        with pytest.raises(ValidationError):
            validate_symlink_depth(depth)


class TestValidateVersion:
    """Tests for version validation."""

    def test_valid(self):
        assert validate_version("1.0")
        assert validate_version("1.12")

    @pytest.mark.parametrize("version", ["1", "1.0.0", "a.b", "2.0"])
    def test_invalid(self, version):
        with pytest.raises(ValidationError):
            validate_version(version)
