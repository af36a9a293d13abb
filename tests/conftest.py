"""Shared pytest fixtures for BucketFS tests."""
import logging
import os
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from bucketfs.diagnostics import RecordingSink
from bucketfs.filesystem import BucketFS
from bucketfs.infrastructure.logger import Logger, LogLevel


class DryRunError(Exception):
    """Error injected into hybrid filesystems under test."""


@pytest.fixture
def injected() -> DryRunError:
    """The error a hybrid filesystem wraps into its failures."""
    return DryRunError("dry run")


@pytest.fixture
def recorder() -> RecordingSink:
    """Diagnostic sink keeping every event."""
    return RecordingSink()


@pytest.fixture
def quiet_logger() -> Logger:
    """Debug-level logger that writes nowhere."""
    return Logger(name="bucketfs.test", level=LogLevel.DEBUG, handlers=[logging.NullHandler()])


@pytest.fixture
def silent_fs(recorder: RecordingSink, quiet_logger: Logger) -> BucketFS:
    """Silent-mode filesystem."""
    return BucketFS.create(sink=recorder, logger=quiet_logger)


@pytest.fixture
def hybrid_fs(injected: DryRunError, recorder: RecordingSink, quiet_logger: Logger) -> BucketFS:
    """Hybrid-mode filesystem with a small declared tree.

    /home                      (dir)
    /home/Documents            (dir)
    /home/Documents/cv.doc     (file)
    /home/notes.txt            (file)
    """
    return (
        BucketFS.create_with_error(injected, sink=recorder, logger=quiet_logger)
        .with_fake_directories(["/home", "/home/Documents"])
        .with_fake_files(["/home/Documents/cv.doc", "/home/notes.txt"])
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every BUCKETFS_* variable from the environment."""
    for key in list(os.environ):
        if key.startswith("BUCKETFS_"):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample hybrid BucketFS configuration."""
    return {
        "bucketfs": {
            "version": "1.0",
            "mode": "hybrid",
            "error": "read-only dry run",
            "node_level": "functional",
            "fake_directories": ["/srv", "/srv/app"],
            "fake_files": ["/srv/app/app.conf"],
            "file_perm": 0o640,
            "dir_perm": 0o750,
            "max_symlink_depth": 8,
            "diagnostics": {"sink": "none", "verbose": False},
            "logging": {"level": "DEBUG", "file": None},
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Write the sample configuration to a YAML file."""
    path = tmp_path / "bucketfs.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(sample_config, f)
    return path
