# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest


@pytest.fixture
def job_files(tmp_path):
    """
    Create a job definition, binary, package and an empty cluster configuration directory.
    """
    definition = tmp_path / "wordcount.yaml"
    definition.write_text(
        """
id: wordcount-7f3a
name: wordcount
config:
  topology.stmgrs: 2
components:
  - name: sentences
    kind: spout
    parallelism: 2
  - name: counter
    kind: bolt
    parallelism: 4
    inputs: [sentences]
"""
    )

    binary = tmp_path / "wordcount.jar"
    binary.write_bytes(b"binary")

    package = tmp_path / "wordcount.tar.gz"
    package.write_bytes(b"package")

    install_dir = tmp_path / "install"
    install_dir.mkdir()

    config_path = tmp_path / "conf" / "local"
    config_path.mkdir(parents=True)

    return {
        "definition": definition,
        "binary": binary,
        "package": package,
        "install_dir": install_dir,
        "config_path": config_path,
        "state_root": tmp_path / "state",
        "upload_dir": tmp_path / "uploads",
    }
