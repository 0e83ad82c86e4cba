from __future__ import annotations

from pathlib import Path

import pytest

GO_SOURCE = """\
// Copyright 2020 Paul Greenberg (greenpau@outlook.com)

package main

import (
	"fmt"
	"github.com/greenpau/versioned"
)

var (
	app        *versioned.PackageManager
	appVersion string
	gitBranch  string
	gitCommit  string
)

func init() {
	app = versioned.NewPackageManager("myapp")
	app.Description = "My app"
	app.SetVersion(appVersion, "1.0.1")
	app.SetGitBranch(gitBranch, "main")
	app.SetGitCommit(gitCommit, "v1.0.0-1-gabcdef0")
	app.SetBuildUser(buildUser, "")
}

func main() {
	app.SetVersion(appVersion, "9.9.9")
	fmt.Println(app.Banner())
}
"""


@pytest.fixture
def go_file(tmp_path: Path) -> Path:
    path = tmp_path / "main.go"
    path.write_text(GO_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
