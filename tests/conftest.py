"""Shared fixtures for simple_worktree tests."""

import errno
import os
import shutil
import subprocess

import pytest
from click.testing import CliRunner


requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available",
)


def git(*args, cwd):
    """Run git in *cwd*, failing the test on error."""
    proc = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True,
    )
    assert proc.returncode == 0, proc.stderr
    return proc.stdout.strip()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_tree(tmp_path):
    """A main worktree with a mix of local files.

    Tree:
        .env, secrets.env, README.md,
        .idea/workspace.xml, .idea/modules.xml,
        a/b/secrets.env, a/notes.txt,
        .git/config
    """
    root = tmp_path / "source"
    root.mkdir()
    (root / ".env").write_text("TOKEN=abc\n")
    (root / "secrets.env").write_text("root secret\n")
    (root / "README.md").write_text("readme\n")

    idea = root / ".idea"
    idea.mkdir()
    (idea / "workspace.xml").write_text("<workspace/>")
    (idea / "modules.xml").write_text("<modules/>")

    nested = root / "a" / "b"
    nested.mkdir(parents=True)
    (nested / "secrets.env").write_text("nested secret\n")
    (root / "a" / "notes.txt").write_text("notes\n")

    gitdir = root / ".git"
    gitdir.mkdir()
    (gitdir / "config").write_text("[core]\n")
    return root


@pytest.fixture
def deny_scandir(monkeypatch):
    """Make ``os.scandir`` raise PermissionError for directories by name.

    Add names to the returned set to deny them.
    """
    denied = set()
    real_scandir = os.scandir

    def scandir(path="."):
        if os.path.basename(os.fspath(path)) in denied:
            raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    return denied


@pytest.fixture
def target_tree(tmp_path):
    """An empty, freshly created worktree directory."""
    root = tmp_path / "target"
    root.mkdir()
    return root


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """A real repository with one commit on 'main'.

    HOME points at an empty directory so no user config leaks in.
    """
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")

    repo = tmp_path / "project"
    repo.mkdir()
    git("-c", "init.defaultBranch=main", "init", cwd=repo)
    git("config", "user.email", "test@example.com", cwd=repo)
    git("config", "user.name", "Test", cwd=repo)
    git("config", "commit.gpgsign", "false", cwd=repo)
    (repo / "README.md").write_text("project\n")
    (repo / ".gitignore").write_text("node_modules\n")
    git("add", "README.md", ".gitignore", cwd=repo)
    git("commit", "-m", "initial", cwd=repo)
    git("branch", "-M", "main", cwd=repo)
    return repo
