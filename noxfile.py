# /// script
# dependencies = ["nox>=2025.02.09"]
# ///

from __future__ import annotations

import datetime
import glob
import re
import shutil
import subprocess
import sys
from pathlib import Path

import nox

nox.needs_version = ">=2025.02.09"
nox.options.reuse_existing_virtualenvs = True
nox.options.default_venv_backend = "uv|virtualenv"

PYPROJECT = nox.project.load_toml("pyproject.toml")
PYTHON_VERSIONS = nox.project.python_versions(PYPROJECT)

PACKAGE_NAME = "univers"
VERSION_FILE = Path(f"src/{PACKAGE_NAME}/__init__.py")
CHANGELOG_FILE = Path("CHANGELOG.rst")


@nox.session(python=[*PYTHON_VERSIONS, "pypy3.10", "pypy3.11"], default=False)
def tests(session: nox.Session) -> None:
    coverage = ["python", "-m", "coverage"]

    session.install(*nox.project.dependency_groups(PYPROJECT, "test"))
    session.install("-e.")
    env = {} if session.python != "3.14" else {"COVERAGE_CORE": "sysmon"}

    assert session.python is not None
    assert not isinstance(session.python, bool)
    if "pypy" not in session.python:
        session.run(*coverage, "run", "-m", "pytest", *session.posargs, env=env)
        session.run(*coverage, "report")
    else:
        # Coverage under PyPy is too slow to be worth it.
        session.run("python", "-m", "pytest", "--capture=no", *session.posargs)

    # The console script has to work from an installed tree, not just the tests.
    session.run("univers", "compare", "maven", "1.0", "1.0.0-ga")
    session.run("univers", "contains", "vers:pypi/>=1.0|<2", "1.5")


@nox.session(python="3.9")
def lint(session: nox.Session) -> None:
    session.install("ruff", "mypy", *nox.project.dependency_groups(PYPROJECT, "test"))
    session.run("ruff", "check", ".", *session.posargs)
    session.run("ruff", "format", "--check", ".")
    session.run("mypy")

    # Check the distribution
    session.install("build", "twine")
    session.run("pyproject-build")
    session.run("twine", "check", *glob.glob("dist/*"))


@nox.session(python="3.9", default=False)
def docs(session: nox.Session) -> None:
    shutil.rmtree("docs/_build", ignore_errors=True)
    session.install("-r", "docs/requirements.txt")
    session.install("-e", ".")

    for builder in ("html", "doctest"):
        session.run(
            "sphinx-build",
            "-W",
            "-b",
            builder,
            "-d",
            "docs/_build/doctrees/" + builder,
            "docs",  # source directory
            "docs/_build/" + builder,  # output directory
        )


@nox.session(default=False)
def benchmarks(session: nox.Session) -> None:
    # Compare the working tree against the last commit on main
    session.install("asv", "virtualenv")
    session.run("asv", "machine", "--yes")
    session.run("asv", "continuous", "--factor", "1.1", "main", "HEAD", *session.posargs)


@nox.session(default=False)
def release(session: nox.Session) -> None:
    try:
        release_version = _get_version_from_arguments(session.posargs)
    except ValueError as e:
        session.error(f"Invalid arguments: {e}")
        return

    _check_git_state(session, release_version)

    _changelog_update_unreleased_title(release_version, file=CHANGELOG_FILE)
    session.run("git", "add", str(CHANGELOG_FILE), external=True)
    _bump(session, version=release_version, kind="release")

    shutil.rmtree("dist", ignore_errors=True)
    session.install("build", "twine")
    session.run("python", "-m", "build")
    session.run("twine", "check", "--strict", *sorted(glob.glob("dist/*")))
    shutil.rmtree("dist", ignore_errors=True)

    # fmt: off
    session.run(
        "git", "tag",
        "-s", release_version,
        "-m", f"Release {release_version}",
        external=True,
    )
    # fmt: on

    major, minor = map(int, release_version.split("."))
    _bump(session, version=f"{major}.{minor + 1}.dev0", kind="development")

    session.run("git", "push", "upstream", "main", release_version, external=True)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _get_version_from_arguments(arguments: list[str]) -> str:
    """Checks the arguments passed to `nox -s release`.

    Only 1 argument that looks like a version? Return the argument.
    Otherwise, raise a ValueError describing what's wrong.
    """
    if len(arguments) != 1:
        raise ValueError("Expected exactly 1 argument")

    version = arguments[0]
    parts = version.split(".")

    if len(parts) != 2:
        raise ValueError("not of the form: YY.N")

    if not all(part.isdigit() for part in parts):
        raise ValueError("non-integer segments")

    return version


def _git(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args], check=False, capture_output=True, encoding="utf-8"
    )


def _check_git_state(session: nox.Session, version_tag: str) -> None:
    """Check state of the git repository, prior to making the release."""
    if _git("rev-parse", "--abbrev-ref", "HEAD").stdout != "main\n":
        session.error("Not on main branch")

    status = _git("status", "--porcelain").stdout
    if status:
        print(status, end="", file=sys.stderr)
        session.error("The working tree has uncommitted changes")

    if not _git("rev-parse", version_tag).returncode:
        session.error(f"Tag already exists! {version_tag}")


def _bump(session: nox.Session, *, version: str, kind: str) -> None:
    session.log(f"Bump version to {version!r}")
    contents = VERSION_FILE.read_text()
    VERSION_FILE.write_text(
        re.sub('__version__ = "(.+)"', f'__version__ = "{version}"', contents)
    )

    session.log("git commit")
    _git("add", str(VERSION_FILE))
    _git("commit", "-m", f"Bump for {kind}")


def _changelog_update_unreleased_title(version: str, *, file: Path) -> None:
    """Update an "*unreleased*" heading to "{version} - {date}" """
    yyyy_mm_dd = datetime.datetime.now(tz=datetime.timezone.utc).strftime("%Y-%m-%d")
    title = f"{version} - {yyyy_mm_dd}"

    lines = file.read_text().splitlines(keepends=True)
    index = lines.index("*unreleased*\n")
    lines[index : index + 2] = [f"{title}\n", len(title) * "~" + "\n"]
    file.write_text("".join(lines))


if __name__ == "__main__":
    nox.main()
