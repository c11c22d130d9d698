import os
from pathlib import Path

import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = ["lint", "tests"]

PASSED_ENV_VARS = [
    "DATABASE_URL",
    "SECRET_KEY",
    "TIMEZONE",
    "LOG_LEVEL",
]


def _set_env(session):
    """Propagate selected variables and force the test environment."""
    session.env["PYTHONPATH"] = str(Path.cwd())
    session.env["ENVIRONMENT"] = "test"
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """isort, black, flake8 and mypy over the package and tests."""
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "volunteerhub/", "tests/", "scripts/")
    session.run("black", "volunteerhub/", "tests/", "scripts/")
    session.run("flake8", "volunteerhub/", "tests/", "scripts/")
    session.run("mypy", "volunteerhub/")


@nox.session(name="tests")
def tests(session):
    """
    Run the test suite with coverage.
    Usage:
      nox -s tests
      nox -s tests -- tests/unit/test_accounting.py -m unit
    """
    _set_env(session)
    session.install("-e", ".[test]")
    args = session.posargs or ["tests"]
    session.run(
        "pytest",
        *args,
        "-vv",
        "--tb=short",
        "--cov=volunteerhub",
        "--cov-report=term-missing",
        "--cov-report=xml",
        "--cov-fail-under=80",
    )
