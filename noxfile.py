"""Test sessions for CafeHub.

The default domain configuration is memory-only, so no session needs
PostgreSQL or Redis running.
"""

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with its test group and extras into the nox virtualenv."""
    session.run("poetry", "install", "--with", "test", "--all-extras", external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the full suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Aggregate and value object tests only."""
    _install(session)
    session.run("pytest", "tests/cafehub/domain/", "tests/cafehub/utils/")


@nox.session(python=PYTHON_VERSIONS[-1])
def api(session: nox.Session) -> None:
    """HTTP API tests through the FastAPI TestClient."""
    _install(session)
    session.run("pytest", "-m", "integration")


@nox.session(python=PYTHON_VERSIONS[-1])
def bdd(session: nox.Session) -> None:
    """Behaviour scenarios only."""
    _install(session)
    session.run("pytest", "tests/cafehub/bdd/")
