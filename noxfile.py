import nox  # type: ignore[import]


@nox.session(python=False)
def run(session):
    session.run("python", "main.py", *session.posargs)


@nox.session
def tests(session):
    session.install("-e", ".[test]")
    session.env.setdefault("QT_QPA_PLATFORM", "offscreen")
    session.run("pytest", *session.posargs)


@nox.session
def lint(session):
    session.install("ruff", "black")
    session.run("ruff", "check", ".")
    session.run("black", "--check", ".")


@nox.session
def format(session):
    session.install("black")
    session.run("black", ".")


@nox.session
def typecheck(session):
    session.install("mypy", "-e", ".")
    session.run("mypy", "stepview")
