from invoke import Context, task

TARGETS = "main.py config src tests"


@task
def sort_imports(c: Context) -> None:
    """Sort imports using isort."""
    print("🔹 Running isort...")
    c.run(f"isort {TARGETS}")


@task
def format_code(c: Context) -> None:
    """Format code using black."""
    print("🔹 Running black...")
    c.run(f"black {TARGETS}")


@task
def lint(c: Context) -> None:
    """Lint code using ruff."""
    print("🔹 Running ruff...")
    c.run(f"ruff check {TARGETS} --fix")


@task
def type_check(c: Context) -> None:
    """Check types using mypy."""
    print("🔹 Running mypy...")
    c.run("mypy main.py config src")


@task
def security_check(c: Context) -> None:
    """Check for security issues using bandit."""
    print("🔹 Running bandit...")
    c.run("bandit -r main.py config src")


@task
def test(c: Context) -> None:
    """Run the test suite with pytest."""
    print("🔹 Running pytest...")
    c.run("pytest -q")


@task(pre=[sort_imports, format_code, lint, type_check, security_check, test])
def all(c: Context) -> None:
    """Run all formatters, linters, checks and tests in order."""
    print("\n✅ All checks completed successfully!")
