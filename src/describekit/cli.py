from typing import Optional
import typer
from .config import load_config, RunConfig
from .runners.runner import SuiteLoadError, TestRunner
from .reporters.console import ConsoleReporter

app = typer.Typer(add_completion=False, help="describekit - run nested describe/when/it suites")

@app.callback()
def main() -> None:
    pass

@app.command()
def run(
    suite: str = typer.Argument(..., help="Suite module, e.g. sample or mypkg.specs.login"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    list_tests: bool = typer.Option(False, "--list", help="List tests without running"),
):
    cfg: RunConfig = load_config(config)
    runner = TestRunner(cfg)
    try:
        root = runner.discover(suite)
    except SuiteLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if list_tests:
        for path, case in root.iter_cases():
            typer.echo(" ".join(path + (case.name,)))
        raise typer.Exit(code=0)

    summary = runner.run(root, ConsoleReporter(show_traceback=cfg.show_traceback))
    raise typer.Exit(code=0 if summary.ok else 1)
