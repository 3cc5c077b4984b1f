"""CLI entry point for running decision task steps outside a workflow engine."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from clients.decision_service import DecisionServiceClient
from config.settings import get_settings
from decision_engine.activity import DecisionTaskActivity
from decision_engine.adapters import (
    ExpressionError,
    InMemoryConfigurationSource,
    InMemoryOverrideStore,
    RecordedEvaluationService,
    StaticDeploymentResolver,
    StepDefinition,
    VariableLookupEvaluator,
)
from decision_engine.binder import ResultBinder
from decision_engine.errors import DecisionTaskError
from models.schemas import AuditResult, EngineOptions, ExecutionContext


console = Console()


class StepFile(BaseModel):
    """A decision task step plus the execution it runs for."""

    step: StepDefinition = Field(description="Step and its configured fields")
    context: ExecutionContext = Field(description="Execution to run the step for")
    deployments: dict[str, str] = Field(
        default_factory=dict, description="Process definition id to deployment id"
    )
    overrides: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Dynamic override documents per process definition"
    )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=False)],
    )


def _load_json(path: Path) -> Any:
    with open(path) as f:
        return json.load(f)


def _print_variables(variables: dict[str, Any], names: list[str], title: str) -> None:
    table = Table(show_header=True, header_style="bold", title=title)
    table.add_column("Variable", style="cyan")
    table.add_column("Value")
    table.add_column("Bound", justify="center")

    for name, value in variables.items():
        bound = "[green]✓[/green]" if name in names else ""
        table.add_row(escape(name), escape(json.dumps(value, default=str)), bound)

    console.print(table)


@click.group()
@click.version_option(version="1.0.0")
def cli() -> None:
    """Decision task runner - dispatch DMN steps and bind their results."""
    _configure_logging(get_settings().log_level)


@cli.command()
@click.argument("step_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--audit-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Replay a stored audit result instead of calling the decision service",
)
@click.option("--variables", "extra_variables", help="JSON object merged into the execution variables")
def run(step_file: Path, audit_file: Path | None, extra_variables: str | None) -> None:
    """Run a decision task step described by STEP_FILE."""
    settings = get_settings()
    definition = StepFile.model_validate(_load_json(step_file))
    context = definition.context
    if extra_variables:
        context.variables.update(json.loads(extra_variables))

    console.print(Panel(f"[bold]Step:[/bold] {definition.step.step_id}", title="Decision Task"))

    if audit_file is not None:
        service: Any = RecordedEvaluationService(AuditResult.model_validate(_load_json(audit_file)))
    else:
        service = DecisionServiceClient(settings=settings)

    activity = DecisionTaskActivity(
        source=InMemoryConfigurationSource([definition.step]),
        evaluator=VariableLookupEvaluator(),
        deployment_resolver=StaticDeploymentResolver(definition.deployments),
        evaluation_service=service,
        override_store=InMemoryOverrideStore(definition.overrides),
    )

    try:
        outcome = activity.execute(context, EngineOptions.from_settings(settings))
    except (DecisionTaskError, ExpressionError) as e:
        console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        sys.exit(1)
    finally:
        if isinstance(service, DecisionServiceClient):
            service.close()

    console.print(f"[dim]Decision key: {outcome.decision_key} ({outcome.reference_kind.label})[/dim]")
    console.print(f"[dim]Rule hits: {outcome.rule_hits}[/dim]")
    _print_variables(context.variables, outcome.bound_variables, "Execution Variables")


@cli.command()
@click.argument("audit_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--key", "decision_key", required=True, help="Decision or decision service key")
@click.option(
    "--arrays/--no-arrays",
    default=None,
    help="Force arrays for multi-hit results (defaults to the configured setting)",
)
def bind(audit_file: Path, decision_key: str, arrays: bool | None) -> None:
    """Preview the variables a stored audit result would bind."""
    settings = get_settings()
    audit = AuditResult.model_validate(_load_json(audit_file))

    if audit.failed:
        console.print(f"[red]Audit result is marked failed: {escape(audit.exception_message or '')}[/red]")
        sys.exit(1)

    use_arrays = settings.always_use_arrays_for_multi_hit if arrays is None else arrays
    variables = ResultBinder().plan(audit, decision_key, audit.multiple_results and use_arrays)

    if not variables:
        console.print("[yellow]No variables would be bound.[/yellow]")
        return

    _print_variables(variables, list(variables), f"Bindings for {decision_key}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
