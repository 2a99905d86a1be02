"""protoredact CLI application with Typer."""

import logging
from pathlib import Path
from typing import Annotated

import click
import typer

from protoredact import __version__
from protoredact.app import GenerationFailed, GenerationReport
from protoredact.bootstrap import bootstrap_application
from protoredact.config import get_settings, set_settings
from protoredact.errors import Diagnostic, RedactionError
from protoredact.rules.defaults import default_for, go_type_name, suggested_rule_spelling
from protoredact.schema.models import ALL_KINDS, ALL_LABELS

app = typer.Typer(
    name="protoredact",
    help="Resolve (redact.*) protobuf annotations into validated redaction plans",
    add_completion=True,
    no_args_is_help=True,
)
rules_app = typer.Typer(help="Rule spellings and default redaction literals")
app.add_typer(rules_app, name="rules")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"protoredact version {__version__}")
        raise typer.Exit()


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _echo_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        color = typer.colors.RED if diagnostic.severity == "error" else typer.colors.YELLOW
        typer.secho(f"{diagnostic.severity}: {diagnostic.message}", fg=color, err=True)


def _plan_or_exit(paths: list[Path]) -> GenerationReport:
    container = bootstrap_application()
    try:
        return container.generate_service.plan(paths)
    except (FileNotFoundError, ValueError, RedactionError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log skipped files, services, methods and messages"),
    ] = False,
    fail_fast: Annotated[
        bool,
        typer.Option("--fail-fast", help="Stop at the first resolution error"),
    ] = False,
) -> None:
    """protoredact - redaction planning for protobuf code generation."""
    # Update settings with CLI flags
    settings = get_settings()
    if debug:
        settings.debug = True
    if fail_fast:
        settings.fail_fast = True
    set_settings(settings)
    _configure_logging(settings.debug)


@app.command("resolve")
def resolve_command(
    schemas: Annotated[
        list[Path],
        typer.Argument(help="Schema description files (YAML or JSON)"),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output the resolved decisions as JSON"),
    ] = False,
) -> None:
    """Resolve annotations and report decisions without writing anything."""
    report = _plan_or_exit(schemas)

    if json_output:
        from protoredact.utils.cli_output import json_response

        typer.echo(json_response("redaction_plan", 1, **report.to_dict()))
        if report.has_errors():
            raise typer.Exit(code=1)
        return

    for result in report.files:
        if result.failed:
            typer.echo(f"{result.path}: failed")
            continue
        if result.data is None:
            typer.echo(f"{result.path}: skipped")
            continue
        data = result.data
        methods = sum(len(service.methods) for service in data.services)
        redacted = sum(
            1 for message in data.messages for field in message.fields if field.redact
        )
        typer.echo(
            f"{result.path}: package {data.package}, {len(data.services)} service(s), "
            f"{methods} method(s), {len(data.messages)} message(s), "
            f"{redacted} redacted field(s)"
        )

    _echo_diagnostics(report.warnings)
    if report.has_errors():
        _echo_diagnostics(report.errors)
        typer.secho(f"\n{len(report.errors)} error(s) recorded", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("\nAll annotations resolved", fg=typer.colors.GREEN)


@app.command("generate")
def generate_command(
    schemas: Annotated[
        list[Path],
        typer.Argument(help="Schema description files (YAML or JSON)"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory for decision files"),
    ] = None,
) -> None:
    """Resolve annotations and render one decision file per schema."""
    container = bootstrap_application()

    try:
        report = container.generate_service.generate(schemas, output)
    except GenerationFailed as exc:
        _echo_diagnostics(exc.report.errors)
        typer.secho(f"\n{exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except (FileNotFoundError, ValueError, RedactionError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    _echo_diagnostics(report.warnings)
    for path in report.outputs:
        typer.echo(f"Wrote {path}")
    typer.secho(f"\nGenerated {len(report.outputs)} decision file(s)", fg=typer.colors.GREEN)


@rules_app.command("suggest")
def rules_suggest(
    kind: Annotated[
        str,
        typer.Option(
            "--kind",
            help="Protobuf field kind, e.g. int32",
            click_type=click.Choice(ALL_KINDS),
        ),
    ],
    label: Annotated[
        str,
        typer.Option("--label", help="Field label", click_type=click.Choice(ALL_LABELS)),
    ] = "singular",
) -> None:
    """Print the annotation spelling that fits a field."""
    typer.echo(suggested_rule_spelling(kind, label))


@rules_app.command("defaults")
def rules_defaults(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List the default redaction literal for every protobuf kind."""
    rows = [
        {
            "kind": kind,
            "go_type": go_type_name(kind),
            "default": default_for(kind, False),
            "collection_default": default_for(kind, True),
            "rule": suggested_rule_spelling(kind, "singular"),
        }
        for kind in ALL_KINDS
    ]

    if json_output:
        from protoredact.utils.cli_output import json_response

        typer.echo(json_response("redaction_defaults", 1, defaults=rows))
        return

    for row in rows:
        typer.echo(f"{row['kind']:<10} {row['default']:<12} {row['rule']}")


if __name__ == "__main__":
    app()
