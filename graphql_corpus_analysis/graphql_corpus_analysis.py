import sys
from pathlib import Path

import click

from .config import DEPTH_RULE, UNUSED_FIELDS_RULE, AnalysisConfig, RuleConfig, load_config
from .documents import load_documents, load_schema
from .errors import AnalysisError, ConfigurationError
from .logging import configure_logging
from .reporting import render_json, render_text
from .session import AnalysisSession


@click.command()
@click.option("--schema", "-s", default=None, type=click.Path(exists=True, resolve_path=True), help="SDL file, directory, or introspection JSON")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--max-depth", default=None, type=int, help="Maximum selection depth (selection-set-depth rule)")
@click.option("--ignore", multiple=True, help="Field name that does not count towards depth (repeatable)")
@click.option("--unused-fields/--no-unused-fields", default=None, help="Enable the no-unused-fields rule")
@click.option("--format", "output_format", default="text", type=click.Choice(["text", "json"]))
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.argument("documents", nargs=-1)
def graphql_corpus_analysis(schema, config, max_depth, ignore, unused_fields, output_format, log_level, documents):
    try:
        if config is not None:
            config = load_config(config)
        else:
            config = AnalysisConfig()

        # Command line options override the config file
        if schema is not None:
            config.schema = schema
        if documents:
            # Patterns given here are relative to cwd, not to the config file
            config.documents = [str(Path.cwd() / pattern) for pattern in documents]
        if max_depth is not None or ignore:
            options = dict(config.rules.get(DEPTH_RULE, RuleConfig()).options)
            if max_depth is not None:
                options["maxDepth"] = max_depth
            if ignore:
                options["ignore"] = list(ignore)
            config.rules[DEPTH_RULE] = RuleConfig(enabled=True, options=options)
        if unused_fields is not None:
            config.rules[UNUSED_FIELDS_RULE] = RuleConfig(enabled=unused_fields)
        if log_level is not None:
            config.log_level = log_level
        config.validate()
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    if not config.schema:
        raise click.UsageError("A schema is required (--schema or \"schema\" in the config file)")

    configure_logging(level=config.log_level, json_format=config.log_format == "json")

    try:
        schema_path = Path(config.schema)
        if not schema_path.is_absolute():
            schema_path = Path(config.base_dir) / schema_path
        graphql_schema = load_schema(schema_path)
        source_documents, load_errors = load_documents(config.documents, config.base_dir)
        session = AnalysisSession(graphql_schema, source_documents, config)
        report = session.run()
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e
    except AnalysisError as e:
        raise click.ClickException(str(e)) from e

    for error in load_errors:
        click.echo(f"{error.source_path}: {error}", err=True)

    out = render_json(report) if output_format == "json" else render_text(report)
    click.echo(out, nl=False)

    if report.has_errors or load_errors:
        sys.exit(1)
