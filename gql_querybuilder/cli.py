"""Command-line interface for gql-querybuilder."""

import json
import logging
from pathlib import Path

import click
from graphql import GraphQLSyntaxError, parse
from pydantic import ValidationError

from .core.document import Document
from .core.errors import QueryBuilderError
from .loader import load_document


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(input_path: str) -> Document:
    try:
        return load_document(input_path)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{input_path} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise click.ClickException(f"Invalid document description:\n{e}") from e
    except QueryBuilderError as e:
        raise click.ClickException(e.message) from e


def _render(document: Document) -> str:
    try:
        return document.render()
    except QueryBuilderError as e:
        raise click.ClickException(e.message) from e


@click.group()
@click.version_option(package_name="gql-querybuilder")
def main():
    """Render GraphQL documents from JSON descriptions.

    The descriptions list operations, fields, fragments, variables and
    directives; see gql_querybuilder.loader for the format.
    """
    pass


@main.command()
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the JSON document description.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the rendered document to this file instead of stdout.",
)
@click.option(
    "--check",
    is_flag=True,
    help="Parse the rendered text with graphql-core to confirm it is valid GraphQL.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def render(input_path: str, output: str | None, check: bool, verbose: bool):
    """Render a document description as GraphQL text.

    Examples:

        gql-querybuilder render --input ./hero.json

        gql-querybuilder render -i ./hero.json -o ./hero.graphql --check
    """
    _setup_logging(verbose)
    if verbose:
        click.echo(f"Input: {Path(input_path).resolve()}", err=True)

    document = _load(input_path)
    text = _render(document)

    if check:
        try:
            parse(text)
        except GraphQLSyntaxError as e:
            raise click.ClickException(f"Rendered document is not valid GraphQL: {e.message}") from e
        if verbose:
            click.echo("Syntax check passed.", err=True)

    if output:
        output_path = Path(output).resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n")
        click.echo(f"Done! Wrote {len(document.operations)} operation(s) to {output_path}")
    else:
        click.echo(text)


@main.command()
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the JSON document description.",
)
@click.option(
    "--variables",
    "variables_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with the variables to send.",
)
@click.option(
    "--operation-name",
    "-n",
    default=None,
    help="Operation to execute when the document has several.",
)
def payload(input_path: str, variables_path: str | None, operation_name: str | None):
    """Print the JSON request body for a document description.

    Examples:

        gql-querybuilder payload -i ./hero.json --variables ./vars.json
    """
    _setup_logging(False)
    document = _load(input_path)
    variables = None
    if variables_path:
        try:
            variables = json.loads(Path(variables_path).read_text())
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{variables_path} is not valid JSON: {e}") from e
    try:
        body = document.to_payload(variables, operation_name)
    except QueryBuilderError as e:
        raise click.ClickException(e.message) from e
    click.echo(json.dumps(body, indent=2))


if __name__ == "__main__":
    main()
