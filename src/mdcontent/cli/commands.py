"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdcontent.config import Settings, load_config
from mdcontent.core.content import MarkdownContent
from mdcontent.core.models import ParsedDoc
from mdcontent.core.parse import build_frontmatter, parse_file
from mdcontent.core.search import CompareOptions
from mdcontent.core.sequence import RenderFormat


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _load(path: str, parser_config: str) -> ParsedDoc:
    """Parse a Markdown file with standard CLI error handling."""
    try:
        return parse_file(Path(path), parser_config)
    except OSError as e:
        _fail(f"Cannot read {path}", e)
    except ValueError as e:
        _fail(f"Cannot parse {path}", e)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to render")],
    fmt: Annotated[RenderFormat, typer.Option("--format", "-f", help="Output format")] = RenderFormat.plain_text,
    children: Annotated[bool, typer.Option("--children", help="Render only the contents of container blocks")] = False,
    frontmatter: Annotated[bool, typer.Option("--frontmatter", help="Keep the YAML frontmatter (markdown format only)")] = False,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Render a Markdown file as Markdown, plain text, or HTML."""
    if frontmatter and fmt != RenderFormat.markdown:
        _fail("--frontmatter requires --format markdown")
    settings = _settings(overrides={"parser_config": parser})
    parsed = _load(path, settings.parser_config)
    content = MarkdownContent.from_parsed(parsed)
    if children:
        content = content.child_content
        if content is None:
            _fail(f"No container blocks found in {path}")
    output = content.render(fmt)
    if frontmatter and parsed.frontmatter:
        output = f"{build_frontmatter(parsed.frontmatter)}\n{output}"
    typer.echo(output)


def search_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to search")],
    query: Annotated[str, typer.Argument(help="Text to look for")],
    case_sensitive: Annotated[Optional[bool], typer.Option("--case-sensitive/--ignore-case", help="Match letter case exactly")] = None,
    locale: Annotated[Optional[str], typer.Option("--locale", help="Locale for case folding, e.g. tr_TR")] = None,
    context: Annotated[Optional[int], typer.Option("--context", help="Characters of context around each match")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print results as JSON")] = False,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Find every occurrence of QUERY in the plain text of a Markdown file."""
    settings = _settings(overrides={
        "parser_config": parser, "case_sensitive": case_sensitive,
        "locale": locale, "snippet_context_length": context,
    })
    content = MarkdownContent.from_parsed(_load(path, settings.parser_config))
    options = CompareOptions.NONE if settings.case_sensitive else CompareOptions.CASE_INSENSITIVE
    results = content.search(query, options, settings.locale, settings.snippet_context_length)

    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2, ensure_ascii=False))
        return
    if not results:
        typer.echo("No matches.")
        return
    for r in results:
        lower, upper = r.match_range
        typer.echo(f"  block {r.block_index} [{lower}:{upper}] {r.snippet}")
    typer.echo(f"Found {len(results)} match(es).")
