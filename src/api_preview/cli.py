"""CLI entry point for api-preview."""

import logging
from fnmatch import fnmatch
from pathlib import Path

import click

from api_preview.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_BANNER_TITLE,
    DEFAULT_DOCS_URL,
    PreviewConfig,
)
from api_preview.errors import PreviewError
from api_preview.parser.models import ApiDocument, EndpointDescriptor
from api_preview.render.page import build_document, render_page


def _load(doc_path: Path) -> ApiDocument:
    """Parse and normalize an API document, reporting failures as CLI errors."""
    try:
        return build_document(doc_path.read_text(encoding="utf-8"), base_path=doc_path)
    except PreviewError as e:
        raise click.ClickException(str(e)) from e


def _filter_endpoints(endpoints: list[EndpointDescriptor], patterns: tuple[str, ...]) -> list[EndpointDescriptor]:
    """Keep endpoints matching any 'METHOD /path' or '/path' glob pattern."""
    result = []
    for ep in endpoints:
        for pattern in patterns:
            method, _, path = pattern.strip().rpartition(" ")
            if method and method.upper() != ep.method.upper():
                continue
            if fnmatch(ep.path, path):
                result.append(ep)
                break
    return result


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Preview — render OpenAPI/Swagger documents as static HTML."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path for the HTML preview.")
@click.option("--title", "banner_title", default=DEFAULT_BANNER_TITLE, show_default=True, help="Preview banner heading.")
@click.option("--base-url", default=DEFAULT_API_BASE_URL, envvar="API_PREVIEW_BASE_URL", show_default=True, help="Base URL shown in resource URLs.")
@click.option("--docs-url", default=DEFAULT_DOCS_URL, envvar="API_PREVIEW_DOCS_URL", show_default=True, help="Link target of the published docs.")
@click.option("--workers", default=1, type=click.IntRange(min=1), envvar="API_PREVIEW_WORKERS", show_default=True, help="Threads used to render endpoints.")
@click.option("--endpoint", "patterns", multiple=True, help="Only render endpoints matching 'METHOD /path' or '/path' (glob).")
def render(doc_path: Path, output: Path, banner_title: str, base_url: str, docs_url: str, workers: int, patterns: tuple[str, ...]):
    """Render an API document as an HTML preview page."""
    click.echo(f"Parsing {doc_path}...")
    document = _load(doc_path)
    if patterns:
        document = document.model_copy(update={"endpoints": _filter_endpoints(document.endpoints, patterns)})
    click.echo(f"Found {len(document.endpoints)} endpoints.")

    config = PreviewConfig(banner_title=banner_title, docs_url=docs_url, api_base_url=base_url, workers=workers)
    html = render_page(document, config)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    click.echo(f"Preview saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def endpoints(doc_path: Path):
    """List the endpoints of an API document."""
    document = _load(doc_path)
    for ep in document.endpoints:
        line = f"{ep.method.upper()} {ep.path}"
        if ep.operation_id:
            line += f" - {ep.operation_id}"
        click.echo(line)
