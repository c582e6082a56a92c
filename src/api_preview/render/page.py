"""Page assembly: the full HTML preview of an API document."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from html import escape
from pathlib import Path

import markdown

from api_preview.config import PreviewConfig
from api_preview.errors import RenderError
from api_preview.parser.loader import load_document
from api_preview.parser.merger import merge_all_of
from api_preview.parser.models import ApiDocument, EndpointDescriptor
from api_preview.parser.normalize import normalize_document
from api_preview.parser.resolver import resolve_refs
from api_preview.render.sections import render_parameters, render_responses
from api_preview.render.styles import STYLES

log = logging.getLogger(__name__)

START = '<!DOCTYPE html><html lang="en">'
END = "</html>"
FONTS_URL = "https://fonts.googleapis.com/css?family=Montserrat:700|Raleway:400,500i,700&display=swap"


@dataclass(frozen=True)
class EndpointResult:
    """Outcome of rendering one endpoint: its markup or the error it hit."""

    endpoint: EndpointDescriptor
    html: str = ""
    error: RenderError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_document(text: str, base_path: Path | None = None) -> ApiDocument:
    """Parse, dereference, flatten and normalize raw document text."""
    raw = load_document(text)
    resolved = resolve_refs(raw, base_path)
    return normalize_document(merge_all_of(resolved))


def generate_preview(text: str, config: PreviewConfig | None = None, base_path: Path | None = None) -> str:
    """Render raw YAML/JSON document text as a standalone HTML page.

    ``base_path`` is the file the text was read from, used to resolve
    relative file references.
    """
    return render_page(build_document(text, base_path), config or PreviewConfig())


def render_page(document: ApiDocument, config: PreviewConfig) -> str:
    results = render_endpoints(document, config)
    failed = [r for r in results if not r.ok]
    if failed:
        log.warning("%d of %d endpoints failed to render", len(failed), len(results))
    paths_dom = "\n".join(r.html for r in results)

    return f"""{START}{_head(document.title)}
<body>
  <div>
    <div class="preview-banner">
      <h1>{escape(config.banner_title, quote=False)}</h1>
      <p>This is a preview and is not an exact representation of what will be available on <a href="{escape(config.docs_url)}">API docs</a> after spec publishing.</p>
    </div>
    <div>
      {_api_title(document, config)}
      {paths_dom}
    </div>
  </div>
</body>
{END}"""


def render_endpoints(document: ApiDocument, config: PreviewConfig) -> list[EndpointResult]:
    """Render every endpoint, in document order.

    Endpoints share no state, so with ``config.workers > 1`` they render in
    a thread pool; results still come back in document order.
    """
    log.info("Rendering %d endpoints", len(document.endpoints))
    if config.workers > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            return list(executor.map(lambda ep: render_endpoint_safe(document, ep, config), document.endpoints))
    return [render_endpoint_safe(document, ep, config) for ep in document.endpoints]


def render_endpoint_safe(document: ApiDocument, endpoint: EndpointDescriptor, config: PreviewConfig) -> EndpointResult:
    """Render one endpoint, turning a render fault into an error notice."""
    try:
        return EndpointResult(endpoint=endpoint, html=render_endpoint(document, endpoint, config))
    except RenderError as e:
        log.warning("Failed to render %s %s: %s", endpoint.method.upper(), endpoint.path, e)
        return EndpointResult(endpoint=endpoint, html=_error_block(endpoint, e), error=e)


def render_endpoint(document: ApiDocument, endpoint: EndpointDescriptor, config: PreviewConfig) -> str:
    log.debug("Rendering %s %s", endpoint.method.upper(), endpoint.path)
    schemes = endpoint.schemes or document.schemes
    security = ""
    if schemes:
        security = f""" <div class="resource-detail">
      <div class="resource-detail__title">Security</div>
      <div class="resource-detail__content">{escape(", ".join(schemes), quote=False)}</div>
    </div>"""

    return f"""<div class="spec-endpoint">
    {_endpoint_header(endpoint)}
    <div class="spec-endpoint__body">
      <h3>Resource URL</h3>
      <div class="resource-url">
          <code>{escape(resource_url(config.api_base_url, document.base_path, endpoint.path), quote=False)}</code>
      </div>
      <h3>Resource Details</h3>
      {security}
      <div class="resource-detail">
        <div class="resource-detail__title">Category</div>
        <div class="resource-detail__content">{escape(", ".join(endpoint.tags), quote=False)}</div>
      </div>
      <h2>Request</h2>
      {render_parameters(endpoint)}
      <h2>Response</h2>
      {render_responses(endpoint)}
    </div>
  </div>"""


def resource_url(api_base_url: str, base_path: str, path: str) -> str:
    return f"{api_base_url.rstrip('/')}/{(base_path.rstrip('/') + path).lstrip('/')}"


def base_path_label(base_path: str) -> str:
    """Human label from the first basePath segment: '/pet-store/v1' -> 'pet store'."""
    segments = [s for s in base_path.split("/") if s]
    if not segments:
        return "basePath"
    return segments[0].replace("-", " ")


def _head(title: str) -> str:
    return f"""<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title, quote=False)}</title>
  <link href="{FONTS_URL}" rel="stylesheet">
  <style>{STYLES}</style>
</head>"""


def _api_title(document: ApiDocument, config: PreviewConfig) -> str:
    return f"""<div class="spec-header">
    <div class="spec-header__description">
      <h1 class="spec-header__description-title">{escape(document.title, quote=False)}</h1>
      <a href="{escape(config.docs_url)}">{escape(base_path_label(document.base_path), quote=False)}</a>
      <div class="spec-header__description-description">{markdown.markdown(document.description)}</div>
    </div>
  </div>"""


def _endpoint_header(endpoint: EndpointDescriptor) -> str:
    return f"""<div class="spec-endpoint__header">
      <h2 class="spec-endpoint__header-title">
        <span class="method {endpoint.method}">{endpoint.method.upper()}</span>
         - {escape(endpoint.operation_id, quote=False)}
      </h2>
      <p class="spec-endpoint__header-description">{escape(endpoint.description, quote=False)}</p>
    </div>"""


def _error_block(endpoint: EndpointDescriptor, error: RenderError) -> str:
    return f"""<div class="spec-endpoint spec-endpoint--error">
    {_endpoint_header(endpoint)}
    <p class="render-error">This endpoint could not be rendered: {escape(str(error), quote=False)}</p>
  </div>"""
