import logging
from pathlib import Path

from api_preview.config import PreviewConfig
from api_preview.render.page import (
    base_path_label,
    build_document,
    generate_preview,
    render_endpoints,
    resource_url,
)
from api_preview.render.properties import REQUIRED_MARKER

FIXTURES = Path(__file__).parent / "fixtures"

STATUS_DOC = """
swagger: "2.0"
info:
  title: Status API
paths:
  /things/{id}:
    get:
      operationId: getThing
      tags: [things]
      parameters:
        - name: id
          in: path
          type: string
          required: true
      responses:
        "200":
          description: OK
          schema:
            properties:
              status:
                type: string
            required:
              - status
"""

BROKEN_EXAMPLE_DOC = """
swagger: "2.0"
info:
  title: Mixed API
paths:
  /good:
    get:
      operationId: goodOne
      tags: [misc]
      parameters: []
      responses:
        "200":
          description: OK
  /bad:
    get:
      operationId: badOne
      tags: [misc]
      parameters: []
      responses:
        "200":
          description: OK
          schema:
            properties:
              born:
                type: string
            example:
              born: 2020-01-01
"""

SCHEMES_DOC = """
swagger: "2.0"
info:
  title: Stream API
schemes: [https]
paths:
  /feed:
    get:
      operationId: watchFeed
      tags: [2024]
      schemes: [wss]
      parameters: []
      responses:
        "200":
          description: OK
          schema:
            properties:
              event:
                type: string
            example:
              allOf: [{a: 1}, {b: 2}]
  /health:
    get:
      operationId: health
      tags: [ops]
      parameters: []
"""


def _petstore() -> str:
    return (FIXTURES / "petstore.yaml").read_text(encoding="utf-8")


class TestGeneratePreview:
    def test_page_skeleton(self):
        html = generate_preview(_petstore(), base_path=FIXTURES / "petstore.yaml")
        assert html.startswith('<!DOCTYPE html><html lang="en"><head>')
        assert html.endswith("</html>")
        assert "<title>Swagger Petstore</title>" in html
        assert "<style>" in html
        assert "<h1>API Documentation Preview</h1>" in html

    def test_api_title_block(self):
        html = generate_preview(_petstore(), base_path=FIXTURES / "petstore.yaml")
        assert '<h1 class="spec-header__description-title">Swagger Petstore</h1>' in html
        assert ">pet store</a>" in html
        assert "<strong>petstore</strong>" in html

    def test_endpoints_in_document_order(self):
        html = generate_preview(_petstore(), base_path=FIXTURES / "petstore.yaml")
        assert html.index("listPets") < html.index("createPet") < html.index("showPetById")
        assert html.count('<div class="spec-endpoint">') == 3

    def test_endpoint_details(self):
        html = generate_preview(_petstore(), base_path=FIXTURES / "petstore.yaml")
        assert '<span class="method get">GET</span>' in html
        assert '<span class="method post">POST</span>' in html
        assert "<code>https://api.example.com/pet-store/v1/pets/{petId}</code>" in html
        assert '<div class="resource-detail__content">https</div>' in html
        assert '<div class="resource-detail__content">pets</div>' in html

    def test_custom_config(self):
        config = PreviewConfig(banner_title="Internal Preview", api_base_url="https://gw.test/", docs_url="https://docs.test")
        html = generate_preview(_petstore(), config, base_path=FIXTURES / "petstore.yaml")
        assert "<h1>Internal Preview</h1>" in html
        assert "<code>https://gw.test/pet-store/v1/pets</code>" in html
        assert 'href="https://docs.test"' in html

    def test_path_parameter_and_required_status(self):
        html = generate_preview(STATUS_DOC)
        assert html.count("<td>id</td>") == 1
        assert "<tr><td>id</td>\n<td>string</td>\n<td></td>\n<td>true</td></tr>" in html
        status = html.split('<div class="schema-property__description-title">status</div>', 1)[1]
        assert REQUIRED_MARKER in status.split("</li>", 1)[0]
        assert html.count('<li class="schema-property">') == 1

    def test_missing_base_path_label(self):
        html = generate_preview(STATUS_DOC)
        assert ">basePath</a>" in html
        assert "<code>https://api.example.com/things/{id}</code>" in html

    def test_no_security_without_schemes(self):
        html = generate_preview(STATUS_DOC)
        assert "Security" not in html

    def test_operation_schemes_take_precedence(self):
        feed, health = generate_preview(SCHEMES_DOC).split('<div class="spec-endpoint">')[1:]
        assert '<div class="resource-detail__content">wss</div>' in feed
        assert "https" not in feed.split("Category", 1)[0].split("Resource Details", 1)[1]
        assert '<div class="resource-detail__content">https</div>' in health

    def test_numeric_tag_in_category(self):
        html = generate_preview(SCHEMES_DOC)
        assert '<div class="resource-detail__content">2024</div>' in html

    def test_all_of_inside_example_rendered_verbatim(self):
        html = generate_preview(SCHEMES_DOC)
        assert '"allOf": [' in html
        assert '"a": 1' in html


class TestEndpointIsolation:
    def test_failed_endpoint_does_not_break_page(self, caplog):
        with caplog.at_level(logging.WARNING):
            html = generate_preview(BROKEN_EXAMPLE_DOC)
        assert "goodOne" in html
        assert '<div class="spec-endpoint spec-endpoint--error">' in html
        assert "This endpoint could not be rendered" in html
        assert "Failed to render GET /bad" in caplog.text

    def test_results_report_failures(self):
        results = render_endpoints(build_document(BROKEN_EXAMPLE_DOC), PreviewConfig())
        assert [r.ok for r in results] == [True, False]
        assert results[1].endpoint.operation_id == "badOne"


class TestParallelRendering:
    def test_thread_pool_matches_sequential(self):
        text = _petstore()
        base = FIXTURES / "petstore.yaml"
        sequential = generate_preview(text, PreviewConfig(workers=1), base_path=base)
        parallel = generate_preview(text, PreviewConfig(workers=4), base_path=base)
        assert parallel == sequential


class TestHelpers:
    def test_resource_url_joins_segments(self):
        assert resource_url("https://api.example.com", "/v1", "/pets") == "https://api.example.com/v1/pets"
        assert resource_url("https://api.example.com/", "/v1/", "/pets") == "https://api.example.com/v1/pets"
        assert resource_url("https://api.example.com", "", "/pets") == "https://api.example.com/pets"

    def test_base_path_label(self):
        assert base_path_label("/pet-store/v1") == "pet store"
        assert base_path_label("/") == "basePath"
        assert base_path_label("") == "basePath"
