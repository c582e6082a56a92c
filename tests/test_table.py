from api_preview.render.table import format_cell, render_table


class TestFormatCell:
    def test_booleans_render_literally(self):
        assert format_cell(True) == "true"
        assert format_cell(False) == "false"

    def test_none_is_empty(self):
        assert format_cell(None) == ""

    def test_numbers_use_plain_str(self):
        assert format_cell(0) == "0"
        assert format_cell(1.5) == "1.5"

    def test_markup_is_escaped(self):
        assert format_cell("<b>bold</b> & co") == "&lt;b&gt;bold&lt;/b&gt; &amp; co"


class TestRenderTable:
    def test_rows_and_columns(self):
        out = render_table(["Parameter", "Required"], [["id", True], ["limit", False], ["page", None]])
        assert out.count("<th>") == 2
        # one header row plus three body rows
        assert out.count("<tr>") == 4
        assert out.count("<td>") == 6
        assert "<tr><td>id</td>\n<td>true</td></tr>" in out
        assert "<tr><td>page</td>\n<td></td></tr>" in out

    def test_headings_in_order(self):
        out = render_table(["HTTP Code", "Description"], [])
        assert out.index("<th>HTTP Code</th>") < out.index("<th>Description</th>")

    def test_empty_rows_renders_headers_only(self):
        out = render_table(["A", "B"], [])
        assert out.count("<tr>") == 1
        assert "<td>" not in out
        assert "<tbody>" in out and "</tbody>" in out

    def test_wrapped_in_container(self):
        out = render_table(["A"], [["x"]])
        assert out.startswith('<div class="table-container">')
        assert out.endswith("</div>")
