"""Inline stylesheet embedded in every preview page."""

STYLES = """
body {
  margin: 0;
  font-family: "Raleway", "Helvetica Neue", Arial, sans-serif;
  color: #1f2933;
  background: #f5f7fa;
}
h1, h2, h3 {
  font-family: "Montserrat", "Helvetica Neue", Arial, sans-serif;
}
a {
  color: #0b6bcb;
}
.preview-banner {
  padding: 16px 32px;
  background: #fff4d6;
  border-bottom: 1px solid #f0c36d;
}
.preview-banner h1 {
  margin: 0 0 8px;
  font-size: 20px;
}
.spec-header,
.spec-endpoint {
  margin: 24px 32px;
  padding: 24px;
  background: #ffffff;
  border-radius: 4px;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.12);
}
.spec-header__description-title {
  margin-top: 0;
}
.spec-endpoint__header-title {
  margin: 0;
}
.spec-endpoint--error {
  border-left: 4px solid #d64545;
}
.render-error {
  color: #d64545;
}
.method {
  display: inline-block;
  padding: 2px 8px;
  border-radius: 3px;
  color: #ffffff;
  background: #52606d;
  font-size: 14px;
}
.method.get { background: #2f8132; }
.method.post { background: #186faf; }
.method.put { background: #95507c; }
.method.patch { background: #b36b00; }
.method.delete { background: #cc3333; }
.resource-url code {
  display: block;
  padding: 8px 12px;
  background: #f0f4f8;
  border-radius: 3px;
}
.resource-detail {
  display: flex;
  margin-bottom: 8px;
}
.resource-detail__title {
  width: 120px;
  font-weight: 700;
}
.table-container {
  overflow-x: auto;
}
table {
  width: 100%;
  border-collapse: collapse;
}
th, td {
  padding: 8px 12px;
  text-align: left;
  border-bottom: 1px solid #e4e7eb;
}
.schema-list {
  list-style: none;
  padding-left: 24px;
  border-left: 1px dashed #cbd2d9;
}
.schema-list.first {
  padding-left: 0;
  border-left: none;
}
.schema-property {
  margin: 8px 0;
}
.schema-property__description-title {
  display: inline-block;
  font-weight: 700;
}
.schema-property__description-type {
  margin-left: 6px;
  color: #616e7c;
}
.required {
  margin-left: 6px;
  color: #d64545;
  font-size: 12px;
}
.array-bound {
  font-weight: 700;
  color: #616e7c;
}
.codeblock {
  padding: 12px;
  overflow-x: auto;
  background: #1f2933;
  color: #f5f7fa;
  border-radius: 3px;
}
"""
