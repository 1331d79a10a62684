"""Built-in Jinja2 template for the generated API documentation."""

TEMPLATE_NAME = "documentation.html.j2"

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <style>
    body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; line-height: 1.6; color: #333; max-width: 1200px; margin: 0 auto; padding: 20px; }
    header { background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin-bottom: 30px; border-left: 5px solid #0366d6; }
    h1, h2, h3 { color: #0366d6; }
    h1 { margin-top: 0; }
    h2 { margin-top: 40px; padding-bottom: 10px; border-bottom: 1px solid #eaecef; }
    .endpoint, .node, .workflow { background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin-bottom: 20px; }
    .endpoint { border-left: 5px solid #28a745; }
    .node { border-left: 5px solid #6f42c1; }
    .workflow { border-left: 5px solid #f9c513; }
    .endpoint h3, .node h3, .workflow h3 { margin-top: 0; }
    .method { display: inline-block; padding: 5px 10px; border-radius: 5px; color: white; font-weight: bold; margin-right: 10px; min-width: 60px; text-align: center; }
    .get { background-color: #0366d6; }
    .post { background-color: #28a745; }
    .put { background-color: #f9c513; }
    .delete { background-color: #d73a49; }
    .path { font-family: monospace; font-size: 1.1em; }
    .node-type { font-size: 0.8em; color: #6a737d; font-weight: normal; }
    table { width: 100%; border-collapse: collapse; margin: 20px 0; }
    th, td { text-align: left; padding: 12px; border-bottom: 1px solid #eaecef; }
    th { background-color: #f1f3f5; }
    code { font-family: SFMono-Regular, Consolas, "Liberation Mono", Menlo, monospace; background-color: #f6f8fa; padding: 2px 5px; border-radius: 3px; }
    .response-code { display: inline-block; padding: 2px 8px; border-radius: 3px; color: white; font-weight: bold; min-width: 40px; text-align: center; }
    .code-2xx { background-color: #28a745; }
    .code-4xx { background-color: #f9c513; }
    .code-5xx { background-color: #d73a49; }
    .code-other { background-color: #6a737d; }
    footer { margin-top: 50px; padding-top: 20px; border-top: 1px solid #eaecef; text-align: center; color: #6a737d; }
  </style>
</head>
<body>
  <header>
    <h1>{{ backend.name }} API Documentation</h1>
    <p>{{ backend.description }}</p>
    <p><strong>Version:</strong> {{ backend.version }} | <strong>Generated:</strong> {{ date }}</p>
  </header>

  <main>
    <h2>API Endpoints</h2>
    {% for endpoint in backend.endpoints %}
    <div class="endpoint">
      <h3>
        <span class="method {{ endpoint.method | lower }}">{{ endpoint.method }}</span>
        <span class="path">{{ endpoint.path }}</span>
      </h3>
      <p>{{ endpoint.description }}</p>
      {% if endpoint.parameters %}
      <h4>Parameters</h4>
      <table>
        <thead>
          <tr><th>Name</th><th>Located in</th><th>Type</th><th>Required</th><th>Description</th></tr>
        </thead>
        <tbody>
          {% for param in endpoint.parameters %}
          <tr>
            <td><code>{{ param.name }}</code></td>
            <td>{{ param.location }}</td>
            <td><code>{{ param.type }}</code></td>
            <td>{{ "Yes" if param.required else "No" }}</td>
            <td>{{ param.description }}</td>
          </tr>
          {% endfor %}
        </tbody>
      </table>
      {% endif %}
      {% if endpoint.responses %}
      <h4>Responses</h4>
      <table>
        <thead>
          <tr><th>Status</th><th>Description</th></tr>
        </thead>
        <tbody>
          {% for response in endpoint.responses %}
          <tr>
            <td><span class="response-code {{ response.status | status_class }}">{{ response.status }}</span></td>
            <td>{{ response.description }}</td>
          </tr>
          {% endfor %}
        </tbody>
      </table>
      {% endif %}
    </div>
    {% else %}
    <p>No endpoints defined yet.</p>
    {% endfor %}

    <h2>Nodes</h2>
    {% for node in backend.nodes %}
    <div class="node">
      <h3>{{ node.name }} <span class="node-type">({{ node.type }})</span></h3>
      <p>{{ node.description }}</p>
      {% if node.inputs or node.outputs %}
      <table>
        <thead>
          <tr><th>Direction</th><th>Name</th><th>Type</th><th>Description</th></tr>
        </thead>
        <tbody>
          {% for field in node.inputs %}
          <tr><td>input</td><td><code>{{ field.name }}</code></td><td><code>{{ field.type }}</code></td><td>{{ field.description }}</td></tr>
          {% endfor %}
          {% for field in node.outputs %}
          <tr><td>output</td><td><code>{{ field.name }}</code></td><td><code>{{ field.type }}</code></td><td>{{ field.description }}</td></tr>
          {% endfor %}
        </tbody>
      </table>
      {% endif %}
    </div>
    {% else %}
    <p>No nodes defined yet.</p>
    {% endfor %}

    <h2>Workflows</h2>
    {% for workflow in backend.workflows %}
    <div class="workflow">
      <h3>{{ workflow.name }}</h3>
      <p>{{ workflow.description }}</p>
      {% if workflow.nodes %}
      <p><strong>Steps:</strong> {{ workflow.nodes | join(" &rarr; " | safe) }}</p>
      {% endif %}
      {% if workflow.endpoints %}
      <p><strong>Serves:</strong>
        {% for endpoint in workflow.endpoints %}<code>{{ endpoint.method }} {{ endpoint.path }}</code>{% if not loop.last %}, {% endif %}{% endfor %}
      </p>
      {% endif %}
    </div>
    {% else %}
    <p>No workflows defined yet.</p>
    {% endfor %}
  </main>

  <footer>
    <p>Generated by genbackend</p>
  </footer>
</body>
</html>
"""
