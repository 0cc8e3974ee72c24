"""Write the generated document as YAML plus a Swagger UI viewer page."""

from pathlib import Path
from typing import Any

import yaml

from swagger_generate.exceptions import OutputError

YAML_INDENT = 2


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that repeats shared values instead of emitting anchors."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def dump_yaml(document: dict[str, Any]) -> str:
    """Serialize deterministically: insertion order kept, no anchors."""
    return yaml.dump(
        document,
        Dumper=_NoAliasDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        indent=YAML_INDENT,
        width=4096,
    )


def render_html(yaml_url: str) -> str:
    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Swagger UI</title>
    <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist/swagger-ui.css" />
</head>
<body>
<div id="swagger-ui"></div>
<script src="https://unpkg.com/swagger-ui-dist/swagger-ui-bundle.js"></script>
<script>
    SwaggerUIBundle({{
        url: '{yaml_url}',
        dom_id: "#swagger-ui"
    }});
</script>
</body>
</html>
'''


def write_outputs(
    document: dict[str, Any],
    output_dir: Path,
    yaml_filename: str = "api-docs.yaml",
    html_filename: str | None = "docs.html",
) -> list[Path]:
    """Write the YAML document (and viewer page) into ``output_dir``.

    Returns the written paths.
    """
    written = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        yaml_path = output_dir / yaml_filename
        yaml_path.write_text(dump_yaml(document), encoding="utf-8")
        written.append(yaml_path)

        if html_filename:
            html_path = output_dir / html_filename
            html_path.write_text(render_html(f"/{yaml_filename}"), encoding="utf-8")
            written.append(html_path)
    except OSError as e:
        raise OutputError(f"Cannot write documentation to {output_dir}: {e}") from e

    return written
