"""
Utility script to generate and write the OpenAPI schema for the task list service.

The schema is serialized to interfaces/openapi.json (relative to the working
directory) so that API clients and documentation tools can consume a stable
schema without running the server.

Usage:
    tasklist-openapi [output_path]
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, List, Optional

from fastapi import FastAPI

DEFAULT_OUTPUT = os.path.join("interfaces", "openapi.json")


def _ensure_tags(schema: Dict[str, Any], tags: List[Dict[str, Any]]) -> None:
    """
    Ensure the OpenAPI schema contains the expected tags metadata. Existing tag
    definitions are kept; missing ones are appended.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(app: Optional[FastAPI] = None, out_path: str = DEFAULT_OUTPUT) -> str:
    """Write the app's OpenAPI schema to ``out_path`` and return the path."""
    from .main import create_app, openapi_tags

    if app is None:
        app = create_app()

    schema = app.openapi()
    _ensure_tags(schema, openapi_tags)

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    return out_path


def main() -> None:
    out_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_OUTPUT
    written = generate_openapi(out_path=out_path)
    print(f"Wrote OpenAPI schema to: {written}")


if __name__ == "__main__":
    main()
