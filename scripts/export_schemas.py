"""Export JSON schemas for the API wire models."""

import json
from pathlib import Path

from pydantic import BaseModel

from backend.app.models import Document, Suggestion, UserPublic

EXPORTED_MODELS: dict[str, type[BaseModel]] = {
    "Document": Document,
    "Suggestion": Suggestion,
    "User": UserPublic,
}


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for name, model in EXPORTED_MODELS.items():
        # camelCase field names, as served by the API
        schema = model.model_json_schema(by_alias=True)
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported {name} schema to {path}")


if __name__ == "__main__":
    main()
