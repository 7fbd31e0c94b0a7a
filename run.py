"""Entry point: list translatable resources of an exported space."""

import json
import sys
from pathlib import Path

from content_l10n.config import load_config
from content_l10n.logging_setup import configure_logging
from content_l10n.pipeline import LocalizationPipeline


def main(argv: list[str] | None = None) -> None:
    """Print one JSON line per translatable resource of an export file.

    The export is a JSON object with ``items`` (entries, all locales) and
    ``contentTypes`` lists.
    """
    args = sys.argv[1:] if argv is None else argv
    config = load_config()
    configure_logging(config.logging)

    export_path = Path(args[0] if args else "export.json")
    if not export_path.exists():
        raise FileNotFoundError(f"Export not found: {export_path}")

    export = json.loads(export_path.read_text(encoding="utf-8"))

    pipeline = LocalizationPipeline(config)
    pipeline.load(export.get("items", []), export.get("contentTypes", []))

    for record, payload in pipeline.iter_resources():
        line = {
            "resource": record.model_dump(by_alias=True),
            "payload": json.loads(payload),
        }
        print(json.dumps(line, ensure_ascii=False))


if __name__ == "__main__":
    main()
