"""Example script showing how to drive the media catalog programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from media_catalog import Category, MediaCatalog, StorageClass  # type: ignore  # noqa: E402
from utils.config import load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402


def main() -> None:
    config = load_config(PROJECT_ROOT / "mediacat.yml")
    configure_logging(config.log_level)
    catalog = MediaCatalog.from_config(config)
    for path in catalog.select_category(Category.AUDIO) or []:
        print(path)

    # The card was unplugged and plugged back in.
    catalog.detach_root(StorageClass.REMOVABLE_CARD)
    catalog.attach_root(StorageClass.REMOVABLE_CARD)
    catalog.sort()
    print(catalog.summary().model_dump_json(indent=2))


if __name__ == "__main__":
    main()
