#!/usr/bin/env python3
"""
Restore a dense slide ordering (0..N-1) after an interrupted renumbering pass.

Storage locations come from settings (SLIDES_DIR, USERS_DIR, .env).
"""
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from signage.application.slide_service import SlideService  # noqa: E402
from signage.infra.config.logging_config import setup_logging  # noqa: E402
from signage.infra.config.settings import get_settings  # noqa: E402
from signage.infra.storage.slide_store import SlideStore  # noqa: E402


def repair_slide_indices() -> int:
    """Renumber all slides. Returns a process exit code."""
    settings = get_settings()
    setup_logging(settings)

    service = SlideService(SlideStore.from_settings(settings))
    result = service.repair()
    if not result.ok:
        print(f"Repair failed ({result.error.value}): {result.message}")
        return 1

    for slide in result.value:
        print(f"{slide['index']:>5}  {slide['id']}  {slide['name']}")
    print(f"Renumbered {len(result.value)} slides in {settings.slides_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(repair_slide_indices())
