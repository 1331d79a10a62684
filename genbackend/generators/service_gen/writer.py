"""File writer for generated artifacts."""
import logging
from pathlib import Path
from typing import List
from genbackend.generators.service_gen.types import GeneratedFile

log = logging.getLogger(__name__)


def write_files(files: List[GeneratedFile], out_dir: Path) -> List[Path]:
    """
    Write generated files below the output directory.

    File paths are derived from model names, so every target is checked to
    stay inside out_dir before anything is written.

    Args:
        files: List of GeneratedFile objects to write
        out_dir: Base output directory path

    Returns:
        Absolute paths of the written files, in input order

    Raises:
        ValueError: If a file path resolves outside out_dir
    """
    root = out_dir.resolve()
    targets = []
    for file in files:
        target = (root / file.path).resolve()
        if root not in target.parents:
            raise ValueError(f"Refusing to write outside {root}: {file.path}")
        targets.append(target)

    root.mkdir(parents=True, exist_ok=True)
    for file, target in zip(files, targets):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file.content, encoding="utf-8")

    log.info("Wrote %d files to %s", len(targets), root)
    return targets
