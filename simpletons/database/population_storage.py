"""JSON persistence for populations of body trees.

A population document stores, per tree, the root index and every node's
segment (raw genes only), parent index and incoming joint. Scaled values are
derived and never stored, so they recompute identically after a reload.

Documents come from outside the program, so every defect in one surfaces as
a recoverable :class:`PopulationFormatError` rather than an abort.
"""

from __future__ import annotations

import os
from pathlib import Path
import re

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from simpletons.body.tree import BodyTree, BodyTreeDocument
from simpletons.database.population import Population
from simpletons.exceptions import (
    PopulationFormatError,
    StorageError,
    TreeValidationError,
)

FORMAT_VERSION = 1


class PopulationDocument(BaseModel):
    version: int = Field(default=FORMAT_VERSION, description="Document format version")
    trees: list[BodyTreeDocument] = Field(default_factory=list)
    model_config = ConfigDict(extra="forbid")


def serialize(population: Population, *, indent: int | None = None) -> str:
    document = PopulationDocument(trees=[tree.to_document() for tree in population])
    return document.model_dump_json(indent=indent)


def deserialize(data: str | bytes) -> Population:
    """Parse a population document.

    Raises:
        PopulationFormatError: malformed JSON, schema violations, unsupported
            version, or tree links that do not form a single rooted tree
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PopulationFormatError(f"Population document is not UTF-8: {e}") from e

    try:
        document = PopulationDocument.model_validate_json(data)
    except PydanticValidationError as e:
        raise PopulationFormatError(f"Invalid population document: {e}") from e

    if document.version != FORMAT_VERSION:
        raise PopulationFormatError(
            f"Unsupported population format version {document.version} "
            f"(expected {FORMAT_VERSION})"
        )

    trees = []
    for index, tree_doc in enumerate(document.trees):
        try:
            trees.append(BodyTree.from_document(tree_doc))
        except TreeValidationError as e:
            raise PopulationFormatError(f"Tree {index}: {e}") from e
    return Population(trees)


def save(path: str | os.PathLike, population: Population) -> Path:
    """Write *population* to *path*, replacing any existing file atomically."""
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(serialize(population, indent=2), encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise StorageError(f"Failed to write population to {path}: {e}") from e

    logger.info(
        "[population] Saved {} tree(s), {} segment(s) to {}",
        len(population),
        population.segment_count(),
        path,
    )
    return path


def load(path: str | os.PathLike) -> Population:
    """Read a population from *path*.

    Raises:
        StorageError: the file cannot be read
        PopulationFormatError: the file content is not a valid population
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise StorageError(f"Failed to read population from {path}: {e}") from e

    population = deserialize(data)
    logger.info("[population] Loaded {} tree(s) from {}", len(population), path)
    return population


class PopulationArchive:
    """
    Directory of per-generation population snapshots:
      - <root>/gen_<####>.json  one file per saved generation
      - <root>/latest.json      copy of the most recently saved generation
    """

    _GEN_PATTERN = re.compile(r"^gen_(\d+)\.json$")

    def __init__(self, root: str | os.PathLike = "populations") -> None:
        self.root = Path(root)

    def generation_path(self, generation: int) -> Path:
        if generation < 0:
            raise ValueError(f"generation must be non-negative, got {generation}")
        return self.root / f"gen_{generation:04d}.json"

    @property
    def latest_path(self) -> Path:
        return self.root / "latest.json"

    def save_generation(self, generation: int, population: Population) -> Path:
        path = save(self.generation_path(generation), population)
        save(self.latest_path, population)
        return path

    def load_generation(self, generation: int) -> Population:
        return load(self.generation_path(generation))

    def load_latest(self) -> Population:
        return load(self.latest_path)

    def generations(self) -> list[int]:
        """Saved generation numbers in ascending order."""
        if not self.root.is_dir():
            return []
        found = []
        for entry in self.root.iterdir():
            match = self._GEN_PATTERN.match(entry.name)
            if match:
                found.append(int(match.group(1)))
        return sorted(found)
