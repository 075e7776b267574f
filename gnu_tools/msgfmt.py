"""Merge PO catalogs and emit them as a resource bundle."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from gnu_tools.catalog import Catalog, CatalogEntry, DuplicatePolicy
from gnu_tools.resources import ResourceWriter

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when an entry cannot be added to the resource bundle."""

    def __init__(self, entry: CatalogEntry) -> None:
        if entry.context:
            message = (
                f"Error adding item {entry.string} in context '{entry.context}'"
            )
        else:
            message = f"Error adding item {entry.string}"
        super().__init__(message)
        self.string = entry.string
        self.context = entry.context


@dataclass
class MsgfmtOptions:
    """Inputs and settings for one conversion run."""

    input_files: list[str] = field(default_factory=list)
    output_file: Optional[str] = None
    duplicates: DuplicatePolicy = DuplicatePolicy.LAST_WINS
    use_fuzzy: bool = False


@dataclass
class ConversionResult:
    """Summary of a finished conversion run."""

    files: int = 0
    entries: int = 0
    translated: int = 0
    untranslated: int = 0
    replaced: int = 0
    skipped: int = 0
    output: Optional[str] = None


def resource_value(entry: CatalogEntry) -> str:
    """Return the string stored for ``entry``: its translation or its msgid."""
    return entry.get_translation(0) if entry.is_translated else entry.string


class ResourcesGen:
    """Builds a resource bundle from one or more PO files."""

    def __init__(self, options: MsgfmtOptions) -> None:
        self.options = options

    def load_catalog(self, result: ConversionResult) -> Catalog:
        """Load and merge all input files, in order."""
        catalog = Catalog()
        for file_name in self.options.input_files:
            logger.info("Reading %s", file_name)
            temp = Catalog.load(file_name, use_fuzzy=self.options.use_fuzzy)
            stats = catalog.append(temp, self.options.duplicates)
            result.files += 1
            result.replaced += stats.replaced
            result.skipped += stats.skipped
        return catalog

    def run(self, writer: Optional[ResourceWriter] = None) -> ConversionResult:
        """Convert the input files.

        Args:
            writer: Sink to write into. When omitted, a ResourceWriter is
                opened on ``options.output_file`` and closed when done.

        Returns:
            Counts describing the conversion.

        Raises:
            FileNotFoundError: If an input file does not exist.
            CatalogLoadError: If an input file cannot be parsed.
            CatalogError: If an entry is rejected by the writer.
        """
        result = ConversionResult()
        catalog = self.load_catalog(result)

        if writer is not None:
            self._write(catalog, writer, result)
            return result

        if not self.options.output_file:
            raise ValueError("No output file given")
        with ResourceWriter(self.options.output_file) as owned:
            self._write(catalog, owned, result)
        return result

    def _write(
        self, catalog: Catalog, writer: ResourceWriter, result: ConversionResult
    ) -> None:
        for entry in catalog:
            try:
                writer.add_resource(entry.key, resource_value(entry))
            except Exception as e:
                raise CatalogError(entry) from e
            result.entries += 1
            if entry.is_translated:
                result.translated += 1
            else:
                result.untranslated += 1
        writer.generate()
        result.output = getattr(writer, "name", None)
        logger.info("Wrote %d resources to %s", result.entries, result.output)
