"""In-memory translation catalogs loaded from gettext PO files."""

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

import polib

logger = logging.getLogger(__name__)

# gettext joins msgctxt and msgid with EOT to form the lookup key.
CONTEXT_SEPARATOR = "\x04"


class CatalogLoadError(Exception):
    """Raised when a catalog file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load catalog {path}: {reason}")
        self.path = path


class DuplicatePolicy(str, enum.Enum):
    """What Catalog.append does with an entry whose key already exists."""

    LAST_WINS = "last-wins"
    FIRST_WINS = "first-wins"
    KEEP_ALL = "keep-all"


@dataclass
class CatalogEntry:
    """A single translatable message."""

    string: str
    plural: Optional[str] = None
    context: Optional[str] = None
    translations: list[str] = field(default_factory=list)
    fuzzy: bool = False
    references: list[str] = field(default_factory=list)
    comments: str = ""

    @property
    def key(self) -> str:
        if self.context is not None:
            return f"{self.context}{CONTEXT_SEPARATOR}{self.string}"
        return self.string

    @property
    def is_translated(self) -> bool:
        return any(self.translations)

    @property
    def has_plural(self) -> bool:
        return self.plural is not None

    def get_translation(self, index: int) -> str:
        """Return the translated form at ``index``, or "" if there is none."""
        if 0 <= index < len(self.translations):
            return self.translations[index]
        return ""


@dataclass
class MergeStats:
    """Outcome of one Catalog.append call."""

    added: int = 0
    replaced: int = 0
    skipped: int = 0


def _entry_from_po(po_entry: polib.POEntry, use_fuzzy: bool) -> CatalogEntry:
    if po_entry.msgid_plural:
        translations = [
            po_entry.msgstr_plural[index]
            for index in sorted(po_entry.msgstr_plural, key=int)
        ]
    else:
        translations = [po_entry.msgstr] if po_entry.msgstr else []

    fuzzy = po_entry.fuzzy
    if fuzzy and not use_fuzzy:
        # Fuzzy translations are unreviewed; keep them out of the output.
        translations = []

    return CatalogEntry(
        string=po_entry.msgid,
        plural=po_entry.msgid_plural or None,
        context=po_entry.msgctxt,
        translations=translations,
        fuzzy=fuzzy,
        references=[
            f"{path}:{line}" if line else path
            for path, line in po_entry.occurrences
        ],
        comments=po_entry.tcomment or "",
    )


class Catalog:
    """An ordered collection of catalog entries plus header metadata."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self._entries: list[CatalogEntry] = []
        self._index: dict[str, int] = {}

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __getitem__(self, key: str) -> CatalogEntry:
        return self._entries[self._index[key]]

    @property
    def language(self) -> Optional[str]:
        return self.headers.get("Language") or None

    def add(self, entry: CatalogEntry) -> None:
        """Append ``entry`` at the end of the catalog."""
        self._index.setdefault(entry.key, len(self._entries))
        self._entries.append(entry)

    @classmethod
    def load(cls, path: str, use_fuzzy: bool = False) -> "Catalog":
        """Load a catalog from a PO file.

        Args:
            path: File path to the .po file.
            use_fuzzy: Keep translations of entries marked fuzzy.

        Returns:
            A new Catalog holding the file's live (non-obsolete) entries.

        Raises:
            FileNotFoundError: If the file does not exist.
            CatalogLoadError: If the file cannot be parsed.
        """
        file_path = Path(path)
        # polib treats a non-existent path as PO source text.
        if not file_path.is_file():
            raise FileNotFoundError(f"Catalog file not found: {path}")

        try:
            po = polib.pofile(str(file_path))
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogLoadError(str(path), str(e)) from e

        catalog = cls()
        catalog.headers = dict(po.metadata)
        for po_entry in po:
            if po_entry.obsolete:
                continue
            catalog.add(_entry_from_po(po_entry, use_fuzzy))

        logger.debug(
            "Loaded %d entries from %s (language: %s)",
            len(catalog),
            path,
            catalog.language or "unknown",
        )
        return catalog

    def append(
        self,
        other: "Catalog",
        policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS,
    ) -> MergeStats:
        """Merge the entries of ``other`` into this catalog.

        New keys are appended in ``other``'s order. A colliding key replaces
        the existing entry in place (LAST_WINS), is dropped (FIRST_WINS), or
        is appended as a second entry (KEEP_ALL). Header values from
        ``other`` override existing ones.

        Args:
            other: The catalog to merge in. It is not modified.
            policy: How to treat entries whose key already exists.

        Returns:
            Counts of added, replaced and skipped entries.
        """
        policy = DuplicatePolicy(policy)
        stats = MergeStats()
        self.headers.update(other.headers)

        for entry in other:
            position = self._index.get(entry.key)
            if position is None or policy is DuplicatePolicy.KEEP_ALL:
                self.add(entry)
                stats.added += 1
            elif policy is DuplicatePolicy.LAST_WINS:
                self._entries[position] = entry
                stats.replaced += 1
            else:
                stats.skipped += 1

        if stats.replaced or stats.skipped:
            logger.info(
                "Merged catalog: %d added, %d replaced, %d skipped",
                stats.added,
                stats.replaced,
                stats.skipped,
            )
        return stats
