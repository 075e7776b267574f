"""Key/value resource bundle writer.

Resources are collected in memory and serialized as a single JSON object,
in the order they were added.
"""

import json
import logging
from pathlib import Path
from typing import IO, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class ResourceError(Exception):
    """Base class for resource writer failures."""


class DuplicateResourceError(ResourceError):
    """A resource with the same key was already added."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Duplicate resource key: {key!r}")
        self.key = key


class ResourceEncodingError(ResourceError):
    """A key or value cannot be stored in the bundle."""


class ResourceWriterClosedError(ResourceError):
    """The writer has already generated its output."""


def _check_text(label: str, text: object) -> str:
    """Ensure a key or value is a string that encodes as UTF-8.

    Raises:
        ResourceEncodingError: If the check fails.
    """
    if not isinstance(text, str):
        raise ResourceEncodingError(
            f"Resource {label} must be a string, got {type(text).__name__}"
        )
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ResourceEncodingError(
            f"Resource {label} {text!r} is not valid UTF-8: {e.reason}"
        ) from e
    return text


class ResourceWriter:
    """Collects string resources and writes them to a JSON bundle.

    Args:
        target: Output file path, or an open text stream. A stream is
            written to but not closed.
    """

    def __init__(self, target: Union[str, Path, IO[str]]) -> None:
        self._target = target
        self._resources: dict[str, str] = {}
        self._generated = False

    def __enter__(self) -> "ResourceWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the exception already propagating; a failed flush is only logged.
        try:
            self.close()
        except (OSError, ResourceError):
            logger.exception("Could not flush resources to %s", self.name)

    def __len__(self) -> int:
        return len(self._resources)

    @property
    def resources(self) -> Mapping[str, str]:
        """Resources accepted so far, in insertion order."""
        return dict(self._resources)

    @property
    def closed(self) -> bool:
        return self._generated

    def add_resource(self, key: str, value: str) -> None:
        """Add a string resource.

        Raises:
            DuplicateResourceError: If ``key`` was already added.
            ResourceEncodingError: If key or value is not encodable text.
            ResourceWriterClosedError: If the bundle was already generated.
        """
        if self._generated:
            raise ResourceWriterClosedError(
                "Cannot add resources after the bundle was generated"
            )
        _check_text("key", key)
        _check_text("value", value)
        if not key:
            raise ResourceEncodingError("Resource key must not be empty")
        if key in self._resources:
            raise DuplicateResourceError(key)
        self._resources[key] = value

    def generate(self) -> None:
        """Write all accepted resources to the target and close the writer."""
        if self._generated:
            raise ResourceWriterClosedError("Bundle was already generated")
        self._generated = True

        if isinstance(self._target, (str, Path)):
            with open(self._target, "w", encoding="utf-8") as f:
                self._dump(f)
        else:
            self._dump(self._target)
            self._target.flush()

        logger.debug("Wrote %d resources to %s", len(self._resources), self.name)

    def close(self) -> None:
        """Generate the bundle if that has not happened yet."""
        if not self._generated:
            self.generate()

    @property
    def name(self) -> Optional[str]:
        if isinstance(self._target, (str, Path)):
            return str(self._target)
        return getattr(self._target, "name", None)

    def _dump(self, stream: IO[str]) -> None:
        json.dump(self._resources, stream, indent=2, ensure_ascii=False)
        stream.write("\n")
