"""
Saved calculation schemes.

A scheme is a named TaxInput kept for later reload. Only the input is
stored; results are always recomputed by the calculator. The calculator
never reads or writes schemes - the CLI and MCP server do.

Storage layout (one JSON file per scheme):

    <data dir>/schemes/<id>.json
    {
      "meta": {"id": "...", "name": "...", "created_at": "...", "updated_at": "..."},
      "input": {...TaxInput fields...}
    }

IDs are the first 8 hex chars of a sha256 over name and creation time.
"""

import hashlib
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import get_data_path
from .schemas import TaxInput

logger = logging.getLogger(__name__)

# IDs name files directly, so only generated IDs are accepted
SCHEME_ID_PATTERN = re.compile(r"[0-9a-f]{8}")


class SchemeNotFoundError(KeyError):
    """Raised when a scheme ID does not exist."""
    pass


class SchemeSummary(BaseModel):
    """Listing entry for a saved scheme."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="8-char scheme ID")
    name: str
    created_at: str = Field(..., description="ISO timestamp")
    updated_at: str = Field(..., description="ISO timestamp")


class Scheme(SchemeSummary):
    """A saved scheme with its input."""

    input: TaxInput


def _generate_scheme_id(name: str, created_at: str) -> str:
    """Generate an 8-char scheme ID from name and creation time."""
    content = f"scheme|{name}|{created_at}"
    return hashlib.sha256(content.encode()).hexdigest()[:8]


def get_schemes_dir() -> Path:
    """Get the default schemes directory (<data dir>/schemes/)."""
    return get_data_path() / "schemes"


class SchemeStore:
    """Key-value store of schemes backed by a directory of JSON files.

    Args:
        directory: Storage directory. Defaults to get_schemes_dir(),
                   resolved on first use so settings changes are honored.
    """

    def __init__(self, directory: Optional[Path] = None):
        self._directory = Path(directory) if directory is not None else None

    @property
    def directory(self) -> Path:
        directory = self._directory or get_schemes_dir()
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def _path(self, scheme_id: str) -> Optional[Path]:
        """Path of a scheme file, or None if the ID is not a valid scheme ID."""
        if not isinstance(scheme_id, str) or not SCHEME_ID_PATTERN.fullmatch(scheme_id):
            logger.warning(f"Rejected invalid scheme ID {scheme_id!r}")
            return None
        return self.directory / f"{scheme_id}.json"

    def _read(self, path: Path) -> Optional[Scheme]:
        try:
            with open(path) as f:
                record = json.load(f)
            return Scheme(**record["meta"], input=record["input"])
        except (json.JSONDecodeError, IOError, KeyError, TypeError, ValidationError) as e:
            logger.warning(f"Skipping unreadable scheme file {path.name}: {e}")
            return None

    def _write(self, scheme: Scheme) -> Path:
        record = {
            "meta": scheme.model_dump(exclude={"input"}),
            "input": scheme.input.model_dump(),
        }
        path = self._path(scheme.id)
        with open(path, "w") as f:
            json.dump(record, f, indent=2)
        return path

    def save(self, name: str, tax_input: TaxInput) -> Scheme:
        """Save a new scheme and return it (with its generated ID)."""
        if not name or not name.strip():
            raise ValueError("Scheme name must not be empty")

        now = datetime.now().isoformat()
        scheme = Scheme(
            id=_generate_scheme_id(name, now),
            name=name.strip(),
            created_at=now,
            updated_at=now,
            input=tax_input,
        )
        path = self._write(scheme)
        logger.info(f"Saved scheme {scheme.id} '{scheme.name}' to {path}")
        return scheme

    def get(self, scheme_id: str) -> Optional[Scheme]:
        """Get a scheme by ID, or None if not found."""
        path = self._path(scheme_id)
        if path is None or not path.exists():
            return None
        return self._read(path)

    def load(self, scheme_id: str) -> Optional[TaxInput]:
        """Get only the input of a scheme, or None if not found."""
        scheme = self.get(scheme_id)
        return scheme.input if scheme else None

    def list_all(self) -> List[SchemeSummary]:
        """List all schemes, most recently updated first."""
        summaries = []
        for json_file in self.directory.glob("*.json"):
            scheme = self._read(json_file)
            if scheme is None:
                continue
            summaries.append(SchemeSummary(**scheme.model_dump(exclude={"input"})))

        summaries.sort(key=lambda s: s.updated_at, reverse=True)
        return summaries

    def update(
        self,
        scheme_id: str,
        name: Optional[str] = None,
        tax_input: Optional[TaxInput] = None,
    ) -> Scheme:
        """Rename a scheme and/or replace its input.

        Raises:
            SchemeNotFoundError: If the scheme does not exist
        """
        scheme = self.get(scheme_id)
        if scheme is None:
            raise SchemeNotFoundError(scheme_id)

        changes = {"updated_at": datetime.now().isoformat()}
        if name is not None:
            if not name.strip():
                raise ValueError("Scheme name must not be empty")
            changes["name"] = name.strip()
        if tax_input is not None:
            changes["input"] = tax_input

        updated = scheme.model_copy(update=changes)
        self._write(updated)
        logger.info(f"Updated scheme {scheme_id}")
        return updated

    def delete(self, scheme_id: str) -> bool:
        """Delete a scheme. Returns True if it existed."""
        path = self._path(scheme_id)
        if path is None or not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted scheme {scheme_id}")
        return True
