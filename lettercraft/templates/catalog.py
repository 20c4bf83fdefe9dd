"""
Template Catalog - the static list of letter templates.

The catalog is a JSON array of {id, title, length, prompt} objects. It is
read once per process and never modified afterwards.

Usage:
    from lettercraft.templates.catalog import get_catalog

    template = get_catalog().get("cover-letter")
    if template:
        print(template.prompt)
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from lettercraft.core.config import settings

logger = logging.getLogger("lettercraft.templates.catalog")


class TemplateCatalogError(Exception):
    """Raised when the template catalog file cannot be read or is malformed."""
    pass


@dataclass(frozen=True)
class Template:
    """
    A named letter skeleton.

    `prompt` may contain placeholders written as [Placeholder Name].
    """
    id: str
    title: str
    length: str
    prompt: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "length": self.length,
            "prompt": self.prompt,
        }


class TemplateCatalog:
    """Read-only, ordered collection of templates keyed by id."""

    def __init__(self, templates: List[Template]):
        self._templates = list(templates)
        self._by_id = {t.id: t for t in self._templates}

    def get(self, template_id: str) -> Optional[Template]:
        """Return the template with this id, or None."""
        return self._by_id.get(template_id)

    def all(self) -> List[Template]:
        return list(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._by_id

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


def load_templates(path: Union[str, Path]) -> TemplateCatalog:
    """
    Load a catalog from a JSON file.

    Raises:
        TemplateCatalogError: file missing, invalid JSON, or an entry
            lacks one of the required fields
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise TemplateCatalogError(f"Cannot read template catalog {path}: {e}") from e

    if not isinstance(raw, list):
        raise TemplateCatalogError(f"Template catalog {path} must be a JSON array")

    templates = []
    for index, entry in enumerate(raw):
        try:
            templates.append(
                Template(
                    id=str(entry["id"]),
                    title=str(entry["title"]),
                    length=str(entry["length"]),
                    prompt=str(entry["prompt"]),
                )
            )
        except (KeyError, TypeError) as e:
            raise TemplateCatalogError(
                f"Template #{index} in {path} is missing field {e}"
            ) from e

    logger.info(f"Loaded {len(templates)} letter templates from {path}")
    return TemplateCatalog(templates)


@lru_cache(maxsize=1)
def get_catalog() -> TemplateCatalog:
    """Process-wide catalog loaded from settings.TEMPLATES_PATH."""
    return load_templates(settings.TEMPLATES_PATH)
