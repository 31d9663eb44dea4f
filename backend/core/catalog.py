"""
Built-in challenge templates and badge catalog, loaded from catalog.yaml.
"""
import pathlib
from functools import lru_cache
from typing import List, Optional

import yaml

from domain.models.achievement import Badge
from domain.models.challenge import ChallengeKind, ChallengeTemplate

CATALOG_PATH = pathlib.Path(__file__).with_name("catalog.yaml")


@lru_cache
def _load() -> dict:
    return yaml.safe_load(CATALOG_PATH.read_text())


def builtin_templates(kind: Optional[ChallengeKind] = None) -> List[ChallengeTemplate]:
    """Built-in templates, optionally filtered by kind, in catalog order."""
    kinds = [kind] if kind else list(ChallengeKind)
    return [
        ChallengeTemplate(id=item["id"], title=item["title"], kind=k, target=item["target"])
        for k in kinds
        for item in _load().get(k.value, [])
    ]


def lookup_template(template_id: str) -> Optional[ChallengeTemplate]:
    return next((t for t in builtin_templates() if t.id == template_id), None)


def badge_catalog() -> List[Badge]:
    """Every badge, ascending by threshold."""
    badges = [Badge(**item) for item in _load()["badges"]]
    return sorted(badges, key=lambda b: b.threshold)
