"""
Event classifier
================

Maps a raw EVTYPE label to one canonical event type.

The vocabulary lists each event type with its synonyms. Looking a label up
category by category would cost one membership test per category, so the
classifier builds a reverse index once:

    "tstm wind (g45)"  ->  "thunderstorm wind"
    "hail 075"         ->  "hail"

and every lookup afterwards is a single dict access. Matching is exact: no
substring, regex or fuzzy matching.
"""

from __future__ import annotations
import logging
from typing import Dict, Optional, Tuple

from .vocabulary import EVENT_SYNONYMS, Vocabulary, validate_vocabulary

logger = logging.getLogger(__name__)


def normalize_label(raw: Optional[str]) -> str:
    """Lower-case a raw label and strip surrounding whitespace.

    Runs of whitespace inside the label are kept: the vocabulary treats
    "high  swells" and "high swells" as different labels.
    """
    if raw is None:
        return ""
    return str(raw).strip().lower()


def build_reverse_index(vocabulary: Vocabulary) -> Dict[str, str]:
    """Build {normalized synonym: canonical event} from a vocabulary.

    Categories are applied in vocabulary order, so a synonym listed twice ends
    up under the later category.
    """
    index: Dict[str, str] = {}
    for event, synonyms in vocabulary.items():
        for s in synonyms:
            key = normalize_label(s)
            prev = index.get(key)
            if prev is not None and prev != event:
                logger.debug("Label %r listed under %r and %r; using %r", key, prev, event, event)
            index[key] = event
    return index


class EventClassifier:
    """Classify raw labels against a vocabulary (built-in by default)."""

    def __init__(self, vocabulary: Optional[Vocabulary] = None) -> None:
        self._vocabulary = validate_vocabulary(vocabulary if vocabulary is not None else EVENT_SYNONYMS)
        self._index = build_reverse_index(self._vocabulary)

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._vocabulary.keys())

    def synonyms_of(self, event: str) -> Tuple[str, ...]:
        return self._vocabulary.get(event, ())

    def classify(self, raw_label: Optional[str]) -> Optional[str]:
        """Return the canonical event for a raw label, or None if unmapped."""
        return self._index.get(normalize_label(raw_label))

    def __contains__(self, raw_label: object) -> bool:
        return isinstance(raw_label, str) and normalize_label(raw_label) in self._index

    def __len__(self) -> int:
        return len(self._index)
