"""
Structural Diff Engine — existant vs proposé, position par position.

Seule la FORME est comparée : nombre, ordre, clé et tag des sections/blocs.
Les payloads `data` et les réglages de section ne sont jamais comparés
(modifications de contenu autorisées pour tous les tiers).

Appariement uniquement par position : déplacer un bloc est traité comme
un changement de clé à chaque position touchée, donc refusé en CONTENT_EDITOR.
"""
import logging
from typing import Iterator, List, Optional, Sequence

from .config import COLLECT_ALL_STRUCTURAL
from .core.schemas import BlockNode, Document, Section
from .core.violations import (
    BlockCountChanged,
    BlockReordered,
    BlockTypeChanged,
    SectionCountChanged,
    SectionReordered,
    StructuralViolation,
)

log = logging.getLogger(__name__)


def _iter_blocks(
    existing: Sequence[BlockNode],
    proposed: Sequence[BlockNode],
    section_key: str,
    parent_key: Optional[str],
) -> Iterator[StructuralViolation]:
    if len(existing) != len(proposed):
        yield BlockCountChanged(
            section_key=section_key, parent_key=parent_key,
            expected=len(existing), actual=len(proposed),
        )
        return

    for i, (old, new) in enumerate(zip(existing, proposed)):
        if old.key != new.key:
            yield BlockReordered(key=old.key, proposed_key=new.key, section_key=section_key, index=i)
            continue
        if old.block_type != new.block_type:
            yield BlockTypeChanged(key=old.key, from_tag=old.block_type, to_tag=new.block_type, section_key=section_key)
        # Conteneur d'un côté ou de l'autre → comparer les enfants, tag changé ou non
        if old.blocks is not None or new.blocks is not None:
            yield from _iter_blocks(old.children, new.children, section_key, old.key)


def _iter_sections(existing: Sequence[Section], proposed: Sequence[Section]) -> Iterator[StructuralViolation]:
    if len(existing) != len(proposed):
        yield SectionCountChanged(expected=len(existing), actual=len(proposed))
        return

    for i, (old, new) in enumerate(zip(existing, proposed)):
        if old.key != new.key:
            yield SectionReordered(key=old.key, proposed_key=new.key, index=i)
            continue
        yield from _iter_blocks(old.blocks, new.blocks, old.key, None)


def iter_structural_changes(existing: Document, proposed: Document) -> Iterator[StructuralViolation]:
    """Violations en ordre haut → bas, gauche → droite."""
    return _iter_sections(existing.sections, proposed.sections)


def structural_diff(existing: Document, proposed: Document) -> Optional[StructuralViolation]:
    """Première violation structurelle, None si seule la donnée a changé."""
    first = next(iter_structural_changes(existing, proposed), None)
    if first is not None:
        log.debug("structural_diff: %s", first.kind)
    return first


def structural_diff_all(existing: Document, proposed: Document) -> List[StructuralViolation]:
    """Variante « tout collecter » : ne descend pas sous un changement de nombre ou de clé."""
    return list(iter_structural_changes(existing, proposed))


def structural_violations(
    existing: Document,
    proposed: Document,
    collect_all: bool = COLLECT_ALL_STRUCTURAL,
) -> List[StructuralViolation]:
    if collect_all:
        return structural_diff_all(existing, proposed)
    first = structural_diff(existing, proposed)
    return [first] if first is not None else []
