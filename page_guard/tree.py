"""
Tree Validator — invariants globaux du document, indépendants du tier et de la version précédente.

  collect_keys        parcours pré-ordre : clés de sections et de blocs (toutes profondeurs)
  check_unique_keys   aucune clé dupliquée dans TOUT le document
  check_nesting_depth section = 1, chaque niveau de conteneur +1, max 4 par défaut
"""
import logging
from collections import Counter
from typing import Dict, Iterator, List, Optional, Tuple

from .blocks import is_container_tag
from .config import MAX_NESTING_DEPTH
from .core.schemas import BlockNode, Document
from .core.violations import DuplicateKey, NestingDepthExceeded

log = logging.getLogger(__name__)


# ── Clés ────────────────────────────────────────────────────────────────────

def _walk_blocks(blocks: List[BlockNode], path: str) -> Iterator[Tuple[BlockNode, str]]:
    for node in blocks:
        node_path = f"{path}/{node.key}"
        yield node, node_path
        # Tout bloc portant des enfants est parcouru, conteneur ou non
        if node.blocks:
            yield from _walk_blocks(node.blocks, node_path)


def _walk_keys(document: Document) -> Iterator[Tuple[str, str, str]]:
    """(clé, label, chemin) en ordre document."""
    for section in document.sections:
        yield section.key, f"section:{section.key}", section.key
        for node, path in _walk_blocks(section.blocks, section.key):
            yield node.key, f"{node.block_type}:{node.key}", path


def collect_keys(document: Document) -> List[str]:
    return [key for key, _, _ in _walk_keys(document)]


def describe_keys(document: Document) -> List[str]:
    """Labels de debug : ["section:s1", "heading-block:h1", …]."""
    return [label for _, label, _ in _walk_keys(document)]


def find_duplicate_keys(keys: List[str]) -> List[str]:
    """Clés vues plus d'une fois, dans l'ordre de leur première répétition."""
    seen, dups = set(), []
    for key in keys:
        if key in seen and key not in dups:
            dups.append(key)
        seen.add(key)
    return dups


def check_unique_keys(document: Document) -> Optional[DuplicateKey]:
    entries = list(_walk_keys(document))
    keys = [key for key, _, _ in entries]
    if len(keys) == len(set(keys)):
        return None

    dups = find_duplicate_keys(keys)
    locations: Dict[str, List[str]] = {k: [] for k in dups}
    for key, _, path in entries:
        if key in locations:
            locations[key].append(path)
    counts = Counter(keys)
    log.debug("clés dupliquées : %s", {k: counts[k] for k in dups})
    return DuplicateKey(keys=dups, locations=locations)


# ── Profondeur ──────────────────────────────────────────────────────────────

def _block_depth(node: BlockNode, depth: int) -> int:
    # Seuls les conteneurs ouvrent un niveau ; un conteneur vide compte pour son propre niveau
    if not is_container_tag(node.block_type) or not node.blocks:
        return depth
    return max(_block_depth(child, depth + 1) for child in node.blocks)


def section_depth(section) -> int:
    """Section vide = 1, ses blocs directs = 2, etc."""
    return max((_block_depth(node, 2) for node in section.blocks), default=1)


def document_depth(document: Document) -> Tuple[int, Optional[str]]:
    """(profondeur max, clé de la section la plus profonde)."""
    deepest, deepest_key = 0, None
    for section in document.sections:
        depth = section_depth(section)
        if depth > deepest:
            deepest, deepest_key = depth, section.key
    return deepest, deepest_key


def check_nesting_depth(document: Document, max_depth: int = MAX_NESTING_DEPTH) -> Optional[NestingDepthExceeded]:
    observed, section_key = document_depth(document)
    if observed <= max_depth:
        return None
    return NestingDepthExceeded(observed=observed, max=max_depth, section_key=section_key)
