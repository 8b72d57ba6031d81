"""
Grammaire — conformité de chaque bloc à sa variante déclarée.

Un seul point de dispatch : BLOCK_ADAPTER (union discriminée par `_type`).
Les erreurs pydantic sont converties en GrammarViolation (clé, tag, champ, raison),
jamais levées : l'appelant reçoit la liste complète.
"""
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from .blocks import BLOCK_ADAPTER
from .core.schemas import BlockNode, Document
from .core.violations import GrammarViolation

log = logging.getLogger(__name__)

_CHILDREN_FORBIDDEN = "content blocks cannot carry children"


def _strip_value_error(msg: str) -> str:
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def _to_violation(err: Mapping[str, Any], key: Optional[str], tag: str) -> GrammarViolation:
    """Erreur pydantic (loc = (tag, 'data', champ…)) → GrammarViolation."""
    code = err["type"]
    if code == "union_tag_invalid":
        return GrammarViolation(key=key, tag=tag, field="_type", reason=f"unknown block type {tag!r}", code=code)

    loc = list(err["loc"])
    if loc and loc[0] == tag:
        loc = loc[1:]
    in_data = bool(loc) and loc[0] == "data"
    if in_data:
        loc = loc[1:]
    # Validateurs de modèle (arité, defaultTab…) : pas de champ précis
    field = ".".join(str(p) for p in loc) or ("data" if in_data else "blocks")

    if code == "extra_forbidden" and field == "blocks":
        reason = _CHILDREN_FORBIDDEN
    else:
        reason = _strip_value_error(err["msg"])
    return GrammarViolation(key=key, tag=tag, field=field, reason=reason, code=code)


def check_block_payload(
    tag: str,
    data: Mapping[str, Any],
    key: Optional[str] = None,
    children: Optional[Sequence[Any]] = None,
) -> List[GrammarViolation]:
    """
    Vérifie un bloc isolé (tag + payload + enfants éventuels).
    Retourne [] si conforme. Les enfants ne sont comptés que pour l'arité.
    Sans `key`, seule la forme du bloc est vérifiée.
    """
    payload: Dict[str, Any] = {"_key": key if key is not None else "_", "_type": tag, "data": dict(data)}
    if children is not None:
        payload["blocks"] = list(children)
    try:
        BLOCK_ADAPTER.validate_python(payload)
    except ValidationError as e:
        return [_to_violation(err, key, tag) for err in e.errors()]
    return []


def check_block(node: BlockNode) -> List[GrammarViolation]:
    return check_block_payload(node.block_type, node.data, key=node.key, children=node.blocks)


def _iter_block(node: BlockNode) -> Iterator[GrammarViolation]:
    yield from check_block(node)
    # Descente même si le bloc est invalide : chaque enfant est rapporté sous sa propre clé
    for child in node.children:
        yield from _iter_block(child)


def iter_grammar_violations(document: Document) -> Iterator[GrammarViolation]:
    for section in document.sections:
        for node in section.blocks:
            yield from _iter_block(node)


def check_grammar(document: Document) -> List[GrammarViolation]:
    """Toutes les violations de grammaire du document, en ordre document."""
    violations = list(iter_grammar_violations(document))
    if violations:
        log.debug("grammar: %d violation(s) — %s", len(violations),
                  ", ".join(f"{v.key}.{v.field}" for v in violations[:10]))
    return violations


def envelope_violations(exc: ValidationError) -> List[GrammarViolation]:
    """Enveloppe illisible (sections non liste, `_key` manquant…) → GrammarViolation sans clé."""
    return [
        GrammarViolation(
            field=".".join(str(p) for p in err["loc"]) or "document",
            reason=_strip_value_error(err["msg"]),
            code=err["type"],
        )
        for err in exc.errors()
    ]
