"""
Service de validation d'un update de page — orchestration côté appelant.

  1. merge   : update partiel fusionné sur le document stocké (jamais muté)
  2. validate: grammaire + invariants sur le document proposé (tous tiers)
  3. gate    : CONTENT_EDITOR → diff structurel existant/proposé ; BUILDER → aucun diff
  4. le document fusionné n'est persistable que si `accepted`

La persistance et le contrôle de version restent à la charge du content store :
`existing` doit être le dernier snapshot commité.
"""
import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .config import COLLECT_ALL_STRUCTURAL, MAX_NESTING_DEPTH
from .core.schemas import EMPTY_DOCUMENT, Document, PageUpdate, parse_document, parse_update
from .core.tiers import Tier, TierLike, coerce_tier, is_structural_edit_allowed
from .core.violations import ContentValidationError, GrammarViolation, Violation
from .diff import structural_violations
from .grammar import check_grammar, envelope_violations
from .tree import check_nesting_depth, check_unique_keys

log = logging.getLogger(__name__)

DocumentLike = Union[Document, Mapping[str, Any], None]
UpdateLike = Union[PageUpdate, Document, Mapping[str, Any]]


class UpdateDecision(BaseModel):
    """Résultat de evaluate_update — sérialisable tel quel par la couche transport."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    accepted:          bool
    tier:              Tier
    violations:        List[Violation] = []
    structural_check:  bool = False           # diff structurel effectivement calculé
    document:          Optional[Document] = None

    def raise_for_violations(self) -> Document:
        if not self.accepted:
            raise ContentValidationError(self.violations)
        return self.document


def merge_update(existing: Optional[Document], update: PageUpdate) -> Document:
    """Champs présents dans l'update → remplacent ; `sections` absent → sections existantes."""
    base = (existing or EMPTY_DOCUMENT).model_dump(by_alias=True)
    base.update(update.model_extra or {})
    if update.sections is not None:
        base["sections"] = [s.model_dump(by_alias=True) for s in update.sections]
    return Document.model_validate(base)


def validate_document(
    document: DocumentLike,
    max_depth: int = MAX_NESTING_DEPTH,
    fail_fast: bool = True,
) -> List[Violation]:
    """
    Solidité structurelle d'un document, indépendante du tier.
    fail_fast : erreurs de grammaire → invariants non évalués.
    """
    try:
        doc = parse_document(document)
    except ValidationError as e:
        return list(envelope_violations(e))

    violations: List[Violation] = list(check_grammar(doc))
    if violations and fail_fast:
        return violations

    for check in (check_unique_keys(doc), check_nesting_depth(doc, max_depth)):
        if check is not None:
            violations.append(check)
    return violations


def _prefixed(violations: List[GrammarViolation], prefix: str) -> List[GrammarViolation]:
    """Champ préfixé (« existing.sections.0._key ») : distingue le snapshot stocké de la proposition."""
    return [v.model_copy(update={"field": f"{prefix}.{v.field}"}) for v in violations]


def _annex_fields(existing: DocumentLike) -> Document:
    """Champs hors `sections` d'un snapshot dont les sections sont illisibles."""
    if not isinstance(existing, Mapping):
        return EMPTY_DOCUMENT
    return Document.model_validate({k: v for k, v in existing.items() if k != "sections"})


def evaluate_update(
    existing: DocumentLike,
    update: UpdateLike,
    tier: TierLike,
    max_depth: int = MAX_NESTING_DEPTH,
    collect_all: bool = COLLECT_ALL_STRUCTURAL,
) -> UpdateDecision:
    tier = coerce_tier(tier)

    try:
        upd = parse_update(update)
    except ValidationError as e:
        return UpdateDecision(accepted=False, tier=tier, violations=envelope_violations(e))

    try:
        stored = parse_document(existing)
    except ValidationError as e:
        # BUILDER remplaçant toutes les sections : le snapshot illisible ne sert qu'aux champs annexes
        if not (is_structural_edit_allowed(tier) and upd.proposes_structure):
            return UpdateDecision(accepted=False, tier=tier,
                                  violations=_prefixed(envelope_violations(e), "existing"))
        log.warning("snapshot existant illisible, sections remplacées (%s) : %d erreur(s)",
                    tier.value, len(e.errors()))
        stored = _annex_fields(existing)

    proposed = merge_update(stored, upd)

    # Rien de structurel proposé → rien à comparer
    if not upd.proposes_structure:
        return UpdateDecision(accepted=True, tier=tier, document=proposed)

    violations = validate_document(proposed, max_depth=max_depth)
    if violations:
        log.info("update refusé (%s) : %s", tier.value, [v.kind for v in violations])
        return UpdateDecision(accepted=False, tier=tier, violations=violations)

    if is_structural_edit_allowed(tier):
        return UpdateDecision(accepted=True, tier=tier, document=proposed)

    changes = structural_violations(stored, proposed, collect_all=collect_all)
    if changes:
        log.info("update refusé (%s) : %s", tier.value, [v.kind for v in changes])
        return UpdateDecision(accepted=False, tier=tier, violations=changes, structural_check=True)
    return UpdateDecision(accepted=True, tier=tier, structural_check=True, document=proposed)


def apply_update(existing: DocumentLike, update: UpdateLike, tier: TierLike) -> Document:
    """Comme evaluate_update mais lève ContentValidationError ; retourne le document à persister."""
    return evaluate_update(existing, update, tier).raise_for_violations()
