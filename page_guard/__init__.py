"""
page_guard — validation de l'arbre de contenu et contrôle structurel par tier.

Usage :
    >>> from page_guard import evaluate_update, Tier
    >>> decision = evaluate_update(stored_content, {"sections": [...]}, Tier.CONTENT_EDITOR)
    >>> if not decision.accepted:
    ...     print([v.message for v in decision.violations])

Briques (utilisables séparément) :
    check_grammar        conformité de chaque bloc à sa variante
    check_unique_keys    clés uniques dans tout le document
    check_nesting_depth  profondeur ≤ 4 (section → conteneur → conteneur → contenu)
    structural_diff      forme existant vs proposé (CONTENT_EDITOR)
    is_structural_edit_allowed
"""
from .core import (
    BlockNode, Section, Document, PageUpdate, parse_document, parse_update,
    GrammarViolation, DuplicateKey, NestingDepthExceeded,
    SectionCountChanged, SectionReordered, BlockCountChanged, BlockReordered, BlockTypeChanged,
    StructuralViolation, Violation, ContentValidationError,
    Tier, coerce_tier, tier_at_least, is_structural_edit_allowed,
)
from .blocks import BlockUnion, BLOCK_REGISTRY, CONTAINER_TAGS, CONTENT_TAGS, is_container_tag
from .grammar import check_block, check_block_payload, check_grammar
from .tree import (
    collect_keys, describe_keys, find_duplicate_keys, check_unique_keys,
    section_depth, document_depth, check_nesting_depth,
)
from .diff import structural_diff, structural_diff_all, iter_structural_changes
from .catalog import BlockSpec, BLOCK_SPECS, get_block_spec, blocks_for_tier, create_default_block
from .service import UpdateDecision, merge_update, validate_document, evaluate_update, apply_update

__version__ = "0.1.0"

__all__ = [
    # Enveloppe
    "BlockNode", "Section", "Document", "PageUpdate", "parse_document", "parse_update",
    # Violations
    "GrammarViolation", "DuplicateKey", "NestingDepthExceeded",
    "SectionCountChanged", "SectionReordered", "BlockCountChanged", "BlockReordered", "BlockTypeChanged",
    "StructuralViolation", "Violation", "ContentValidationError",
    # Tiers
    "Tier", "coerce_tier", "tier_at_least", "is_structural_edit_allowed",
    # Grammaire
    "BlockUnion", "BLOCK_REGISTRY", "CONTAINER_TAGS", "CONTENT_TAGS", "is_container_tag",
    "check_block", "check_block_payload", "check_grammar",
    # Arbre
    "collect_keys", "describe_keys", "find_duplicate_keys", "check_unique_keys",
    "section_depth", "document_depth", "check_nesting_depth",
    # Diff
    "structural_diff", "structural_diff_all", "iter_structural_changes",
    # Catalogue
    "BlockSpec", "BLOCK_SPECS", "get_block_spec", "blocks_for_tier", "create_default_block",
    # Service
    "UpdateDecision", "merge_update", "validate_document", "evaluate_update", "apply_update",
]
