"""Core module pour page_guard : enveloppe, violations, tiers."""
from .schemas import (
    BlockNode,
    Section,
    Document,
    PageUpdate,
    EMPTY_DOCUMENT,
    parse_document,
    parse_update,
)
from .violations import (
    GrammarViolation,
    DuplicateKey,
    NestingDepthExceeded,
    SectionCountChanged,
    SectionReordered,
    BlockCountChanged,
    BlockReordered,
    BlockTypeChanged,
    StructuralViolation,
    Violation,
    ContentValidationError,
)
from .tiers import Tier, coerce_tier, tier_at_least, is_structural_edit_allowed

__all__ = [
    "BlockNode",
    "Section",
    "Document",
    "PageUpdate",
    "EMPTY_DOCUMENT",
    "parse_document",
    "parse_update",
    "GrammarViolation",
    "DuplicateKey",
    "NestingDepthExceeded",
    "SectionCountChanged",
    "SectionReordered",
    "BlockCountChanged",
    "BlockReordered",
    "BlockTypeChanged",
    "StructuralViolation",
    "Violation",
    "ContentValidationError",
    "Tier",
    "coerce_tier",
    "tier_at_least",
    "is_structural_edit_allowed",
]
