"""
Violations — valeurs structurées (jamais des exceptions opaques).

Trois catégories :
  grammar    payload non conforme au tag déclaré          → toujours bloquant
  invariant  clé dupliquée / imbrication trop profonde    → toujours bloquant
  structure  forme modifiée alors que le tier l'interdit  → bloquant pour CONTENT_EDITOR seulement

Sérialisation camelCase (sectionKey, fromTag…) pour la couche transport.
"""
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

_UPGRADE_HINT = "Upgrade to Builder tier to modify page structure."


class _BaseViolation(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ── Grammar ─────────────────────────────────────────────────────────────────

class GrammarViolation(_BaseViolation):
    kind:     Literal["GrammarViolation"] = "GrammarViolation"
    category: Literal["grammar"]          = "grammar"
    key:      Optional[str] = None     # None si l'enveloppe elle-même est illisible
    tag:      Optional[str] = None
    field:    str
    reason:   str
    code:     str = "invalid"          # type d'erreur pydantic (missing, literal_error, string_type…)

    @computed_field
    @property
    def message(self) -> str:
        if self.key:
            where = f"{self.tag} '{self.key}'"
        else:
            where = self.tag or "document"
        return f"Invalid {where}: {self.field}: {self.reason}"


# ── Invariants ──────────────────────────────────────────────────────────────

class DuplicateKey(_BaseViolation):
    kind:      Literal["DuplicateKey"] = "DuplicateKey"
    category:  Literal["invariant"]    = "invariant"
    keys:      List[str]
    locations: Dict[str, List[str]] = Field(default_factory=dict)   # clé → chemins de chaque occurrence

    @computed_field
    @property
    def message(self) -> str:
        return f"Duplicate block keys found: {', '.join(self.keys)}. All block keys must be unique."


class NestingDepthExceeded(_BaseViolation):
    kind:        Literal["NestingDepthExceeded"] = "NestingDepthExceeded"
    category:    Literal["invariant"]            = "invariant"
    observed:    int
    max:         int
    section_key: Optional[str] = None

    @computed_field
    @property
    def message(self) -> str:
        return f"Block nesting exceeds maximum depth of {self.max} levels (found {self.observed})."


# ── Structure (tier CONTENT_EDITOR) ─────────────────────────────────────────

class SectionCountChanged(_BaseViolation):
    kind:     Literal["SectionCountChanged"] = "SectionCountChanged"
    category: Literal["structure"]           = "structure"
    expected: int
    actual:   int

    @computed_field
    @property
    def message(self) -> str:
        return f"Content Editor tier cannot add or remove sections. {_UPGRADE_HINT}"


class SectionReordered(_BaseViolation):
    kind:         Literal["SectionReordered"] = "SectionReordered"
    category:     Literal["structure"]        = "structure"
    key:          str
    proposed_key: str
    index:        int

    @computed_field
    @property
    def message(self) -> str:
        return f"Content Editor tier cannot reorder sections. {_UPGRADE_HINT}"


class BlockCountChanged(_BaseViolation):
    kind:        Literal["BlockCountChanged"] = "BlockCountChanged"
    category:    Literal["structure"]         = "structure"
    section_key: str
    parent_key:  Optional[str] = None   # conteneur concerné, None au niveau de la section
    expected:    int
    actual:      int

    @computed_field
    @property
    def message(self) -> str:
        return f"Content Editor tier cannot add or remove blocks. {_UPGRADE_HINT}"


class BlockReordered(_BaseViolation):
    kind:         Literal["BlockReordered"] = "BlockReordered"
    category:     Literal["structure"]      = "structure"
    key:          str
    proposed_key: str
    section_key:  str
    index:        int

    @computed_field
    @property
    def message(self) -> str:
        return f"Content Editor tier cannot reorder blocks. {_UPGRADE_HINT}"


class BlockTypeChanged(_BaseViolation):
    kind:        Literal["BlockTypeChanged"] = "BlockTypeChanged"
    category:    Literal["structure"]        = "structure"
    key:         str
    from_tag:    str
    to_tag:      str
    section_key: str

    @computed_field
    @property
    def message(self) -> str:
        return f"Content Editor tier cannot change block types. {_UPGRADE_HINT}"


StructuralViolation = Union[
    SectionCountChanged,
    SectionReordered,
    BlockCountChanged,
    BlockReordered,
    BlockTypeChanged,
]

# Union discriminée par kind
Violation = Annotated[
    Union[
        GrammarViolation,
        DuplicateKey,
        NestingDepthExceeded,
        SectionCountChanged,
        SectionReordered,
        BlockCountChanged,
        BlockReordered,
        BlockTypeChanged,
    ],
    Field(discriminator="kind"),
]


class ContentValidationError(ValueError):
    """Exception de confort pour les appelants qui préfèrent lever : porte les violations."""

    def __init__(self, violations: List[BaseModel]):
        self.violations = list(violations)
        first = self.violations[0].message if self.violations else "invalid content"
        super().__init__(first)

    @property
    def categories(self) -> List[str]:
        return sorted({v.category for v in self.violations})
