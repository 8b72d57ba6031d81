"""
Enveloppe filaire du document : Document → Section → BlockNode (récursif).

L'enveloppe ne connaît pas les variantes de blocs : `_type` reste une chaîne
libre et `data` un dict opaque. La conformité par variante est vérifiée à part
(voir page_guard.grammar), ce qui permet de signaler les erreurs de grammaire
et les erreurs d'invariants indépendamment.

Tous les modèles sont immuables (frozen) : un update produit un nouveau Document.
"""
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BlockNode(BaseModel):
    """Bloc tel que reçu : clé, tag, payload, enfants (conteneurs uniquement)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    key:        str                         = Field(..., alias="_key")
    block_type: str                         = Field(..., alias="_type")
    data:       Dict[str, Any]              = Field(default_factory=dict)
    blocks:     Optional[List["BlockNode"]] = None

    @property
    def children(self) -> List["BlockNode"]:
        return list(self.blocks or [])


class Section(BaseModel):
    """
    Région verticale d'une page.
    Les réglages de présentation (background, spacing, width, align, paddingY…)
    sont opaques pour le core et conservés tels quels (extra="allow").
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    key:          str                 = Field(..., alias="_key", min_length=1)
    section_type: Literal["section"]  = Field("section", alias="_type")
    background:   Optional[Any]       = None   # str (legacy) ou objet
    spacing:      Optional[str]       = None
    width:        Optional[str]       = None
    align:        Optional[str]       = None
    blocks:       List[BlockNode]     = Field(default_factory=list)


class Document(BaseModel):
    """Contenu complet d'une page/post. Champs annexes (seo, accessibility…) conservés."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    sections: List[Section] = Field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PageUpdate(BaseModel):
    """
    Update partiel : `sections` absent → aucune modification de structure proposée.
    Les autres champs de contenu (seo, accessibility, performance…) passent en extra.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    sections: Optional[List[Section]] = None

    @property
    def proposes_structure(self) -> bool:
        return self.sections is not None


EMPTY_DOCUMENT = Document()


def parse_document(raw: Union[Document, Mapping[str, Any], None]) -> Document:
    """dict JSON → Document. Lève pydantic.ValidationError si l'enveloppe est invalide."""
    if raw is None:
        return EMPTY_DOCUMENT
    if isinstance(raw, Document):
        return raw
    return Document.model_validate(raw)


def parse_update(raw: Union[PageUpdate, Document, Mapping[str, Any]]) -> PageUpdate:
    """dict JSON → PageUpdate. Un Document complet vaut update de toutes ses sections."""
    if isinstance(raw, PageUpdate):
        return raw
    if isinstance(raw, Document):
        return PageUpdate.model_validate(raw.model_dump(by_alias=True))
    return PageUpdate.model_validate(raw)
