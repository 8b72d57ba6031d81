"""
Blocs de base — grammaire fermée des variantes.

Chaque variante = BaseBlock discriminé par `_type` + un modèle BlockData pour son payload.
ContentBlock : jamais d'enfants (extra="forbid" → `blocks` refusé).
ContainerBlock : liste ordonnée d'enfants + contrôle d'arité optionnel.

Les enfants ne sont PAS validés ici : le walker (page_guard.grammar) descend
lui-même dans l'arbre pour rattacher chaque erreur à la clé du bloc fautif.
"""
from typing import Any, ClassVar, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# ── Énumérations partagées ──────────────────────────────────────────────────

Align       = Literal["left", "center", "right"]
ItemAlign   = Literal["start", "center", "end", "stretch", "baseline"]
Justify     = Literal["start", "center", "end", "between", "around", "evenly"]
TextSize    = Literal["xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl"]
Spacing     = Literal["none", "xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl", "7xl"]
AspectRatio = Literal["16/9", "4/3", "1/1", "3/2", "21/9", "9/16", "auto"]


class BlockRecord(BaseModel):
    """Enregistrement plat : clés camelCase côté wire, champs inconnus tolérés."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class BlockData(BlockRecord):
    """Payload `data` d'un bloc (textes, URLs, réglages)."""
    pass


class BaseBlock(BaseModel):
    """Bloc de base (classe parente de toutes les variantes)."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    is_container: ClassVar[bool] = False

    key:        str       = Field(..., alias="_key", min_length=1, strict=True)
    block_type: str       = Field(..., alias="_type")
    data:       BlockData = Field(default_factory=BlockData)


class ContentBlock(BaseBlock):
    """Bloc feuille (heading, text, image…)."""
    pass


class ContainerBlock(BaseBlock):
    """Bloc conteneur (grid, flex, stack, container, columns)."""
    is_container: ClassVar[bool] = True

    blocks: List[Any] = Field(default_factory=list)

    def expected_child_count(self) -> Optional[int]:
        """Nombre exact d'enfants requis, None = libre (≥ 0)."""
        return None

    @model_validator(mode="after")
    def check_arity(self):
        expected = self.expected_child_count()
        if expected is not None and len(self.blocks) != expected:
            raise ValueError(
                f"{self.block_type} declares {expected} children but has {len(self.blocks)}"
            )
        return self
