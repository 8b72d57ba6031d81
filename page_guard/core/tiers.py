"""
Tier Gate — capacité de l'acteur → modifications structurelles autorisées ou non.

CONTENT_EDITOR : modifie le contenu des blocs existants (textes, images, réglages)
BUILDER        : ajoute / supprime / réordonne / retype sections et blocs
"""
from enum import Enum
from typing import Dict, Union


class Tier(str, Enum):
    CONTENT_EDITOR = "CONTENT_EDITOR"
    BUILDER        = "BUILDER"


# Échelle ordonnée : un tier supérieur hérite des droits des tiers inférieurs
_TIER_RANK: Dict[str, int] = {
    "CONTENT_EDITOR": 0,
    "BUILDER":        1,
}

TierLike = Union[Tier, str]


def coerce_tier(tier: TierLike) -> Tier:
    """'BUILDER' → Tier.BUILDER. ValueError si la valeur est inconnue."""
    if isinstance(tier, Tier):
        return tier
    try:
        return Tier(str(tier).upper())
    except ValueError:
        raise ValueError(f"Tier inconnu : {tier!r}. Attendu : {[t.value for t in Tier]}") from None


def tier_at_least(tier: TierLike, required: TierLike) -> bool:
    return _TIER_RANK[coerce_tier(tier).value] >= _TIER_RANK[coerce_tier(required).value]


def is_structural_edit_allowed(tier: TierLike) -> bool:
    return tier_at_least(tier, Tier.BUILDER)
