"""
Catalogue des blocs — métadonnées éditeur + payloads par défaut + filtrage par tier.

Le contenu est insérable par CONTENT_EDITOR ; les conteneurs (qui modifient la
forme de la page) sont réservés à BUILDER.
"""
import copy
import uuid
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

from .blocks import BLOCK_REGISTRY
from .core.schemas import BlockNode
from .core.tiers import Tier, TierLike, tier_at_least

Category = Literal["content", "media", "interactive", "layout", "container"]


class BlockSpec(BaseModel):
    tag:          str
    display_name: str
    category:     Category
    description:  str
    tier:         Tier
    is_container: bool = False

    def data_schema(self) -> Dict[str, Any]:
        """JSON schema du payload `data` (clés camelCase)."""
        data_cls = BLOCK_REGISTRY[self.tag].model_fields["data"].annotation
        return data_cls.model_json_schema(by_alias=True)


# tag → (nom affiché, catégorie, description, payload par défaut)
_CATALOG: Dict[str, tuple] = {
    "heading-block":   ("Heading",   "content",     "Titre h1-h6",
                        {"text": "Heading", "level": "h2", "size": "2xl", "align": "left", "weight": "semibold", "color": "default"}),
    "text-block":      ("Text",      "content",     "Paragraphe simple",
                        {"text": "Your text here", "size": "md", "align": "left", "variant": "body"}),
    "rich-text-block": ("Rich Text", "content",     "Texte formaté (HTML)",
                        {"html": "<p>Start typing...</p>", "size": "md", "align": "left"}),
    "quote-block":     ("Quote",     "content",     "Citation",
                        {"text": "Insert your quote here...", "size": "md", "align": "left", "variant": "default"}),
    "list-block":      ("List",      "content",     "Liste à puces ou numérotée",
                        {"items": [{"text": "First item"}, {"text": "Second item"}, {"text": "Third item"}],
                         "ordered": False, "style": "default", "spacing": "comfortable"}),
    "image-block":     ("Image",     "media",       "Image avec texte alternatif",
                        {"src": "", "alt": "", "aspectRatio": "16/9", "objectFit": "cover", "rounded": False}),
    "video-block":     ("Video",     "media",       "Vidéo YouTube / Vimeo / fichier",
                        {"url": "", "provider": "youtube", "aspectRatio": "16/9",
                         "controls": True, "autoplay": False, "muted": False, "loop": False}),
    "audio-block":     ("Audio",     "media",       "Lecteur audio",
                        {"src": "", "controls": True, "autoplay": False, "loop": False}),
    "embed-block":     ("Embed",     "media",       "Code HTML embarqué",
                        {"html": "", "aspectRatio": "16/9"}),
    "icon-block":      ("Icon",      "media",       "Icône",
                        {"icon": "Star", "size": "md", "color": "default", "align": "center"}),
    "logo-block":      ("Logo",      "media",       "Logo de la marque",
                        {"src": "", "alt": "Logo", "size": "md", "align": "left"}),
    "map-block":       ("Map",       "media",       "Carte interactive",
                        {"center": {"lat": 40.7128, "lng": -74.006}, "zoom": 12, "height": "md", "style": "default"}),
    "button-block":    ("Button",    "interactive", "Bouton d'appel à l'action",
                        {"text": "Click me", "href": "#", "variant": "default", "size": "default",
                         "fullWidth": False, "openInNewTab": False}),
    "card-block":      ("Card",      "interactive", "Carte image + titre + description",
                        {"title": "Card Title", "description": "Card description goes here...",
                         "variant": "default", "padding": "md"}),
    "accordion-block": ("Accordion", "interactive", "Sections repliables",
                        {"items": [{"title": "First item", "content": "Content here...", "defaultOpen": False},
                                   {"title": "Second item", "content": "Content here...", "defaultOpen": False}],
                         "allowMultiple": False, "variant": "default"}),
    "tabs-block":      ("Tabs",      "interactive", "Onglets",
                        {"tabs": [{"label": "First tab", "content": "Content here..."},
                                  {"label": "Second tab", "content": "Content here..."}],
                         "defaultTab": 0, "variant": "default"}),
    "stats-block":     ("Stats",     "interactive", "Chiffres clés",
                        {"stats": [{"label": "Customers", "value": "1000+", "description": "Happy customers"},
                                   {"label": "Projects", "value": "50+", "description": "Completed"},
                                   {"label": "Years", "value": "10+", "description": "Experience"}],
                         "layout": "horizontal", "variant": "default"}),
    "divider-block":   ("Divider",   "layout",      "Séparateur horizontal",
                        {"style": "solid", "thickness": "thin", "spacing": "md", "color": "default"}),
    "spacer-block":    ("Spacer",    "layout",      "Espacement vertical",
                        {"height": "md"}),
    "container-block": ("Container", "container",   "Conteneur générique",
                        {"maxWidth": "full", "padding": "md", "background": "none"}),
    "stack-block":     ("Stack",     "container",   "Empilement vertical",
                        {"gap": "md", "align": "start"}),
    "flex-block":      ("Flex",      "container",   "Disposition flexbox",
                        {"direction": "row", "justify": "start", "align": "start", "gap": "md", "wrap": False}),
    "grid-block":      ("Grid",      "container",   "Grille CSS",
                        {"columns": "2", "gap": "md", "autoFlow": "row"}),
    "columns-block":   ("Columns",   "container",   "2 ou 3 colonnes",
                        {"count": "2", "gap": "md", "responsive": True}),
}

BLOCK_SPECS: Dict[str, BlockSpec] = {
    tag: BlockSpec(
        tag=tag,
        display_name=name,
        category=category,
        description=desc,
        tier=Tier.BUILDER if BLOCK_REGISTRY[tag].is_container else Tier.CONTENT_EDITOR,
        is_container=BLOCK_REGISTRY[tag].is_container,
    )
    for tag, (name, category, desc, _) in _CATALOG.items()
}


def get_block_spec(tag: str) -> BlockSpec:
    """KeyError si le tag ne fait pas partie du catalogue."""
    try:
        return BLOCK_SPECS[tag]
    except KeyError:
        raise KeyError(f"Bloc inconnu : {tag!r}. Catalogue : {list(BLOCK_SPECS)}") from None


def blocks_for_tier(tier: TierLike) -> List[BlockSpec]:
    """Blocs qu'un tier peut insérer (BUILDER voit tout)."""
    return [spec for spec in BLOCK_SPECS.values() if tier_at_least(tier, spec.tier)]


def default_data(tag: str) -> Dict[str, Any]:
    get_block_spec(tag)
    return copy.deepcopy(_CATALOG[tag][3])


def new_key(tag: str) -> str:
    return f"{tag.replace('-block', '')}-{uuid.uuid4().hex[:12]}"


def create_default_block(tag: str, key: Optional[str] = None) -> BlockNode:
    """
    Bloc neuf prêt à insérer (clé unique + payload par défaut conforme).
    columns-block est créé avec autant de stack-block vides que de colonnes.
    """
    spec = get_block_spec(tag)
    data = default_data(tag)
    children = None
    if spec.is_container:
        children = []
        if tag == "columns-block":
            children = [create_default_block("stack-block") for _ in range(int(data["count"]))]
    return BlockNode(key=key or new_key(tag), block_type=tag, data=data, blocks=children)
