"""
Variantes de blocs — exports publics + BlockUnion discriminé par `_type`.

Catalogue fermé : un tag absent de BlockUnion est rejeté immédiatement
(erreur `union_tag_invalid` de pydantic). Ajouter une variante = l'ajouter ici.
"""
from typing import Annotated, Dict, FrozenSet, Type, Union

from pydantic import Field, TypeAdapter

from .base import (
    BaseBlock, BlockData, BlockRecord, ContentBlock, ContainerBlock,
    Align, ItemAlign, Justify, TextSize, Spacing, AspectRatio,
)
from .text import (
    HeadingBlock, HeadingData,
    TextBlock, TextData,
    RichTextBlock, RichTextData,
    QuoteBlock, QuoteData,
    ListBlock, ListData, ListItem,
)
from .media import (
    ImageBlock, ImageData,
    VideoBlock, VideoData,
    AudioBlock, AudioData,
    EmbedBlock, EmbedData,
    IconBlock, IconData,
    LogoBlock, LogoData,
    MapBlock, MapData, MapCenter,
)
from .interactive import (
    ButtonBlock, ButtonData,
    CardBlock, CardData,
    AccordionBlock, AccordionData, AccordionItem,
    TabsBlock, TabsData, TabItem,
    StatsBlock, StatsData, StatItem,
)
from .layout import DividerBlock, DividerData, SpacerBlock, SpacerData
from .containers import (
    GenericContainerBlock, ContainerData,
    StackBlock, StackData,
    FlexBlock, FlexData,
    GridBlock, GridData,
    ColumnsBlock, ColumnsData,
)

_VARIANTS = (
    # Contenu
    HeadingBlock,
    TextBlock,
    RichTextBlock,
    ButtonBlock,
    ImageBlock,
    CardBlock,
    VideoBlock,
    AudioBlock,
    ListBlock,
    QuoteBlock,
    DividerBlock,
    SpacerBlock,
    AccordionBlock,
    TabsBlock,
    EmbedBlock,
    IconBlock,
    StatsBlock,
    MapBlock,
    LogoBlock,
    # Conteneurs
    GenericContainerBlock,
    StackBlock,
    FlexBlock,
    GridBlock,
    ColumnsBlock,
)

# Union discriminée par block_type (alias `_type` sur le wire)
BlockUnion = Annotated[
    Union[
        HeadingBlock,
        TextBlock,
        RichTextBlock,
        ButtonBlock,
        ImageBlock,
        CardBlock,
        VideoBlock,
        AudioBlock,
        ListBlock,
        QuoteBlock,
        DividerBlock,
        SpacerBlock,
        AccordionBlock,
        TabsBlock,
        EmbedBlock,
        IconBlock,
        StatsBlock,
        MapBlock,
        LogoBlock,
        GenericContainerBlock,
        StackBlock,
        FlexBlock,
        GridBlock,
        ColumnsBlock,
    ],
    Field(discriminator="block_type"),
]

BLOCK_ADAPTER: TypeAdapter = TypeAdapter(BlockUnion)

BLOCK_REGISTRY: Dict[str, Type[BaseBlock]] = {
    cls.model_fields["block_type"].default: cls for cls in _VARIANTS
}

CONTAINER_TAGS: FrozenSet[str] = frozenset(t for t, cls in BLOCK_REGISTRY.items() if cls.is_container)
CONTENT_TAGS:   FrozenSet[str] = frozenset(t for t, cls in BLOCK_REGISTRY.items() if not cls.is_container)


def is_container_tag(tag: str) -> bool:
    return tag in CONTAINER_TAGS


__all__ = [
    # Base
    "BaseBlock", "BlockData", "BlockRecord", "ContentBlock", "ContainerBlock",
    "Align", "ItemAlign", "Justify", "TextSize", "Spacing", "AspectRatio",
    # Texte
    "HeadingBlock", "HeadingData",
    "TextBlock", "TextData",
    "RichTextBlock", "RichTextData",
    "QuoteBlock", "QuoteData",
    "ListBlock", "ListData", "ListItem",
    # Média
    "ImageBlock", "ImageData",
    "VideoBlock", "VideoData",
    "AudioBlock", "AudioData",
    "EmbedBlock", "EmbedData",
    "IconBlock", "IconData",
    "LogoBlock", "LogoData",
    "MapBlock", "MapData", "MapCenter",
    # Interactif
    "ButtonBlock", "ButtonData",
    "CardBlock", "CardData",
    "AccordionBlock", "AccordionData", "AccordionItem",
    "TabsBlock", "TabsData", "TabItem",
    "StatsBlock", "StatsData", "StatItem",
    # Mise en page
    "DividerBlock", "DividerData", "SpacerBlock", "SpacerData",
    # Conteneurs
    "GenericContainerBlock", "ContainerData",
    "StackBlock", "StackData",
    "FlexBlock", "FlexData",
    "GridBlock", "GridData",
    "ColumnsBlock", "ColumnsData",
    # Union + registry
    "BlockUnion", "BLOCK_ADAPTER", "BLOCK_REGISTRY",
    "CONTAINER_TAGS", "CONTENT_TAGS", "is_container_tag",
]
