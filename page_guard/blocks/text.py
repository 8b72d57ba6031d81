"""Blocs texte — heading, text, rich-text, quote, list."""
from typing import List, Literal, Optional

from pydantic import Field, StrictBool, StrictStr

from .base import Align, BlockData, BlockRecord, ContentBlock, TextSize


class HeadingData(BlockData):
    text:   StrictStr = Field(..., min_length=1)
    level:  Literal["h1", "h2", "h3", "h4", "h5", "h6"] = "h2"
    size:   Optional[TextSize] = None
    align:  Optional[Align] = None
    weight: Optional[Literal["normal", "medium", "semibold", "bold"]] = None
    color:  Optional[StrictStr] = None


class HeadingBlock(ContentBlock):
    block_type: Literal["heading-block"] = Field("heading-block", alias="_type")
    data: HeadingData


class TextData(BlockData):
    text:    StrictStr
    size:    Optional[TextSize] = None
    align:   Optional[Align] = None
    variant: Optional[Literal["body", "lead", "muted", "small"]] = None


class TextBlock(ContentBlock):
    block_type: Literal["text-block"] = Field("text-block", alias="_type")
    data: TextData


class RichTextData(BlockData):
    html:  StrictStr
    size:  Optional[TextSize] = None
    align: Optional[Align] = None


class RichTextBlock(ContentBlock):
    block_type: Literal["rich-text-block"] = Field("rich-text-block", alias="_type")
    data: RichTextData


class QuoteData(BlockData):
    text:    StrictStr
    author:  Optional[StrictStr] = None
    size:    Optional[TextSize] = None
    align:   Optional[Align] = None
    variant: Optional[Literal["default", "bordered", "highlighted"]] = None


class QuoteBlock(ContentBlock):
    block_type: Literal["quote-block"] = Field("quote-block", alias="_type")
    data: QuoteData


class ListItem(BlockRecord):
    text: StrictStr


class ListData(BlockData):
    items:   List[ListItem]
    ordered: Optional[StrictBool] = None
    style:   Optional[Literal["default", "check", "arrow", "none"]] = None
    spacing: Optional[Literal["compact", "comfortable", "spacious"]] = None


class ListBlock(ContentBlock):
    block_type: Literal["list-block"] = Field("list-block", alias="_type")
    data: ListData
