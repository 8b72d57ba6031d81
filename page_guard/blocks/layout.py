"""Blocs de mise en page sans enfants — divider, spacer."""
from typing import Literal, Optional

from pydantic import Field, StrictStr

from .base import BlockData, ContentBlock, Spacing


class DividerData(BlockData):
    style:     Optional[Literal["solid", "dashed", "dotted"]] = None
    thickness: Optional[Literal["thin", "medium", "thick"]] = None
    spacing:   Optional[Spacing] = None
    color:     Optional[StrictStr] = None


class DividerBlock(ContentBlock):
    block_type: Literal["divider-block"] = Field("divider-block", alias="_type")
    data: DividerData = Field(default_factory=DividerData)


class SpacerData(BlockData):
    height: Spacing


class SpacerBlock(ContentBlock):
    block_type: Literal["spacer-block"] = Field("spacer-block", alias="_type")
    data: SpacerData
