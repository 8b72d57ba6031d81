"""Blocs interactifs — button, card, accordion, tabs, stats."""
from typing import List, Literal, Optional

from pydantic import Field, StrictBool, StrictInt, StrictStr, model_validator

from .base import BlockData, BlockRecord, ContentBlock, Spacing


class ButtonData(BlockData):
    text:            StrictStr = Field(..., min_length=1)
    href:            StrictStr
    variant:         Optional[Literal["default", "secondary", "outline", "ghost", "link", "destructive"]] = None
    size:            Optional[Literal["default", "sm", "lg", "icon"]] = None
    full_width:      Optional[StrictBool] = None
    open_in_new_tab: Optional[StrictBool] = None


class ButtonBlock(ContentBlock):
    block_type: Literal["button-block"] = Field("button-block", alias="_type")
    data: ButtonData


class CardData(BlockData):
    title:       StrictStr
    description: Optional[StrictStr] = None
    image:       Optional[StrictStr] = None
    variant:     Optional[Literal["default", "outlined", "elevated", "ghost"]] = None
    padding:     Optional[Spacing] = None


class CardBlock(ContentBlock):
    block_type: Literal["card-block"] = Field("card-block", alias="_type")
    data: CardData


class AccordionItem(BlockRecord):
    title:        StrictStr
    content:      StrictStr
    default_open: Optional[StrictBool] = None


class AccordionData(BlockData):
    items:          List[AccordionItem]
    allow_multiple: Optional[StrictBool] = None
    variant:        Optional[Literal["default", "bordered", "separated"]] = None


class AccordionBlock(ContentBlock):
    block_type: Literal["accordion-block"] = Field("accordion-block", alias="_type")
    data: AccordionData


class TabItem(BlockRecord):
    label:   StrictStr
    content: StrictStr


class TabsData(BlockData):
    tabs:        List[TabItem] = Field(..., min_length=1)
    default_tab: Optional[StrictInt] = Field(None, ge=0)
    variant:     Optional[Literal["default", "pills", "underline"]] = None

    @model_validator(mode="after")
    def default_tab_in_range(self):
        if self.default_tab is not None and self.default_tab >= len(self.tabs):
            raise ValueError(f"defaultTab {self.default_tab} out of range for {len(self.tabs)} tabs")
        return self


class TabsBlock(ContentBlock):
    block_type: Literal["tabs-block"] = Field("tabs-block", alias="_type")
    data: TabsData


class StatItem(BlockRecord):
    label:       StrictStr
    value:       StrictStr
    description: Optional[StrictStr] = None


class StatsData(BlockData):
    stats:   List[StatItem]
    layout:  Optional[Literal["horizontal", "vertical", "grid"]] = None
    variant: Optional[Literal["default", "cards", "minimal"]] = None


class StatsBlock(ContentBlock):
    block_type: Literal["stats-block"] = Field("stats-block", alias="_type")
    data: StatsData
