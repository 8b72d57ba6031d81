"""
Blocs conteneurs — container, stack, flex, grid, columns.
Seuls blocs autorisés à porter `blocks`. columns-block impose exactement `count` enfants.
"""
from typing import Literal, Optional

from pydantic import Field, StrictBool, StrictStr

from .base import BlockData, ContainerBlock, ItemAlign, Justify, Spacing


class ContainerData(BlockData):
    max_width:  Optional[Literal["none", "xs", "sm", "md", "lg", "xl", "full"]] = None
    padding:    Optional[Spacing] = None
    background: Optional[StrictStr] = None


class GenericContainerBlock(ContainerBlock):
    block_type: Literal["container-block"] = Field("container-block", alias="_type")
    data: ContainerData = Field(default_factory=ContainerData)


class StackData(BlockData):
    gap:   Optional[Spacing] = None
    align: Optional[ItemAlign] = None


class StackBlock(ContainerBlock):
    block_type: Literal["stack-block"] = Field("stack-block", alias="_type")
    data: StackData = Field(default_factory=StackData)


class FlexData(BlockData):
    direction: Optional[Literal["row", "column"]] = None
    justify:   Optional[Justify] = None
    align:     Optional[ItemAlign] = None
    gap:       Optional[Spacing] = None
    wrap:      Optional[StrictBool] = None


class FlexBlock(ContainerBlock):
    block_type: Literal["flex-block"] = Field("flex-block", alias="_type")
    data: FlexData = Field(default_factory=FlexData)


class GridData(BlockData):
    columns:   Optional[Literal["1", "2", "3", "4", "5", "6", "auto"]] = None
    gap:       Optional[Spacing] = None
    auto_flow: Optional[Literal["row", "column", "dense"]] = None


class GridBlock(ContainerBlock):
    block_type: Literal["grid-block"] = Field("grid-block", alias="_type")
    data: GridData = Field(default_factory=GridData)


class ColumnsData(BlockData):
    count:      Literal[2, 3, "2", "3"]   # l'éditeur envoie "2" / "3"
    gap:        Optional[Spacing] = None
    responsive: Optional[StrictBool] = None


class ColumnsBlock(ContainerBlock):
    block_type: Literal["columns-block"] = Field("columns-block", alias="_type")
    data: ColumnsData

    def expected_child_count(self) -> Optional[int]:
        return int(self.data.count)
