"""Blocs média — image, video, audio, embed, icon, logo, map."""
from typing import Literal, Optional

from pydantic import Field, StrictBool, StrictInt, StrictStr

from .base import Align, AspectRatio, BlockData, BlockRecord, ContentBlock

IconSize = Literal["xs", "sm", "md", "lg", "xl", "2xl"]


class ImageData(BlockData):
    src:          StrictStr
    alt:          StrictStr
    aspect_ratio: Optional[AspectRatio] = None
    object_fit:   Optional[Literal["cover", "contain", "fill", "none"]] = None
    rounded:      Optional[StrictBool] = None
    caption:      Optional[StrictStr] = None


class ImageBlock(ContentBlock):
    block_type: Literal["image-block"] = Field("image-block", alias="_type")
    data: ImageData


class VideoData(BlockData):
    url:          StrictStr
    provider:     Optional[Literal["youtube", "vimeo", "file"]] = None
    aspect_ratio: Optional[AspectRatio] = None
    controls:     Optional[StrictBool] = None
    autoplay:     Optional[StrictBool] = None
    muted:        Optional[StrictBool] = None
    loop:         Optional[StrictBool] = None


class VideoBlock(ContentBlock):
    block_type: Literal["video-block"] = Field("video-block", alias="_type")
    data: VideoData


class AudioData(BlockData):
    src:      StrictStr
    title:    Optional[StrictStr] = None
    controls: Optional[StrictBool] = None
    autoplay: Optional[StrictBool] = None
    loop:     Optional[StrictBool] = None


class AudioBlock(ContentBlock):
    block_type: Literal["audio-block"] = Field("audio-block", alias="_type")
    data: AudioData


class EmbedData(BlockData):
    html:         StrictStr
    aspect_ratio: Optional[AspectRatio] = None


class EmbedBlock(ContentBlock):
    block_type: Literal["embed-block"] = Field("embed-block", alias="_type")
    data: EmbedData


class IconData(BlockData):
    icon:  StrictStr = Field(..., min_length=1)   # nom d'icône lucide ("Star", "Check"…)
    size:  Optional[IconSize] = None
    color: Optional[StrictStr] = None
    align: Optional[Align] = None


class IconBlock(ContentBlock):
    block_type: Literal["icon-block"] = Field("icon-block", alias="_type")
    data: IconData


class LogoData(BlockData):
    src:   StrictStr
    alt:   Optional[StrictStr] = None
    size:  Optional[IconSize] = None
    align: Optional[Align] = None
    href:  Optional[StrictStr] = None


class LogoBlock(ContentBlock):
    block_type: Literal["logo-block"] = Field("logo-block", alias="_type")
    data: LogoData


class MapCenter(BlockRecord):
    lat: float = Field(..., ge=-90, le=90, strict=True)     # int accepté, str / bool refusés
    lng: float = Field(..., ge=-180, le=180, strict=True)


class MapData(BlockData):
    center: MapCenter
    zoom:   Optional[StrictInt] = Field(None, ge=1, le=20)
    height: Optional[Literal["sm", "md", "lg", "xl"]] = None
    style:  Optional[Literal["default", "grayscale", "dark"]] = None


class MapBlock(ContentBlock):
    block_type: Literal["map-block"] = Field("map-block", alias="_type")
    data: MapData
