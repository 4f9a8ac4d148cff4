"""图像元数据模型。

描述一张已解码图像的不可变快照。
"""

from typing import Any

from humanize import naturalsize
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .image_format import ImageFormat


U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


class Metadata(BaseModel):
    """图像元数据快照

    ``size`` 是原始输入文件的字节数，缩放后保持不变，不能用来推测缩放后
    重新编码的文件大小。
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=0, le=U32_MAX, description="图片宽度")
    height: int = Field(ge=0, le=U32_MAX, description="图片高度")
    format: ImageFormat = Field(description="检测到的图片格式")
    size: int = Field(ge=0, le=U64_MAX, description="原始文件大小（字节）")

    @computed_field
    def aspect_ratio(self) -> float:
        """宽高比"""
        return self.width / self.height if self.height > 0 else 0.0

    @computed_field
    def orientation(self) -> str:
        """图片方向"""
        if self.width > self.height:
            return "landscape"
        if self.height > self.width:
            return "portrait"
        return "square"

    def get_size_human(self) -> str:
        """人性化显示原始文件大小"""
        return naturalsize(self.size, binary=True)

    def to_dict(self) -> dict[str, Any]:
        """转换为宿主侧响应格式"""
        return {
            "width": self.width,
            "height": self.height,
            "format": self.format.value,
            "mime": self.format.mime(),
            "size": self.size,
            "size_human": self.get_size_human(),
            "aspect_ratio": self.aspect_ratio,
            "orientation": self.orientation,
        }
