"""图像格式枚举。

封闭的输出格式集合，外加一个"不支持"哨兵值。
"""

from enum import Enum

from ..exceptions import UnsupportedFormatError
from .constants import ImageFormats, get_format_alias


class ImageFormat(str, Enum):
    """支持的图像格式"""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_detected(cls, detected: str | None) -> "ImageFormat":
        """从 Pillow 检测到的格式名转换，未知格式一律映射为 UNSUPPORTED"""
        if not detected:
            return cls.UNSUPPORTED
        value = ImageFormats.PIL_FORMATS.get(get_format_alias(detected))
        return cls(value) if value else cls.UNSUPPORTED

    def mime(self) -> str:
        """MIME 类型，UNSUPPORTED 返回哨兵值"""
        return ImageFormats.MIME_TYPES.get(self.value, ImageFormats.UNSUPPORTED_MIME)

    def extension(self) -> str:
        """文件扩展名（不含点），UNSUPPORTED 返回哨兵值"""
        return ImageFormats.EXTENSIONS.get(
            self.value, ImageFormats.UNSUPPORTED_EXTENSION
        )

    def to_encode_target(self) -> str:
        """转换为 Pillow 编码器格式名

        Raises:
            UnsupportedFormatError: 格式为 UNSUPPORTED 时
        """
        if self is ImageFormat.UNSUPPORTED:
            raise UnsupportedFormatError(f"不支持编码该图像格式: {self.value}")
        return self.name
