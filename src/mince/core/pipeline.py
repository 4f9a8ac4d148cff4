"""图像转换流水线。

加载 -> 查看 -> 缩放 -> 导出。每个 Mince 实例独占一张已解码图像
和描述它的元数据快照。
"""

from PIL import Image

from ..config import get_config
from ..exceptions import InvalidDimensionsError
from ..models.image_format import ImageFormat
from ..models.metadata import Metadata
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from . import codec
from .file_bridge import BlobFile, HostFile, read_all, wrap
from .resampling import resample


logger = get_logger()


class Mince:
    """已加载的图像

    只能通过 ``from_file`` 或 ``resize`` 创建。缩放不会修改原实例，
    持有旧实例的调用方始终看到原来的像素。
    """

    def __init__(self, raster: Image.Image, metadata: Metadata):
        self._raster = raster
        self._metadata = metadata

    @classmethod
    async def from_file(cls, handle: HostFile) -> "Mince":
        """从宿主文件句柄加载图像

        Raises:
            FileReadError: 读取句柄失败
            DetectImageFormatError: 无法识别图像格式
            DecodeImageError: 图像数据损坏或截断
        """
        data = await read_all(handle)
        raster, detected = codec.decode(data)

        metadata = Metadata(
            width=raster.width,
            height=raster.height,
            format=ImageFormat.from_detected(detected),
            size=len(data),
        )
        logger.info(
            f"加载图像: {metadata.format.value} "
            f"{MessageFormatter.dimensions(metadata.width, metadata.height)}, "
            f"{metadata.get_size_human()}"
        )
        return cls(raster, metadata)

    def meta(self) -> Metadata:
        return self._metadata

    @property
    def format(self) -> ImageFormat:
        return self._metadata.format

    @property
    def export_name(self) -> str:
        """导出文件名，扩展名来自解码时检测到的格式"""
        stem = get_config().export.FILE_STEM
        return f"{stem}.{self._metadata.format.extension()}"

    def resize(self, width: int, height: int) -> "Mince":
        """缩放到指定尺寸，返回新实例

        新元数据保留原格式和原始文件大小 ``size``。

        Raises:
            InvalidDimensionsError: 宽或高不大于 0
        """
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(
                MessageFormatter.validation_error(
                    "尺寸", MessageFormatter.dimensions(width, height), "必须大于 0"
                )
            )

        raster = resample(self._raster, width, height)
        metadata = self._metadata.model_copy(update={"width": width, "height": height})

        logger.debug(
            "缩放图像: "
            f"{MessageFormatter.dimensions(self._metadata.width, self._metadata.height)}"
            f" -> {MessageFormatter.dimensions(width, height)}"
        )
        return Mince(raster, metadata)

    def encode(self) -> bytes:
        """按检测到的格式编码

        Raises:
            EncodeImageError: 编码失败，或格式为 UNSUPPORTED
        """
        return codec.encode(self._raster, self._metadata.format)

    def to_file(self) -> BlobFile:
        """编码并包装为宿主文件对象

        Raises:
            EncodeImageError: 编码失败，或格式为 UNSUPPORTED
        """
        data = self.encode()
        return wrap(data, self.export_name, self._metadata.format.mime())

    def __repr__(self) -> str:
        meta = self._metadata
        return (
            f"Mince(format={meta.format.value}, "
            f"size={MessageFormatter.dimensions(meta.width, meta.height)})"
        )
