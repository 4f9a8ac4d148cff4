"""编解码适配模块。

包装 Pillow 的格式嗅探、解码与编码，把库的原生异常转换为类型化错误。
格式只从字节内容推断，从不信任文件名或声明的 MIME 类型。
"""

from io import BytesIO
from typing import Any

from PIL import Image, UnidentifiedImageError

from ..config import get_config
from ..exceptions import (
    DecodeImageError,
    DetectImageFormatError,
    EncodeImageError,
    handle_codec_errors,
)
from ..models.constants import ImageFormats, supports_transparency
from ..models.image_format import ImageFormat
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


def decode(data: bytes) -> tuple[Image.Image, str | None]:
    """嗅探格式并完整解码。

    Args:
        data: 原始文件字节

    Returns:
        tuple: (解码后的图像, Pillow 检测到的格式名)

    Raises:
        DetectImageFormatError: 字节不匹配任何已知格式签名
        DecodeImageError: 格式已识别但数据截断、损坏或使用了不支持的特性
    """
    img = _sniff(data)
    detected = img.format
    _load(img)

    logger.debug(
        f"解码完成: {detected} "
        f"{MessageFormatter.dimensions(img.width, img.height)} {img.mode}"
    )
    return img, detected


@handle_codec_errors(DecodeImageError, "图像嗅探")
def _sniff(data: bytes) -> Image.Image:
    """格式嗅探，只读取文件头"""
    try:
        img = Image.open(BytesIO(data))
    except UnidentifiedImageError as e:
        logger.warning(f"无法识别图像格式 ({len(data)} 字节)")
        raise DetectImageFormatError() from e

    if img.format in ImageFormats.WEAK_SIGNATURE_FORMATS:
        logger.warning(f"无法识别图像格式: 仅匹配无签名格式 {img.format}")
        raise DetectImageFormatError()

    return img


@handle_codec_errors(DecodeImageError, "图像解码")
def _load(img: Image.Image) -> None:
    """完整解码像素数据"""
    img.load()


@handle_codec_errors(EncodeImageError, "图像编码")
def encode(raster: Image.Image, fmt: ImageFormat) -> bytes:
    """把图像编码为目标格式的字节。

    Args:
        raster: 待编码图像
        fmt: 目标格式

    Returns:
        bytes: 编码后的文件内容

    Raises:
        UnsupportedFormatError: 目标格式为 UNSUPPORTED
        EncodeImageError: 图像尺寸为零或编码器拒绝该图像
    """
    target_format = fmt.to_encode_target()

    if raster.width == 0 or raster.height == 0:
        raise EncodeImageError(
            f"无法编码空图像: {MessageFormatter.dimensions(raster.width, raster.height)}"
        )

    prepared = prepare_for_format(raster, target_format)
    buffer = BytesIO()
    prepared.save(buffer, format=target_format, **get_save_parameters(target_format))
    encoded = buffer.getvalue()

    logger.debug(f"编码完成: {target_format} {len(encoded)} 字节")
    return encoded


def prepare_for_format(img: Image.Image, target_format: str) -> Image.Image:
    """为目标格式准备图片的色彩模式

    Args:
        img: PIL图片对象
        target_format: Pillow 编码器格式名

    Returns:
        Image.Image: 处理后的图片对象（可能是原对象）
    """
    if not supports_transparency(target_format) and _has_alpha(img):
        img = _flatten_alpha(img)

    match target_format:
        case "JPEG":
            return _prepare_for_jpeg(img)
        case "PNG":
            return _prepare_for_png(img)
        case "GIF":
            return _prepare_for_gif(img)
        case _:
            return img


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def _flatten_alpha(img: Image.Image) -> Image.Image:
    """透明图像合成到背景色上"""
    rgba = img.convert("RGBA")
    background = Image.new("RGB", rgba.size, get_config().codec.JPEG_BACKGROUND)
    background.paste(rgba, mask=rgba.split()[-1])
    return background


def _prepare_for_jpeg(img: Image.Image) -> Image.Image:
    """JPEG 可直接写出 RGB、L、CMYK，其余转换为 RGB"""
    if img.mode in ("RGB", "L", "CMYK"):
        return img

    return img.convert("RGB")


def _prepare_for_png(img: Image.Image) -> Image.Image:
    """PNG 支持大部分模式，只转换 CMYK 等不可写模式"""
    if img.mode == "CMYK":
        return img.convert("RGB")

    if img.mode in ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"):
        return img

    return img.convert("RGBA")


def _prepare_for_gif(img: Image.Image) -> Image.Image:
    """GIF 由 Pillow 自动量化为调色板，只处理 CMYK"""
    if img.mode == "CMYK":
        return img.convert("RGB")
    return img


def get_save_parameters(format_name: str) -> dict[str, Any]:
    """获取保存参数

    JPEG 固定使用最高质量，不提供有损质量配置。
    """
    codec_config = get_config().codec

    match format_name:
        case "JPEG":
            return {"quality": codec_config.JPEG_QUALITY}
        case "PNG":
            return {"compress_level": codec_config.PNG_COMPRESS_LEVEL}
        case _:
            return {}
