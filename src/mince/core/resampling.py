"""重采样模块。

固定使用 Lanczos 核的尺寸调整，结果总是新图像。
"""

from PIL import Image


RESAMPLE_FILTER = Image.Resampling.LANCZOS


def resample(
    raster: Image.Image,
    width: int,
    height: int,
    resample_filter: Image.Resampling = RESAMPLE_FILTER,
) -> Image.Image:
    """把图像重采样到指定尺寸

    源图像先转换为 8 位 RGBA，再执行缩放；源图像本身不会被修改。
    """
    rgba = raster if raster.mode == "RGBA" else raster.convert("RGBA")
    return rgba.resize((width, height), resample_filter)
