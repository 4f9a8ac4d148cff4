"""测试配置文件。

提供测试所需的fixtures和配置。
"""

import asyncio
import os
import tempfile
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from mince.config import reset_config


def run(coro):
    """在测试中执行协程"""
    return asyncio.run(coro)


def image_bytes(img: Image.Image, format_name: str, **params) -> bytes:
    """把图片编码为字节"""
    buffer = BytesIO()
    img.save(buffer, format=format_name, **params)
    return buffer.getvalue()


def _draw_sample(mode: str, size: tuple[int, int]) -> Image.Image:
    """带几何图案的测试图片"""
    fill = (255, 255, 255, 0) if mode == "RGBA" else "white"
    img = Image.new(mode, size, color=fill)
    draw = ImageDraw.Draw(img)
    width, height = size
    for i in range(10):
        x, y = (i * width) // 10, (i * height) // 10
        color = (i * 25 % 256, 100 + i * 15, 255 - i * 20, 200)
        draw.rectangle([x, y, x + width // 5, y + height // 5], fill=color[: len(mode)])
    return img


@pytest.fixture(autouse=True)
def clean_config():
    """每个测试使用全新的全局配置"""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def jpeg_exif_bytes() -> bytes:
    """2048x1536 基线 JPEG，带 EXIF 方向信息（旋转 90°）"""
    img = _draw_sample("RGB", (2048, 1536))
    exif = Image.Exif()
    exif[0x0112] = 6
    return image_bytes(img, "JPEG", quality=90, exif=exif.tobytes())


@pytest.fixture
def png_bytes() -> bytes:
    return image_bytes(_draw_sample("RGBA", (120, 80)), "PNG")


@pytest.fixture
def gif_bytes() -> bytes:
    return image_bytes(_draw_sample("RGB", (64, 48)).convert("P"), "GIF")


@pytest.fixture
def bmp_bytes() -> bytes:
    """Pillow 可解码但不支持导出的格式"""
    return image_bytes(_draw_sample("RGB", (40, 30)), "BMP")


@pytest.fixture
def noisy_png_bytes() -> bytes:
    """随机像素的 PNG，压缩后数据足够大，便于构造截断文件"""
    img = Image.frombytes("RGB", (128, 128), os.urandom(128 * 128 * 3))
    return image_bytes(img, "PNG")


@pytest.fixture
def garbage_bytes() -> bytes:
    return b"definitely not an image, just some text" * 10


@pytest.fixture
def mpo_bytes() -> bytes:
    """两帧 MPO：带 MPF 扩展的多图 JPEG"""
    first = _draw_sample("RGB", (64, 48))
    second = Image.new("RGB", (64, 48), "navy")
    return image_bytes(first, "MPO", save_all=True, append_images=[second])


@pytest.fixture
def tga_like_bytes() -> bytes:
    """只满足 TGA 头部字段校验、没有任何魔数的数据"""
    return b"\x00\x00\x02" + b"\x00" * 9 + b"\x10\x00\x10\x00\x18\x00" + b"\x00" * 800


@pytest.fixture
def ppm_header_bytes() -> bytes:
    """只有魔数、头部不完整的 PPM"""
    return b"P6\n"
