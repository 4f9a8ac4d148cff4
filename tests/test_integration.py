"""集成测试。

测试加载 -> 查看 -> 缩放 -> 导出的端到端流程和 MCP 服务器。
"""

from io import BytesIO

import pytest
from PIL import Image

from mince import (
    BlobFile,
    DetectImageFormatError,
    FileReadError,
    ImageFormat,
    InvalidDimensionsError,
    Metadata,
    Mince,
    PathFile,
    UnsupportedFormatError,
)
from tests.conftest import run


def load(data: bytes, name: str = "input", mime: str = "application/octet-stream"):
    """从内存字节加载"""
    return run(Mince.from_file(BlobFile(name=name, mime_type=mime, data=data)))


class TestMince:
    """图像流水线测试"""

    def test_reads_file_metadata(self, jpeg_exif_bytes):
        """带 EXIF 方向信息的 JPEG 保持存储尺寸"""
        mince = load(jpeg_exif_bytes, "photo.jpg", "image/jpeg")

        assert mince.meta() == Metadata(
            width=2048, height=1536, format=ImageFormat.JPEG, size=len(jpeg_exif_bytes)
        )
        assert mince.format is ImageFormat.JPEG

    def test_encodes_jpeg(self, jpeg_exif_bytes):
        exported = load(jpeg_exif_bytes).to_file()

        assert exported.name == "mince_image.jpeg"
        assert exported.mime_type == "image/jpeg"
        assert exported.size > 0
        with Image.open(BytesIO(exported.data)) as img:
            assert img.format == "JPEG"
            assert img.size == (2048, 1536)

    def test_resize(self, jpeg_exif_bytes):
        mince = load(jpeg_exif_bytes)
        resized = mince.resize(1024, 768)

        assert resized.meta() == Metadata(
            width=1024, height=768, format=ImageFormat.JPEG, size=len(jpeg_exif_bytes)
        )

    def test_resize_does_not_mutate_source(self, png_bytes):
        mince = load(png_bytes)
        before = mince.meta()

        resized = mince.resize(12, 34)

        assert resized is not mince
        assert mince.meta() == before
        with Image.open(BytesIO(mince.encode())) as img:
            assert img.size == (120, 80)
        with Image.open(BytesIO(resized.encode())) as img:
            assert img.size == (12, 34)

    @pytest.mark.parametrize(("width", "height"), [(1, 1), (37, 5), (500, 300)])
    def test_resize_shape_and_format(self, gif_bytes, width, height):
        mince = load(gif_bytes)
        resized = mince.resize(width, height)

        assert resized.meta().width == width
        assert resized.meta().height == height
        assert resized.meta().format == mince.meta().format
        assert resized.meta().size == mince.meta().size

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-1, 5)])
    def test_resize_rejects_non_positive(self, png_bytes, width, height):
        with pytest.raises(InvalidDimensionsError):
            load(png_bytes).resize(width, height)

    @pytest.mark.parametrize(
        ("fixture", "fmt"),
        [("png_bytes", ImageFormat.PNG), ("gif_bytes", ImageFormat.GIF)],
    )
    def test_export_identity(self, request, fixture, fmt):
        mince = load(request.getfixturevalue(fixture))
        exported = mince.resize(20, 10).to_file()

        assert mince.meta().format is fmt
        assert exported.mime_type == mince.meta().format.mime()
        assert exported.name == "mince_image." + mince.meta().format.extension()

    def test_format_detected_from_content(self, png_bytes):
        """文件名和 MIME 与内容不符时以内容为准"""
        mince = load(png_bytes, "photo.jpg", "image/jpeg")

        assert mince.meta().format is ImageFormat.PNG
        assert mince.to_file().name == "mince_image.png"

    def test_exported_file_can_be_reloaded(self, png_bytes):
        exported = load(png_bytes).resize(60, 40).to_file()
        reloaded = run(Mince.from_file(exported))

        assert reloaded.meta() == Metadata(
            width=60, height=40, format=ImageFormat.PNG, size=exported.size
        )

    def test_multi_picture_jpeg(self, mpo_bytes):
        """相机输出的多图 JPEG 按 JPEG 加载和导出"""
        mince = load(mpo_bytes, "stereo.jpg", "image/jpeg")

        assert mince.meta() == Metadata(
            width=64, height=48, format=ImageFormat.JPEG, size=len(mpo_bytes)
        )
        exported = mince.resize(32, 24).to_file()
        assert exported.name == "mince_image.jpeg"
        assert exported.mime_type == "image/jpeg"
        with Image.open(BytesIO(exported.data)) as img:
            assert img.format == "JPEG"
            assert img.size == (32, 24)

    def test_garbage_input(self, garbage_bytes):
        with pytest.raises(DetectImageFormatError):
            load(garbage_bytes)

    def test_headerless_input(self, tga_like_bytes):
        """只匹配无签名格式的数据视为无法识别"""
        with pytest.raises(DetectImageFormatError):
            load(tga_like_bytes)

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileReadError):
            run(Mince.from_file(PathFile(temp_dir / "missing.jpg")))

    def test_load_from_path(self, temp_dir, gif_bytes):
        path = temp_dir / "anim.gif"
        path.write_bytes(gif_bytes)

        mince = run(Mince.from_file(PathFile(path)))

        assert mince.meta().format is ImageFormat.GIF
        assert mince.meta().size == len(gif_bytes)

    def test_unsupported_format(self, bmp_bytes):
        """可解码但不支持导出的格式：元数据可用，导出失败"""
        mince = load(bmp_bytes)

        assert mince.meta().format is ImageFormat.UNSUPPORTED
        assert mince.meta().width == 40
        assert mince.export_name == "mince_image.unsupported"
        with pytest.raises(UnsupportedFormatError):
            mince.to_file()
        with pytest.raises(UnsupportedFormatError):
            mince.resize(10, 10).encode()


class TestMCPServer:
    """MCP服务器功能测试"""

    def test_mcp_tools(self):
        from mince.mcp_server import export_image, get_image_meta, mcp, resize_image

        assert mcp is not None
        assert get_image_meta.name == "get_image_meta"
        assert resize_image.name == "resize_image"
        assert export_image.name == "export_image"

    def test_get_image_meta(self, temp_dir, jpeg_exif_bytes):
        from mince.mcp_server import get_image_meta

        path = temp_dir / "photo.jpg"
        path.write_bytes(jpeg_exif_bytes)

        result = run(get_image_meta.fn(str(path)))

        assert result["success"]
        assert result["meta"]["width"] == 2048
        assert result["meta"]["height"] == 1536
        assert result["meta"]["format"] == "jpeg"
        assert result["export_name"] == "mince_image.jpeg"

    def test_resize_image(self, temp_dir, png_bytes):
        from mince.mcp_server import resize_image

        path = temp_dir / "input.png"
        path.write_bytes(png_bytes)
        output_dir = temp_dir / "out"

        result = run(resize_image.fn(str(path), 30, 20, str(output_dir)))

        assert result["success"]
        assert result["output_path"] == str(output_dir / "mince_image.png")
        assert result["mime_type"] == "image/png"
        with Image.open(output_dir / "mince_image.png") as img:
            assert img.size == (30, 20)

    def test_export_image_defaults_to_input_dir(self, temp_dir, gif_bytes):
        from mince.mcp_server import export_image

        path = temp_dir / "input.gif"
        path.write_bytes(gif_bytes)

        result = run(export_image.fn(str(path)))

        assert result["success"]
        assert (temp_dir / "mince_image.gif").exists()

    def test_errors_become_responses(self, temp_dir, garbage_bytes, bmp_bytes):
        from mince.mcp_server import export_image, get_image_meta, resize_image

        garbage = temp_dir / "garbage.png"
        garbage.write_bytes(garbage_bytes)
        bmp = temp_dir / "input.bmp"
        bmp.write_bytes(bmp_bytes)

        detect = run(get_image_meta.fn(str(garbage)))
        missing = run(get_image_meta.fn(str(temp_dir / "missing.png")))
        unsupported = run(export_image.fn(str(bmp)))
        invalid = run(resize_image.fn(str(bmp), 0, 10))

        assert detect["success"] is False
        assert detect["error_type"] == "detect_image_format"
        assert missing["error_type"] == "file_read"
        assert unsupported["error_type"] == "encode_image"
        assert invalid["error_type"] == "invalid_dimensions"
        assert detect["details"] == {"file_path": str(garbage)}
