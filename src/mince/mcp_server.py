"""图像转换 MCP 服务器。

作为宿主环境的一端：接收文件路径，把类型化错误转换为响应字典。
"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .core import BlobFile, Mince, PathFile
from .exceptions import GenericError, MinceError
from .utils.logging_helpers import configure_logging, get_logger
from .utils.message_formatter import MessageFormatter


MCPResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def from_mince_error(
        error: MinceError, input_path: str | None = None
    ) -> dict[str, Any]:
        """把类型化错误转换为响应"""
        details = {"file_path": input_path} if input_path else None
        return MCPResponseBuilder.error(
            message=error.message,
            error_type=error.kind,
            details=details,
        )


logger = get_logger(__name__)

mcp: FastMCP[Any] = FastMCP("图像转换服务")


async def load_image(input_path: str | Path) -> Mince:
    """从路径加载图像"""
    return await Mince.from_file(PathFile(input_path))


def save_export(exported: BlobFile, output_dir: str | Path) -> Path:
    """把导出文件写入目录

    Raises:
        GenericError: 写盘失败
    """
    try:
        return exported.save(output_dir)
    except OSError as e:
        logger.error(MessageFormatter.operation_failed("写入导出文件", output_dir, e))
        raise GenericError(f"IO 错误: {e}") from e


def _export_response(
    mince: Mince, exported: BlobFile, output_path: Path
) -> MCPResponse:
    return {
        "success": True,
        "output_path": str(output_path),
        "name": exported.name,
        "mime_type": exported.mime_type,
        "exported_size": exported.size,
        "meta": mince.meta().to_dict(),
    }


@mcp.tool()
async def get_image_meta(input_path: str) -> MCPResponse:
    """获取图片元数据。

    格式由文件内容检测，与文件名无关。

    Args:
        input_path: 输入图像文件路径

    Returns:
        dict: 宽、高、格式、MIME、原始大小和导出文件名
    """
    try:
        mince = await load_image(input_path)
    except MinceError as e:
        logger.warning(MessageFormatter.operation_failed("获取元数据", input_path, e))
        return MCPResponseBuilder.from_mince_error(e, input_path)

    return {
        "success": True,
        "meta": mince.meta().to_dict(),
        "export_name": mince.export_name,
    }


@mcp.tool()
async def resize_image(
    input_path: str,
    width: int,
    height: int,
    output_dir: str | None = None,
) -> MCPResponse:
    """缩放图片并导出。

    输出文件名固定为 mince_image.<扩展名>，格式与输入检测到的格式一致。

    Args:
        input_path: 输入图像文件路径
        width: 目标宽度（像素）
        height: 目标高度（像素）
        output_dir: 输出目录（默认与输入相同）

    Returns:
        dict: 输出路径、MIME 类型、导出大小与缩放后的元数据
    """
    target_dir = Path(output_dir) if output_dir else Path(input_path).parent

    try:
        mince = (await load_image(input_path)).resize(width, height)
        exported = mince.to_file()
        output_path = save_export(exported, target_dir)
    except MinceError as e:
        logger.warning(MessageFormatter.operation_failed("缩放导出", input_path, e))
        return MCPResponseBuilder.from_mince_error(e, input_path)

    logger.info(f"导出完成: {output_path}")
    return _export_response(mince, exported, output_path)


@mcp.tool()
async def export_image(input_path: str, output_dir: str | None = None) -> MCPResponse:
    """按原格式重新编码并导出图片（不缩放）。

    Args:
        input_path: 输入图像文件路径
        output_dir: 输出目录（默认与输入相同）

    Returns:
        dict: 输出路径、MIME 类型、导出大小与元数据
    """
    target_dir = Path(output_dir) if output_dir else Path(input_path).parent

    try:
        mince = await load_image(input_path)
        exported = mince.to_file()
        output_path = save_export(exported, target_dir)
    except MinceError as e:
        logger.warning(MessageFormatter.operation_failed("导出", input_path, e))
        return MCPResponseBuilder.from_mince_error(e, input_path)

    logger.info(f"导出完成: {output_path}")
    return _export_response(mince, exported, output_path)


def main() -> None:
    """启动 MCP 服务器"""
    configure_logging()
    logger.info("启动图像转换 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
