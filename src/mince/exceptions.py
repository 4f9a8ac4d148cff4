"""图像转换异常处理模块。

定义封闭的错误类型体系，以及在编解码边界统一包装第三方异常的装饰器。
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from PIL.Image import DecompressionBombError

from .utils.logging_helpers import get_logger


logger = get_logger()
T = TypeVar("T")


class MinceError(Exception):
    """图像转换错误基类"""

    kind: str = "generic"
    default_message: str = "IO 错误"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """转换为宿主侧可用的错误描述"""
        return {"error": self.message, "error_type": self.kind}


class GenericError(MinceError):
    """未归类的 IO 相关错误（保留，少见）"""

    pass


class FileReadError(MinceError):
    """宿主文件读取失败"""

    kind = "file_read"
    default_message = "读取文件字节失败"


class DetectImageFormatError(MinceError):
    """无法识别图像格式"""

    kind = "detect_image_format"
    default_message = "无法识别图像格式"


class DecodeImageError(MinceError):
    """图像解码失败"""

    kind = "decode_image"
    default_message = "图像解码失败"


class EncodeImageError(MinceError):
    """图像编码失败"""

    kind = "encode_image"
    default_message = "图像编码失败"


class UnsupportedFormatError(EncodeImageError):
    """格式不支持编码输出"""

    default_message = "不支持编码该图像格式"


class InvalidDimensionsError(MinceError):
    """缩放尺寸非法（宽或高不大于 0）"""

    kind = "invalid_dimensions"
    default_message = "缩放尺寸必须大于 0"


def handle_codec_errors(
    error_cls: type[MinceError], operation_name: str = "图像处理"
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """编解码边界的异常包装装饰器

    已是 MinceError 的异常原样抛出，其余 Pillow 异常统一包装为 ``error_cls``。

    Args:
        error_cls: 包装使用的错误类型
        operation_name: 操作名称，用于日志记录
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except MinceError:
                raise
            except DecompressionBombError as e:
                logger.error(f"{operation_name} - 图像过大: {e}")
                raise error_cls(f"图像过大，可能存在安全风险: {e}") from e
            except (OSError, SyntaxError) as e:
                logger.warning(f"{operation_name} - 数据无效: {e}")
                raise error_cls(f"{error_cls.default_message}: {e}") from e
            except (ValueError, TypeError, KeyError, SystemError) as e:
                logger.warning(f"{operation_name} - 参数错误: {e}")
                raise error_cls(f"{error_cls.default_message}: {e}") from e
            except Exception as e:
                logger.error(f"{operation_name} - 未知错误: {e}")
                raise error_cls(f"{error_cls.default_message}: {e}") from e

        return wrapper

    return decorator
