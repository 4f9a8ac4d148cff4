"""宿主文件桥接模块。

在宿主文件句柄与字节缓冲之间转换：异步读取句柄的全部字节，
以及把字节、MIME 类型和文件名包装成可交还宿主的文件对象。
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

import aiofiles
from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..exceptions import FileReadError
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


@runtime_checkable
class HostFile(Protocol):
    """宿主文件句柄：只需提供异步 read()"""

    async def read(self) -> bytes: ...


class PathFile:
    """基于文件系统路径的宿主文件句柄"""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def read(self) -> bytes:
        async with aiofiles.open(self.path, "rb") as f:
            return await f.read()

    def __repr__(self) -> str:
        return f"PathFile({str(self.path)!r})"


class BlobFile(BaseModel):
    """交还宿主的文件对象（字节 + MIME + 文件名）

    同样满足 HostFile 协议，可以再次传入 ``Mince.from_file``。
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="文件名")
    mime_type: str = Field(min_length=1, description="MIME 类型")
    data: bytes = Field(repr=False, description="文件内容")

    @computed_field
    def size(self) -> int:
        """文件大小（字节）"""
        return len(self.data)

    async def read(self) -> bytes:
        return self.data

    def save(self, directory: str | Path) -> Path:
        """以自身文件名写入目录，返回写入路径"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        output_path = directory / self.name
        output_path.write_bytes(self.data)
        return output_path


async def read_all(handle: HostFile) -> bytes:
    """读取宿主文件句柄的全部字节。

    唯一的挂起点：句柄的 read() 只会被等待一次，结果要么是字节，要么是
    FileReadError。宿主原生异常不会越过此边界；取消不做拦截。

    Args:
        handle: 宿主文件句柄

    Returns:
        bytes: 文件内容

    Raises:
        FileReadError: 读取失败或句柄返回了非字节数据
    """
    try:
        data = await handle.read()
    except Exception as e:
        logger.warning(MessageFormatter.operation_failed("读取文件", repr(handle), e))
        raise FileReadError(f"读取文件字节失败: {e}") from e

    if not isinstance(data, bytes | bytearray | memoryview):
        raise FileReadError(f"读取文件字节失败: 句柄返回了 {type(data).__name__}")

    logger.debug(f"读取文件完成: {handle!r}, {len(data)} 字节")
    return bytes(data)


def wrap(data: bytes, filename: str, mime: str) -> BlobFile:
    """把字节包装成宿主文件对象。

    参数非法（空文件名或空 MIME）属于编程错误，直接抛出 pydantic 的
    ValidationError，不进入可恢复错误体系。
    """
    return BlobFile(name=filename, mime_type=mime, data=data)
