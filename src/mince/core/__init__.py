"""核心模块包。

文件桥接、编解码适配、重采样与图像流水线。
"""

from .codec import decode, encode, prepare_for_format
from .file_bridge import BlobFile, HostFile, PathFile, read_all, wrap
from .pipeline import Mince
from .resampling import resample


__all__ = [
    "BlobFile",
    "HostFile",
    "Mince",
    "PathFile",
    "decode",
    "encode",
    "prepare_for_format",
    "read_all",
    "resample",
    "wrap",
]
