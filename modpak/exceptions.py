"""
modpak 异常体系

所有可预期的失败都以 ModPakError 子类抛出，携带错误代码与上下文，
命令行层统一转换为一行错误信息。找不到项目不是异常，见 LookupResult。
"""

from typing import Any, Dict, List, Optional


class ModPakError(Exception):
    """modpak 基础异常"""

    default_code = "E000"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.context = dict(context or {})

    def to_dict(self) -> Dict[str, Any]:
        """用于调试日志的结构化表示"""
        return {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# 配置


class ConfigError(ModPakError):
    """配置文件缺失或整合包目录不正确"""

    default_code = "E100"


class ConfigParseError(ConfigError):
    default_code = "E101"


class ConfigValidationError(ConfigError):
    """缺少必填项或加载器不受支持"""

    default_code = "E102"


# 平台 API


class APIError(ModPakError):
    """网络错误或无法处理的响应，只终止当前分支"""

    default_code = "E200"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, code, context)
        self.status = status
        self.url = url
        if status is not None:
            self.context["status"] = status
        if url is not None:
            self.context["url"] = url


class APIRateLimitError(APIError):
    default_code = "E429"


class APIServerError(APIError):
    default_code = "E500"


# 下载


class DownloadError(ModPakError):
    default_code = "E300"


class DownloadNetworkError(DownloadError):
    """请求失败或响应不是 200"""

    default_code = "E301"


class DownloadFileError(DownloadError):
    """本地写入或复制失败"""

    default_code = "E303"


# 本地记录


class StoreError(ModPakError):
    """contents/mods 下的记录无法读取"""

    default_code = "E350"


# 打包


class PackagerError(ModPakError):
    default_code = "E400"


class MrpackError(PackagerError):
    default_code = "E401"


class ZipError(PackagerError):
    default_code = "E402"


class ManualFilesMissingError(PackagerError):
    """
    构建前置检查失败

    ``missing`` 为缺少本地文件的 cf_manual 记录，``directory`` 为应放置文件的目录。
    """

    default_code = "E410"

    def __init__(self, missing: List[Any], directory: str):
        super().__init__(
            f"缺少 {len(missing)} 个需要手动下载的模组文件",
            context={
                "directory": directory,
                "files": [mod.file_name for mod in missing],
            },
        )
        self.missing = missing
        self.directory = directory


__all__ = [
    "ModPakError",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "APIError",
    "APIRateLimitError",
    "APIServerError",
    "DownloadError",
    "DownloadNetworkError",
    "DownloadFileError",
    "StoreError",
    "PackagerError",
    "MrpackError",
    "ZipError",
    "ManualFilesMissingError",
]
