"""统一异常体系

所有业务异常继承 NlpmError，安装与清理流程中的任何失败都是致命的。
CLI 层据此输出友好提示并以非零状态退出。
"""

from __future__ import annotations


class NlpmError(Exception):
    """nlpm 基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(NlpmError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(NlpmError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


class InvalidVersionFormat(ValidationError):
    """版本描述不符合 (#|v)<value> 格式"""

    code = "INVALID_VERSION_FORMAT"

    def __init__(self, name: str, version: str) -> None:
        super().__init__(
            f"依赖 '{name}' 的版本格式无效: '{version}'，"
            "应为 #<commit> 或 v<tag>"
        )
        self.name = name
        self.version = version


class InvalidPackageName(ValidationError):
    """包名无法作为存储目录名使用"""

    code = "INVALID_PACKAGE_NAME"

    def __init__(self, name: str) -> None:
        super().__init__(f"包名无效，不能用作目录名: '{name}'")
        self.name = name


class CloneFailed(NlpmError):
    """克隆仓库失败"""

    code = "CLONE_FAILED"

    def __init__(self, name: str, repo: str) -> None:
        super().__init__(f"克隆依赖 '{name}' 失败，请确认仓库地址正确: {repo}")
        self.name = name
        self.repo = repo


class FetchFailed(NlpmError):
    """拉取指定提交或标签失败"""

    code = "FETCH_FAILED"

    def __init__(self, name: str, kind: str, ref: str) -> None:
        label = "标签" if kind == "v" else "提交"
        super().__init__(f"拉取依赖 '{name}' 的{label} '{ref}' 失败，请确认版本正确")
        self.name = name
        self.kind = kind
        self.ref = ref


class CheckoutFailed(NlpmError):
    """检出指定提交或标签失败"""

    code = "CHECKOUT_FAILED"

    def __init__(self, name: str, kind: str, ref: str) -> None:
        label = "标签" if kind == "v" else "提交"
        super().__init__(f"检出依赖 '{name}' 的{label} '{ref}' 失败，请确认版本正确")
        self.name = name
        self.kind = kind
        self.ref = ref


class ManifestMissing(NlpmError):
    """清单文件不存在"""

    code = "MANIFEST_MISSING"


class ManifestLoadFailed(NlpmError):
    """清单文件存在但无法解析"""

    code = "MANIFEST_LOAD_FAILED"


class DirectoryOperationFailed(NlpmError):
    """目录创建、删除或遍历失败"""

    code = "DIRECTORY_OPERATION_FAILED"


class ScriptNotFound(NlpmError):
    """清单中没有指定名称的脚本"""

    code = "SCRIPT_NOT_FOUND"
