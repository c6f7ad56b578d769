"""nlpm - 基于源码仓库的 Nelua 依赖包管理器"""

__version__ = "0.1.0"
