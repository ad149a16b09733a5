"""0x starter CLI 顶层入口。

本模块仅负责定义 Click 命令组并导入各子命令模块，
实际业务逻辑拆分在 `zrx_starter_cli.services` 与 `zrx_starter_cli.clients` 中。
"""

from __future__ import annotations

import click


@click.group()
def main() -> None:
    """0x v2 starter scenarios CLI."""


# 导入子模块以注册子命令（装饰器在导入时执行）
from . import account as _account  # noqa: F401,E402
from . import scenarios as _scenarios  # noqa: F401,E402


__all__ = ["main"]
