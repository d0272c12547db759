"""
交互输入

所有终端交互都通过 Prompter 完成，解析逻辑本身不直接读写终端。
"""

from abc import ABC, abstractmethod

import click


class Prompter(ABC):
    """同步的询问接口"""

    @abstractmethod
    def ask(self, message: str) -> str:
        """显示提示并返回用户输入（可能为空字符串）"""
        pass

    @abstractmethod
    def echo(self, message: str = ""):
        pass

    def confirm(self, message: str) -> bool:
        answer = self.ask(f"{message} [y/N]")
        return answer.strip().lower() in ("y", "yes")


class ClickPrompter(Prompter):
    """基于 click 的终端交互"""

    def ask(self, message: str) -> str:
        try:
            return click.prompt(
                message, default="", show_default=False, prompt_suffix=" "
            )
        except click.Abort:
            return ""

    def echo(self, message: str = ""):
        click.echo(message)

