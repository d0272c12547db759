"""
版本选择服务

从候选版本列表中选出一个版本：指定版本、默认最新、或交互选择。
选择过程不修改任何状态，选不到时返回 None，由调用方决定如何处理。
"""

from typing import List, Optional

import click

from modpak.models import ModVersionCandidate, StabilityTier
from modpak.prompt import Prompter


DEFAULT_PROMPT_LIMIT = 15


class VersionSelector:
    """版本选择器"""

    def __init__(self, prompter: Optional[Prompter] = None):
        self.prompter = prompter

    @staticmethod
    def filter_stable(
        candidates: List[ModVersionCandidate],
        allow_unstable: bool,
    ) -> List[ModVersionCandidate]:
        """不允许不稳定版本时只保留 release"""
        if allow_unstable:
            return list(candidates)
        return [c for c in candidates if c.stability == StabilityTier.RELEASE]

    @staticmethod
    def select_explicit(
        candidates: List[ModVersionCandidate],
        wanted: str,
    ) -> Optional[ModVersionCandidate]:
        """
        按指定版本选择

        依次匹配版本 ID、版本号、显示名称，或显示名称 / 文件名中包含该字符串，
        第一个匹配的候选胜出。

        Args:
            candidates: 候选版本（平台默认顺序）
            wanted: 版本 ID、版本号或文件名片段

        Returns:
            匹配的版本或 None
        """
        for candidate in candidates:
            if wanted in (
                candidate.id,
                candidate.version_number,
                candidate.display_name,
            ):
                return candidate
        for candidate in candidates:
            if wanted in candidate.display_name:
                return candidate
            if any(wanted in f.filename for f in candidate.files):
                return candidate
        return None

    @staticmethod
    def select_default(
        candidates: List[ModVersionCandidate],
    ) -> Optional[ModVersionCandidate]:
        """平台顺序中的第一个即最新的兼容版本"""
        return candidates[0] if candidates else None

    def prompt(
        self,
        candidates: List[ModVersionCandidate],
        title: str,
        current_file: Optional[str] = None,
        limit: int = DEFAULT_PROMPT_LIMIT,
    ) -> Optional[ModVersionCandidate]:
        """
        列出候选版本并让用户按序号选择

        当前已安装的文件以 * 标记。输入为空、非数字或超出范围均视为取消。
        """
        if not candidates or self.prompter is None:
            return None

        shown = candidates[:limit]
        self.prompter.echo(click.style(f"{title} 的可用版本:", fg="cyan"))
        for index, candidate in enumerate(shown, start=1):
            marker = "*" if candidate.has_file(current_file) else " "
            color = "green" if candidate.stability == StabilityTier.RELEASE else "yellow"
            tier = click.style(candidate.stability.value[0].upper(), fg=color)
            date = candidate.published_at[:10]
            self.prompter.echo(
                f"{marker} {index}. {tier} {candidate.display_name} ({date})"
            )

        answer = self.prompter.ask(f"选择版本 (1-{len(shown)}):").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(shown):
            return shown[int(answer) - 1]

        self.prompter.echo(click.style("已取消选择", fg="yellow"))
        return None
