"""
依赖解析服务

从根模组出发遍历 required 依赖图：
- 使用显式栈代替递归，并用 (平台, 项目) 作为已访问键，循环依赖不会重复处理；
- 每个节点选定版本后才写入本地记录，失败只终止该分支；
- 本地已存在同一项目时不覆盖，但仍会继续检查其依赖。
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from loguru import logger

from modpak.exceptions import APIError
from modpak.models import (
    InstalledMod,
    ModProject,
    ModRef,
    ModVersionCandidate,
    PackConfig,
    Provider,
    Side,
    SupportLevel,
)
from modpak.services.mod_resolver import ModResolver
from modpak.services.version_selector import VersionSelector
from modpak.store import LocalModStore


@dataclass
class ResolveFailure:
    """未能解析的节点"""

    query: str
    provider: Provider
    depth: int
    reason: str


@dataclass
class ResolveReport:
    """一次解析的结果汇总"""

    added: List[InstalledMod] = field(default_factory=list)
    present: List[str] = field(default_factory=list)
    failed: List[ResolveFailure] = field(default_factory=list)


@dataclass
class _Frame:
    ref: ModRef
    version: Optional[str]
    depth: int
    side: Side


def infer_side(requested: Side, project: ModProject) -> Side:
    """
    推断实际运行端

    只有请求为 both 且项目明确声明某一端 unsupported 时才收窄；
    显式指定的 client / server 始终保持不变。
    """
    if requested != Side.BOTH:
        return requested
    client_ok = project.client_support != SupportLevel.UNSUPPORTED
    server_ok = project.server_support != SupportLevel.UNSUPPORTED
    if client_ok and not server_ok:
        return Side.CLIENT
    if server_ok and not client_ok:
        return Side.SERVER
    return requested


class DependencyResolver:
    """依赖解析器"""

    def __init__(
        self,
        resolver: ModResolver,
        store: LocalModStore,
        selector: VersionSelector,
        config: PackConfig,
    ):
        self.resolver = resolver
        self.store = store
        self.selector = selector
        self.config = config
        self._visited: Set[tuple] = set()

    async def resolve(
        self,
        roots: List[ModRef],
        side: Side = Side.BOTH,
        version: Optional[str] = None,
        allow_unstable: bool = True,
        interactive: bool = False,
    ) -> ResolveReport:
        """
        解析根模组及其全部 required 依赖

        Args:
            roots: 根模组引用，按顺序逐个处理
            side: 请求的运行端，整个子树继承
            version: 根模组的指定版本（不作用于依赖）
            allow_unstable: 是否允许 beta / alpha 版本
            interactive: 未指定版本时是否让用户为根模组选择版本

        Returns:
            ResolveReport
        """
        self._visited.clear()
        report = ResolveReport()

        for root in roots:
            stack = [_Frame(root, version, 0, side)]
            while stack:
                frame = stack.pop()
                children = await self._visit(
                    frame, allow_unstable, interactive, report
                )
                # 逆序入栈，保证依赖按声明顺序处理
                stack.extend(reversed(children))

        return report

    def _fail(self, report: ResolveReport, frame: _Frame, reason: str):
        indent = "   " * frame.depth
        logger.warning(f"{indent}! {frame.ref.query}: {reason}")
        report.failed.append(
            ResolveFailure(
                query=frame.ref.query,
                provider=frame.ref.provider,
                depth=frame.depth,
                reason=reason,
            )
        )

    async def _fetch_project(
        self, frame: _Frame, report: ResolveReport
    ) -> Optional[ModProject]:
        result = await self.resolver.lookup(frame.ref)
        if result.ok:
            return result.project

        if result.error:
            self._fail(report, frame, f"网络错误: {result.error}")
            return None

        provider_name = (
            "Modrinth" if frame.ref.provider == Provider.MODRINTH else "CurseForge"
        )
        if frame.depth == 0:
            project = await self.resolver.fallback_to_curseforge(frame.ref)
            if project is not None:
                logger.info(f"改用 CurseForge 上的 '{project.title}'")
                return project

        self._fail(report, frame, f"在 {provider_name} 上找不到该项目")
        return None

    def _select(
        self,
        frame: _Frame,
        project: ModProject,
        candidates: List[ModVersionCandidate],
        interactive: bool,
        current_file: Optional[str],
    ) -> Optional[ModVersionCandidate]:
        if frame.depth == 0:
            if frame.version:
                return self.selector.select_explicit(candidates, frame.version)
            if interactive:
                return self.selector.prompt(candidates, project.title, current_file)
            return self.selector.select_default(candidates)

        # 依赖不交互，固定版本不可用时退回最新兼容版本
        if frame.version:
            pinned = next((c for c in candidates if c.id == frame.version), None)
            if pinned is not None:
                return pinned
            logger.debug(f"依赖 {project.slug} 的固定版本 {frame.version} 不兼容，改用最新版本")
        return self.selector.select_default(candidates)

    async def _visit(
        self,
        frame: _Frame,
        allow_unstable: bool,
        interactive: bool,
        report: ResolveReport,
    ) -> List[_Frame]:
        indent = "   " * frame.depth
        if frame.ref.key() in self._visited:
            return []
        self._visited.add(frame.ref.key())

        project = await self._fetch_project(frame, report)
        if project is None:
            return []

        if project.key() != frame.ref.key() and project.key() in self._visited:
            return []
        self._visited.update(project.aliases())

        side = infer_side(frame.side, project)
        if side != frame.side:
            logger.debug(f"{indent}{project.title} 仅支持 {side.value} 端")

        client = self.resolver.client_for(project.provider)
        try:
            candidates = await client.list_versions(
                project, self.config.loader, self.config.mc_version
            )
        except APIError as e:
            self._fail(report, frame, f"获取版本列表失败: {e}")
            return []

        candidates = self.selector.filter_stable(candidates, allow_unstable)
        if not candidates:
            self._fail(
                report,
                frame,
                f"'{project.title}' 没有适用于 {self.config.loader.value} "
                f"{self.config.mc_version} 的版本",
            )
            return []

        existing = await self.store.get(project.slug)
        selected = self._select(
            frame,
            project,
            candidates,
            interactive,
            existing.file_name if existing else None,
        )
        if selected is None:
            if frame.version and frame.depth == 0:
                self._fail(report, frame, f"找不到版本 '{frame.version}'")
            else:
                self._fail(report, frame, "未选择版本")
            return []

        symbol = "+ " if frame.depth == 0 else "└─ "
        if existing is not None and existing.project_id == project.provider_id:
            logger.info(f"{indent}{symbol}跳过 '{project.title}'（已存在）")
            report.present.append(project.slug)
        else:
            file = selected.primary_file()
            if file is None:
                self._fail(report, frame, f"版本 {selected.display_name} 没有文件")
                return []

            if existing is not None:
                logger.warning(
                    f"{indent}{project.slug} 已被其他项目占用 "
                    f"({existing.provider.value}:{existing.project_id})，将被覆盖"
                )

            mod = InstalledMod.from_file(project, file, side)
            await self.store.save(mod)
            report.added.append(mod)

            if mod.is_manual:
                logger.warning(f"{indent}{symbol}需要手动下载: {project.title}")
                logger.warning(f"{indent}   链接: {mod.manual_link}")
            else:
                logger.success(f"{indent}{symbol}添加: {project.title}")

        children = []
        for dep in selected.required_dependencies:
            if not dep.project_id:
                logger.debug(f"{indent}{project.slug} 的依赖缺少项目 ID，已忽略")
                continue
            children.append(
                _Frame(
                    ModRef(project.provider, dep.project_id, by_id=True),
                    dep.version_id,
                    frame.depth + 1,
                    side,
                )
            )
        return children
