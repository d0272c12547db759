"""
CLI 模块

命令行接口实现。
"""

import asyncio
from typing import Optional

import click
from loguru import logger

from modpak import __version__
from modpak.exceptions import ManualFilesMissingError, ModPakError
from modpak.logger import setup_logger
from modpak.models import ModLoader, Provider, Side
from modpak.orchestrator import PackOrchestrator, init_pack


def report_missing_manual(error: ManualFilesMissingError):
    """列出缺失的手动下载模组"""
    click.secho("构建失败：缺少需要手动下载的模组", fg="red", bold=True)
    click.echo("以下模组不允许自动下载，请手动下载后放入: " + click.style(error.directory, fg="cyan"))
    click.echo()
    for mod in error.missing:
        click.echo(click.style(" [缺失] ", fg="red") + click.style(mod.file_name, bold=True))
        click.echo(click.style("    链接: ", fg="bright_black") + click.style(mod.manual_link or "未知", fg="blue"))
    click.echo()


async def run_async(ctx: click.Context, action):
    """创建协调器并执行操作，统一处理错误"""
    root = ctx.obj["root"]
    api_key = ctx.obj.get("api_key")
    try:
        async with PackOrchestrator(root, api_key=api_key) as orchestrator:
            return await action(orchestrator)
    except ManualFilesMissingError as e:
        report_missing_manual(e)
        raise click.exceptions.Exit(1)
    except ModPakError as e:
        logger.debug(f"{e.to_dict()}")
        raise click.ClickException(str(e))


@click.group()
@click.option(
    "--dir",
    "root",
    type=click.Path(file_okay=False),
    default=".",
    help="整合包根目录",
)
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.option("--log-file", type=click.Path(dir_okay=False), help="同时写入日志文件")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, root: str, debug: bool, log_file: Optional[str]):
    """modpak - Minecraft 整合包管理工具"""
    setup_logger(level="DEBUG" if debug else None, log_file=log_file)
    ctx.ensure_object(dict)
    ctx.obj["root"] = root


@main.command()
@click.argument("name")
@click.option("--mc", "mc_version", required=True, help="Minecraft 版本")
@click.option(
    "--loader",
    required=True,
    type=click.Choice([l.value for l in ModLoader], case_sensitive=False),
    help="模组加载器",
)
@click.option("--author", default="Unknown", help="整合包作者")
@click.option("--cf-key", help="CurseForge API Key（可选，保存到配置）")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["toml", "json", "yaml"]),
    default="toml",
    help="配置文件格式",
)
@click.pass_context
def init(ctx, name, mc_version, loader, author, cf_key, fmt):
    """初始化新的整合包"""
    try:
        init_pack(
            ctx.obj["root"],
            name,
            mc_version,
            ModLoader(loader.lower()),
            author=author,
            curseforge_api_key=cf_key,
            fmt=fmt,
        )
    except ModPakError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("queries", nargs=-1, required=True)
@click.option("-v", "--version", help="指定版本（对所有根模组生效）")
@click.option(
    "--provider",
    type=click.Choice(["mr", "modrinth", "cf", "curseforge"]),
    default="mr",
    help="默认平台（URL 会覆盖此选项）",
)
@click.option(
    "--side",
    type=click.Choice(["c", "client", "s", "server", "both"]),
    default="both",
    help="运行端限制",
)
@click.option("--api-key", help="CurseForge API Key（默认使用内置 key）")
@click.option(
    "--allow-unstable/--stable-only",
    default=True,
    help="是否允许 beta / alpha 版本",
)
@click.option("-i", "--interactive", is_flag=True, help="为根模组交互选择版本")
@click.pass_context
def add(ctx, queries, version, provider, side, api_key, allow_unstable, interactive):
    """添加模组（slug、ID、URL 或名称）"""
    ctx.obj["api_key"] = api_key

    async def action(orchestrator: PackOrchestrator):
        return await orchestrator.add(
            list(queries),
            version=version,
            provider=Provider.parse(provider),
            side=Side.parse(side),
            allow_unstable=allow_unstable,
            interactive=interactive,
        )

    asyncio.run(run_async(ctx, action))


@main.command()
@click.argument("target", type=click.Choice(["client", "server"]))
@click.pass_context
def build(ctx, target):
    """构建客户端 .mrpack 或服务端 .zip"""

    async def action(orchestrator: PackOrchestrator):
        return await orchestrator.build(target)

    asyncio.run(run_async(ctx, action))


@main.command()
@click.option("--allow-unstable", is_flag=True, help="允许 beta / alpha 版本")
@click.option("--api-key", help="CurseForge API Key")
@click.pass_context
def update(ctx, allow_unstable, api_key):
    """将全部模组更新到最新版本"""
    ctx.obj["api_key"] = api_key

    async def action(orchestrator: PackOrchestrator):
        return await orchestrator.update(allow_unstable)

    asyncio.run(run_async(ctx, action))


@main.command()
@click.argument("mods", nargs=-1, required=True)
@click.option("-v", "--version", help="目标版本 ID、版本号或文件名片段")
@click.option("--api-key", help="CurseForge API Key")
@click.pass_context
def select(ctx, mods, version: Optional[str], api_key):
    """为已安装模组选择指定版本（升级或降级）"""
    ctx.obj["api_key"] = api_key

    async def action(orchestrator: PackOrchestrator):
        return await orchestrator.select(list(mods), version)

    asyncio.run(run_async(ctx, action))


@main.command(name="list")
@click.pass_context
def list_mods(ctx):
    """列出已安装的模组"""

    async def action(orchestrator: PackOrchestrator):
        return await orchestrator.list_mods()

    mods = asyncio.run(run_async(ctx, action))
    if not mods:
        click.echo("还没有添加任何模组")
        return
    for mod in mods:
        marker = click.style(" [手动]", fg="yellow") if mod.is_manual else ""
        click.echo(
            f"{mod.slug:<32} {mod.provider.value:<10} {mod.side.value:<7} {mod.file_name}{marker}"
        )


if __name__ == "__main__":
    main()
