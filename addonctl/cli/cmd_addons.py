"""CLI：add-on 管理命令"""

from __future__ import annotations

import click

from addonctl.cli import _svc
from addonctl.core.exceptions import AddonError
from addonctl.core.models import AddOn, by_status_then_priority_then_name
from addonctl.services.container import DEFAULT_ADDONS_DIR

NO_ADDON_MESSAGE = "No add-on with the name '{}' is installed."
NO_REMOVE_MESSAGE = "No removal instructions found for add-on '{}'."

VERBOSE_FORMAT = """Name       : {name}
Description: {description}
Enabled    : {enabled}
Priority   : {priority}
"""

addon_env_option = click.option(
    "--addon-env", "-a", "addon_env", multiple=True,
    help="插值上下文变量 KEY=VALUE（可多次）",
)


def register(group: click.Group) -> None:
    group.add_command(addons_group)


def _require_installed(names: tuple[str, ...]) -> None:
    """任一名称未安装时输出提示并正常退出"""
    try:
        manager = _svc().manager
    except AddonError as e:
        raise click.ClickException(f"Unable to initialize the add-on manager: {e}") from e
    for name in names:
        if not manager.is_installed(name):
            click.echo(NO_ADDON_MESSAGE.format(name))
            click.get_current_context().exit(0)


def _format_addon(addon: AddOn, verbose: bool) -> str:
    if verbose:
        return VERBOSE_FORMAT.format(
            name=addon.name,
            description=("\n" + " " * 13).join(addon.metadata.description),
            enabled=str(addon.enabled).lower(),
            priority=addon.priority,
        )
    status = "enabled" if addon.enabled else "disabled"
    return f"- {addon.name:<20s} : {status:<8s} P({addon.priority})"


@click.group(name="addons")
def addons_group() -> None:
    """管理 add-on：安装、列出、启用 / 禁用、应用 / 移除"""


@addons_group.command(name="list")
@click.option("--verbose", is_flag=True, help="输出包含描述的详细信息")
def addons_list(verbose: bool) -> None:
    """列出已安装的 add-on 及其状态"""
    try:
        addons = _svc().manager.list(key=by_status_then_priority_then_name)
    except AddonError as e:
        raise click.ClickException(str(e)) from e
    if not addons:
        click.echo("没有已安装的 add-on。")
        return
    for addon in addons:
        click.echo(_format_addon(addon, verbose))


@addons_group.command(name="install")
@click.argument("source", required=False)
@click.option("--force", "-f", is_flag=True, help="覆盖已安装的同名 add-on")
@click.option("--enable", is_flag=True, help="安装后以默认优先级启用")
@click.option("--defaults", is_flag=True, help="安装内置的默认 add-on")
def addons_install(source: str | None, force: bool, enable: bool, defaults: bool) -> None:
    """从目录安装 add-on"""
    svc = _svc()
    try:
        if defaults:
            names = [
                svc.manager.install(d, force=True)
                for d in sorted(DEFAULT_ADDONS_DIR.iterdir()) if d.is_dir()
            ]
            click.echo(f"Default add-ons '{', '.join(names)}' installed")
            return
        if not source:
            raise click.UsageError("You must specify the source of the add-on.")
        name = svc.manager.install(source, force=force)
        click.echo(f"Addon '{name}' installed")
        if enable:
            svc.store.put(svc.manager.enable(name, 0))
            click.echo(f"Addon '{name}' enabled")
    except AddonError as e:
        raise click.ClickException(f"Add-on installation failed with the error: {e}") from e


@addons_group.command(name="uninstall")
@click.argument("name")
def addons_uninstall(name: str) -> None:
    """卸载 add-on 并删除其持久化状态"""
    _require_installed((name,))
    svc = _svc()
    try:
        svc.manager.uninstall(name)
        svc.store.remove(name)
    except (AddonError, OSError) as e:
        raise click.ClickException(f"Cannot uninstall the add-on {name}: {e}") from e
    click.echo(f"Add-on '{name}' uninstalled")


@addons_group.command(name="enable")
@click.argument("name")
@click.option("--priority", default=0, type=int, help="应用顺序，数值小的先应用")
def addons_enable(name: str, priority: int) -> None:
    """启用 add-on，下次创建集群时自动应用"""
    _require_installed((name,))
    svc = _svc()
    try:
        svc.store.put(svc.manager.enable(name, priority))
    except AddonError as e:
        raise click.ClickException(f"Unable to enable add-on {name}: {e}") from e
    click.echo(f"Add-on '{name}' enabled")


@addons_group.command(name="disable")
@click.argument("name")
def addons_disable(name: str) -> None:
    """禁用 add-on"""
    _require_installed((name,))
    svc = _svc()
    try:
        svc.store.put(svc.manager.disable(name))
    except AddonError as e:
        raise click.ClickException(f"Unable to disable add-on {name}: {e}") from e
    click.echo(f"Add-on '{name}' disabled")


@addons_group.command(name="apply")
@click.argument("names", nargs=-1, required=True)
@addon_env_option
def addons_apply(names: tuple[str, ...], addon_env: tuple[str, ...]) -> None:
    """应用指定的 add-on（不论是否启用）"""
    _require_installed(names)
    svc = _svc()
    for name in names:
        try:
            svc.manager.apply_addon(svc.manager.get(name), svc.execution_context(addon_env))
        except AddonError as e:
            raise click.ClickException(f"Error applying the add-on: {e}") from e
        click.echo(f"\nAdd-on '{name}' applied")


@addons_group.command(name="remove")
@click.argument("names", nargs=-1, required=True)
@addon_env_option
def addons_remove(names: tuple[str, ...], addon_env: tuple[str, ...]) -> None:
    """执行指定 add-on 的移除命令"""
    _require_installed(names)
    svc = _svc()
    for name in names:
        if not svc.manager.get(name).has_remove:
            click.echo(NO_REMOVE_MESSAGE.format(name))
            click.get_current_context().exit(0)
    for name in names:
        try:
            svc.manager.remove_addon(svc.manager.get(name), svc.execution_context(addon_env))
        except AddonError as e:
            raise click.ClickException(f"Error removing the add-on: {e}") from e
        click.echo(f"\nAdd-on '{name}' removed")


@addons_group.command(name="run")
@addon_env_option
def addons_run(addon_env: tuple[str, ...]) -> None:
    """按优先级应用全部已启用的 add-on"""
    svc = _svc()
    try:
        if not any(a.enabled for a in svc.manager.list()):
            click.echo("没有已启用的 add-on。")
            return
        applied = svc.manager.apply(svc.execution_context(addon_env))
    except AddonError as e:
        raise click.ClickException(f"Error executing addon commands: {e}") from e
    click.echo(f"\nApplied add-ons: {', '.join(applied)}")
