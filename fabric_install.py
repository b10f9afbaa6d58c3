import argparse
import sys
from typing import List, Optional

from rich.panel import Panel
from rich.table import Table, box

from fabricinstaller.exceptions import FabricInstallerError
from fabricinstaller.fabric_api import FABRIC_META_URL, ArtifactClient
from fabricinstaller.installer import install_fabric
from fabricinstaller.location import MinecraftLocation
from fabricinstaller.models import InstallOptions, LibrariesFormat, Side, YarnVersion
from fabricinstaller.utils import console
from fabricinstaller.versions import (
    latest_stable_game_version,
    pick_loader_version,
    pick_yarn_version,
)


def _cmd_versions(client: ArtifactClient) -> int:
    artifacts = client.get_fabric_artifacts()
    table = Table(box=box.ROUNDED)
    table.add_column("Kind", style="bold")
    table.add_column("Latest")
    table.add_column("Stable", justify="center")
    for kind, entries in (("loader", artifacts.loader), ("yarn", artifacts.mappings)):
        if entries:
            latest = entries[0]
            table.add_row(kind, latest.version, "[green]+[/]" if latest.stable else "[red]-[/]")
    console.print(table)
    return 0


def _cmd_loaders(args: argparse.Namespace, client: ArtifactClient) -> int:
    if args.minecraft:
        loaders = [bundle.loader for bundle in client.get_loader_artifact_list_for(args.minecraft)]
    else:
        loaders = client.get_loader_artifact_list()
    if not args.all:
        loaders = [loader for loader in loaders if loader.stable]

    table = Table(box=box.ROUNDED)
    table.add_column("Loader", style="bold")
    table.add_column("Maven", style="dim")
    table.add_column("Stable", justify="center")
    for loader in loaders[: args.limit]:
        table.add_row(loader.version, loader.maven, "[green]+[/]" if loader.stable else "[red]-[/]")
    console.print(table)
    return 0


def _cmd_yarn(args: argparse.Namespace, client: ArtifactClient) -> int:
    yarns = client.get_yarn_artifact_list(args.minecraft)
    table = Table(box=box.ROUNDED)
    table.add_column("Yarn", style="bold")
    table.add_column("Minecraft")
    table.add_column("Build", justify="right")
    for yarn in yarns[: args.limit]:
        table.add_row(yarn.version, yarn.game_version or "", str(yarn.build or ""))
    console.print(table)
    return 0


def _cmd_install(args: argparse.Namespace, client: ArtifactClient) -> int:
    minecraft = args.minecraft or latest_stable_game_version(client.get_game_versions())
    if args.loader:
        loader_version = args.loader
    else:
        bundles = client.get_loader_artifact_list_for(minecraft)
        loader_version = pick_loader_version([bundle.loader for bundle in bundles]).version

    yarn: Optional[YarnVersion] = args.yarn
    if args.latest_yarn:
        yarn = pick_yarn_version(client.get_yarn_artifact_list(minecraft), minecraft)

    console.print(f"[dim]Fetching Fabric loader {loader_version} for Minecraft {minecraft}...[/]")
    loader = client.get_fabric_loader_artifact(minecraft, loader_version)
    options = InstallOptions(
        inherits_from=args.inherits_from,
        version_id=args.version_id,
        side=Side(args.side),
        yarn_version=yarn,
        strict_main_class=args.strict,
        libraries_format=LibrariesFormat(args.libraries_format),
    )
    result = install_fabric(loader, MinecraftLocation(args.dir), options)

    console.print(Panel.fit(
        f"[bold]{result.version_id}[/]\n"
        f"Inherits from: {result.descriptor.inherits_from}\n"
        f"Main class: {result.descriptor.main_class or '[red]<none>[/]'}\n"
        f"Libraries: {len(result.descriptor.libraries)}\n"
        f"[dim]{result.path}[/]",
        title="[bold green]Fabric version installed[/]",
    ))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fabric-install",
        description="Generate Fabric version JSON files for a Minecraft launcher.",
    )
    parser.add_argument("--meta-url", default=FABRIC_META_URL, help="Fabric meta base URL.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("versions", help="Show the latest loader and yarn builds.")

    loaders = sub.add_parser("loaders", help="List Fabric loader versions.")
    loaders.add_argument("--minecraft", default=None, help="Only loaders for this Minecraft version.")
    loaders.add_argument("--all", action="store_true", help="Include unstable loader versions.")
    loaders.add_argument("--limit", type=int, default=20, help="Maximum rows to print (default: 20).")

    yarn = sub.add_parser("yarn", help="List yarn mapping versions.")
    yarn.add_argument("--minecraft", default=None, help="Only yarn for this Minecraft version.")
    yarn.add_argument("--limit", type=int, default=20, help="Maximum rows to print (default: 20).")

    install = sub.add_parser("install", help="Write a Fabric version JSON.")
    install.add_argument("--minecraft", default=None, help="Minecraft version (default: latest stable).")
    install.add_argument("--loader", default=None, help="Loader version (default: latest stable).")
    install.add_argument("--dir", default=".minecraft", help="Launcher game directory (default: .minecraft).")
    install.add_argument("--side", choices=[s.value for s in Side], default=Side.CLIENT.value)
    yarn_group = install.add_mutually_exclusive_group()
    yarn_group.add_argument("--yarn", default=None, help="Yarn version to add to the libraries.")
    yarn_group.add_argument("--latest-yarn", action="store_true", help="Add the newest yarn build.")
    install.add_argument("--version-id", default=None, help="Override the installed version id.")
    install.add_argument("--inherits-from", default=None, help="Override the base version.")
    install.add_argument(
        "--libraries-format",
        choices=[f.value for f in LibrariesFormat],
        default=LibrariesFormat.ARRAY.value,
        help="Write libraries as a JSON array or as an embedded JSON string.",
    )
    install.add_argument("--strict", action="store_true", help="Fail when no main class is found.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    client = ArtifactClient(base_url=args.meta_url)

    try:
        if args.command == "versions":
            return _cmd_versions(client)
        if args.command == "loaders":
            return _cmd_loaders(args, client)
        if args.command == "yarn":
            return _cmd_yarn(args, client)
        if args.command == "install":
            return _cmd_install(args, client)
    except FabricInstallerError as e:
        console.print(f"[red]Error: {e}[/]")
        return 1
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
