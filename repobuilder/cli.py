#!/usr/bin/env python3

import click

from repobuilder.commands.build import build_handler
from repobuilder.commands.check import check_handler
from repobuilder.commands.config import config_cmd


@click.group()
@click.version_option(package_name="repobuilder")
def cli():
    """repobuilder - Build PKGBUILD trees and publish them into a pacman repository.

    Packages are built in a clean chroot (or on the host with --dirty),
    signed with gpg and added to the repository database with repo-add.
    """
    pass


cli.add_command(build_handler, name='build')
cli.add_command(check_handler, name='check')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
