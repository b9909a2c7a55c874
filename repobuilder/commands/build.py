"""
Handles the 'build' command: build every package source and publish it.

This command follows our design principles:
- One JSONL record per package on stdout, then a summary record
- --verbose/-v for progress output
- --quiet/-q to suppress JSON output
- Thin CLI layer over PipelineSequencer
"""

import click

from ..config import PipelineConfig, load_config, configure_logging
from ..cli_utils import standard_command, add_common_options
from ..domain.operation import PackageStatus
from ..render import render_run_summary
from ..services.bootstrap import EnvironmentBootstrap
from ..services.pipeline import PipelineSequencer


@click.command(name='build')
@click.option('--dir', 'build_root', required=True, type=click.Path(file_okay=False),
              help='Directory of package sources, or a single package source')
@click.option('--chroot', 'chroot', required=True, type=click.Path(),
              help='Chroot directory (bootstrapped on first use)')
@click.option('--repo', 'repo', required=True, type=click.Path(file_okay=False),
              help='Repository output directory (created if absent)')
@click.option('--repoName', '--repo-name', 'repo_name', required=True,
              help='Repository database name ({name}.db.tar.gz)')
@click.option('--pacman', 'pacman_config', required=True, type=click.Path(dir_okay=False),
              help='pacman.conf used to update the chroot')
@click.option('--dirty', is_flag=True, help='Build on the host with makepkg instead of in the chroot')
@click.option('--force', is_flag=True, default=False, help='Keep going when a package fails to build')
@click.option('--skip-update', is_flag=True, help='Do not refresh the chroot before building')
@click.option('--table', is_flag=True, help='Show a results table on stderr when done')
@add_common_options('verbose', 'quiet')
@standard_command(streaming=True)
def build_handler(build_root, chroot, repo, repo_name, pacman_config, dirty, force,
                  skip_update, table, progress, verbose=False, quiet=False, **kwargs):
    """Build package sources and publish them into a repository.

    \b
    If --dir itself contains a PKGBUILD it is built as a single package,
    unconditionally. Otherwise every subdirectory is a package source and
    is only built when its declared version differs from the installed one.

    Examples:

    \b
        repobuilder build --dir ~/pkgbuilds --chroot ~/chroot \\
            --repo ~/repo --repoName myrepo --pacman /etc/pacman.conf
        repobuilder build --dir ~/pkgbuilds/foo ... --dirty
        repobuilder build --dir ~/pkgbuilds ... --force --table
    """
    settings = load_config()
    configure_logging(settings, verbose=verbose)

    config = PipelineConfig.from_options(
        build_root=build_root,
        chroot=chroot,
        repo=repo,
        repo_name=repo_name,
        pacman_config=pacman_config,
        dirty=dirty,
        force=force,
        settings=settings,
    )

    for message in EnvironmentBootstrap(config).prepare(update=not skip_update):
        progress(message)

    pipeline = PipelineSequencer(config)
    for result in pipeline.run():
        if result.status in (PackageStatus.FAILED, PackageStatus.NO_ARTIFACTS):
            progress.warning(f"{result.package}: {result.error}")
        else:
            progress.success(f"{result.package}: {result.status.value}")
        yield result

    summary = pipeline.last_result
    if table:
        render_run_summary(summary)
    yield summary
