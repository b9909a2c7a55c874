"""
Handles the 'check' command: report which package sources need building.

Runs discovery and the version gate only. Sources are still fetched
(makepkg --nobuild) so VCS packages report their current version.
"""

import click

from ..config import PipelineConfig, load_config, configure_logging
from ..cli_utils import standard_command, add_common_options
from ..services.pipeline import PipelineSequencer


@click.command(name='check')
@click.option('--dir', 'build_root', required=True, type=click.Path(file_okay=False),
              help='Directory of package sources, or a single package source')
@add_common_options('verbose', 'quiet')
@standard_command(streaming=True)
def check_handler(build_root, progress, verbose=False, quiet=False, **kwargs):
    """Show declared vs installed versions for each package source.

    Examples:

    \b
        repobuilder check --dir ~/pkgbuilds
        repobuilder check --dir ~/pkgbuilds | jq 'select(.needs_build)'
    """
    settings = load_config()
    configure_logging(settings, verbose=verbose)

    # The gate reads only the build root and the descriptor settings
    config = PipelineConfig.from_options(
        build_root=build_root,
        chroot=build_root,
        repo=build_root,
        repo_name="",
        pacman_config="/etc/pacman.conf",
        settings=settings,
    )

    pipeline = PipelineSequencer(config)
    stale = 0
    for decision in pipeline.check():
        if decision.needs_build:
            stale += 1
        yield decision

    progress(f"{stale} package(s) need building")
