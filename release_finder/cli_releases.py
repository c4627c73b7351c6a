#!/usr/bin/env python3
"""
Command-line interface for finding GitHub releases and downloading assets
"""
import os
import sys
import argparse
import logging
from release_finder import FetchError, ReleaseFinderConfig, __version__

DEFAULT_CLIENT = f'release-finder/{__version__}'


def _find(args, prereleases):
    config = ReleaseFinderConfig(args.client) \
        .with_token(args.token or os.environ.get('GITHUB_TOKEN')) \
        .with_author(args.author) \
        .with_repository(args.repository) \
        .with_prereleases(prereleases)
    return config.find_release()


def _print_release(label, manager):
    print(f"Latest {label}: {manager.get_release_tag()}")
    for name in manager.get_asset_names():
        print(f"  {name}")


def show_latest(args):
    """Show the latest stable (and prerelease) with their assets"""
    stable, pre = _find(args, args.prereleases)
    if stable is None and pre is None:
        print("No releases found")
        return 0

    if stable is not None:
        _print_release('release', stable)
    if pre is not None:
        _print_release('prerelease', pre)
    return 0


def _progress(received, total):
    if total:
        pct = 100.0 * received / total
        msg = f"\r  {received / (1024 * 1024):.1f} of {total / (1024 * 1024):.1f} MB ({pct:.0f}%)"
    else:
        msg = f"\r  {received / (1024 * 1024):.1f} MB"
    sys.stdout.write(msg)
    sys.stdout.flush()


def download(args):
    """Download an asset from the latest stable or prerelease"""
    stable, pre = _find(args, args.prerelease)
    manager = pre if args.prerelease else stable
    if manager is None:
        kind = 'prerelease' if args.prerelease else 'release'
        print(f"Error: no {kind} found for {args.author}/{args.repository}", file=sys.stderr)
        return 1

    print(f"Downloading {args.asset} from {manager.get_release_tag()}...")
    outcome = manager.fetch_asset(args.asset, on_progress=None if args.quiet else _progress)
    if not args.quiet:
        print()

    if not outcome.ok:
        if outcome.error is None:
            print(f"Error: no asset named {args.asset}. "
                  f"Available assets: {manager.get_asset_names()}", file=sys.stderr)
        else:
            print(f"Error: {outcome.error}", file=sys.stderr)
        return 1

    dest = args.dest or args.asset
    with open(dest, 'wb') as f:
        f.write(outcome.data)
    print(f"✓ Saved {len(outcome.data)} bytes to {dest}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        description='Find GitHub releases and download their assets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s latest octocat hello-world                  # Show latest release
  %(prog)s latest octocat hello-world --prereleases    # Include prereleases
  %(prog)s download octocat hello-world app.zip        # Download an asset
  %(prog)s download octocat hello-world app.zip --prerelease --dest /tmp/app.zip
        """
    )
    parser.add_argument('--token', help='GitHub access token (default: $GITHUB_TOKEN)')
    parser.add_argument('--client', default=DEFAULT_CLIENT, help='User-Agent sent to GitHub')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # latest command
    latest_parser = subparsers.add_parser('latest', help='Show latest release info')
    latest_parser.add_argument('author')
    latest_parser.add_argument('repository')
    latest_parser.add_argument('--prereleases', action='store_true', help='Also show the latest prerelease')
    latest_parser.set_defaults(func=show_latest)

    # download command
    download_parser = subparsers.add_parser('download', help='Download a release asset')
    download_parser.add_argument('author')
    download_parser.add_argument('repository')
    download_parser.add_argument('asset', help='Exact asset name')
    download_parser.add_argument('--prerelease', action='store_true', help='Use the latest prerelease')
    download_parser.add_argument('--dest', help='Output file (default: asset name)')
    download_parser.add_argument('-q', '--quiet', action='store_true', help='No progress output')
    download_parser.set_defaults(func=download)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    try:
        return args.func(args)
    except FetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
