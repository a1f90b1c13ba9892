"""
Command-line interface for the qBittorrent WebUI client.

Every command logs in, performs one operation and logs out again.
Connection settings default to the QBITTORRENT_* environment variables.

Usage:
    qbittorrent-webui version
    qbittorrent-webui list --filter Completed --sort Name
    qbittorrent-webui info <info_hash>
    qbittorrent-webui add <magnet/url>... --category movies
    qbittorrent-webui remove <info_hash>... --delete-data
"""

import argparse
import json
import sys
from typing import List, Optional

from .client import QBittorrentClient
from .config import Config
from .logger import logger
from .models import Filter, Sort
from .timestamps import is_never


def format_bytes(size):
    """Format bytes as human-readable string."""
    if size is None:
        return "N/A"
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def format_time(value):
    if is_never(value):
        return "Never"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def to_json(value):
    def default(obj):
        if hasattr(obj, "strftime"):
            return None if is_never(obj) else obj.isoformat()
        return str(obj)
    return json.dumps(value, indent=2, default=default)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="qBittorrent WebUI CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s version
  %(prog)s list --filter Downloading --sort Progress --reverse
  %(prog)s info 8c212779b4abde7c6bc608063a0d008b7e40ce32
  %(prog)s add magnet:?xt=... --save-path /downloads --paused
  %(prog)s remove 8c212779b4abde7c6bc608063a0d008b7e40ce32 --delete-data
  %(prog)s set-preferences '{"dl_limit": 1048576}'
"""
    )
    parser.add_argument("--url", default=Config.QBITTORRENT_URL, help="WebUI URL")
    parser.add_argument("--username", default=Config.QBITTORRENT_USERNAME, help="WebUI username")
    parser.add_argument("--password", default=Config.QBITTORRENT_PASSWORD, help="WebUI password")
    parser.add_argument("--timeout", type=float, default=Config.QBITTORRENT_TIMEOUT,
                        help="Request timeout in seconds")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # -------------------------------------------------------------------------
    # Application Commands
    # -------------------------------------------------------------------------

    subparsers.add_parser("version", help="Show application and API versions")
    subparsers.add_parser("transfer", help="Show global transfer statistics")
    subparsers.add_parser("preferences", help="Show application preferences")

    set_prefs_parser = subparsers.add_parser("set-preferences", help="Change application preferences")
    set_prefs_parser.add_argument("json", help="JSON object of preferences to change")

    subparsers.add_parser("shutdown", help="Shut down qBittorrent")

    # -------------------------------------------------------------------------
    # Query Commands
    # -------------------------------------------------------------------------

    list_parser = subparsers.add_parser("list", help="List torrents")
    list_parser.add_argument("--filter", choices=[f.name for f in Filter], help="Torrent state filter")
    list_parser.add_argument("--category", help="Only torrents in this category")
    list_parser.add_argument("--sort", choices=[s.name for s in Sort], help="Sort key")
    list_parser.add_argument("--reverse", action="store_true", default=None, help="Reverse sort order")
    list_parser.add_argument("--limit", type=int, help="Maximum number of torrents")
    list_parser.add_argument("--offset", type=int, help="Number of torrents to skip")

    for name, help_text in [
        ("info", "Show torrent properties"),
        ("webseeds", "List torrent web seeds"),
        ("trackers", "List torrent trackers"),
        ("files", "List torrent files"),
        ("pause", "Pause a torrent"),
        ("resume", "Resume a torrent"),
        ("recheck", "Recheck a torrent"),
    ]:
        hash_parser = subparsers.add_parser(name, help=help_text)
        hash_parser.add_argument("info_hash", help="Torrent info hash")

    # -------------------------------------------------------------------------
    # Torrent Commands
    # -------------------------------------------------------------------------

    add_parser = subparsers.add_parser("add", help="Add torrents by magnet link or URL")
    add_parser.add_argument("urls", nargs="+", help="Magnet links or HTTP URLs")
    upload_parser = subparsers.add_parser("upload", help="Add torrents from .torrent files")
    upload_parser.add_argument("paths", nargs="+", help=".torrent file paths")

    for sub in (add_parser, upload_parser):
        sub.add_argument("--save-path", help="Download directory")
        sub.add_argument("--cookie", help="Cookie for fetching HTTP URLs")
        sub.add_argument("--category", help="Category to assign")
        sub.add_argument("--skip-checking", action="store_true", default=None, help="Skip hash check")
        sub.add_argument("--paused", action="store_true", default=None, help="Add paused")

    rm_parser = subparsers.add_parser("remove", help="Remove torrents")
    rm_parser.add_argument("hashes", nargs="+", help="Torrent info hashes")
    rm_parser.add_argument("--delete-data", action="store_true", help="Also delete downloaded data")

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        client = QBittorrentClient.login(args.url, args.username, args.password, timeout=args.timeout)
    except Exception as e:
        logger.error(f"Login failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)

    try:
        run(client, args)
    except Exception as e:
        logger.error(f"Command {args.command} failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        # No-op after shutdown, which already released the session
        client.logout()


def run(client: QBittorrentClient, args):
    # -------------------------------------------------------------------------
    # Application Commands
    # -------------------------------------------------------------------------

    if args.command == "version":
        print(f"qBittorrent: {client.app_version()}")
        print(f"API: {client.api_version()} (minimum {client.api_min_version()})")

    elif args.command == "transfer":
        print(to_json(client.transfer_info()))

    elif args.command == "preferences":
        print(to_json(client.preferences()))

    elif args.command == "set-preferences":
        client.set_preferences(json.loads(args.json))
        print("Preferences updated")

    elif args.command == "shutdown":
        client.shutdown()
        print("Shutdown requested")

    # -------------------------------------------------------------------------
    # Query Commands
    # -------------------------------------------------------------------------

    elif args.command == "list":
        torrents = client.torrents(
            filter=Filter[args.filter] if args.filter else None,
            category=args.category,
            sort=Sort[args.sort] if args.sort else None,
            reverse=args.reverse,
            limit=args.limit,
            offset=args.offset,
        )
        if not torrents:
            print("No torrents found.")
        else:
            print(f"{'HASH':<20} {'STATE':<12} {'PROGRESS':<10} {'SIZE':<12} {'ADDED':<20} {'NAME'}")
            print("-" * 110)
            for t in torrents:
                hash_short = t.get('Hash', '')[:20]
                state = t.get('State', 'N/A')[:12]
                progress = f"{t.get('Progress', 0) * 100:.1f}%"
                size = format_bytes(t.get('Size', 0))
                added = format_time(t['AddedOn']) if 'AddedOn' in t else "N/A"
                name = t.get('Name', 'Unknown')[:40]
                print(f"{hash_short:<20} {state:<12} {progress:<10} {size:<12} {added:<20} {name}")

    elif args.command == "info":
        print(to_json(client.properties(args.info_hash)))

    elif args.command == "webseeds":
        seeds = client.web_seeds(args.info_hash)
        if not seeds:
            print("No web seeds.")
        for seed in seeds:
            print(seed.get("Url", ""))

    elif args.command == "trackers":
        print(to_json(client.trackers(args.info_hash)))

    elif args.command == "files":
        files = client.files(args.info_hash)
        if not files:
            print("No files found.")
        else:
            print(f"{'PROGRESS':<10} {'SIZE':<12} {'NAME'}")
            print("-" * 80)
            for f in files:
                progress = f"{f.get('Progress', 0) * 100:.1f}%"
                size = format_bytes(f.get('Size', 0))
                print(f"{progress:<10} {size:<12} {f.get('Name', '')}")

    elif args.command == "pause":
        client.pause(args.info_hash)
        print("Torrent paused")

    elif args.command == "resume":
        client.resume(args.info_hash)
        print("Torrent resumed")

    elif args.command == "recheck":
        client.recheck(args.info_hash)
        print("Recheck started")

    # -------------------------------------------------------------------------
    # Torrent Commands
    # -------------------------------------------------------------------------

    elif args.command in ("add", "upload"):
        options = dict(
            save_path=args.save_path,
            cookie=args.cookie,
            category=args.category,
            skip_checking=args.skip_checking,
            paused=args.paused,
        )
        if args.command == "add":
            client.add_urls(args.urls, **options)
            print(f"Added {len(args.urls)} torrent(s)")
        else:
            client.upload(args.paths, **options)
            print(f"Uploaded {len(args.paths)} torrent file(s)")

    elif args.command == "remove":
        client.delete(args.hashes, permanent=args.delete_data)
        print(f"Removed {len(args.hashes)} torrent(s)")


if __name__ == "__main__":
    main()
