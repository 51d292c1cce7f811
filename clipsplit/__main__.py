"""
Command-line interface for clipsplit

Every command works on the persisted session: `open` starts or restores the
session for a media file, the editing commands load it, apply one transition
and save it again through the store.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TypeVar

from . import __version__
from .exceptions import ClipsplitError
from .export import export_selected, is_valid_video_format
from .ffprobe import get_duration
from .formatting import (
    parse_time, print_check, print_error, print_header, print_info,
    print_success, print_timeline, print_warning
)
from .logging import configure_logging
from .persistence import StateStorage
from .store import TimelineStore
from .timeline.models import SourceFile
from .utils import check_dependencies

log = logging.getLogger("clipsplit")

T = TypeVar("T")

def resolve_item(items: Sequence[T], ref: str) -> Optional[T]:
    """Find a marker or segment by 1-based position, id, or unique id prefix"""
    if ref.isdigit():
        index = int(ref) - 1
        return items[index] if 0 <= index < len(items) else None
    exact = [item for item in items if item.id == ref]
    if exact:
        return exact[0]
    matches = [item for item in items if item.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None

def _time_arg(value: str) -> float:
    seconds = parse_time(value)
    if seconds is None:
        raise argparse.ArgumentTypeError(f"invalid time: {value!r}")
    return seconds

def parse_args(argv: Optional[Sequence[str]] = None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="clipsplit",
        description="Split a media timeline into named segments and export them losslessly"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (default from config)"
    )
    parser.add_argument(
        "--state-dir",
        dest="state_dir",
        type=Path,
        default=None,
        help="Directory holding the saved session"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("open", help="Open a media file, restoring its saved session if any")
    p.add_argument("file", type=Path)

    sub.add_parser("show", help="Show segments and markers")

    p = sub.add_parser("add", help="Add a split marker")
    p.add_argument("time", type=_time_arg)

    p = sub.add_parser("move", help="Move a split marker")
    p.add_argument("marker")
    p.add_argument("time", type=_time_arg)

    p = sub.add_parser("remove", help="Remove a split marker")
    p.add_argument("marker")

    p = sub.add_parser("rename", help="Rename a segment (empty name restores the default)")
    p.add_argument("segment")
    p.add_argument("name", nargs="?", default="")

    p = sub.add_parser("toggle", help="Toggle whether a segment is exported")
    p.add_argument("segment")

    p = sub.add_parser("delete", help="Delete a segment, merging it into its neighbours")
    p.add_argument("segment")

    p = sub.add_parser("trim", help="Set a segment's start and end")
    p.add_argument("segment")
    p.add_argument("start", type=_time_arg)
    p.add_argument("end", type=_time_arg)

    p = sub.add_parser("export", help="Export the selected segments")
    p.add_argument("file", type=Path, help="The media file the session belongs to")
    p.add_argument("--merge", action="store_true", help="Merge selected segments into one file")
    p.add_argument("--name", default=None, help="Base name of the merged file")
    p.add_argument("--output-dir", dest="output_dir", type=Path, default=None)

    sub.add_parser("clear", help="Forget the saved session")
    return parser.parse_args(argv)

def open_session(store: TimelineStore, path: Path) -> int:
    if not path.is_file():
        log.error("Input %s does not exist", path)
        return 1
    if not is_valid_video_format(path.name):
        print_warning(f"{path.suffix or 'No extension'} is not a supported format")
    store.set_source(SourceFile.from_path(path))
    if store.restore():
        print_check(f"Restored saved session for {path.name}")
        return 0
    if not check_dependencies():
        log.error("Missing required dependencies")
        return 1
    store.set_duration(get_duration(path))
    print_check(f"Opened {path.name}")
    return 0

def load_session(store: TimelineStore) -> bool:
    """Rebuild the store from the saved session"""
    stored = store.storage.load_state()
    if stored is None:
        print_error("No open session; run 'clipsplit open FILE' first")
        return False
    store.set_source(SourceFile(name=stored.file_name, size=stored.file_size))
    return store.restore()

def run_command(store: TimelineStore, args) -> int:
    """Apply one editing command to a loaded store"""
    state = store.state
    if args.command == "show":
        print_timeline(state)
        return 0
    if args.command == "add":
        ok = store.add_marker(args.time)
        reason = "outside the timeline or too close to another marker"
    elif args.command in ("move", "remove"):
        marker = resolve_item(state.markers, args.marker)
        if marker is None:
            print_error(f"No marker {args.marker}")
            return 1
        if args.command == "move":
            ok = store.update_marker(marker.id, args.time)
            reason = "outside the timeline"
        else:
            ok = store.delete_marker(marker.id)
            reason = ""
    else:
        segment = resolve_item(state.segments, args.segment)
        if segment is None:
            print_error(f"No segment {args.segment}")
            return 1
        if args.command == "rename":
            ok = store.rename_segment(segment.id, args.name)
            reason = ""
        elif args.command == "toggle":
            ok = store.toggle_segment_selected(segment.id)
            reason = ""
        elif args.command == "delete":
            ok = store.delete_segment(segment.id)
            reason = "the last segment cannot be deleted"
        else:
            ok = store.update_segment_time(segment.id, args.start, args.end)
            reason = "the range is invalid or overlaps a neighbouring segment"

    if not ok:
        print_warning(f"{args.command} rejected: {reason}" if reason else f"{args.command} had no effect")
        return 1
    print_timeline(store.state)
    return 0

def export_session(store: TimelineStore, args) -> int:
    source = SourceFile.from_path(args.file) if args.file.is_file() else None
    if source is None or not store.storage.is_file_match(source):
        print_error(f"The saved session does not belong to {args.file}")
        return 1
    if not check_dependencies():
        log.error("Missing required dependencies")
        return 1
    store.set_source(source)
    store.restore()

    def report(percent: float) -> None:
        store.set_exporting(True, percent)

    store.set_exporting(True, 0.0)
    try:
        written = export_selected(
            source, store.state,
            merge=args.merge,
            on_progress=report,
            output_dir=args.output_dir,
            output_name=args.name
        )
    finally:
        store.set_exporting(False)
    for path in written:
        print_success(f"Wrote {path}")
    return 0

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    configure_logging(args.log_level)
    store = TimelineStore(storage=StateStorage(args.state_dir))

    try:
        if args.command == "open":
            print_header(f"clipsplit v{__version__}")
            result = open_session(store, args.file)
            if result == 0:
                print_timeline(store.state)
            return result
        if args.command == "clear":
            store.clear()
            print_info("Saved session cleared")
            return 0
        if not load_session(store):
            return 1
        if args.command == "export":
            return export_session(store, args)
        return run_command(store, args)
    except KeyboardInterrupt:
        log.warning("Interrupted by user")
        return 130
    except ClipsplitError as e:
        log.error("%s", e)
        return 1

if __name__ == "__main__":
    sys.exit(main())
