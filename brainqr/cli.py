"""brainqr: terminal front end for the section filename generator.

Examples::

    brainqr serve
    brainqr series-types
    brainqr generate --brain-id BR001 --local-name Patient001 --series-type T1 \\
        --start 5 --end 7 --qr-dir qr/ --copy all
"""

import argparse
import asyncio
import os
import sys

import uvicorn

from brainqr.clients import GeneratorClient, GeneratorError
from brainqr.clipboard import ClipboardService
from brainqr.clipboard.terminal import terminal_context
from brainqr.config import settings
from brainqr.services.qrcodes import QRCodeService
from brainqr.session import (
    SessionState,
    all_filenames_text,
    apply_generation,
    begin_generation,
    change_field,
    expected_count,
    select_filename,
    validate_form,
)

# Element the browser page selects when a copy fails; the terminal has none.
SELECTION_ELEMENT_ID = "generatedFilename"


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="brainqr",
        description="Generate standardized brain section filenames with QR codes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the web server (host/port from settings)")

    series = sub.add_parser("series-types", help="List available series types")
    series.add_argument("--server", default=None, help="Generator base URL")

    gen = sub.add_parser("generate", help="Generate filenames for a section range")
    gen.add_argument("--server", default=None, help="Generator base URL")
    gen.add_argument("--brain-id", required=True, help="e.g. BR001")
    gen.add_argument("--local-name", required=True, help="e.g. Patient001")
    gen.add_argument("--series-type", required=True, help="Series mnemonic, e.g. T1")
    gen.add_argument("--start", type=int, default=1, help="Start section number")
    gen.add_argument("--end", type=int, default=None, help="End section number (default: start)")
    gen.add_argument("--increment", type=int, default=1, help="Section step")
    gen.add_argument(
        "--slide-id",
        default=None,
        help="Base slide id (default: follows the start section)",
    )
    gen.add_argument("--qr-dir", default=None, help="Write one PNG QR code per filename here")
    gen.add_argument("--qr-size", type=positive_int, default=None, help="QR image width in pixels")
    gen.add_argument(
        "--copy",
        default=None,
        metavar="N|all",
        help="Copy filename N (1-based) or all filenames to the clipboard",
    )
    return parser.parse_args(argv)


def build_state(args: argparse.Namespace) -> SessionState:
    """Fill the form the same way a user typing into the page would."""
    state = SessionState()
    state = change_field(state, "brain_id", args.brain_id)
    state = change_field(state, "local_name", args.local_name)
    state = change_field(state, "series_type", args.series_type)
    state = change_field(state, "start_section", args.start)
    state = change_field(
        state, "end_section", args.end if args.end is not None else args.start
    )
    state = change_field(state, "increment", args.increment)
    if args.slide_id is not None:
        state = change_field(state, "slide_id", args.slide_id)
    return state


async def copy_to_clipboard(clipboard: ClipboardService, text: str) -> bool:
    outcome = await clipboard.copy(text)
    if outcome.success:
        print("Filename copied to clipboard!")
        return True
    if clipboard.select_text(SELECTION_ELEMENT_ID):
        print("Copy failed. Text has been selected - please press Ctrl+C (or Cmd+C on Mac)")
    else:
        print("Copy failed. Please manually select and copy the filename.")
    return False


async def run_generate(
    args: argparse.Namespace,
    client: GeneratorClient,
    clipboard: ClipboardService,
) -> int:
    state = build_state(args)
    error = validate_form(state.form)
    if error:
        print(f"ERROR: {error}")
        return 1

    print(f"Will generate {expected_count(state.form)} filename(s)")
    state, seq = begin_generation(state)
    try:
        filenames, total = await client.generate(state.form.to_payload())
    except GeneratorError as exc:
        print(f"ERROR: {exc}")
        return 1
    state = apply_generation(state, seq, filenames)

    print(f"Generated {total} filename{'s' if total > 1 else ''} successfully!")
    print("-" * 70)
    for i, item in enumerate(state.filenames, start=1):
        print(f"  {i:3d}. {item.filename}  (section {item.section_number}, slide {item.slide_number})")
    print("-" * 70)
    print(f"Timestamp: {state.filenames[0].timestamp}")
    print(f"Next start section: {state.form.start_section}")

    if args.qr_dir:
        try:
            os.makedirs(args.qr_dir, exist_ok=True)
            for item in state.filenames:
                path = os.path.join(args.qr_dir, f"{item.filename}.png")
                QRCodeService.save(item.filename, path, args.qr_size)
        except (ValueError, OSError) as exc:
            print(f"ERROR: could not write QR codes to {args.qr_dir}: {exc}")
            return 1
        print(f"Wrote {len(state.filenames)} QR code(s) to {args.qr_dir}")

    if args.copy:
        if args.copy == "all":
            text = all_filenames_text(state)
        else:
            try:
                index = int(args.copy)
                if index < 1:
                    raise IndexError(index)
                item = state.filenames[index - 1]
            except (ValueError, IndexError):
                print(f"ERROR: --copy must be 'all' or 1-{len(state.filenames)}, got {args.copy!r}")
                return 1
            state = select_filename(state, item)
            text = item.filename
        if not await copy_to_clipboard(clipboard, text):
            return 1
    return 0


async def run_series_types(client: GeneratorClient) -> int:
    try:
        series, notice = await client.series_types()
    except GeneratorError as exc:
        print(f"ERROR: {exc}")
        return 1
    if notice:
        print(f"WARNING: {notice}")
    for s in series:
        print(f"  {s.mnemonic:<8} {s.name}")
    return 0


async def _run(args: argparse.Namespace) -> int:
    client = GeneratorClient(base_url=args.server)
    try:
        if args.command == "series-types":
            return await run_series_types(client)
        return await run_generate(args, client, ClipboardService(terminal_context()))
    finally:
        await client.aclose()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "serve":
        uvicorn.run("brainqr.main:app", host=settings.host, port=settings.port)
        return 0
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
