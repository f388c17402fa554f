"""CLI entrypoint for dictwalk."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dictwalk.collect import DEFAULT_AUDIO_EXTENSIONS, DEFAULT_TEXT_EXTENSIONS

LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def level_from_string(value: str) -> int:
    """argparse type for --level: 'info' -> logging.INFO."""
    try:
        return LOG_LEVELS[value.lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            f"\"{value}\" is not a valid log level ({', '.join(LOG_LEVELS)})"
        ) from None


def existing_dir(value: str) -> Path:
    path = Path(value)
    if not path.is_dir():
        raise argparse.ArgumentTypeError(
            f"Path \"{value}\" does not exist or is not a directory."
        )
    return path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="dictwalk",
        description="Walks the text <-> audio dictionary and produces a JSON with phonemes",
    )
    parser.add_argument("-d", "--dictionary", type=existing_dir, required=True,
                        metavar="DIRECTORY",
                        help="Path to the text <-> audio dictionary")
    parser.add_argument("-l", "--level", type=level_from_string, default="info",
                        help="Logging level: trace, debug, info, warn, error (default: info)")
    parser.add_argument("--audio-ext", action="append", default=None, metavar="EXT",
                        help="Audio file extension, repeatable (default: wav)")
    parser.add_argument("--text-ext", action="append", default=None, metavar="EXT",
                        help="Transcript file extension, repeatable (default: txt)")
    parser.add_argument("--g2p-dict", type=Path, default=None, metavar="FILE",
                        help="Grapheme-to-phoneme pronunciation dictionary")
    parser.add_argument("--model", type=Path,
                        default=os.environ.get("DICTWALK_MODEL_DIR") or None,
                        metavar="DIR",
                        help="Grapheme-to-phoneme model folder "
                             "(default: $DICTWALK_MODEL_DIR, else no model)")
    parser.add_argument("-o", "--output", type=Path, default=None, metavar="FILE",
                        help="Write JSON here instead of stdout")

    args = parser.parse_args(argv)
    if args.audio_ext is None:
        args.audio_ext = sorted(DEFAULT_AUDIO_EXTENSIONS)
    if args.text_ext is None:
        args.text_ext = sorted(DEFAULT_TEXT_EXTENSIONS)
    return args


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    logging.basicConfig(
        level=args.level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("onnxruntime").setLevel(logging.ERROR)

    if args.g2p_dict is not None and not args.g2p_dict.is_file():
        print(f"Error: dictionary file not found: {args.g2p_dict}", file=sys.stderr)
        sys.exit(1)

    from dictwalk.pipeline import entries_to_json, process

    # DecodeError, ModelDefError and backend mismatches are ValueErrors;
    # a missing optional engine is an ImportError
    try:
        entries = process(
            root=args.dictionary,
            dictionary=args.g2p_dict,
            model_dir=args.model,
            audio_extensions=args.audio_ext,
            text_extensions=args.text_ext,
            output=args.output,
        )
    except (ImportError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output is None:
        print(entries_to_json(entries))
    else:
        print(f"Wrote {len(entries)} entries to {args.output}")


if __name__ == "__main__":
    main()
