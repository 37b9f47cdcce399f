import argparse
import base64
import binascii
import sys

from typing import List, Optional
from compressor import decompress, encode
from errors import HuffmanError
from frame import build_frame


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Huffman compression of text into self-describing blobs"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    enc = subparsers.add_parser(
        "encode", aliases=["e"], help="Compress text into a Huffman frame"
    )
    enc.add_argument("text", nargs="?", help="Text to compress")
    enc.add_argument(
        "-i", "--input", help="Read the text from a UTF-8 file instead"
    )
    enc.add_argument(
        "-o",
        "--output",
        help="Write the raw frame to this file (default: print Base64)",
    )
    enc.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show sizes, compression ratio and the code table",
    )

    dec = subparsers.add_parser(
        "decode", aliases=["d"], help="Decompress a Huffman frame"
    )
    dec.add_argument("blob", nargs="?", help="Base64-encoded frame")
    dec.add_argument(
        "-i", "--input", help="Read the raw frame from a file instead"
    )
    dec.add_argument(
        "-o", "--output", help="Write the text to this file (default: print)"
    )

    return parser


def _fmt_bytes(n: int) -> str:
    """Format a byte count into a human-readable string.

    :param n: Number of bytes.
    :type n: int
    :returns: Human-readable string.
    :rtype: str
    """
    for unit in ['', 'Ki', 'Mi', 'Gi', 'Ti']:
        if abs(n) < 1024:
            return f"{n:.2f} {unit}B"
        n /= 1024
    return f"{n:.2f} PiB"


def _fmt_code_key(symbol: str) -> str:
    """Render a symbol for the code table listing.

    :param symbol: Single character.
    :type symbol: str
    :returns: Printable representation (escapes for control characters).
    :rtype: str
    """
    return repr(symbol) if not symbol.isprintable() or symbol == " " else symbol


def _to_base64(frame: bytes) -> str:
    """Encode a frame as Base64 text.

    :param frame: Raw frame bytes.
    :type frame: bytes
    :returns: ASCII Base64 string.
    :rtype: str
    """
    return base64.b64encode(frame).decode("ascii")


def _from_base64(text: str) -> bytes:
    """Decode strict Base64 text.

    :param text: Base64 string, surrounding whitespace allowed.
    :type text: str
    :returns: Decoded bytes.
    :rtype: bytes
    :raises ValueError: If ``text`` is not valid Base64.
    """
    try:
        return base64.b64decode(text.strip(), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Input is not valid Base64: {e}") from None


def encode_text(text: str, output_path: Optional[str], verbose: bool) -> bool:
    """Compress ``text`` and print or store the frame.

    The frame goes to ``output_path`` as raw bytes when given, otherwise its
    Base64 form is printed.

    :param text: Text to compress.
    :type text: str
    :param output_path: Destination file for the raw frame, if any.
    :type output_path: Optional[str]
    :param verbose: Whether to print statistics and the code table.
    :type verbose: bool
    :returns: ``True`` on success.
    :rtype: bool
    """
    if not text or not text.strip():
        print("[!] Nothing to encode: text is empty")
        return False

    result = encode(text)
    frame = build_frame(result.payload, result.codes, result.padding_bits)
    if output_path:
        with open(output_path, "wb") as out:
            out.write(frame)
    else:
        print(_to_base64(frame))

    if verbose:
        original = len(text.encode("utf-8", errors="surrogatepass"))
        print("Original length: ", len(text))
        print("Size before compression: ", _fmt_bytes(original))
        print("Size after compression: ", _fmt_bytes(len(frame)))
        print(f"Compression ratio: {original / len(frame):.2f}")
        codes = result.codes
        for symbol in sorted(codes, key=lambda s: (len(codes[s]), s)):
            print(f"  {_fmt_code_key(symbol)}  {codes[symbol]}")
    return True


def decode_frame(frame: bytes, output_path: Optional[str]) -> bool:
    """Decompress ``frame`` and print or store the text.

    :param frame: Raw frame bytes.
    :type frame: bytes
    :param output_path: Destination UTF-8 text file, if any.
    :type output_path: Optional[str]
    :returns: ``True`` on success.
    :rtype: bool
    """
    try:
        text = decompress(frame)
    except HuffmanError as e:
        print(f"[!] Cannot decode: {e}")
        return False

    try:
        if output_path:
            data = text.encode("utf-8")
            with open(output_path, "wb") as out:
                out.write(data)
        else:
            print(text)
    except UnicodeEncodeError as e:
        print(f"[!] Decoded text cannot be written as UTF-8: {e.reason}")
        return False
    return True


def _read_source(inline: Optional[str], path: Optional[str], binary: bool):
    """Pick the command input from the positional argument or a file.

    :param inline: Positional argument value.
    :type inline: Optional[str]
    :param path: ``--input`` file path.
    :type path: Optional[str]
    :param binary: Read the file as bytes instead of UTF-8 text.
    :type binary: bool
    :returns: File contents or ``inline``; ``None`` when neither is usable.
    :rtype: str | bytes | None
    """
    if inline is not None and path:
        print("[!] Give either an inline argument or --input, not both")
        return None
    if not path:
        if inline is None:
            print("[!] Nothing to process: no input given")
        return inline
    try:
        if binary:
            with open(path, "rb") as f:
                return f.read()
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        print(f"[!] Input file not found: {path}")
    except UnicodeDecodeError:
        print(f"[!] Input file is not valid UTF-8: {path}")
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments to parse (default: ``sys.argv[1:]``).
    :type argv: Optional[List[str]]
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.cmd in ["encode", "e"]:
        text = _read_source(args.text, args.input, binary=False)
        if text is None:
            return 1
        ok = encode_text(text, args.output, args.verbose)
    else:
        source = _read_source(args.blob, args.input, binary=True)
        if source is None:
            return 1
        if isinstance(source, str):
            if not source.strip():
                print("[!] Nothing to decode: input is empty")
                return 1
            try:
                source = _from_base64(source)
            except ValueError as e:
                print(f"[!] {e}")
                return 1
        ok = decode_frame(source, args.output)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
