"""
Offset Cipher - table-based substitution keyed by a single offset character.

Every symbol of the reference alphabet is shifted by the index of the offset
character; anything outside the alphabet passes through untouched. The key
travels as the first character of the ciphertext, so decoding needs nothing
but the ciphertext itself.

This is an obfuscation transform, NOT encryption: the key space is the size
of the alphabet and can be brute-forced by hand.
"""

import sys
import argparse
import threading
from typing import Optional, Tuple

__version__ = "1.0.0"

REFERENCE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789()*+-./"
DEFAULT_OFFSET_CHAR = "B"

_INDEX = {symbol: i for i, symbol in enumerate(REFERENCE_ALPHABET)}
_NOT_FOUND = -1

DEMO_TEXT = "RQPp"

# Verbose mode (disabled by default, enabled with --verbose)
VERBOSE = False

def log_info(msg: str):
    """Print info message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[INFO] {msg}", file=sys.stderr)

def log_warn(msg: str):
    """Print warning message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[WARN] {msg}", file=sys.stderr)

# ==========================================
#  ERRORS
# ==========================================

class InvalidOffsetCharacter(ValueError):
    """Raised when an offset character is not part of the reference alphabet."""

    def __init__(self, candidate):
        self.candidate = candidate
        super().__init__(
            f"Offset character must be in the reference table, got {candidate!r}."
        )

def is_valid_offset_char(candidate) -> bool:
    return isinstance(candidate, str) and len(candidate) == 1 and candidate in _INDEX

def validate_offset_char(candidate) -> str:
    """Return the candidate unchanged, or raise InvalidOffsetCharacter."""
    if not is_valid_offset_char(candidate):
        raise InvalidOffsetCharacter(candidate)
    return candidate

# ==========================================
#  CODEC: Pure Functions
# ==========================================

def _shift(text: str, offset: int) -> str:
    """Move every alphabet symbol forward by offset; leave the rest alone."""
    size = len(REFERENCE_ALPHABET)
    result = []
    for char in text:
        index = _INDEX.get(char, _NOT_FOUND)
        if index == _NOT_FOUND:
            result.append(char)
        else:
            result.append(REFERENCE_ALPHABET[(index + offset) % size])
    return "".join(result)

def encode(plain_text: Optional[str], offset_char: str = DEFAULT_OFFSET_CHAR) -> str:
    """
    Encode text with the given offset character.

    The offset character is prepended to the result so the ciphertext
    carries its own key. Empty input yields an empty string with no prefix.

    Args:
        plain_text: Text to encode (None is treated as empty)
        offset_char: Key symbol, must belong to REFERENCE_ALPHABET

    Returns:
        The key followed by the shifted text

    Raises:
        InvalidOffsetCharacter: if offset_char is not in the alphabet
    """
    return _encode(plain_text, validate_offset_char(offset_char))

def _encode(plain_text: Optional[str], key: str) -> str:
    if not plain_text:
        return ""
    return key + _shift(plain_text, -_INDEX.get(key, _NOT_FOUND))

def decode(encoded_text: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Decode text produced by encode().

    The first character is taken as the key. A key outside the alphabet is
    not rejected: its index is the not-found sentinel (-1), which is applied
    like any other offset, so the body is shifted back by one position.

    Returns:
        (decoded_text, recovered_key); recovered_key is None for empty input
    """
    if not encoded_text:
        return "", None

    key = encoded_text[0]
    offset = _INDEX.get(key, _NOT_FOUND)
    if offset == _NOT_FOUND:
        log_warn(f"Key character {key!r} is not in the reference table. Decoding with offset {offset}.")
    return _shift(encoded_text[1:], offset), key

# ==========================================
#  TRANSCODER: Stateful Wrapper
# ==========================================

class Transcoder:
    """
    Holds the current offset character between calls.

    decode() adopts the key found in the ciphertext, replacing whatever was
    configured before. Every operation runs under the instance lock, so one
    Transcoder can be shared between threads; use one instance per session
    when sessions need independent keys.
    """

    name = "offset"
    description = "Shifts A-Z, 0-9 and ()*+-./ by the index of a key character carried in front of the text."

    def __init__(self, offset_char: str = DEFAULT_OFFSET_CHAR):
        self._lock = threading.Lock()
        self._offset_char = validate_offset_char(offset_char)

    @property
    def offset_char(self) -> str:
        return self._offset_char

    def set_offset_char(self, candidate: str) -> None:
        """Replace the offset character; raises InvalidOffsetCharacter and keeps the old one on bad input."""
        validate_offset_char(candidate)
        with self._lock:
            self._offset_char = candidate

    def encode(self, plain_text: Optional[str]) -> str:
        with self._lock:
            return _encode(plain_text, self._offset_char)

    def decode(self, encoded_text: Optional[str]) -> str:
        """Decode text and keep its key as the new offset character."""
        with self._lock:
            decoded, key = decode(encoded_text)
            if key is not None:
                # adopted even when outside the alphabet
                self._offset_char = key
            return decoded

    def __repr__(self) -> str:
        return f"Transcoder(offset_char={self._offset_char!r})"

# ==========================================
#  CLI LOGIC
# ==========================================

def run_demo(transcoder: Transcoder = None):
    """Encode and decode a sample string, printing both stages."""
    transcoder = transcoder or Transcoder()
    encoded = transcoder.encode(DEMO_TEXT)
    print(f"Encoded: {encoded}")
    decoded = transcoder.decode(encoded)
    print(f"Decoded: {decoded}")


def _read_source(args) -> str:
    if args.text is not None:
        return args.text
    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                return f.read().rstrip("\r\n")
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
    if not sys.stdin.isatty():
        return sys.stdin.read().rstrip("\r\n")
    print("[CIPHER] Paste input below. Ctrl+D (Unix) or Ctrl+Z (Win) to end:")
    try:
        return sys.stdin.read().rstrip("\r\n")
    except KeyboardInterrupt:
        sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="offset-cipher",
        description=(
            "Offset substitution cipher over A-Z 0-9 ()*+-./\n"
            "The key character is written in front of the ciphertext.\n"
            "Obfuscation only: this offers no real secrecy."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Main action group
    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("-e", "--encode", action="store_true", help="Encode mode")
    action_group.add_argument("-d", "--decode", action="store_true", help="Decode mode (key is read from the first character)")
    action_group.add_argument("--demo", action="store_true", help=f"Encode and decode the sample text '{DEMO_TEXT}'")

    parser.add_argument("-k", "--key", default=DEFAULT_OFFSET_CHAR, metavar="CHAR",
                        help=f"Offset character used for encoding (default: {DEFAULT_OFFSET_CHAR}).\nMust be one of: {REFERENCE_ALPHABET}")

    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")

    # I/O options
    io_group = parser.add_mutually_exclusive_group()
    io_group.add_argument("-t", "--text", help="Direct text input")
    io_group.add_argument("-i", "--input", help="Input file path")

    parser.add_argument("-o", "--output", help="Output file path")
    return parser


def main(argv=None):
    global VERBOSE

    args = build_parser().parse_args(argv)
    VERBOSE = args.verbose

    try:
        transcoder = Transcoder()
        transcoder.set_offset_char(args.key)
    except InvalidOffsetCharacter as e:
        sys.exit(f"Error: {e}")

    if args.demo:
        run_demo(transcoder)
        return

    source_text = _read_source(args)

    if args.encode:
        log_info(f"Encoding with key '{transcoder.offset_char}'.")
        result = transcoder.encode(source_text)
    else:
        result = transcoder.decode(source_text)
        if source_text:
            log_info(f"Recovered key '{transcoder.offset_char}'.")

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
                f.write("\n")
        except OSError as e:
            sys.exit(f"Error writing output: {e}")
    else:
        print(result)

if __name__ == "__main__":
    main()
