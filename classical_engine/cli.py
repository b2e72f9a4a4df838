import argparse
import sys

from . import __version__, log
from .engine import CIPHER_REGISTRY, DECRYPT, ENCRYPT, get_cipher, load_plugins, transform
from .errors import CipherError, EmptyInputError
from .log import log_info

DEFAULT_METHOD = "caesar"

# ==========================================
#  CLI LOGIC
# ==========================================

def list_ciphers():
    """Print all available ciphers and exit."""
    print("\nAvailable Ciphers:")
    print("=" * 72)
    for name, cipher in CIPHER_REGISTRY.items():
        key_help = cipher.key_help or "no key"
        print(f"  {name:<17} [{key_help}]")
        print(f"  {'':<17} {cipher.description}")
    print("=" * 72)
    print(f"\nTotal: {len(CIPHER_REGISTRY)} cipher(s) registered.")


def _prescan(argv, flag):
    """Find `--flag VALUE` or `--flag=VALUE` before argparse runs."""
    for i, arg in enumerate(argv):
        if arg == flag and i + 1 < len(argv):
            return argv[i + 1]
        if arg.startswith(flag + "="):
            return arg.split("=", 1)[1]
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cipher-engine",
        description=f"Classical Cipher Engine v{__version__} (Caesar to Hill, plus plugins)",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    method_help = "\n".join(f"  {k:<17}: {v.description}" for k, v in CIPHER_REGISTRY.items())

    # Method selection (choices are dynamic based on loaded plugins)
    parser.add_argument("-m", "--method", choices=list(CIPHER_REGISTRY.keys()), default=DEFAULT_METHOD,
                        help=f"Select cipher algorithm (default: {DEFAULT_METHOD}).\n{method_help}")

    # Main action group
    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("-e", "--encrypt", action="store_true", help="Encrypt mode")
    action_group.add_argument("-d", "--decrypt", action="store_true", help="Decrypt mode")
    action_group.add_argument("-l", "--list", action="store_true", help="List all available ciphers")

    parser.add_argument("-k", "--key", metavar="KEY",
                        help="Cipher key (format depends on --method; see --list). "
                             "Omit to use the cipher's default key.")
    parser.add_argument("--show-key", action="store_true",
                        help="Print derived key material (grid, inverse matrix, column order) to stderr")

    # Plugin directory
    parser.add_argument("--plugin-dir", type=str, metavar="PATH",
                        help="Custom plugin directory (must contain manifest.json)")

    # Verbose output
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")

    # I/O options
    io_group = parser.add_mutually_exclusive_group()
    io_group.add_argument("-t", "--text", help="Direct text input")
    io_group.add_argument("-i", "--input", help="Input file path")

    parser.add_argument("-o", "--output", help="Output file path")
    return parser


def read_source(args) -> str:
    if args.text is not None:
        return args.text
    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
        except (OSError, UnicodeDecodeError) as e:
            sys.exit(f"Error reading input: {e}")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    print("[CIPHER] Paste input below. Ctrl+D (Unix) or Ctrl+Z (Win) to end:")
    try:
        return sys.stdin.read()
    except KeyboardInterrupt:
        sys.exit(0)


def strip_terminator(text: str) -> str:
    """Drop the one line terminator written after every output."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    # Preliminary scan for --verbose (needed before plugin loading)
    log.set_verbose("--verbose" in argv or "-v" in argv)

    # Load plugins before parsing args (so they appear in --list and -m choices)
    loaded_plugins = load_plugins(_prescan(argv, "--plugin-dir"))
    if loaded_plugins:
        log_info(f"Loaded plugins: {', '.join(loaded_plugins)}")

    args = build_parser().parse_args(argv)

    if args.list:
        list_ciphers()
        return 0

    mode = ENCRYPT if args.encrypt else DECRYPT
    cipher = get_cipher(args.method)

    # 1. READ INPUT
    source_text = strip_terminator(read_source(args))

    # 2. PARSE KEY & TRANSFORM
    try:
        if not source_text.strip():
            raise EmptyInputError("Please enter some text to encrypt/decrypt")
        key = cipher.parse_key(args.key)
        if args.show_key and key is not None:
            print(f"[KEY] {cipher.name}:\n{cipher.describe_key(key)}", file=sys.stderr)
        result = transform(cipher.name, mode, source_text, key)
    except CipherError as e:
        if mode == ENCRYPT:
            sys.exit(f"Encrypt Error: {e}")
        sys.exit(f"Decrypt Error ({cipher.name}): {e}")

    # 3. WRITE OUTPUT
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
                f.write("\n")
        except OSError as e:
            sys.exit(f"Error writing output: {e}")
    else:
        print(result)
    return 0


if __name__ == "__main__":
    main()
