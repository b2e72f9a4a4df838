"""
Cipher framework: strategy base class, registry, plugin loading and the
single `transform` entry point.
"""

import importlib.util
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from . import errors, keys
from .errors import InvalidKeyError, UnknownCipherError
from .log import log_warn

ENCRYPT = "encrypt"
DECRYPT = "decrypt"
MODES = (ENCRYPT, DECRYPT)

# ==========================================
#  FRAMEWORK: Abstract Base Class & Registry
# ==========================================

class CipherStrategy(ABC):
    """Abstract base class that all ciphers must implement."""

    # Key dataclass accepted by encrypt/decrypt; None for key-less ciphers.
    key_type: Optional[type] = None
    key_help: str = ""
    default_key = None

    @property
    @abstractmethod
    def name(self) -> str:
        """The command-line name for this cipher."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description for help text."""
        pass

    @abstractmethod
    def encrypt(self, text: str, key) -> str:
        pass

    @abstractmethod
    def decrypt(self, text: str, key) -> str:
        pass

    def parse_key(self, raw: Optional[str]):
        """Build this cipher's key from user input, or fall back to the default."""
        if self.key_type is None:
            return None
        if raw is None or not raw.strip():
            if self.default_key is None:
                raise InvalidKeyError(f"Cipher '{self.name}' requires a key.")
            return self.default_key
        return self.key_type.parse(raw)

    def check_key(self, key):
        if self.key_type is not None and not isinstance(key, self.key_type):
            raise InvalidKeyError(
                f"Cipher '{self.name}' expects a {self.key_type.__name__}, "
                f"got {type(key).__name__}."
            )
        return key

    def describe_key(self, key) -> str:
        """Human-readable dump of derived key material for --show-key."""
        return repr(key)


CIPHER_REGISTRY = {}

def register_cipher(cls):
    """Decorator to auto-register ciphers."""
    cipher = cls()
    CIPHER_REGISTRY[cipher.name] = cipher
    return cls


def get_cipher(name: str) -> CipherStrategy:
    try:
        return CIPHER_REGISTRY[name.lower()]
    except KeyError:
        available = ", ".join(sorted(CIPHER_REGISTRY))
        raise UnknownCipherError(f"Unknown cipher '{name}'. Available: {available}") from None


def transform(cipher_name: str, mode: str, text: str, key=None) -> str:
    """
    Run one encryption or decryption.

    `key` may be a key object, a raw string (parsed by the cipher), or
    None to use the cipher's default key.
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
    cipher = get_cipher(cipher_name)
    if key is None or isinstance(key, str):
        key = cipher.parse_key(key)
    cipher.check_key(key)
    if mode == ENCRYPT:
        return cipher.encrypt(text, key)
    return cipher.decrypt(text, key)


def encrypt(cipher_name: str, text: str, key=None) -> str:
    return transform(cipher_name, ENCRYPT, text, key)


def decrypt(cipher_name: str, text: str, key=None) -> str:
    return transform(cipher_name, DECRYPT, text, key)

# ==========================================
#  PLUGIN SYSTEM: Dynamic Cipher Loading
# ==========================================

DEFAULT_PLUGIN_DIR = Path(__file__).parent / "plugins"


def load_plugins(plugin_dir: str = None) -> List[str]:
    """
    Load cipher plugins from a directory with manifest.json.

    Args:
        plugin_dir: Path to plugins directory (default: the bundled plugins)

    Returns:
        List of successfully loaded plugin names
    """
    plugin_dir = DEFAULT_PLUGIN_DIR if plugin_dir is None else Path(plugin_dir)

    if not plugin_dir.exists():
        return []

    manifest_path = plugin_dir / "manifest.json"
    if not manifest_path.exists():
        log_warn(f"No manifest.json in {plugin_dir}. Skipping plugin loading.")
        return []

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log_warn(f"Failed to read manifest.json: {e}")
        return []

    loaded = []
    for entry in manifest.get("plugins", []):
        filename = entry.get("file")
        expected_cipher = entry.get("cipher")

        if not filename:
            continue

        if expected_cipher and expected_cipher in CIPHER_REGISTRY:
            loaded.append(expected_cipher)
            continue

        filepath = plugin_dir / filename
        if not filepath.exists():
            log_warn(f"Plugin file not found: {filepath}")
            continue

        try:
            spec = importlib.util.spec_from_file_location(f"classical_engine_plugin_{filepath.stem}", filepath)
            if spec and spec.loader:
                module = importlib.util.module_from_spec(spec)
                # Make our framework available to plugins
                module.CipherStrategy = CipherStrategy
                module.register_cipher = register_cipher
                module.keys = keys
                module.errors = errors
                spec.loader.exec_module(module)

                if expected_cipher and expected_cipher in CIPHER_REGISTRY:
                    loaded.append(expected_cipher)
                elif expected_cipher:
                    log_warn(f"Plugin {filename} did not register cipher '{expected_cipher}'")
                else:
                    loaded.append(filename)
        except Exception as e:
            log_warn(f"Failed to load plugin {filename}: {e}")

    return loaded
