"""AES-256-GCM helpers and the authorisation-code generator for e-mail PINs."""

from __future__ import annotations

import argparse
import sys

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from markbook.b64 import encode

__all__ = [
    "ADDITIONAL_DATA",
    "TAG_LENGTH",
    "gcm_encrypt",
    "gcm_decrypt",
    "authorisation_code",
    "main",
]

TAG_LENGTH = 16
ADDITIONAL_DATA = b"The five boxing wizards jump quickly."

_DIGITS = b"0123456789"
_AES_KEY = (_DIGITS * 4)[:32]
_IV = (_DIGITS * 2)[:16]


def gcm_encrypt(plaintext: bytes, aad: bytes, key: bytes, iv: bytes) -> tuple[bytes, bytes]:
    """Encrypt with AES-GCM; return the ciphertext and the 16-byte tag."""
    encryptor = Cipher(algorithms.AES(key), modes.GCM(iv)).encryptor()
    encryptor.authenticate_additional_data(aad)
    ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    return ciphertext, encryptor.tag[:TAG_LENGTH]


def gcm_decrypt(ciphertext: bytes, aad: bytes, tag: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt with AES-GCM.

    Raises ``cryptography.exceptions.InvalidTag`` when verification fails.
    """
    decryptor = Cipher(algorithms.AES(key), modes.GCM(iv, tag)).decryptor()
    decryptor.authenticate_additional_data(aad)
    return decryptor.update(ciphertext) + decryptor.finalize()


def authorisation_code(pin: str) -> str:
    """Return the base64 authorisation code for an e-mail PIN."""
    ciphertext, _tag = gcm_encrypt(pin.encode("utf-8"), ADDITIONAL_DATA, _AES_KEY, _IV)
    return encode(ciphertext)


def main(argv: list[str] | None = None) -> int:
    """Prompt for an e-mail PIN and print its authorisation code."""
    parser = argparse.ArgumentParser(
        description="Print the authorisation code for an e-mail PIN."
    )
    parser.add_argument("pin", nargs="?", help="PIN to encode; read from stdin if omitted")
    args = parser.parse_args(argv)

    sys.stdout.write("Type your email pin: ")
    sys.stdout.flush()
    pin = args.pin
    if pin is None:
        words = sys.stdin.read().split()
        pin = words[0] if words else ""

    print(f"Authorisation Code:{authorisation_code(pin)}")
    return 0