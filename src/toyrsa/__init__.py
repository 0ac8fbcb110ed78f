"""Textbook RSA with toy-sized keys, for teaching purposes.

Provides key derivation from two primes and a public exponent, symbol-wise encryption, decryption, signing and
verification, round-trip checks of all of the above, and a tiny random prime generator. Unsecure by construction:
keys are tiny, there is no padding and primality testing is naive.

Typical usage example:

    kp = derive_key_pair(13, 7, 5)
    encryption_roundtrip("CLOUD", kp)
    pk = ToyPrivKey.from_key_pair(kp)
    c = pk.pub.encrypt("CLOUD")
    r = pk.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from toyrsa.arith import mod_mul
from toyrsa.arith import mod_pow
from toyrsa.arith import mod_pow_linear
from toyrsa.codec import decode_text
from toyrsa.codec import encode_text
from toyrsa.codec import transform_bytes
from toyrsa.codec import transform_symbol
from toyrsa.errors import EncodingError
from toyrsa.errors import InvertibilityError
from toyrsa.errors import SymbolOverflowError
from toyrsa.errors import ToyRSAError
from toyrsa.keygen import check_prime
from toyrsa.keygen import derive_key_pair
from toyrsa.keygen import derive_private_exponent
from toyrsa.keygen import generate_key_pair
from toyrsa.keygen import generate_prime
from toyrsa.keygen import KeyPair
from toyrsa.protocol import encryption_roundtrip
from toyrsa.protocol import roundtrip
from toyrsa.protocol import signature_roundtrip
from toyrsa.rsa import message_digest
from toyrsa.rsa import ToyPrivKey
from toyrsa.rsa import ToyPubKey

__version__ = "0.1.0"
__all__ = [
    "mod_mul",
    "mod_pow",
    "mod_pow_linear",
    "transform_symbol",
    "transform_bytes",
    "encode_text",
    "decode_text",
    "ToyRSAError",
    "InvertibilityError",
    "EncodingError",
    "SymbolOverflowError",
    "KeyPair",
    "check_prime",
    "derive_private_exponent",
    "derive_key_pair",
    "generate_prime",
    "generate_key_pair",
    "roundtrip",
    "encryption_roundtrip",
    "signature_roundtrip",
    "message_digest",
    "ToyPubKey",
    "ToyPrivKey",
]
