"""Round-trip checks for toy RSA key pairs.

Both protocols apply one exponent, then the other, and compare the result against the input. Encryption works on the
message itself, signing on its numeric hash.

Typical usage example:

    kp = derive_key_pair(13, 7, 5)
    encryption_roundtrip("CLOUD", kp)
    signature_roundtrip("CLOUD", kp)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import operator
import typing

from toyrsa.keygen import KeyPair
from toyrsa.rsa import message_digest
from toyrsa.rsa import ToyPrivKey

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")
U = typing.TypeVar("U")


def roundtrip(payload: T,
              forward: typing.Callable[[T], U],
              backward: typing.Callable[[U], typing.Any],
              equals: typing.Callable[[T, typing.Any], bool] = operator.eq) -> bool:
    """Applies `forward` then `backward` and checks the result against the payload.

    Args:
        payload: The original input.
        forward: First transform.
        backward: Transform expected to undo `forward`.
        equals: Equality predicate between the payload and the recovered value.

    Returns:
        True if the recovered value equals the payload, False otherwise.
    """
    intermediate = forward(payload)
    recovered = backward(intermediate)
    ok = equals(payload, recovered)
    logger.debug("Roundtrip %r -> %r -> %r: %s", payload, intermediate, recovered, "ok" if ok else "mismatch")
    return ok


def encryption_roundtrip(plaintext: str, key_pair: KeyPair, encoding: str = "utf-8") -> bool:
    """Encrypts with the public exponent, decrypts with the private one.

    Raises:
        EncodingError: If the decrypted bytes are not valid in `encoding`.
        SymbolOverflowError: If a symbol transforms past a byte.
    """
    priv = ToyPrivKey.from_key_pair(key_pair)
    return roundtrip(plaintext, lambda m: priv.pub.encrypt(m, encoding), lambda c: priv.decrypt(c, encoding))


def signature_roundtrip(message: str, key_pair: KeyPair, hashf: str = "sha256") -> bool:
    """Signs the hash of the message with the private exponent, recovers it with the public one.

    Raises:
        EncodingError: If the recovered signature bytes are not ASCII.
        SymbolOverflowError: If a symbol transforms past a byte.
    """
    priv = ToyPrivKey.from_key_pair(key_pair)
    return roundtrip(message_digest(message, hashf), priv.sign_digest, priv.pub.recover_digest)
