"""Key derivation for toy RSA, along with the small random prime generator feeding it.

Derives the private exponent from two primes and a public exponent through the Extended Euclidean Algorithm. The
prime generator is deliberately naive: trial division against sieved small primes, and uniform sampling below a
bound until a prime comes up.

Typical usage example:

    kp = derive_key_pair(13, 7, 5)
    d = derive_private_exponent(5, 72)
    p = generate_prime(20)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import secrets
import typing

from toyrsa.errors import InvertibilityError

logger = logging.getLogger(__name__)

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0

DEFAULT_UPPER_BOUND: int = 20
DEFAULT_MAX_MODULUS: int = 256
DEFAULT_MIN_MODULUS: int = 128


class KeyPair(typing.NamedTuple):
    """Derived toy RSA key material.

    Attributes:
        public_exponent: The encrypt/verify exponent.
        private_exponent: The decrypt/sign exponent, inverse of the public one modulo the totient.
        modulus: The product of the two primes.
    """
    public_exponent: int
    private_exponent: int
    modulus: int


def _sieve(n: int = 10000) -> list[int]:
    """Lists every prime up to and including `n`.

    Crosses out multiples of each prime up to isqrt(n) in a flag array covering 0..n.

    Args:
        n: Inclusive upper limit. Values below 2 yield an empty list.

    Returns:
        The primes up to `n`, ascending.
    """
    if n < 2:
        return []
    flags = bytearray([1]) * (n + 1)
    flags[0] = flags[1] = 0
    for i in range(2, math.isqrt(n) + 1):
        if flags[i]:
            flags[i * i::i] = bytes(len(range(i * i, n + 1, i)))
    return [i for i, flag in enumerate(flags) if flag]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Returns the trial divisors used by `check_prime`.

    The sieved list lives in `_SMALL_PRIMES`, together with the limit it was sieved to. A request past that limit
    (or `change`, or an empty cache) sieves again up to `n`; anything else is served from the cache, which may
    then hold primes beyond `n`.

    Args:
        n: Smallest limit the returned list has to cover. Must be >= 0.
        change: Re-sieve up to `n` even if the cache already covers it.

    Returns:
        Ascending primes covering at least 2..n.

    Raises:
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    stale = change or not _SMALL_PRIMES or n > _SMALL_PRIMES_CAP
    if stale:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def check_prime(candidate: int) -> bool:
    """Trial division primality test.

    Divides `candidate` by every prime up to its square root.

    Args:
        candidate: The number to check.

    Returns:
        True if `candidate` is prime, False otherwise.
    """
    if candidate < 2:
        return False
    for prime in get_pre_primes(max(math.isqrt(candidate), 2)):
        if prime * prime > candidate:
            break
        if candidate % prime == 0:
            return False
    return True


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Extended Euclid, in loop form.

    Carries the remainder pair along with both coefficient pairs, so the coefficients match the ones the recursive
    formulation unwinds to.

    Args:
        a: First operand, the public exponent when deriving keys.
        b: Second operand, the totient when deriving keys.

    Returns:
        (gcd, s, t) with a*s + b*t == gcd.
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r:
        quot = old_r // r
        old_r, r = r, old_r - quot * r
        old_s, s = s, old_s - quot * s
        old_t, t = t, old_t - quot * t
    return old_r, old_s, old_t


def normalize_exponent(exponent: int, totient: int) -> int:
    """Brings an exponent into [0, totient)."""
    if totient <= 0:
        raise ValueError("Totient must be positive")
    return exponent % totient


def totient(p: int, q: int) -> int:
    """Euler's totient of p*q for two distinct primes."""
    return (p - 1) * (q - 1)


def derive_private_exponent(public_exponent: int, totient_: int, normalize: bool = True) -> int:
    """Derives the private exponent as the inverse of the public exponent modulo the totient.

    The raw Bezout coefficient may be negative or otherwise out of range, which makes it unusable as an exponent.
    Unless told otherwise we normalize it into [0, totient).

    Args:
        public_exponent: The public exponent.
        totient_: Euler's totient of the modulus.
        normalize: Whether to normalize the coefficient. Defaults to True.
            If False, returns the raw Bezout coefficient.

    Returns:
        The private exponent.

    Raises:
        ValueError: If the totient is not positive.
        InvertibilityError: If the public exponent and totient are not coprime.
    """
    if totient_ <= 0:
        raise ValueError("Totient must be positive")
    gcd, x, _ = eea(public_exponent, totient_)
    if gcd != 1:
        raise InvertibilityError(
            f"Public exponent {public_exponent} and totient {totient_} are not coprime (gcd {gcd})")
    if not normalize:
        return x
    return normalize_exponent(x, totient_)


def mod_inverse(a: int, m: int) -> int:
    """Normalized multiplicative inverse of `a` modulo `m`."""
    return derive_private_exponent(a, m)


def derive_key_pair(p: int, q: int, public_exponent: int) -> KeyPair:
    """Derives the full key pair from two primes and a public exponent.

    Args:
        p: Prime 1.
        q: Prime 2. Must differ from p.
        public_exponent: The public exponent. Must be coprime to (p-1)(q-1).

    Returns:
        The derived key pair, private exponent normalized.

    Raises:
        ValueError: If p or q are not distinct primes.
        InvertibilityError: If the public exponent has no inverse modulo the totient.
    """
    if not check_prime(p) or not check_prime(q):
        raise ValueError("Both p and q must be prime.")
    if p == q:
        raise ValueError("p and q must be distinct.")
    phi = totient(p, q)
    d = derive_private_exponent(public_exponent, phi)
    logger.debug("Derived key pair: n=%d, phi=%d, e=%d, d=%d", p * q, phi, public_exponent, d)
    return KeyPair(public_exponent, d, p * q)


def generate_prime(upper_bound: int = DEFAULT_UPPER_BOUND) -> int:
    """Draws a uniformly random prime from [2, upper_bound).

    Args:
        upper_bound: Exclusive upper bound. Must be >= 3.

    Returns:
        A prime below `upper_bound`.

    Raises:
        ValueError: If no prime exists below `upper_bound`.
        RuntimeError: If generation loops way beyond a reasonable time.
    """
    if upper_bound < 3:
        raise ValueError("upper_bound must be at least 3.")
    rep_cap = upper_bound * 64
    for _ in range(rep_cap):
        candidate = secrets.randbelow(upper_bound)
        if check_prime(candidate):
            return candidate
    raise RuntimeError(f"Ran an improbable {rep_cap} loops with no prime found. Check system random number generator.")


def generate_key_pair(upper_bound: int = DEFAULT_UPPER_BOUND,
                      max_modulus: int = DEFAULT_MAX_MODULUS,
                      min_modulus: int = DEFAULT_MIN_MODULUS,
                      expose_primes: bool = False) -> KeyPair | tuple[KeyPair, int, int]:
    """Generates a random toy key pair.

    Draws distinct primes p and q and a prime public exponent, all below `upper_bound`, retrying until the
    exponent is invertible and min_modulus <= p*q <= max_modulus. Every symbol below `min_modulus` round-trips
    under the resulting key, so the default covers ASCII text as well as signed decimal digits.

    Args:
        upper_bound: Exclusive bound for p, q and the public exponent. Must be >= 6.
        max_modulus: Largest modulus accepted. Must be >= 6.
        min_modulus: Smallest modulus accepted. Must not exceed `max_modulus`.
        expose_primes: Whether to return p and q as well. Defaults to False.

    Returns:
        The key pair, or (key pair, p, q) if `expose_primes` is set.

    Raises:
        ValueError: If the bounds cannot produce any key pair.
        RuntimeError: If generation loops way beyond a reasonable time.
    """
    if upper_bound < 6 or max_modulus < 6:
        raise ValueError("Bounds too small to hold two distinct primes.")
    if min_modulus > max_modulus:
        raise ValueError(f"min_modulus {min_modulus} exceeds max_modulus {max_modulus}.")
    rep_cap = upper_bound * 64
    for _ in range(rep_cap):
        p, q, e = generate_prime(upper_bound), generate_prime(upper_bound), generate_prime(upper_bound)
        if p == q or not min_modulus <= p * q <= max_modulus:
            continue
        if math.gcd(e, totient(p, q)) != 1:
            continue
        kp = derive_key_pair(p, q, e)
        if expose_primes:
            return kp, p, q
        return kp
    raise RuntimeError(f"Ran an improbable {rep_cap} loops with no key pair found. Check the provided bounds.")
