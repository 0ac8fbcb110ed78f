"""Failure types raised when toy RSA material cannot be used.

All of them derive from `ValueError` as well, since every one of them stems from a value the caller supplied.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class ToyRSAError(Exception):
    """Base class for all toyrsa failures."""


class InvertibilityError(ToyRSAError, ValueError):
    """The exponent has no usable inverse.

    Raised when the public exponent and the totient are not coprime, or when an unnormalized (negative) exponent
    reaches the modular exponentiation.
    """


class EncodingError(ToyRSAError, ValueError):
    """The transformed bytes do not form valid text under the requested encoding."""


class SymbolOverflowError(ToyRSAError, ValueError):
    """A transformed symbol does not fit into a single byte."""
