"""The Command Line Interface for toyrsa.

Runs the encryption and signature round-trip demo, and exposes key generation, encryption, decryption, signing and
verification over PEM key files. Ciphertexts and signatures travel as base64.

Typical usage example:

    toyrsa demo --primes 13 7 --pub-exponent 5 --message CLOUD
    OR
    python -m toyrsa demo --random
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import base64
import logging
import pathlib
import sys

import toyrsa
from toyrsa import keygen
from toyrsa import rsa

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=pathlib.Path, required=True, help="Location of the public key file.")
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key", "-P", type=pathlib.Path, required=True, help="Location of the private key file.")
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", "-m", required=True, help="Message payload.")
encp = argparse.ArgumentParser(add_help=False)
encp.add_argument("--encoding", "-e", choices=["utf-8", "ascii"], default="utf-8", help="Payload encoding.")
sha = argparse.ArgumentParser(add_help=False)
sha.add_argument("--sha", "-s", choices=list(rsa.HASH_FUNCTIONS), default="sha256", help="Hash algorithm to sign with.")
bounds = argparse.ArgumentParser(add_help=False)
bounds.add_argument("--upper-bound",
                    type=int,
                    default=keygen.DEFAULT_UPPER_BOUND,
                    help="Exclusive bound for random primes and public exponent.")
bounds.add_argument("--max-modulus", type=int, default=keygen.DEFAULT_MAX_MODULUS, help="Largest modulus accepted.")
bounds.add_argument("--min-modulus", type=int, default=keygen.DEFAULT_MIN_MODULUS, help="Smallest modulus accepted.")

corep = argparse.ArgumentParser(prog="toyrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {toyrsa.__version__}")
corep.add_argument("--verbose", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

demo = commands.add_parser("demo", parents=[bounds, sha], help="Encryption and signature round-trip demo.")
demo.add_argument("--primes", nargs=2, type=int, default=[13, 7], metavar=("P", "Q"), help="The two primes.")
demo.add_argument("--pub-exponent", type=int, default=5, help="Exponent for the public key.")
demo.add_argument("--message", "-m", default="CLOUD", help="Message to round-trip.")
demo.add_argument("--random", "-r", action="store_true", help="Use randomly generated primes and exponent.")

keygen_cmd = commands.add_parser("keygen", parents=[privkey, pubkey, bounds], help="Key generation utility.")
keygen_cmd.add_argument("--overwrite", "-o", action="store_true", help="Overwrite destination files if they exist.")
commands.add_parser("encrypt", parents=[pubkey, payloads, encp], help="Encryption utility.")
commands.add_parser("decrypt", parents=[privkey, payloads, encp], help="Decryption utility.")
commands.add_parser("sign", parents=[privkey, payloads, sha], help="Signing utility.")
verify = commands.add_parser("verify", parents=[pubkey, payloads, sha], help="Signature verification utility.")
verify.add_argument("--signature", "-S", required=True, help="The base64 signature to validate.")


def run_demo(args: argparse.Namespace) -> int:
    """Runs both round-trips, returning the process exit code."""
    if args.random:
        pk = rsa.ToyPrivKey.generate(args.upper_bound, args.max_modulus, args.min_modulus)
    else:
        pk = rsa.ToyPrivKey.from_primes(args.primes[0], args.primes[1], args.pub_exponent)
    kp = pk.key_pair
    print(f"p={pk.p} q={pk.q} n={kp.modulus} e={kp.public_exponent} d={kp.private_exponent}")
    checks = (
        ("Encryption", lambda: toyrsa.encryption_roundtrip(args.message, kp)),
        ("Signature", lambda: toyrsa.signature_roundtrip(args.message, kp, args.sha)),
    )
    status = 0
    for name, check in checks:
        try:
            ok = check()
        except toyrsa.ToyRSAError as exc:
            print(f"{name} roundtrip failed: {exc}")
            status = 1
            continue
        print(f"{name} roundtrip: {'OK' if ok else 'FAILED'}")
        if not ok:
            status = 1
    return status


def dispatch(args: argparse.Namespace) -> int:
    """Runs the parsed subcommand, returning the process exit code."""
    match args.subcommand:
        case "demo":
            return run_demo(args)
        case "keygen":
            if not args.overwrite and (args.private_key.exists() or args.public_key.exists()):
                print("Destination private or public key already exists!")
                return 1
            rpk = rsa.ToyPrivKey.generate(args.upper_bound, args.max_modulus, args.min_modulus)
            rpk.export(args.private_key)
            rpk.pub.export(args.public_key)
            print("Key pair generated!")
        case "encrypt":
            rpu = rsa.ToyPubKey.import_key(args.public_key)
            print(base64.b64encode(rpu.encrypt(args.message, args.encoding)).decode("ascii"))
        case "decrypt":
            rpk = rsa.ToyPrivKey.import_key(args.private_key)
            print(rpk.decrypt(base64.b64decode(args.message), args.encoding))
        case "sign":
            rpk = rsa.ToyPrivKey.import_key(args.private_key)
            print(base64.b64encode(rpk.sign(args.message, args.sha)).decode("ascii"))
        case "verify":
            rpu = rsa.ToyPubKey.import_key(args.public_key)
            try:
                verified = rpu.verify(args.message, base64.b64decode(args.signature), args.sha)
            except toyrsa.ToyRSAError:
                verified = False
            if not verified:
                print("Signature Verification Failed!")
                return 1
            print("Signature Verified!")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Core CLI entry point.

    Bad primes, exponents, payloads or bounds are reported on stdout with exit code 1.
    """
    args = corep.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        return dispatch(args)
    except ValueError as exc:
        # ToyRSAError and binascii.Error are both ValueErrors.
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
