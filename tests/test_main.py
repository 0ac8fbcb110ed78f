# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64

import pytest

from toyrsa import __main__ as cli
from toyrsa import keygen
from toyrsa import rsa

TEXTBOOK = keygen.KeyPair(5, 29, 91)


@pytest.fixture
def keyfiles(mocker, tmp_path):
    mocker.patch("toyrsa.keygen.generate_key_pair", return_value=(TEXTBOOK, 13, 7))
    priv, pub = tmp_path / "toykey", tmp_path / "toykey.pub"
    assert cli.main(["keygen", "-P", str(priv), "-p", str(pub)]) == 0
    return priv, pub


def test_demo_defaults(capsys):
    assert cli.main(["demo"]) == 0
    out = capsys.readouterr().out
    assert "p=13 q=7 n=91 e=5 d=29" in out
    assert "Encryption roundtrip: OK" in out
    assert "Signature roundtrip: OK" in out


def test_demo_custom(capsys):
    assert cli.main(["demo", "--primes", "11", "13", "--pub-exponent", "7", "--message", "Hello", "--sha", "sha512"]) == 0
    assert "d=103" in capsys.readouterr().out


def test_demo_random(mocker, capsys):
    mocker.patch("toyrsa.keygen.generate_key_pair", return_value=(TEXTBOOK, 13, 7))
    assert cli.main(["demo", "--random"]) == 0
    assert "n=91" in capsys.readouterr().out


def test_demo_reports_failure(capsys):
    # Lowercase symbols do not fit below 91.
    with pytest.warns(RuntimeWarning):
        assert cli.main(["demo", "--message", "cloud"]) == 1
    assert "Encryption roundtrip: FAILED" in capsys.readouterr().out


def test_demo_reports_typed_failure(capsys):
    assert cli.main(["demo", "--primes", "17", "19", "--pub-exponent", "5"]) == 1
    assert "roundtrip failed:" in capsys.readouterr().out


def test_demo_not_coprime(capsys):
    assert cli.main(["demo", "--pub-exponent", "3"]) == 1
    assert "not coprime" in capsys.readouterr().out


def test_demo_not_prime(capsys):
    assert cli.main(["demo", "--primes", "13", "9"]) == 1
    assert "must be prime" in capsys.readouterr().out


def test_demo_bad_bounds(capsys):
    assert cli.main(["demo", "--random", "--min-modulus", "300"]) == 1
    assert "exceeds max_modulus" in capsys.readouterr().out


def test_demo_verbose(caplog):
    with caplog.at_level("DEBUG", logger="toyrsa"):
        assert cli.main(["--verbose", "demo"]) == 0
    assert "Derived key pair" in caplog.text


def test_keygen_refuses_overwrite(keyfiles, capsys):
    priv, pub = keyfiles
    assert cli.main(["keygen", "-P", str(priv), "-p", str(pub)]) == 1
    assert "already exists" in capsys.readouterr().out
    assert cli.main(["keygen", "-P", str(priv), "-p", str(pub), "--overwrite"]) == 0


def test_encrypt_decrypt(keyfiles, capsys):
    priv, pub = keyfiles
    capsys.readouterr()
    assert cli.main(["encrypt", "-p", str(pub), "-m", "CLOUD"]) == 0
    ciph = capsys.readouterr().out.strip()
    assert cli.main(["decrypt", "-P", str(priv), "-m", ciph]) == 0
    assert capsys.readouterr().out.strip() == "CLOUD"


def test_sign_verify(keyfiles, capsys):
    priv, pub = keyfiles
    capsys.readouterr()
    assert cli.main(["sign", "-P", str(priv), "-m", "CLOUD"]) == 0
    signature = capsys.readouterr().out.strip()
    assert cli.main(["verify", "-p", str(pub), "-m", "CLOUD", "-S", signature]) == 0
    assert "Signature Verified!" in capsys.readouterr().out
    assert cli.main(["verify", "-p", str(pub), "-m", "CLOUDS", "-S", signature]) == 1
    assert "Signature Verification Failed!" in capsys.readouterr().out


def test_missing_subcommand():
    with pytest.raises(SystemExit):
        cli.main([])


def test_keygen_bounds(mocker, tmp_path):
    mocker.patch("toyrsa.keygen.generate_key_pair", return_value=(TEXTBOOK, 13, 7))
    args = ["keygen", "-P", str(tmp_path / "k"), "-p", str(tmp_path / "k.pub")]
    assert cli.main(args + ["--upper-bound", "30", "--max-modulus", "200", "--min-modulus", "100"]) == 0
    keygen.generate_key_pair.assert_called_once_with(30, 200, 100, expose_primes=True)


def test_decrypt_invalid_text(tmp_path, capsys):
    key = rsa.ToyPrivKey.from_primes(11, 13, 7)
    priv = tmp_path / "toykey"
    key.export(priv)
    ciph = base64.b64encode(key.pub.c_rsa(b"\x80")).decode("ascii")
    assert cli.main(["decrypt", "-P", str(priv), "-m", ciph]) == 1
    assert "not valid utf-8" in capsys.readouterr().out


def test_decrypt_invalid_base64(keyfiles, capsys):
    priv, _ = keyfiles
    capsys.readouterr()
    assert cli.main(["decrypt", "-P", str(priv), "-m", "not base64!"]) == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_encoding_choices(keyfiles):
    _, pub = keyfiles
    with pytest.raises(SystemExit):
        cli.main(["encrypt", "-p", str(pub), "-m", "CLOUD", "-e", "utf-16"])
    assert cli.main(["encrypt", "-p", str(pub), "-m", "CLOUD", "-e", "ascii"]) == 0
