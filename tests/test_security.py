from __future__ import annotations

from pathlib import Path

import pytest

from mixpanel_export.models import CredentialUnavailable
from mixpanel_export.security import (
    KEY_FILE_ENV,
    SECRET_FILE_ENV,
    CredentialStore,
    load_credentials,
    read_credential_file,
)
from mixpanel_export.signing import generate_signature


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_load_credentials_strips_whitespace(tmp_path: Path) -> None:
    key = _write(tmp_path, "key", "abc\n")
    secret = _write(tmp_path, "secret", "  xyz\r\n")
    creds = load_credentials(key, secret)
    assert creds.api_key == "abc"
    assert creds.api_secret == "xyz"


def test_trailing_newline_does_not_change_signature(tmp_path: Path) -> None:
    plain = load_credentials(_write(tmp_path, "k1", "abc"), _write(tmp_path, "s1", "xyz"))
    newline = load_credentials(_write(tmp_path, "k2", "abc\n"), _write(tmp_path, "s2", "xyz\n"))
    assert plain == newline
    assert generate_signature(plain, "1000000000", {"event": "login"}) == generate_signature(
        newline, "1000000000", {"event": "login"}
    )


def test_missing_secret_file_raises(tmp_path: Path) -> None:
    key = _write(tmp_path, "key", "abc")
    missing = tmp_path / "nope"
    with pytest.raises(CredentialUnavailable) as excinfo:
        load_credentials(key, missing)
    assert excinfo.value.source == str(missing)


def test_empty_key_file_raises(tmp_path: Path) -> None:
    key = _write(tmp_path, "key", "\n\n")
    secret = _write(tmp_path, "secret", "xyz")
    with pytest.raises(CredentialUnavailable):
        load_credentials(key, secret)


def test_custom_reader_resolves_locators() -> None:
    store = {"vault://key": "abc\n", "vault://secret": "xyz\n"}
    creds = load_credentials("vault://key", "vault://secret", reader=store.__getitem__)
    assert (creds.api_key, creds.api_secret) == ("abc", "xyz")


def test_reader_oserror_is_wrapped() -> None:
    def reader(_locator: str) -> str:
        raise PermissionError(13, "Permission denied")

    with pytest.raises(CredentialUnavailable) as excinfo:
        load_credentials("key", "secret", reader=reader)
    assert excinfo.value.source == "key"
    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_non_utf8_key_file_raises(tmp_path: Path) -> None:
    key = tmp_path / "key"
    key.write_bytes(b"abc\xff\n")
    secret = _write(tmp_path, "secret", "xyz")
    with pytest.raises(CredentialUnavailable) as excinfo:
        load_credentials(key, secret)
    assert excinfo.value.source == str(key)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_error_message_omits_contents(tmp_path: Path) -> None:
    key = _write(tmp_path, "key", "k3y-v4lue")
    with pytest.raises(CredentialUnavailable) as excinfo:
        load_credentials(key, tmp_path / "missing-secret")
    assert "k3y-v4lue" not in str(excinfo.value)


def test_read_credential_file(tmp_path: Path) -> None:
    assert read_credential_file(_write(tmp_path, "k", "\tvalue \n")) == "value"


def test_from_env(tmp_path: Path) -> None:
    env = {
        KEY_FILE_ENV: str(_write(tmp_path, "key", "abc\n")),
        SECRET_FILE_ENV: str(_write(tmp_path, "secret", "xyz\n")),
    }
    creds = CredentialStore.from_env(env)
    assert creds.api_key == "abc"
    assert creds.api_secret == "xyz"


def test_from_env_requires_both_variables(tmp_path: Path) -> None:
    env = {KEY_FILE_ENV: str(_write(tmp_path, "key", "abc"))}
    with pytest.raises(CredentialUnavailable, match=SECRET_FILE_ENV):
        CredentialStore.from_env(env)


def test_from_values() -> None:
    creds = CredentialStore.from_values(" abc\n", "xyz\n")
    assert (creds.api_key, creds.api_secret) == ("abc", "xyz")
    with pytest.raises(CredentialUnavailable):
        CredentialStore.from_values("abc", "   ")
