from urllib.parse import quote

from hypothesis import assume, given, strategies as st

from codepax.scm import ensure_credentials, parse_remote_url, redact_url

userinfo = st.text(
    alphabet=st.characters(codec="utf-8", exclude_categories=["Cs"]),
    min_size=1,
    max_size=20,
)
host = st.from_regex(r"[a-z][a-z0-9-]{0,10}(\.[a-z]{2,5}){1,2}", fullmatch=True)
path = st.from_regex(r"(/[A-Za-z0-9._-]{1,10}){1,3}", fullmatch=True)


@given(username=userinfo, password=userinfo, host=host, path=path)
def test_credentials_round_trip(username: str, password: str, host: str, path: str) -> None:
    url = ensure_credentials(f"https://{host}{path}", username, password)
    assert url is not None

    remote = parse_remote_url(url)

    assert remote.username == username
    assert remote.password == password
    assert remote.host == host
    assert remote.path == path


@given(username=userinfo, password=userinfo, host=host, path=path)
def test_credential_sync_is_idempotent(
    username: str, password: str, host: str, path: str
) -> None:
    assume((username, password) != ("olduser", "oldpw"))

    url = ensure_credentials(f"https://olduser:oldpw@{host}{path}", username, password)
    assert url is not None

    assert ensure_credentials(url, username, password) is None


@given(username=userinfo, password=userinfo, host=host, path=path)
def test_redaction_replaces_password(
    username: str, password: str, host: str, path: str
) -> None:
    url = ensure_credentials(f"https://{host}{path}", username, password)
    assert url is not None

    redacted = redact_url(url)

    assert redacted == f"https://{quote(username, safe='')}:***@{host}{path}"
