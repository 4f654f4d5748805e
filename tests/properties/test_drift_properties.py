import pytest
from hypothesis import given, strategies as st

from codepax.exceptions import DriftParseError
from codepax.scm import parse_drift

counts = st.integers(min_value=0, max_value=10_000)


@given(ahead=counts, behind=counts)
def test_counts_are_preserved(ahead: int, behind: int) -> None:
    report = parse_drift(f"{ahead}\n", f" {behind} ", "stable")

    assert report.ahead == ahead
    assert report.behind == behind


@given(ahead=counts, behind=counts)
def test_message_mentions_only_nonzero_directions(ahead: int, behind: int) -> None:
    message = parse_drift(str(ahead), str(behind), "stable").message

    assert ("ahead" in message) == (ahead > 0)
    assert ("behind" in message) == (behind > 0)
    assert ("up to date" in message) == (ahead == 0 and behind == 0)
    assert message.endswith("'stable'")


@given(negative=st.integers(max_value=-1), other=counts)
def test_negative_counts_are_rejected(negative: int, other: int) -> None:
    with pytest.raises(DriftParseError):
        parse_drift(str(negative), str(other), "stable")


def _is_int(text: str) -> bool:
    try:
        int(text)
    except ValueError:
        return False
    return True


@given(raw=st.text().filter(lambda s: not _is_int(s)))
def test_non_numeric_counts_are_rejected(raw: str) -> None:
    with pytest.raises(DriftParseError):
        parse_drift("0", raw, "stable")
