from prready.config import DEFAULT_MENTIONS, MentionTable
from prready.ids import extract_ticket_id, resolve_mentions, short_sha


def test_ticket_id_from_title():
    assert extract_ticket_id("FOR-482: fix bug") == "FOR-482"


def test_ticket_id_missing():
    assert extract_ticket_id("no ticket here") == ""


def test_ticket_id_first_match_only():
    assert extract_ticket_id("FOR-1 and FOR-22") == "FOR-1"


def test_ticket_id_other_project_prefix():
    assert extract_ticket_id("ABC-9 tidy up", project="ABC") == "ABC-9"
    assert extract_ticket_id("ABC-9 tidy up") == ""


def test_mentions_known_and_unknown():
    out = resolve_mentions("hello @alex and @nobody", DEFAULT_MENTIONS)
    assert out == "hello <@U01FFMD8P7E> and @nobody"


def test_mentions_are_case_sensitive():
    table = MentionTable({"alex": "U1"})
    assert resolve_mentions("@Alex @alex", table) == "@Alex <@U1>"


def test_mentions_aliases_share_an_id():
    out = resolve_mentions("@brad @dvrs-brad @Brad", DEFAULT_MENTIONS)
    # \w stops at the hyphen, so only "dvrs" is looked up
    assert out == "<@U058HUUKZ6U> @dvrs-brad <@U058HUUKZ6U>"


def test_mentions_not_rescanned():
    table = MentionTable({"a": "@b", "b": "U2"})
    assert resolve_mentions("@a", table) == "<@@b>"


def test_short_sha_full_length():
    sha = "0123456789abcdef0123456789abcdef01234567"
    assert short_sha(sha) == "012345"


def test_short_sha_shorter_than_six():
    assert short_sha("abc") == "abc"
    assert short_sha("") == ""
