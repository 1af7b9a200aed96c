"""
Field selection for every MSG_MINIMAL shape.

The keyword form prepends fields one at a time, so the result is the
keyword list reversed with the message field last. These tests pin that
order exactly.
"""

import pytest

from prready.config import EnvSnapshot, Settings
from prready.fields import Field, select_fields

SHA = "0123456789abcdef0123456789abcdef01234567"


def _settings(**overrides):
    base = dict(
        title="Review request",
        message="Please take a look",
        message_or_eom="Please take a look",
        server_url="https://github.com",
        repository="acme/widget",
        ref="refs/heads/main",
        event_name="pull_request",
        workflow="CI",
        sha=SHA,
    )
    base.update(overrides)
    return Settings(**base)


def _titles(fields):
    return [f.title for f in fields]


def test_full_mode_order():
    fields = select_fields(_settings())
    assert _titles(fields) == ["Ref", "Event", "Actions URL", "Commit", "Review request"]
    assert [f.short for f in fields] == [True, True, True, True, False]


def test_full_mode_values():
    ref, event, actions, commit, message = select_fields(_settings())
    assert ref.value == "refs/heads/main"
    assert event.value == "pull_request"
    assert actions.value == f"<https://github.com/acme/widget/commit/{SHA}/checks|CI>"
    assert commit.value == f"<https://github.com/acme/widget/commit/{SHA}|012345>"
    assert message == Field("Review request", "Please take a look", False)


def test_minimal_true_only_message():
    fields = select_fields(_settings(minimal="true"))
    assert fields == [Field("Review request", "Please take a look", False)]


def test_minimal_keywords_reverse_order():
    fields = select_fields(_settings(minimal="commit,ref"))
    assert _titles(fields) == ["Ref", "Commit", "Review request"]


def test_minimal_all_keywords_reverse_order():
    fields = select_fields(_settings(minimal="ref,event,actions url,commit"))
    assert _titles(fields) == ["Commit", "Actions URL", "Event", "Ref", "Review request"]


@pytest.mark.parametrize("minimal", ["COMMIT,Ref", "commit, ref"])
def test_minimal_keywords_case_and_spacing(minimal):
    fields = select_fields(_settings(minimal=minimal))
    assert _titles(fields) == ["Ref", "Commit", "Review request"]


def test_minimal_unknown_keywords_ignored():
    fields = select_fields(_settings(minimal="bogus,event,,nope"))
    assert _titles(fields) == ["Event", "Review request"]


def test_minimal_repeated_keyword_repeats_field():
    fields = select_fields(_settings(minimal="ref,ref"))
    assert _titles(fields) == ["Ref", "Ref", "Review request"]


def test_host_fields_prepended():
    s = _settings(
        minimal="true",
        site_title="Site",
        site_name="staging",
        host_title="Host",
        host_name="web-1",
    )
    fields = select_fields(s)
    assert fields[:2] == [Field("Site", "staging", True), Field("Host", "web-1", True)]
    assert _titles(fields) == ["Site", "Host", "Review request"]


def test_host_fields_need_host_name():
    fields = select_fields(_settings(minimal="true", site_name="staging"))
    assert _titles(fields) == ["Review request"]


def test_commit_field_with_short_sha():
    fields = select_fields(_settings(minimal="commit", sha="abc"))
    assert fields[0].value == "<https://github.com/acme/widget/commit/abc|abc>"


def test_message_falls_back_to_eom_when_unset():
    s = Settings.from_env(EnvSnapshot({"MSG_MINIMAL": "true", "SLACK_TITLE": "T"}))
    assert select_fields(s) == [Field("T", "EOM", False)]


def test_field_wire_form_omits_empty_values():
    assert Field("", "", False).to_dict() == {}
    assert Field("Ref", "main", True).to_dict() == {"title": "Ref", "value": "main", "short": True}
