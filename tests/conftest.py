import pytest

SHA = "0123456789abcdef0123456789abcdef01234567"


@pytest.fixture
def ci_env():
    """Environment of a typical pull_request workflow run."""
    return {
        "SLACK_WEBHOOK": "https://hooks.slack.test/services/T000/B000/XXX",
        "SLACK_MESSAGE": "Please take a look",
        "SLACK_TITLE": "Review request",
        "SLACK_USERNAME": "pr-bot",
        "SLACK_CHANNEL": "#reviews",
        "GITHUB_ACTOR": "twigs67",
        "GITHUB_SERVER_URL": "https://github.com",
        "GITHUB_REPOSITORY": "acme/widget",
        "GITHUB_REF": "refs/pull/17/merge",
        "GITHUB_EVENT_NAME": "pull_request",
        "GITHUB_WORKFLOW": "CI",
        "GITHUB_SHA": SHA,
        "PR_TITLE": "FOR-482: fix bug",
        "PR_NUMBER": "17",
        "PR_BODY": "cc @alex\nthanks",
    }
