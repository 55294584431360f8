from datetime import date

from src.officeroute.officeroute.core.enums import AttendanceStatus
from src.officeroute.officeroute.insights.provider import GeminiProvider
from src.officeroute.officeroute.insights.service import (
    MSG_FAILED,
    MSG_UNAVAILABLE,
    InsightService,
    build_prompt,
    build_summary,
)
from tests.support import FakeResponse, make_record, make_user

TODAY = date(2026, 3, 2)


class EchoProvider:
    def __init__(self):
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return "## Summary"


class BrokenProvider:
    def generate(self, prompt):
        raise TimeoutError("model overloaded")


def test_missing_key_reports_unavailable():
    assert InsightService(None).analyze([], []) == MSG_UNAVAILABLE


def test_provider_failure_never_raises():
    assert InsightService(BrokenProvider()).analyze([], [make_user()], today=TODAY) == MSG_FAILED


def test_prompt_includes_query_and_summary():
    provider = EchoProvider()
    text = InsightService(provider).analyze([make_record("r1", day=TODAY)], [make_user()], "Who is late?", today=TODAY)

    assert text == "## Summary"
    assert '"Who is late?"' in provider.prompts[0]
    assert '"totalEmployees": 1' in provider.prompts[0]


def test_summary_counts_today():
    records = [
        make_record("a", user_id="A", day=TODAY, status=AttendanceStatus.LATE, total_duration_minutes=90),
        make_record("b", user_id="B", day=TODAY),
        make_record("c", user_id="A", day=date(2026, 3, 1)),
    ]
    users = [make_user("A"), make_user("B"), make_user("C")]

    summary = build_summary(records, users, TODAY)

    assert summary["todayStats"] == {"present": 2, "absent": 1, "late": 1}
    assert summary["recentRecords"][0]["hours"] == "1.5"
    assert summary["recentRecords"][1]["hours"] == "Active"


def test_default_query_used_when_none_given():
    assert "executive summary" in build_prompt({}, None)


def test_gemini_provider_joins_text_parts():
    class Session:
        def post(self, url, headers=None, json=None, timeout=None):
            self.url, self.headers, self.body = url, headers, json
            return FakeResponse(200, {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]})

    session = Session()
    text = GeminiProvider("key", session=session).generate("hello")

    assert text == "ab"
    assert session.url.endswith("/models/gemini-2.5-flash:generateContent")
    assert session.headers["x-goog-api-key"] == "key"
    assert session.body == {"contents": [{"parts": [{"text": "hello"}]}]}
