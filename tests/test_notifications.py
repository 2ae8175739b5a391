import json

import httpx

from squadkit.services.notifications import HttpNotifier, NOTIFY_PATH, notify_event


def test_notification_posts_event_id():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"success": True})

    notifier = HttpNotifier("http://notify.test/functions/", transport=httpx.MockTransport(handler))

    result = notify_event(notifier, "e1")

    assert result.sent
    assert requests[0].url.path == "/functions" + NOTIFY_PATH
    assert json.loads(requests[0].content) == {"eventId": "e1"}


def test_failed_notification_is_reported_not_raised():
    notifier = HttpNotifier(
        "http://notify.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"})),
    )

    result = notify_event(notifier, "e1")

    assert not result.sent
    assert result.message == "Failed to send availability notifications"


def test_missing_url_is_reported(monkeypatch):
    monkeypatch.delenv("SQUADKIT_NOTIFY_URL", raising=False)

    result = notify_event(HttpNotifier(), "e1")

    assert not result.sent


def test_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("SQUADKIT_NOTIFY_TIMEOUT", "2.5")
    assert HttpNotifier("http://notify.test").timeout == 2.5

    monkeypatch.setenv("SQUADKIT_NOTIFY_TIMEOUT", "soon")
    assert HttpNotifier("http://notify.test").timeout == 10.0
