from mountflow.models import NotificationLevel
from mountflow.services.notifications.flash_messages import FlashMessageService


def test_success_and_danger_are_recorded(caplog):
    service = FlashMessageService()
    with caplog.at_level("INFO"):
        service.success("mounted")
        service.danger("failed")

    levels = [n.level for n in service.get_recent()]
    assert levels == [NotificationLevel.SUCCESS, NotificationLevel.DANGER]
    assert "failed" in caplog.text


def test_filter_by_level():
    service = FlashMessageService()
    service.success("a")
    service.danger("b")
    assert [n.message for n in service.get_recent(NotificationLevel.DANGER)] == ["b"]


def test_keeps_only_most_recent():
    service = FlashMessageService(max_notifications=2)
    for message in ["one", "two", "three"]:
        service.success(message)
    assert [n.message for n in service.get_recent()] == ["two", "three"]


def test_clear():
    service = FlashMessageService()
    service.success("a")
    service.clear()
    assert service.get_recent() == []
